"""Value classifier and encoder: JSON token <-> Value, one token at a time.

WHY: JSON's grammar overlaps in ways a dynamic decode gets wrong. Decoding
``"true"`` and ``true`` into Python objects and then asking "is it a bool?"
conflates the quoted string with the literal, and numeric-looking strings
with numbers. The producer's intent is only visible in the raw token, so
classification happens on the token text before anything else.

HOW: decode_value runs an ordered chain of guarded checks on the raw
token; the first that matches wins. Arrays and objects are handed to the
list and map codecs, which call back into decode_value for every element.
encode_value dispatches on the variant and mirrors the same split.

RULES:
- Decode precedence: null → number → quoted string → bare bool → array → object
- Number before quoted string: a bare numeric literal is never a string
- Quoted string before bare bool: ``"true"`` is a String, only ``true`` is a Bool
- Only the exact literals ``true`` and ``false`` are booleans
- A token opening with ``[`` or ``{`` commits to the list/map codec so
  errors carry the failing index or key
- Numbers are written in shortest round-trip form; integral values below
  1e21 carry no fraction
- Non-finite numbers follow CodecOptions.nonfinite; invalid JSON is never emitted
"""

from __future__ import annotations

import json
import logging
import math
from typing import Optional, Union

from structjson.codec import list_codec, map_codec
from structjson.codec.tokens import (
    TokenError,
    is_number_literal,
    strip_whitespace,
    unquote,
)
from structjson.config import NONFINITE_ERROR, nonfinite_token
from structjson.core.errors import DecodeError, EncodingError, NonFiniteNumberError
from structjson.core.options import CodecOptions, resolve_options
from structjson.core.value import (
    FALSE,
    NULL,
    TRUE,
    BoolValue,
    ListValue,
    MapValue,
    NullValue,
    NumberValue,
    StringValue,
    Value,
    is_valid_utf8,
)

logger = logging.getLogger(__name__)

# Integral doubles below this magnitude are written without a fraction or
# exponent, matching ECMAScript Number#toString.
_PLAIN_INTEGER_LIMIT = 1e21


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_number(number: float, options: Optional[CodecOptions] = None) -> str:
    """Render a float as a JSON number literal (or non-finite string token).

    RULES:
    - 1.0 → ``1``; -0.0 → ``-0``; 0.1 → ``0.1``; 1e300 → ``1e+300``
    - NaN/±Infinity → ``"NaN"``/``"Infinity"``/``"-Infinity"`` under the
      "string" policy, NonFiniteNumberError under "error"
    """
    options = resolve_options(options)
    token = nonfinite_token(number)
    if token is not None:
        if options.nonfinite == NONFINITE_ERROR:
            raise NonFiniteNumberError(number)
        return json.dumps(token)
    if number == 0.0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"
    if number.is_integer() and abs(number) < _PLAIN_INTEGER_LIMIT:
        return str(int(number))
    return repr(number)


def encode_string(text: str, options: Optional[CodecOptions] = None) -> str:
    options = resolve_options(options)
    return json.dumps(text, ensure_ascii=options.ensure_ascii)


def encode_value(
    value: Value,
    options: Optional[CodecOptions] = None,
    depth: int = 0,
) -> str:
    """Encode a Value as compact JSON text.

    Args:
        value: Any Value variant.
        options: Codec options; defaults come from structjson.config.
        depth: Nesting depth of ``value``. Leave at 0; the list and map
               codecs pass it down.

    Returns:
        JSON text with no insignificant whitespace.

    Raises:
        NonFiniteNumberError: A NaN/Infinity number under the "error" policy.
        EncodingError: Nesting deeper than ``options.max_depth``.
        TypeError: ``value`` is not a Value variant.
    """
    options = resolve_options(options)
    if isinstance(value, NullValue):
        return "null"
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return encode_number(value.value, options)
    if isinstance(value, StringValue):
        return encode_string(value.value, options)
    if isinstance(value, ListValue):
        return list_codec.encode_list(value, options, depth)
    if isinstance(value, MapValue):
        return map_codec.encode_map(value, options, depth)
    raise TypeError("not a Value: {!r}".format(type(value).__name__))


def check_depth_for_encode(depth: int, options: CodecOptions) -> None:
    if depth > options.max_depth:
        raise EncodingError(
            "maximum nesting depth {} exceeded".format(options.max_depth)
        )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _as_text(token: Union[str, bytes, bytearray]) -> str:
    if isinstance(token, (bytes, bytearray)):
        try:
            return bytes(token).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("input is not valid UTF-8", cause=exc) from exc
    if not isinstance(token, str):
        raise TypeError(
            "token must be str or bytes, got {}".format(type(token).__name__)
        )
    return token


def check_depth_for_decode(depth: int, options: CodecOptions) -> None:
    if depth > options.max_depth:
        raise DecodeError(
            "maximum nesting depth {} exceeded".format(options.max_depth)
        )


def decode_value(
    token: Union[str, bytes, bytearray],
    options: Optional[CodecOptions] = None,
    depth: int = 0,
) -> Value:
    """Classify one JSON value token and build the matching Value.

    Args:
        token: Raw JSON text of exactly one value (scalar, array or
               object). Surrounding JSON whitespace is ignored. Bytes are
               decoded as UTF-8.
        options: Codec options; only ``max_depth`` matters here.
        depth: Nesting depth of ``token``. Leave at 0.

    Returns:
        The Value variant the token denotes.

    Raises:
        DecodeError: The token matches no value shape, is malformed, or a
            nested element fails (with index/key context).
    """
    options = resolve_options(options)
    text = strip_whitespace(_as_text(token))

    # 1. The null literal.
    if text == "null":
        return NULL

    # 2. A bare numeric literal. Checked before strings so "1" and 1 stay apart.
    if is_number_literal(text):
        number = float(text)
        if math.isinf(number):
            raise DecodeError("number out of range", token=text)
        return NumberValue(number)

    # 3. A quoted string. Checked before booleans so "true" stays a string.
    if text.startswith('"'):
        try:
            content = unquote(text)
        except TokenError as exc:
            logger.debug("Rejected string token %.60r: %s", text, exc)
            raise DecodeError("bad string", token=text, cause=exc) from exc
        if not is_valid_utf8(content):
            raise DecodeError("invalid UTF-8 in string", token=text)
        return StringValue(content)

    # 4. The bare boolean literals, and nothing else.
    if text == "true":
        return TRUE
    if text == "false":
        return FALSE

    # 5. An array: each element goes back through this classifier.
    if text.startswith("["):
        return list_codec.decode_list(text, options, depth)

    # 6. An object: each member value goes back through this classifier.
    if text.startswith("{"):
        return map_codec.decode_map(text, options, depth)

    # 7. Nothing matched.
    logger.debug("Unrecognized token %.60r", text)
    raise DecodeError("unrecognized type for Value", token=text)
