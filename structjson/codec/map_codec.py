"""Map codec: MapValue <-> JSON object.

WHY: Objects carry the one piece of JSON text the classifier never sees
— member keys — and keys have their own validity rule: they must be
realizable as UTF-8 strings. Failures inside a member value have to say
which key they belong to.

HOW: encode_map writes each key with standard JSON string escaping and
each value through the classifier. decode_map splits the object token
into (key, raw value) pairs, validates the key and runs the value through
the classifier.

RULES:
- Empty or unset maps encode as ``{}``, never ``null``
- Member order follows the map's insertion order, or sorted keys when
  CodecOptions.sort_keys is set
- Duplicate keys on decode: the last occurrence wins
- Keys with lone surrogate escapes (invalid UTF-8) are rejected
- A failing member is reported as a DecodeError with its key, wrapping
  the member's own error
"""

from __future__ import annotations

from typing import Dict, Optional

from structjson.codec import classifier
from structjson.codec.tokens import TokenError, iter_object, strip_whitespace
from structjson.core.errors import DecodeError
from structjson.core.options import CodecOptions, resolve_options
from structjson.core.value import MapValue, Value, is_valid_utf8


def encode_map(
    value: Optional[MapValue],
    options: Optional[CodecOptions] = None,
    depth: int = 0,
) -> str:
    """Encode a MapValue as a JSON object. ``None`` encodes as ``{}``."""
    options = resolve_options(options)
    if value is None or len(value.fields) == 0:
        return "{}"
    classifier.check_depth_for_encode(depth + 1, options)
    keys = sorted(value.fields) if options.sort_keys else list(value.fields)
    parts = [
        classifier.encode_string(key, options)
        + ":"
        + classifier.encode_value(value.fields[key], options, depth + 1)
        for key in keys
    ]
    return "{" + ",".join(parts) + "}"


def decode_map(
    token: str,
    options: Optional[CodecOptions] = None,
    depth: int = 0,
) -> MapValue:
    """Decode a JSON object token into a MapValue.

    Raises:
        DecodeError: ``token`` is not a JSON object, a key is invalid, or
            a member value fails; ``key`` names the failing member.
    """
    options = resolve_options(options)
    text = strip_whitespace(token)
    if not text.startswith("{"):
        raise DecodeError("bad MapValue: expected a JSON object", token=text)

    fields: Dict[str, Value] = {}
    try:
        for key, raw in iter_object(text):
            if not is_valid_utf8(key):
                raise DecodeError("invalid UTF-8 in MapValue key", key=key)
            try:
                classifier.check_depth_for_decode(depth + 1, options)
                fields[key] = classifier.decode_value(raw, options, depth + 1)
            except DecodeError as exc:
                raise DecodeError("bad value in MapValue", key=key, cause=exc) from exc
    except TokenError as exc:
        raise DecodeError("bad MapValue", key=exc.key, cause=exc) from exc
    return MapValue(fields)
