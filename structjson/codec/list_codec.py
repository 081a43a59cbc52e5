"""List codec: ListValue <-> JSON array.

WHY: Arrays are where element order matters and where a single bad
element has to be reported by position. Keeping that logic out of the
classifier leaves the classifier a flat, readable precedence chain.

HOW: encode_list joins the classifier's encoding of each element.
decode_list splits the array token into raw element tokens and runs each
through the classifier.

RULES:
- Empty or unset lists encode as ``[]``, never ``null``
- Element order is preserved exactly
- A failing element is reported as a DecodeError with its index,
  wrapping the element's own error
"""

from __future__ import annotations

from typing import List, Optional

from structjson.codec import classifier
from structjson.codec.tokens import TokenError, iter_array, strip_whitespace
from structjson.core.errors import DecodeError
from structjson.core.options import CodecOptions, resolve_options
from structjson.core.value import ListValue, Value


def encode_list(
    value: Optional[ListValue],
    options: Optional[CodecOptions] = None,
    depth: int = 0,
) -> str:
    """Encode a ListValue as a JSON array. ``None`` encodes as ``[]``."""
    options = resolve_options(options)
    if value is None or len(value.values) == 0:
        return "[]"
    classifier.check_depth_for_encode(depth + 1, options)
    parts = [classifier.encode_value(item, options, depth + 1) for item in value.values]
    return "[" + ",".join(parts) + "]"


def decode_list(
    token: str,
    options: Optional[CodecOptions] = None,
    depth: int = 0,
) -> ListValue:
    """Decode a JSON array token into a ListValue.

    Raises:
        DecodeError: ``token`` is not a JSON array, or an element fails;
            ``index`` names the failing element.
    """
    options = resolve_options(options)
    text = strip_whitespace(token)
    if not text.startswith("["):
        raise DecodeError("bad ListValue: expected a JSON array", token=text)

    values: List[Value] = []
    index = 0
    try:
        for raw in iter_array(text):
            try:
                classifier.check_depth_for_decode(depth + 1, options)
                values.append(classifier.decode_value(raw, options, depth + 1))
            except DecodeError as exc:
                raise DecodeError("bad element in ListValue", index=index, cause=exc) from exc
            index += 1
    except TokenError as exc:
        raise DecodeError("bad ListValue", index=index, cause=exc) from exc
    return ListValue(values)
