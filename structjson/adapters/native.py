"""Adapter: native Python containers <-> Value trees.

WHY: Most callers already hold their data as dicts, lists and scalars.
They need a way into the value model (to encode it with the classifier's
exact rules) and a way back out (to hand decoded documents to code that
expects plain Python objects).

HOW: from_native walks the native object with an isinstance chain and
builds the matching variant; to_native walks a Value tree and rebuilds
plain objects. Both recurse on containers.

    ╔═══════════════════════════════╤════════════════════════════════════╗
    ║ Python type                   │ Conversion                         ║
    ╠═══════════════════════════════╪════════════════════════════════════╣
    ║ None                          │ NullValue                          ║
    ║ bool                          │ BoolValue                          ║
    ║ int, float, any numbers.Real  │ NumberValue (widened to float)     ║
    ║ str                           │ StringValue; must be valid UTF-8   ║
    ║ bytes, bytearray, memoryview  │ StringValue; base64-encoded        ║
    ║ Mapping with str keys         │ MapValue                           ║
    ║ list, tuple                   │ ListValue                          ║
    ╚═══════════════════════════════╧════════════════════════════════════╝

RULES:
- bool is checked before numbers (bool is an int subclass)
- Integers beyond 2**53 lose precision; beyond the double range they
  raise EncodingError
- There is no binary variant: bytes come back from to_native as their
  standard base64 text
- to_native renders NaN/Infinity/-Infinity as the strings "NaN",
  "Infinity", "-Infinity" so json.dumps of the result matches
  encode_value; under the "error" policy it raises instead
- Cyclic containers and nesting beyond max_depth raise EncodingError
- Adapters never modify their input
"""

from __future__ import annotations

import base64
import numbers
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Set

from structjson.config import NONFINITE_ERROR, nonfinite_token
from structjson.core.errors import EncodingError, NonFiniteNumberError, UnsupportedTypeError
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


# ---------------------------------------------------------------------------
# Native → Value
# ---------------------------------------------------------------------------


def from_native(obj: Any, options: Optional[CodecOptions] = None) -> Value:
    """Convert a native Python object into a Value tree.

    Raises:
        EncodingError: Invalid UTF-8 text, an integer too large for a
            double, a cyclic container, or nesting beyond max_depth.
        UnsupportedTypeError: A type outside the table above, including
            non-str mapping keys.
    """
    options = resolve_options(options)
    return _from_native(obj, options, 0, set())


def map_from_dict(mapping: Mapping, options: Optional[CodecOptions] = None) -> MapValue:
    """Convert a str-keyed mapping into a MapValue."""
    options = resolve_options(options)
    return _map_from_native(mapping, options, 0, set())


def list_from_sequence(items: Sequence, options: Optional[CodecOptions] = None) -> ListValue:
    """Convert a list or tuple into a ListValue."""
    options = resolve_options(options)
    return _list_from_native(items, options, 0, set())


def _from_native(obj: Any, options: CodecOptions, depth: int, active: Set[int]) -> Value:
    if depth > options.max_depth:
        raise EncodingError("maximum nesting depth {} exceeded".format(options.max_depth))
    if obj is None:
        return NULL
    if isinstance(obj, bool):
        return TRUE if obj else FALSE
    if isinstance(obj, numbers.Real):
        return NumberValue(obj)
    if isinstance(obj, str):
        if not is_valid_utf8(obj):
            raise EncodingError("invalid UTF-8 in string: {!r}".format(obj))
        return StringValue(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return StringValue(base64.b64encode(bytes(obj)).decode("ascii"))
    if isinstance(obj, Mapping):
        return _map_from_native(obj, options, depth, active)
    if isinstance(obj, (list, tuple)):
        return _list_from_native(obj, options, depth, active)
    raise UnsupportedTypeError(type(obj))


def _enter(obj: Any, active: Set[int]) -> int:
    marker = id(obj)
    if marker in active:
        raise EncodingError("circular reference detected")
    active.add(marker)
    return marker


def _map_from_native(obj: Mapping, options: CodecOptions, depth: int, active: Set[int]) -> MapValue:
    if not isinstance(obj, Mapping):
        raise UnsupportedTypeError(type(obj), "MapValue")
    marker = _enter(obj, active)
    try:
        fields: Dict[str, Value] = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise UnsupportedTypeError(type(key), "map key")
            if not is_valid_utf8(key):
                raise EncodingError("invalid UTF-8 in map key: {!r}".format(key))
            fields[key] = _from_native(item, options, depth + 1, active)
    finally:
        active.discard(marker)
    return MapValue(fields)


def _list_from_native(obj: Sequence, options: CodecOptions, depth: int, active: Set[int]) -> ListValue:
    if not isinstance(obj, (list, tuple)):
        raise UnsupportedTypeError(type(obj), "ListValue")
    marker = _enter(obj, active)
    try:
        values = [_from_native(item, options, depth + 1, active) for item in obj]
    finally:
        active.discard(marker)
    return ListValue(values)


# ---------------------------------------------------------------------------
# Value → native
# ---------------------------------------------------------------------------


def to_native(value: Value, options: Optional[CodecOptions] = None) -> Any:
    """Convert a Value tree into plain Python objects.

    Returns:
        None, bool, float, str, list or dict. Non-finite numbers come back
        as the strings "NaN", "Infinity" and "-Infinity".

    Raises:
        NonFiniteNumberError: A non-finite number under the "error" policy.
        TypeError: ``value`` is not a Value variant.
    """
    options = resolve_options(options)
    if isinstance(value, NullValue):
        return None
    if isinstance(value, BoolValue):
        return value.value
    if isinstance(value, NumberValue):
        token = nonfinite_token(value.value)
        if token is None:
            return value.value
        if options.nonfinite == NONFINITE_ERROR:
            raise NonFiniteNumberError(value.value)
        return token
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, ListValue):
        return list_to_list(value, options)
    if isinstance(value, MapValue):
        return map_to_dict(value, options)
    raise TypeError("not a Value: {!r}".format(type(value).__name__))


def map_to_dict(value: MapValue, options: Optional[CodecOptions] = None) -> Dict[str, Any]:
    """Convert a MapValue into a dict, converting each field with to_native."""
    options = resolve_options(options)
    return {key: to_native(item, options) for key, item in value.fields.items()}


def list_to_list(value: ListValue, options: Optional[CodecOptions] = None) -> List[Any]:
    """Convert a ListValue into a list, converting each element with to_native."""
    options = resolve_options(options)
    return [to_native(item, options) for item in value.values]
