"""Generic value dataclasses — the tagged union every codec works with.

WHY: JSON documents and native Python containers both need a neutral,
closed representation in which "the string 'true'" and "the boolean
true" are different things. A closed set of variants lets the classifier
make that distinction once and lets every consumer dispatch exhaustively.

HOW: Six frozen dataclasses form the union:
  NullValue   — JSON null
  BoolValue   — true / false
  NumberValue — IEEE-754 double (NaN and infinities allowed internally)
  StringValue — text, valid UTF-8
  ListValue   — ordered tuple of values
  MapValue    — string-keyed dict of values

RULES:
- Exactly one variant per value; ``kind`` names it
- Strings and map keys must be valid UTF-8 (no lone surrogates);
  constructors raise EncodingError rather than repairing
- ListValue(None) and MapValue(None) mean "unset" and become empty
- Lists and maps own their children; trees are immutable in shape
- Map key order is not significant for equality
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Iterable, Mapping, Optional, Tuple, Union

from structjson.core.errors import EncodingError, UnsupportedTypeError


class Kind(str, Enum):
    """Variant identifiers, usable wherever a plain string is expected."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAP = "map"


def is_valid_utf8(text: str) -> bool:
    """Return True if ``text`` can be encoded as UTF-8.

    A Python str is invalid UTF-8 only when it holds lone surrogates,
    e.g. from a ``"\\ud800"`` JSON escape or ``surrogateescape`` decoding.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _require_utf8(text: str) -> None:
    if not is_valid_utf8(text):
        raise EncodingError("invalid UTF-8 in string: {!r}".format(text))


@dataclass(frozen=True)
class NullValue:
    """The null variant. All instances compare equal; use ``NULL``."""

    kind: ClassVar[Kind] = Kind.NULL


@dataclass(frozen=True)
class BoolValue:
    value: bool

    kind: ClassVar[Kind] = Kind.BOOL

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise UnsupportedTypeError(type(self.value), "BoolValue")


@dataclass(frozen=True)
class NumberValue:
    """A JSON number, always held as a float.

    RULES:
    - Any real, non-bool number is accepted and widened with float()
    - Integers beyond 2**53 lose precision; beyond the double range they
      raise EncodingError
    - NaN and the infinities are legal here; how they are written out is
      the encoder's non-finite policy
    """

    value: float

    kind: ClassVar[Kind] = Kind.NUMBER

    def __post_init__(self) -> None:
        raw = self.value
        if isinstance(raw, bool) or not isinstance(raw, numbers.Real):
            raise UnsupportedTypeError(type(raw), "NumberValue")
        try:
            widened = float(raw)
        except OverflowError:
            raise EncodingError(
                "number too large to represent as a double: {!r}".format(raw)
            ) from None
        object.__setattr__(self, "value", widened)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)


@dataclass(frozen=True)
class StringValue:
    value: str

    kind: ClassVar[Kind] = Kind.STRING

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise UnsupportedTypeError(type(self.value), "StringValue")
        _require_utf8(self.value)


@dataclass(frozen=True)
class ListValue:
    """An ordered sequence of values.

    HOW: Any iterable of values is accepted and frozen into a tuple.
    ``None`` (an unset list) becomes the empty tuple so it still encodes
    as ``[]``.
    """

    values: Tuple["Value", ...] = ()

    kind: ClassVar[Kind] = Kind.LIST

    def __post_init__(self) -> None:
        items = tuple(self.values) if self.values is not None else ()
        for item in items:
            if not isinstance(item, VALUE_TYPES):
                raise UnsupportedTypeError(type(item), "ListValue element")
        object.__setattr__(self, "values", items)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, index: int) -> "Value":
        return self.values[index]


@dataclass(frozen=True)
class MapValue:
    """A string-keyed mapping of values.

    HOW: The input mapping is copied into a private dict so later changes
    to the caller's dict are not observed. ``None`` (an unset map)
    becomes an empty dict so it still encodes as ``{}``.

    RULES:
    - Keys must be str and valid UTF-8
    - Values must be Value variants
    """

    fields: Dict[str, "Value"] = field(default_factory=dict)

    kind: ClassVar[Kind] = Kind.MAP

    def __post_init__(self) -> None:
        source: Mapping[str, Value] = self.fields if self.fields is not None else {}
        copied: Dict[str, Value] = {}
        for key, item in source.items():
            if not isinstance(key, str):
                raise UnsupportedTypeError(type(key), "MapValue key")
            _require_utf8(key)
            if not isinstance(item, VALUE_TYPES):
                raise UnsupportedTypeError(type(item), "MapValue field {!r}".format(key))
            copied[key] = item
        object.__setattr__(self, "fields", copied)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __getitem__(self, key: str) -> "Value":
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def get(self, key: str, default: Optional["Value"] = None) -> Optional["Value"]:
        return self.fields.get(key, default)

    def items(self) -> Iterable[Tuple[str, "Value"]]:
        return self.fields.items()


Value = Union[NullValue, BoolValue, NumberValue, StringValue, ListValue, MapValue]

VALUE_TYPES = (NullValue, BoolValue, NumberValue, StringValue, ListValue, MapValue)
"""Concrete variant classes, for isinstance checks."""

NULL = NullValue()
TRUE = BoolValue(True)
FALSE = BoolValue(False)
