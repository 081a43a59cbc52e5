"""Raw JSON token splitting on top of the standard library scanner.

WHY: The classifier works on raw JSON text, one value token at a time,
so that it can tell ``"true"`` from ``true`` and ``"1"`` from ``1``
before any Python object is built. Arrays and objects therefore have to
be split into the raw text of their elements and members. The standard
library already knows JSON grammar; this module only asks it where each
element ends.

HOW: ``json.JSONDecoder.raw_decode`` scans one complete value starting
at an offset and reports where it stopped; the text between the two
offsets is the raw element token. Object keys are read with
``json.decoder.scanstring``. Separators and whitespace are handled here.

RULES:
- JSON whitespace is space, tab, newline and carriage return only
- NaN, Infinity and -Infinity are not JSON and are rejected
- Splitting is lazy: elements are yielded as they are found, so a
  malformed tail is reported after the well-formed head was consumed
- Every failure is a TokenError carrying the offset and, for object
  members, the key whose value failed
"""

from __future__ import annotations

import json
import re
from json.decoder import scanstring
from typing import Iterator, Optional, Tuple

JSON_WHITESPACE = " \t\n\r"

_WHITESPACE_RE = re.compile(r"[ \t\n\r]*")

# RFC 8259 number grammar. [0-9] rather than \d: \d also matches non-ASCII digits.
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?")


class TokenError(ValueError):
    """Raised when raw JSON text is not the expected token shape.

    Attributes:
        position: Offset into the token where scanning stopped.
        key: Object member key whose value could not be scanned, if any.
    """

    def __init__(self, message: str, position: int, key: Optional[str] = None) -> None:
        self.message = message
        self.position = position
        self.key = key
        super().__init__("{} (char {})".format(message, position))


def _reject_constant(name: str) -> None:
    raise ValueError("{} is not a valid JSON value".format(name))


_SCANNER = json.JSONDecoder(parse_constant=_reject_constant)


def strip_whitespace(token: str) -> str:
    return token.strip(JSON_WHITESPACE)


def is_number_literal(token: str) -> bool:
    return _NUMBER_RE.fullmatch(token) is not None


def unquote(token: str) -> str:
    """Return the content of a complete JSON string token.

    Raises:
        TokenError: If ``token`` is not exactly one quoted JSON string
            (missing quotes, bad escapes, raw control characters, or
            anything after the closing quote).
    """
    if not token.startswith('"'):
        raise TokenError("expected '\"'", 0)
    try:
        value, end = scanstring(token, 1, True)
    except ValueError as exc:
        raise TokenError("bad string: {}".format(exc), 0) from exc
    if end != len(token):
        raise TokenError("unexpected data after string", end)
    return value


def _skip(text: str, pos: int) -> int:
    return _WHITESPACE_RE.match(text, pos).end()


def _expect_end(text: str, pos: int) -> None:
    pos = _skip(text, pos)
    if pos != len(text):
        raise TokenError("unexpected data after closing bracket", pos)


def _scan_value(text: str, pos: int, key: Optional[str] = None) -> int:
    try:
        _, end = _SCANNER.raw_decode(text, pos)
    except ValueError as exc:
        # JSONDecodeError, a rejected constant, or an integer over the
        # interpreter's digit limit.
        raise TokenError(str(exc), pos, key=key) from exc
    except RecursionError as exc:
        raise TokenError("value nested too deeply to scan", pos, key=key) from exc
    return end


def iter_array(text: str) -> Iterator[str]:
    """Yield the raw element tokens of a JSON array token.

    Args:
        text: A JSON array with no surrounding whitespace.

    Yields:
        Each element's raw JSON text, in document order.

    Raises:
        TokenError: If ``text`` is not a well-formed JSON array.
    """
    if not text.startswith("["):
        raise TokenError("expected '['", 0)
    pos = _skip(text, 1)
    if text.startswith("]", pos):
        _expect_end(text, pos + 1)
        return
    while True:
        end = _scan_value(text, pos)
        yield text[pos:end]
        pos = _skip(text, end)
        if text.startswith(",", pos):
            pos = _skip(text, pos + 1)
            continue
        if text.startswith("]", pos):
            _expect_end(text, pos + 1)
            return
        raise TokenError("expected ',' or ']'", pos)


def iter_object(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(key, raw value token)`` pairs of a JSON object token.

    Duplicate keys are yielded as they appear; collapsing them is the
    caller's job.

    Raises:
        TokenError: If ``text`` is not a well-formed JSON object. When a
            member value is malformed, ``key`` names that member.
    """
    if not text.startswith("{"):
        raise TokenError("expected '{'", 0)
    pos = _skip(text, 1)
    if text.startswith("}", pos):
        _expect_end(text, pos + 1)
        return
    while True:
        if not text.startswith('"', pos):
            raise TokenError("expected object key", pos)
        try:
            key, pos = scanstring(text, pos + 1, True)
        except ValueError as exc:
            raise TokenError("bad object key: {}".format(exc), pos) from exc
        pos = _skip(text, pos)
        if not text.startswith(":", pos):
            raise TokenError("expected ':'", pos, key=key)
        pos = _skip(text, pos + 1)
        end = _scan_value(text, pos, key=key)
        yield key, text[pos:end]
        pos = _skip(text, end)
        if text.startswith(",", pos):
            pos = _skip(text, pos + 1)
            continue
        if text.startswith("}", pos):
            _expect_end(text, pos + 1)
            return
        raise TokenError("expected ',' or '}'", pos)
