"""Exception hierarchy for value conversion.

WHY: Callers need to tell apart "your data has bad text in it", "I do not
know how to convert this Python type" and "this JSON token is not a value"
without parsing messages. Decode failures deep inside a document must
also say where they happened.

HOW: ConversionError is the common base. Each concrete error also
derives from the builtin exception a caller would naturally catch
(ValueError or TypeError). DecodeError records the failing token and its
position (array index or object key) and chains nested DecodeErrors so
``path`` spells out the full location.

RULES:
- Every error raised by the library is a ConversionError
- Nested decode failures are wrapped, never replaced; use ``raise ... from``
- ``DecodeError.path`` lists locators outermost first
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

Locator = Union[int, str]

# Tokens longer than this are abbreviated in error messages.
_TOKEN_PREVIEW_CHARS = 60


def _preview(token: str) -> str:
    if len(token) <= _TOKEN_PREVIEW_CHARS:
        return token
    return token[:_TOKEN_PREVIEW_CHARS] + "..."


class ConversionError(Exception):
    """Base class for all structjson conversion failures."""


class EncodingError(ConversionError, ValueError):
    """Raised when native input or a value tree cannot be represented.

    WHY: Strings and map keys must be valid UTF-8; integers must fit a
    double; containers must be acyclic and not too deep. These are data
    errors the caller has to fix.

    RULES:
    - Raised by value constructors, from_native and encode_value
    - Never raised for an unsupported Python type (see UnsupportedTypeError)
    """


class NonFiniteNumberError(EncodingError):
    """Raised when a NaN or infinite number is encoded under the "error" policy."""

    def __init__(self, number: float) -> None:
        self.number = number
        super().__init__(
            "cannot encode non-finite number {!r} as JSON".format(number)
        )


class UnsupportedTypeError(ConversionError, TypeError):
    """Raised when from_native meets a Python type it cannot convert.

    HOW: Carries the offending type so callers can report it.
    """

    def __init__(self, value_type: type, context: str = "value") -> None:
        self.value_type = value_type
        name = value_type.__qualname__
        if value_type.__module__ != "builtins":
            name = "{}.{}".format(value_type.__module__, name)
        super().__init__("invalid type for {}: {}".format(context, name))


class DecodeError(ConversionError, ValueError):
    """Raised when a JSON token cannot be classified as a value.

    WHY: A failure three levels down in a large document is useless
    without knowing where it happened. DecodeError keeps the token, the
    position inside its parent and the nested cause.

    HOW: ``index`` is set when the failing token is an array element,
    ``key`` when it is an object member value. ``cause`` is the nested
    error (also set as ``__cause__`` by the raiser). ``path`` walks the
    chain of nested DecodeErrors.

    RULES:
    - At most one of index and key is set
    - str() includes the locator and the nested message
    """

    def __init__(
        self,
        message: str,
        *,
        token: Optional[str] = None,
        index: Optional[int] = None,
        key: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message = message
        self.token = token
        self.index = index
        self.key = key
        self.cause = cause
        super().__init__(self._render())

    @property
    def locator(self) -> Optional[Locator]:
        if self.index is not None:
            return self.index
        return self.key

    @property
    def path(self) -> Tuple[Locator, ...]:
        """Locators from the outermost container down to the failing token."""
        head = () if self.locator is None else (self.locator,)
        if isinstance(self.cause, DecodeError):
            return head + self.cause.path
        return head

    def _render(self) -> str:
        text = self.message
        if self.index is not None:
            text = "{} at index {}".format(text, self.index)
        elif self.key is not None:
            text = "{} for key {!r}".format(text, self.key)
        if self.token is not None and self.cause is None:
            text = "{}: {!r}".format(text, _preview(self.token))
        if self.cause is not None:
            text = "{}: {}".format(text, self.cause)
        return text
