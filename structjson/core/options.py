"""Options shared by the codec and the native adapters.

WHY: Depth limits, the non-finite policy and output formatting switches
have to reach every level of a recursive walk. Bundling them in one
frozen object keeps function signatures short and makes the options
safe to share between threads.

HOW: CodecOptions defaults come from structjson.config (environment and
.env). ``resolve_options(None)`` returns the shared default instance.

RULES:
- max_depth >= 1
- nonfinite is "string" or "error"
- Instances are immutable; use dataclasses.replace() to derive variants
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from structjson.config import (
    DEFAULT_ENSURE_ASCII,
    DEFAULT_MAX_DEPTH,
    DEFAULT_NONFINITE,
    DEFAULT_SORT_KEYS,
    NONFINITE_POLICIES,
)


@dataclass(frozen=True)
class CodecOptions:
    """Tuning knobs for encode, decode and native conversion.

    Attributes:
        max_depth: Deepest container nesting accepted. The top-level
                   value is depth 0; its children are depth 1.
        nonfinite: "string" writes NaN/Infinity/-Infinity as JSON string
                   tokens; "error" raises NonFiniteNumberError.
        sort_keys: Emit map members in sorted key order.
        ensure_ascii: Escape non-ASCII characters in emitted strings.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    nonfinite: str = DEFAULT_NONFINITE
    sort_keys: bool = DEFAULT_SORT_KEYS
    ensure_ascii: bool = DEFAULT_ENSURE_ASCII

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError("max_depth must be an integer, got {!r}".format(self.max_depth))
        if self.max_depth < 1:
            raise ValueError("max_depth must be positive, got {}".format(self.max_depth))
        if self.nonfinite not in NONFINITE_POLICIES:
            raise ValueError(
                "nonfinite must be one of {}, got {!r}".format(
                    ", ".join(sorted(NONFINITE_POLICIES)), self.nonfinite,
                )
            )


DEFAULT_OPTIONS = CodecOptions()


def resolve_options(options: Optional[CodecOptions]) -> CodecOptions:
    return DEFAULT_OPTIONS if options is None else options
