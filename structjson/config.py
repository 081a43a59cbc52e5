"""Configuration defaults and .env loading.

WHY: Nesting limits, the non-finite number policy and output formatting
switches are plain settings that operators and tests want to override
without touching code. Keeping them here makes them easy to find.

HOW: python-dotenv loads the .env file on import. Each setting has a
small loader that reads the environment and validates the value; the
module-level constants are the loaders' results at import time.

RULES:
- All defaults can be overridden via STRUCTJSON_* environment variables
- Loaders raise ValueError on malformed values, never fall back silently
- NONFINITE_TOKENS is the single source of the NaN/Infinity text forms
"""

from __future__ import annotations

import math
import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Non-finite numbers
# ---------------------------------------------------------------------------

NONFINITE_STRING = "string"
NONFINITE_ERROR = "error"
NONFINITE_POLICIES = frozenset({NONFINITE_STRING, NONFINITE_ERROR})

NONFINITE_TOKENS: dict[str, str] = {
    "nan": "NaN",
    "inf": "Infinity",
    "-inf": "-Infinity",
}
"""Text forms for non-finite numbers, keyed by Python's repr of the float."""


def nonfinite_token(number: float) -> str | None:
    """Return the text token for a non-finite float, or None when finite."""
    if math.isfinite(number):
        return None
    return NONFINITE_TOKENS[repr(number)]


def _env_flag(name: str, default: str) -> bool:
    raw = os.getenv(name, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError("{} must be a boolean flag, got {!r}".format(name, raw))


def load_max_depth() -> int:
    """Load the maximum nesting depth from the environment.

    RULES:
    - Reads STRUCTJSON_MAX_DEPTH, default 128
    - Raises ValueError if the value is not a positive integer
    """
    raw = os.getenv("STRUCTJSON_MAX_DEPTH", "128").strip()
    try:
        depth = int(raw)
    except ValueError:
        raise ValueError(
            "STRUCTJSON_MAX_DEPTH must be an integer, got {!r}".format(raw)
        ) from None
    if depth < 1:
        raise ValueError("STRUCTJSON_MAX_DEPTH must be positive, got {}".format(depth))
    return depth


def load_nonfinite_policy() -> str:
    """Load the non-finite number policy from the environment.

    WHY: JSON has no literal for NaN or Infinity. Callers choose between
    emitting the text tokens ("NaN", "Infinity", "-Infinity") and failing.

    RULES:
    - Reads STRUCTJSON_NONFINITE, default "string"
    - Accepted values: "string", "error" (case-insensitive)
    - Raises ValueError for anything else
    """
    raw = os.getenv("STRUCTJSON_NONFINITE", NONFINITE_STRING).strip().lower()
    if raw not in NONFINITE_POLICIES:
        raise ValueError(
            "STRUCTJSON_NONFINITE must be one of {}, got {!r}".format(
                ", ".join(sorted(NONFINITE_POLICIES)), raw,
            )
        )
    return raw


def load_sort_keys() -> bool:
    return _env_flag("STRUCTJSON_SORT_KEYS", "false")


def load_ensure_ascii() -> bool:
    return _env_flag("STRUCTJSON_ENSURE_ASCII", "false")


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_MAX_DEPTH = load_max_depth()
DEFAULT_NONFINITE = load_nonfinite_policy()
DEFAULT_SORT_KEYS = load_sort_keys()
DEFAULT_ENSURE_ASCII = load_ensure_ascii()
LOG_LEVEL = os.getenv("STRUCTJSON_LOG_LEVEL", "WARNING").strip().upper()
