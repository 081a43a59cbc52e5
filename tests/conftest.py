"""Shared test fixtures for the structjson test suite.

WHY: Several test modules need the same reference document, its expected
value tree and a native container covering every supported Python type.
Centralizing them here keeps the modules in agreement.

HOW: Pytest fixtures provide the compact nested JSON sample, the Value
tree it must decode to, a native sample dict, and explicit CodecOptions
so tests do not depend on STRUCTJSON_* variables in the environment.

RULES:
- NESTED_JSON is compact with insertion-ordered keys so re-encoding is
  byte-identical.
- Native samples avoid tuples and bytes; those are lossy by design and
  tested separately.
"""

from typing import Any, Dict

import pytest

from structjson.core.options import CodecOptions
from structjson.core.value import (
    NULL,
    TRUE,
    ListValue,
    MapValue,
    NumberValue,
    StringValue,
)

NESTED_JSON = '{"a":{"b":1,"c":[{"d":true},"f"]}}'


@pytest.fixture
def options():
    """Codec options pinned to the documented defaults."""
    return CodecOptions(max_depth=128, nonfinite="string", sort_keys=False, ensure_ascii=False)


@pytest.fixture
def nested_json():
    return NESTED_JSON


@pytest.fixture
def nested_value():
    """The Value tree NESTED_JSON decodes to."""
    return MapValue({
        "a": MapValue({
            "b": NumberValue(1),
            "c": ListValue([
                MapValue({"d": TRUE}),
                StringValue("f"),
            ]),
        }),
    })


@pytest.fixture
def sample_native() -> Dict[str, Any]:
    """A native dict using every round-trippable type."""
    return {
        "nothing": None,
        "flag": True,
        "off": False,
        "count": 3,
        "ratio": 0.25,
        "name": "näme 世界",
        "tags": ["x", 1.5, False, None],
        "nested": {
            "empty_list": [],
            "empty_map": {},
            "deep": [[{"k": "v"}]],
        },
    }
