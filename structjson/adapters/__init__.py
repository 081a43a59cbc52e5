"""Adapter modules for converting between Value trees and external data models.

WHY: The value model (NullValue, ListValue, MapValue, ...) is not what most
Python code holds. Adapters bridge native containers and the model so each
side can evolve independently.

HOW: native.py maps dicts, lists and scalars to Value variants and back.

RULES:
- Adapters are pure data transformations — no I/O, no side effects
- Adapters must not modify their input
"""

from structjson.adapters.native import (
    from_native,
    list_from_sequence,
    list_to_list,
    map_from_dict,
    map_to_dict,
    to_native,
)

__all__ = [
    "from_native",
    "list_from_sequence",
    "list_to_list",
    "map_from_dict",
    "map_to_dict",
    "to_native",
]
