"""JSON codec package — Value trees to and from JSON text.

WHY: Callers want two functions, encode and decode, without caring that
arrays and objects are handled by separate codecs underneath.

HOW: Re-exports the classifier's encode_value/decode_value and the
container-level codecs.

RULES:
- The classifier is the only place JSON ambiguity is resolved
- List and map codecs call back into the classifier for every child
"""

from structjson.codec.classifier import decode_value, encode_value
from structjson.codec.list_codec import decode_list, encode_list
from structjson.codec.map_codec import decode_map, encode_map

__all__ = [
    "decode_list",
    "decode_map",
    "decode_value",
    "encode_list",
    "encode_map",
    "encode_value",
]
