"""structjson — generic value model with an order-aware JSON codec.

WHY: JSON does not say whether a token is a number or a numeric-looking
string, a boolean or a boolean-looking string. Naively decoding into
Python objects loses the distinction the producer intended. This package
holds a closed generic value model (Null, Bool, Number, String, List,
Map) and converts it to and from JSON text and native Python containers.

HOW: Three layers — the value model (core), the JSON codec (codec:
classifier plus list and map codecs) and the native-interop adapters
(adapters). Each layer is independently testable.

RULES:
- The value model is the stable contract between codec and adapters
- Only the classifier resolves JSON ambiguity; list/map codecs delegate to it
- All conversions are pure: no I/O, no shared mutable state
"""

__version__ = "0.1.0"
