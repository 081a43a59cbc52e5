"""Core value model, error types and codec options.

WHY: The core package holds the stable heart of the library — the value
dataclasses every codec and adapter produces or consumes, the exception
hierarchy they raise, and the options bundle they share.

HOW: value.py defines the six variants, errors.py the exceptions,
options.py the frozen CodecOptions dataclass.

RULES:
- Value dataclasses are the contract — change with care
- Nothing in core imports from codec or adapters
"""
