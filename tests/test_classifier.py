"""Unit tests for the value classifier and encoder.

WHY: The classifier is the one place where JSON's ambiguity is resolved.
Getting the precedence wrong silently turns ``"true"`` into a boolean or
``"9223372036854775807"`` into a lossy float, and nothing downstream can
tell.

HOW: Tests cover each precedence step in isolation, the quoted-vs-bare
disambiguation cases, number and string rendering, the non-finite
policy, depth limits, and full decode/encode round trips including the
nested reference document.

RULES:
- Tests pass explicit CodecOptions (``options`` fixture) so results do
  not depend on the environment
- Round trips only use finite numbers and valid strings
"""

import json
import math

import pytest

from structjson.adapters.native import to_native
from structjson.codec.classifier import decode_value, encode_number, encode_value
from structjson.core.errors import DecodeError, EncodingError, NonFiniteNumberError
from structjson.core.options import CodecOptions
from structjson.core.value import (
    FALSE,
    NULL,
    TRUE,
    BoolValue,
    ListValue,
    MapValue,
    NumberValue,
    StringValue,
)


class TestDisambiguation:
    """Quoted and bare forms of the same text decode to different variants."""

    def test_quoted_true_is_string(self, options):
        assert decode_value('"true"', options) == StringValue("true")

    def test_bare_true_is_bool(self, options):
        assert decode_value("true", options) == BoolValue(True)

    def test_bare_false_is_bool(self, options):
        assert decode_value("false", options) == FALSE

    def test_quoted_int64_is_string(self, options):
        value = decode_value('"9223372036854775807"', options)
        assert value == StringValue("9223372036854775807")

    def test_bare_int64_is_number(self, options):
        value = decode_value("9223372036854775807", options)
        assert isinstance(value, NumberValue)
        assert value.value == float(9223372036854775807)

    def test_quoted_null_is_string(self, options):
        assert decode_value('"null"', options) == StringValue("null")

    def test_bare_null(self, options):
        assert decode_value("null", options) == NULL

    def test_quoted_float_is_string(self, options):
        assert decode_value('"1.5"', options) == StringValue("1.5")


class TestPrecedenceSteps:
    """Each step of the ordered check chain, in isolation."""

    @pytest.mark.parametrize("token", ["True", "TRUE", "t", "F", "yes"])
    def test_only_exact_bool_literals(self, token, options):
        with pytest.raises(DecodeError):
            decode_value(token, options)

    def test_surrounding_whitespace_ignored(self, options):
        assert decode_value("  false \n", options) == FALSE
        assert decode_value("\t12\r\n", options) == NumberValue(12)

    def test_negative_zero(self, options):
        value = decode_value("-0", options)
        assert value.value == 0.0
        assert math.copysign(1.0, value.value) < 0

    def test_exponent_number(self, options):
        assert decode_value("1.5e3", options) == NumberValue(1500)

    def test_integer_precision_loss_accepted(self, options):
        assert decode_value("9007199254740993", options) == NumberValue(9007199254740992.0)

    def test_number_out_of_range(self, options):
        with pytest.raises(DecodeError, match="out of range"):
            decode_value("1e400", options)

    def test_array_goes_to_list(self, options):
        assert decode_value("[]", options) == ListValue()

    def test_object_goes_to_map(self, options):
        assert decode_value("{}", options) == MapValue()

    def test_bytes_token(self, options):
        assert decode_value('"caf\xc3\xa9"'.encode("latin-1"), options) == StringValue("café")

    def test_bytes_token_invalid_utf8(self, options):
        with pytest.raises(DecodeError, match="UTF-8"):
            decode_value(b'"\xff"', options)

    def test_rejects_non_text_token(self, options):
        with pytest.raises(TypeError):
            decode_value(12, options)


class TestUnrecognizedTokens:
    """Tokens matching no step raise DecodeError naming the token."""

    def test_bare_word(self, options):
        with pytest.raises(DecodeError) as excinfo:
            decode_value("undefined", options)
        assert excinfo.value.token == "undefined"
        assert "undefined" in str(excinfo.value)

    def test_empty(self, options):
        with pytest.raises(DecodeError):
            decode_value("", options)

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literals(self, token, options):
        with pytest.raises(DecodeError):
            decode_value(token, options)

    def test_two_strings(self, options):
        with pytest.raises(DecodeError):
            decode_value('"a" "b"', options)

    def test_lone_surrogate_escape(self, options):
        with pytest.raises(DecodeError, match="UTF-8"):
            decode_value('"\\ud800"', options)

    def test_surrogate_pair_escape_is_fine(self, options):
        assert decode_value('"\\ud83d\\ude00"', options) == StringValue("\U0001f600")


class TestScalarEncoding:
    """encode_value on scalar variants."""

    def test_null_and_bools(self, options):
        assert encode_value(NULL, options) == "null"
        assert encode_value(TRUE, options) == "true"
        assert encode_value(FALSE, options) == "false"

    @pytest.mark.parametrize(
        "number, text",
        [
            (1, "1"),
            (-42, "-42"),
            (1.5, "1.5"),
            (0.1, "0.1"),
            (0.0, "0"),
            (-0.0, "-0"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1e-7, "1e-07"),
            (2.5e300, "2.5e+300"),
        ],
    )
    def test_number_text(self, number, text, options):
        assert encode_number(float(number), options) == text

    def test_number_text_is_valid_json(self, options):
        for number in (1e-7, 1e21, 123.456, -0.0):
            assert json.loads(encode_number(number, options)) == number

    def test_string_escaping(self, options):
        assert encode_value(StringValue('a"b\\c\n'), options) == '"a\\"b\\\\c\\n"'

    def test_non_ascii_kept_by_default(self, options):
        assert encode_value(StringValue("世界"), options) == '"世界"'

    def test_ensure_ascii(self):
        opts = CodecOptions(ensure_ascii=True)
        assert encode_value(StringValue("世界"), opts) == '"\\u4e16\\u754c"'

    def test_rejects_non_value(self, options):
        with pytest.raises(TypeError):
            encode_value("plain", options)


class TestNonFinitePolicy:
    """NaN and infinities follow CodecOptions.nonfinite, never invalid JSON."""

    @pytest.mark.parametrize(
        "number, text",
        [
            (float("nan"), '"NaN"'),
            (float("inf"), '"Infinity"'),
            (float("-inf"), '"-Infinity"'),
        ],
    )
    def test_string_policy(self, number, text, options):
        assert encode_value(NumberValue(number), options) == text

    def test_string_policy_matches_native_path(self, options):
        value = MapValue({
            "x": NumberValue(float("nan")),
            "y": ListValue([NumberValue(0.5), TRUE, NULL, StringValue("s")]),
        })
        native_text = json.dumps(to_native(value, options), separators=(",", ":"))
        assert encode_value(value, options) == native_text
        assert native_text == '{"x":"NaN","y":[0.5,true,null,"s"]}'

    def test_error_policy(self):
        opts = CodecOptions(nonfinite="error")
        with pytest.raises(NonFiniteNumberError):
            encode_value(NumberValue(float("inf")), opts)

    def test_error_policy_inside_container(self):
        opts = CodecOptions(nonfinite="error")
        with pytest.raises(EncodingError):
            encode_value(ListValue([NumberValue(float("nan"))]), opts)

    def test_error_policy_leaves_finite_alone(self):
        opts = CodecOptions(nonfinite="error")
        assert encode_value(NumberValue(2), opts) == "2"


class TestDepthLimit:
    """Nesting beyond max_depth is refused on decode and encode."""

    def test_decode_within_limit(self):
        opts = CodecOptions(max_depth=2)
        assert decode_value("[[1]]", opts) == ListValue([ListValue([NumberValue(1)])])

    def test_decode_beyond_limit(self):
        opts = CodecOptions(max_depth=2)
        with pytest.raises(DecodeError, match="maximum nesting depth") as excinfo:
            decode_value("[[[1]]]", opts)
        assert excinfo.value.path == (0, 0, 0)

    def test_decode_adversarial_depth(self, options):
        depth = 100000
        with pytest.raises(DecodeError):
            decode_value("[" * depth + "]" * depth, options)

    def test_encode_beyond_limit(self):
        value = NumberValue(1)
        for _ in range(4):
            value = ListValue([value])
        with pytest.raises(EncodingError, match="maximum nesting depth"):
            encode_value(value, CodecOptions(max_depth=2))


class TestRoundTrip:
    """decode(encode(v)) == v for finite numbers and valid strings."""

    def test_nested_reference_document(self, nested_json, nested_value, options):
        value = decode_value(nested_json, options)
        assert value == nested_value
        assert encode_value(value, options) == nested_json

    def test_unicode_escapes_survive(self, options):
        token = '{"unicode":"\\u00004E16\\u0000754C"}'
        value = decode_value(token, options)
        assert value["unicode"] == StringValue("\x004E16\x00754C")
        assert encode_value(value, options) == token

    @pytest.mark.parametrize(
        "value",
        [
            NULL,
            TRUE,
            NumberValue(0.1),
            NumberValue(1 / 3),
            NumberValue(-2.5e-300),
            NumberValue(1e300),
            NumberValue(123456789.125),
            StringValue(""),
            StringValue("tab\there \"quoted\" \\ 世界 \U0001f600 \x00"),
            StringValue("true"),
            StringValue("42"),
            ListValue([ListValue(), MapValue(), NULL]),
            MapValue({"": StringValue("empty key"), "k\n": ListValue([FALSE])}),
        ],
    )
    def test_values(self, value, options):
        assert decode_value(encode_value(value, options), options) == value

    def test_sorted_keys_round_trip(self, nested_value):
        opts = CodecOptions(sort_keys=True)
        assert decode_value(encode_value(nested_value, opts), opts) == nested_value
