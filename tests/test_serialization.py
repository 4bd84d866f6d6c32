"""
Tests for canonical value strings and dict conversion
"""

import pytest

from models.enums import DoubleRangeMode, InterpolationMode, LogLevel
from models.keyframe import Keyframe, ParseResult
from particle.range_parser import parse_range_value
from particle.value_parser import parse_value
from utils.serialization import Serializer, format_number


class TestFormatNumber:

    @pytest.mark.parametrize("value, text", [
        (1.0, "1"),
        (-130.0, "-130"),
        (0.5, "0.5"),
        (0.39999996, "0.39999996"),
        (float("inf"), "inf"),
    ])
    def test_format(self, value, text):
        assert format_number(value) == text


class TestValueString:
    """Canonical text form reads back to the same result."""

    def test_zero(self):
        assert Serializer.to_value_string(ParseResult.zero()) == ""

    def test_fixed(self):
        assert Serializer.to_value_string(ParseResult.fixed(5)) == "5"

    def test_range(self):
        assert Serializer.to_value_string(ParseResult(min=0.7, max=0.9)) == "[0.7 0.9]"

    def test_keyframes_with_keyword(self):
        result = ParseResult(
            keyframes=[(0, 0.4), (0.5, 10), (1, 10)],
            interpolation=InterpolationMode.LINEAR,
        )
        assert Serializer.to_value_string(result) == "0,0.4 Linear 0.5,10 1,10"

    def test_hybrid(self):
        result = ParseResult(min=-720, max=720, keyframes=[(0.4, 0), (1, 5)])
        assert Serializer.to_value_string(result) == "[-720 720] 0,0.4 5,1"

    @pytest.mark.parametrize("raw", [
        "[0.7 0.9]",
        "1500",
        "1,95 0",
        ".4 Linear 10,9.999999",
        "[-720 720] 0,39.999996",
        "[.4 .6] [.8 1.2]",
        "0,2 1,2 4,21",
        "200 100",
        "0 EaseOut 10,50 0",
        "50 50",
        "20,50 0",
        "1,50 0,50",
        ".9,70 Linear 0",
    ])
    def test_reparses_to_same_result(self, raw):
        result = parse_value(raw)
        assert parse_value(Serializer.to_value_string(result)) == result

    @pytest.mark.parametrize("raw, text", [
        ("50 50", "50 50"),
        ("20,50 0", "20,50 0"),
        ("1,50 0,50", "1,50 0,50"),
    ])
    def test_shorthand_forms(self, raw, text):
        assert Serializer.to_value_string(parse_value(raw)) == text

    def test_equal_values_above_threshold(self):
        result = ParseResult(keyframes=[Keyframe(0.0, 50.0), Keyframe(0.5, 50.0)])
        text = Serializer.to_value_string(result)

        assert text == "50,50 50,50"
        assert parse_value(text) == result

    def test_pairs_separated_when_rules_would_fire(self):
        result = ParseResult(keyframes=[(0, 50), (0.5, 50), (0.7, 3)])
        text = Serializer.to_value_string(result)

        assert text == "0,50 , 0.5,50 , 0.7,3"
        assert parse_value(text) == result


class TestDictConversion:

    def test_round_trip(self):
        result = parse_value(".4 Linear 10,9.999999")
        data = Serializer.to_dict(result)

        assert data["interpolation"] == "Linear"
        assert data["keyframes"][0] == [0.0, 0.4]
        assert Serializer.from_dict(data) == result

    def test_defaults(self):
        assert Serializer.from_dict({}) == ParseResult.zero()

    def test_invalid_keyframes(self):
        with pytest.raises(ValueError):
            Serializer.from_dict({"keyframes": [[0, "high"]]})

    def test_range_value(self):
        data = Serializer.range_value_to_dict(parse_range_value("[-130 0] [-100 0]"))
        assert data["initial_min"] == -130.0
        assert data["min_keyframes"] == [[0.0, -130.0], [1.0, -100.0]]
        assert data["width_keyframes"] == [[0.0, 130.0], [1.0, 100.0]]
        assert data["interpolation"] == "Linear"

    def test_keyframe_to_str(self):
        assert Serializer.keyframe_to_str(Keyframe(0.95, 1.0)) == "(0.95, 1)"


class TestEnumConversion:

    def test_enum_to_str(self):
        assert Serializer.enum_to_str(DoubleRangeMode.WIDTH) == "WIDTH"
        assert Serializer.enum_to_str(None) is None

    @pytest.mark.parametrize("text, expected", [
        ("WIDTH", DoubleRangeMode.WIDTH),
        ("random", DoubleRangeMode.RANDOM),
        (" width ", DoubleRangeMode.WIDTH),
    ])
    def test_str_to_enum(self, text, expected):
        assert Serializer.str_to_enum(text, DoubleRangeMode) == expected

    def test_str_to_enum_passthrough(self):
        assert Serializer.str_to_enum(LogLevel.WARN, LogLevel) is LogLevel.WARN

    def test_str_to_enum_invalid(self):
        with pytest.raises(ValueError):
            Serializer.str_to_enum("SIDEWAYS", DoubleRangeMode)
