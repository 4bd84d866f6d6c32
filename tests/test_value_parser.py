"""
Tests for the value dispatcher

Covers format detection order, the fail-soft contract and the two
meanings of the double range form.
"""

import pytest

from models.config import ParserThresholds
from models.enums import DoubleRangeMode, InterpolationMode, ValueFormat
from models.keyframe import Keyframe, ParseResult
from particle.tokens import parse_float
from particle.value_parser import ValueParser, is_trivial_result, parse_value


def frames(result):
    return [(kf.time, kf.value) for kf in result.keyframes]


def assert_frames(result, expected):
    assert len(result.keyframes) == len(expected)
    for kf, (time, value) in zip(result.keyframes, expected):
        assert kf.time == pytest.approx(time)
        assert kf.value == pytest.approx(value)


class TestFormatDetection:
    """Each sub-format is claimed by the right parser."""

    @pytest.mark.parametrize("raw, expected", [
        ("", ValueFormat.EMPTY),
        ("   ", ValueFormat.EMPTY),
        ("[-720 720] 0,39.999996", ValueFormat.RANGE_WITH_KEYFRAMES),
        ("[.4 .6] [.8 1.2]", ValueFormat.DOUBLE_RANGE),
        ("0 [-40 10]", ValueFormat.INITIAL_TO_RANDOM),
        ("[0.7 0.9]", ValueFormat.RANGE),
        ("[5]", ValueFormat.RANGE),
        (".4 Linear 10,9.999999", ValueFormat.KEYFRAMES),
        ("1,95 0", ValueFormat.KEYFRAMES),
        ("200 100", ValueFormat.TWO_VALUES),
        ("1500", ValueFormat.FIXED),
        ("-10.5", ValueFormat.FIXED),
        ("abc", ValueFormat.INVALID),
        ("[10", ValueFormat.INVALID),
        ("0,", ValueFormat.INVALID),
    ])
    def test_classify(self, parser, raw, expected):
        value_format, _ = parser.classify(raw)
        assert value_format == expected

    def test_none_is_empty(self, parser):
        assert parser.classify(None) == (ValueFormat.EMPTY, ParseResult.zero())


class TestScalarForms:
    """Ranges, fixed values and the implicit two-value pair."""

    def test_range(self, parser):
        result = parser.parse("[0.7 0.9]")
        assert result.min == pytest.approx(0.7)
        assert result.max == pytest.approx(0.9)
        assert not result.has_keyframes

    def test_single_value_range(self, parser):
        assert parser.parse("[5]") == ParseResult.fixed(5)

    def test_fixed_value(self, parser):
        assert parser.parse("1500") == ParseResult(min=1500, max=1500)

    def test_surrounding_whitespace_ignored(self, parser):
        assert parser.parse("  [1 2]  ") == ParseResult(min=1, max=2)

    def test_two_values_are_linear_pair(self, parser):
        result = parser.parse("200 100")
        assert frames(result) == [(0.0, 200.0), (1.0, 100.0)]
        assert result.interpolation == InterpolationMode.LINEAR


class TestKeyframeForms:
    """Keyframe strings reach the sequence parser with their keyword."""

    def test_initial_quick_interpolate(self, parser):
        result = parser.parse(".4 Linear 10,9.999999")
        assert result.interpolation == InterpolationMode.LINEAR
        assert_frames(result, [(0.0, 0.4), (0.09999999, 10.0), (1.0, 10.0)])

    def test_hold_then_decay(self, parser):
        result = parser.parse("1,95 0")
        assert_frames(result, [(0.0, 1.0), (0.95, 1.0), (1.0, 0.0)])
        assert result.interpolation == InterpolationMode.UNSPECIFIED

    def test_absolute_times_preserved(self, parser):
        result = parser.parse("0,2 1,2 4,21")
        assert frames(result) == [(0.0, 2.0), (1.0, 2.0), (4.0, 21.0)]

    def test_keyword_only_is_invalid(self, parser):
        assert parser.classify("Linear") == (ValueFormat.INVALID, ParseResult.zero())

    def test_custom_thresholds(self, midpoint_sampler):
        strict = ValueParser(thresholds=ParserThresholds(trigger_percent_min=99), sampler=midpoint_sampler)
        result = strict.parse("1,95 0")
        # 95 no longer counts as a hold percentage: plain pair, trailing scalar ignored
        assert frames(result) == [(1.0, 95.0)]


class TestHybridAndDoubleRanges:
    """Bracketed forms combined with keyframes or a second range."""

    def test_range_with_percent_keyframe(self, parser):
        result = parser.parse("[-720 720] 0,39.999996")
        assert (result.min, result.max) == (-720.0, 720.0)
        assert_frames(result, [(0.39999996, 0.0)])
        assert result.is_hybrid

    def test_double_range_width_default(self, parser):
        result = parser.parse("[.4 .6] [.8 1.2]")
        assert_frames(result, [(0.0, 0.2), (1.0, 0.4)])
        assert result.interpolation == InterpolationMode.LINEAR

    def test_double_range_width_uses_magnitude(self, parser):
        result = parser.parse("[-130 0] [-100 0]")
        assert frames(result) == [(0.0, 130.0), (1.0, 100.0)]

    def test_double_range_random(self, midpoint_sampler):
        random_parser = ValueParser(double_range=DoubleRangeMode.RANDOM, sampler=midpoint_sampler)
        result = random_parser.parse("[.4 .6] [.8 1.2]")
        assert_frames(result, [(0.0, 0.5), (1.0, 1.0)])

    def test_double_range_random_stays_in_bounds(self, sampler):
        random_parser = ValueParser(double_range=DoubleRangeMode.RANDOM, sampler=sampler)
        for _ in range(50):
            start, end = random_parser.parse("[.4 .6] [.8 1.2]").keyframes
            assert 0.4 <= start.value <= 0.6
            assert 0.8 <= end.value <= 1.2

    def test_initial_to_random(self, parser):
        result = parser.parse("0 [-40 10]")
        assert frames(result) == [(0.0, 0.0), (1.0, -15.0)]
        assert result.interpolation == InterpolationMode.LINEAR


class TestFailSoft:
    """Malformed input degrades to the zero result, never an exception."""

    @pytest.mark.parametrize("raw", [
        "abc", "[10", "0,", "]", "[", "[]", ",", "1,2,3", "[a b] [c d]",
        "[1 2 3]", "1_000", "Linear EaseIn", "x [1 2]", "1e400", "[1e400 2]",
    ])
    def test_malformed_gives_zero(self, parser, raw):
        assert parser.parse(raw) == ParseResult.zero()

    @pytest.mark.parametrize("token", ["1e400", "-1e400", "1E999"])
    def test_float_overflow_rejected(self, token):
        assert parse_float(token) is None

    def test_spelled_out_infinity_kept(self):
        assert parse_float("inf") == float("inf")
        assert parse_float("-Infinity") == float("-inf")

    def test_module_helper(self, midpoint_sampler):
        assert parse_value("[1 3]") == ParseResult(min=1, max=3)
        assert parse_value("0 [0 10]", midpoint_sampler).keyframes[-1] == Keyframe(1.0, 5.0)


class TestTrivialResult:
    """Strict check for strings that were silently dropped."""

    @pytest.mark.parametrize("raw", ["abc", "[10", "0,", "[a b]", "1,2,3"])
    def test_dropped_strings_reported(self, raw):
        assert is_trivial_result(raw, parse_value(raw))

    @pytest.mark.parametrize("raw", ["", "   ", "0", "[0 0]", "[0]", "[0.7 0.9]", "1,95 0"])
    def test_legitimate_strings_not_reported(self, raw):
        assert not is_trivial_result(raw, parse_value(raw))
