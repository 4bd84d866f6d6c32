"""
Value dispatcher

Turns one definition string into a ParseResult. The sub-formats overlap
syntactically, so they are tried from most to least specific:

    1. "[min max] v,p ..."    range + keyframes
    2. "[a b] [c d]"          double range
    3. "v [min max]"          initial value → random target
    4. "[min max]" / "[v]"    plain range
    5. keyword or comma       keyframe sequence
    6. "v1 v2"                implicit 0 → 1 linear pair
    7. "v"                    fixed value
    8. anything else          zero result

Parsing never raises: malformed input degrades to the zero result.
"""

from typing import Optional, Tuple

from models.config import ParserThresholds
from models.enums import DoubleRangeMode, InterpolationMode, LogCategory, LogLevel, ValueFormat
from models.keyframe import Keyframe, ParseResult
from particle.keyframe_parser import KeyframeSequenceParser, extract_interpolation
from particle.range_parser import (
    parse_double_range_random,
    parse_double_range_width,
    parse_initial_to_random,
    parse_range,
    parse_range_with_keyframes,
)
from particle.sampler import UniformSampler
from particle.tokens import parse_float, parse_floats
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.PARSER)


class ValueParser:
    """
    Format dispatcher for particle value strings

    The meaning of "[a b] [c d]" is fixed per parser instance:
    DoubleRangeMode.WIDTH (width curve, the default) or
    DoubleRangeMode.RANDOM (random start → random end).

    Example:
        parser = ValueParser(sampler=UniformSampler.seeded(7))
        parser.parse("[0.7 0.9]")              # min=0.7, max=0.9
        parser.parse(".4 Linear 10,9.999999")  # 3 keyframes, Linear
    """

    def __init__(
        self,
        thresholds: Optional[ParserThresholds] = None,
        double_range: DoubleRangeMode = DoubleRangeMode.WIDTH,
        sampler: Optional[UniformSampler] = None,
    ):
        self.thresholds = thresholds or ParserThresholds()
        self.double_range = double_range
        self.sampler = sampler
        self._sequence_parser = KeyframeSequenceParser(self.thresholds)

    def parse(self, s: Optional[str]) -> ParseResult:
        """Parse a value string into its normalized descriptor"""
        return self.classify(s)[1]

    def classify(self, s: Optional[str]) -> Tuple[ValueFormat, ParseResult]:
        """Parse a value string and report which sub-format claimed it"""
        value_format, result = self._dispatch((s or '').strip())
        if log.is_enabled(LogLevel.DEBUG):
            log.debug(
                "Classified value",
                raw=repr(s),
                format=value_format.name,
                keyframes=len(result.keyframes),
            )
        return value_format, result

    def _dispatch(self, s: str) -> Tuple[ValueFormat, ParseResult]:
        if not s:
            return ValueFormat.EMPTY, ParseResult.zero()

        result = parse_range_with_keyframes(s, self.thresholds)
        if result is not None:
            return ValueFormat.RANGE_WITH_KEYFRAMES, result

        result = self._parse_double_range(s)
        if result is not None:
            return ValueFormat.DOUBLE_RANGE, result

        result = parse_initial_to_random(s, self.sampler)
        if result is not None:
            return ValueFormat.INITIAL_TO_RANDOM, result

        result = parse_range(s)
        if result is not None:
            return ValueFormat.RANGE, result

        text, mode = extract_interpolation(s)
        if ',' in text or mode is not InterpolationMode.UNSPECIFIED:
            result = self._sequence_parser.parse(text, mode)
            if result is not None:
                return ValueFormat.KEYFRAMES, result

        result = _parse_two_values(text)
        if result is not None:
            return ValueFormat.TWO_VALUES, result

        value = parse_float(text)
        if value is not None:
            return ValueFormat.FIXED, ParseResult.fixed(value)

        return ValueFormat.INVALID, ParseResult.zero()

    def _parse_double_range(self, s: str) -> Optional[ParseResult]:
        if self.double_range is DoubleRangeMode.RANDOM:
            return parse_double_range_random(s, self.sampler)
        return parse_double_range_width(s)


def _parse_two_values(s: str) -> Optional[ParseResult]:
    """Implicit pair: "200 100" goes linearly from 200 at t=0 to 100 at t=1"""
    if ',' in s or '[' in s:
        return None
    parts = s.split()
    if len(parts) != 2:
        return None
    values = parse_floats(parts)
    if values is None:
        return None
    return ParseResult(
        keyframes=(Keyframe(0.0, values[0]), Keyframe(1.0, values[1])),
        interpolation=InterpolationMode.LINEAR,
    )


def is_trivial_result(raw: Optional[str], result: ParseResult) -> bool:
    """
    True when a non-empty string produced the zero result

    Strict callers use this to catch definitions that were silently dropped.
    "0" and "[0 0]" are legitimately zero and are not reported.
    """
    if not raw or not raw.strip() or not result.is_zero:
        return False
    value_format, _ = _default_parser.classify(raw)
    return value_format is ValueFormat.INVALID or (
        value_format is ValueFormat.RANGE and not _is_zero_range_literal(raw)
    )


def _is_zero_range_literal(raw: str) -> bool:
    values = parse_floats(raw.strip()[1:-1].split())
    return values is not None and len(values) in (1, 2) and all(v == 0 for v in values)


_default_parser = ValueParser()


def parse_value(s: Optional[str], sampler: Optional[UniformSampler] = None) -> ParseResult:
    """Parse with default thresholds and width semantics for double ranges"""
    if sampler is None:
        return _default_parser.parse(s)
    return ValueParser(sampler=sampler).parse(s)
