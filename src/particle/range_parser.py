"""
Range sub-parsers

Bracketed forms of the value language:

    "[0.7 0.9]"                 plain range
    "[5]"                       degenerate range (fixed value)
    "[.4 .6] [.8 1.2]"          double range (random or width interpolated)
    "0 [-40 10]"                initial value → random target
    "[-720 720] 0,39.999996"    range + percentage keyframes

Each parser takes the trimmed input string and returns None when the string
is not in its format, so the dispatcher can try the next one.
"""

from typing import List, Optional, Tuple

from models.config import ParserThresholds
from models.enums import InterpolationMode
from models.keyframe import Keyframe, ParseResult, RangeValueResult
from particle.sampler import UniformSampler, random_in_range
from particle.tokens import bracket_fields, is_bracketed, parse_float, parse_floats, split_pair

DEFAULT_THRESHOLDS = ParserThresholds()


def _draw(sampler: Optional[UniformSampler], min_value: float, max_value: float) -> float:
    if sampler is None:
        return random_in_range(min_value, max_value)
    return sampler.sample(min_value, max_value)


def _range_bounds(fields: List[str]) -> Optional[Tuple[float, float]]:
    """(min, max) from one or two range fields"""
    values = parse_floats(fields)
    if values is None:
        return None
    if len(values) == 2:
        return values[0], values[1]
    if len(values) == 1:
        return values[0], values[0]
    return None


# === Plain range ===

def parse_range(s: str) -> Optional[ParseResult]:
    """
    Parse "[min max]" or "[v]"

    Owns every string wrapped in brackets: malformed content gives the zero
    result rather than None. No ordering is enforced (min may exceed max).
    """
    if not is_bracketed(s):
        return None
    bounds = _range_bounds(bracket_fields(s))
    if bounds is None:
        return ParseResult.zero()
    return ParseResult(min=bounds[0], max=bounds[1])


# === Double range ===

def double_range_bounds(s: str) -> Optional[Tuple[float, float, float, float]]:
    """
    (start_min, start_max, end_min, end_max) of "[a b] [c d]"

    Both groups must hold exactly two numbers.
    """
    if s.count('[') != 2 or s.count(']') != 2:
        return None

    parts = s.split(']')
    first = parts[0].strip()
    if first.startswith('['):
        first = first[1:]
    second = parts[1].strip()
    if second.startswith('['):
        second = second[1:]

    first_fields = first.split()
    second_fields = second.split()
    if len(first_fields) != 2 or len(second_fields) != 2:
        return None

    values = parse_floats(first_fields + second_fields)
    if values is None:
        return None
    return values[0], values[1], values[2], values[3]


def parse_double_range_random(s: str, sampler: Optional[UniformSampler] = None) -> Optional[ParseResult]:
    """
    "[a b] [c d]" as a random start → random end curve

    Draws once from each range; the result is a linear 0 → 1 keyframe pair.
    """
    bounds = double_range_bounds(s)
    if bounds is None:
        return None
    start_min, start_max, end_min, end_max = bounds
    start = _draw(sampler, start_min, start_max)
    end = _draw(sampler, end_min, end_max)
    return ParseResult(
        keyframes=(Keyframe(0.0, start), Keyframe(1.0, end)),
        interpolation=InterpolationMode.LINEAR,
    )


def parse_double_range_width(s: str) -> Optional[ParseResult]:
    """
    "[a b] [c d]" as a width curve |b - a| → |d - c|

    Used for emitter boxes, e.g. "[-130 0] [-100 0]" shrinks 130 → 100.
    """
    bounds = double_range_bounds(s)
    if bounds is None:
        return None
    start_min, start_max, end_min, end_max = bounds
    return ParseResult(
        keyframes=(
            Keyframe(0.0, abs(start_max - start_min)),
            Keyframe(1.0, abs(end_max - end_min)),
        ),
        interpolation=InterpolationMode.LINEAR,
    )


def parse_range_value(s: str) -> RangeValueResult:
    """
    Parse a range whose bounds may move over time

    Supports:
        "100"               → initial (100, 100), no tracks
        "[min max]"         → initial (min, max), no tracks
        "[a b] [c d]"       → initial (a, b), min track a → c, width track (b-a) → (d-c)

    Unparseable input gives an all-zero result.
    """
    s = s.strip()
    if not s:
        return RangeValueResult()

    bounds = double_range_bounds(s)
    if bounds is not None:
        start_min, start_max, end_min, end_max = bounds
        return RangeValueResult(
            initial_min=start_min,
            initial_max=start_max,
            min_keyframes=(Keyframe(0.0, start_min), Keyframe(1.0, end_min)),
            width_keyframes=(
                Keyframe(0.0, start_max - start_min),
                Keyframe(1.0, end_max - end_min),
            ),
            interpolation=InterpolationMode.LINEAR,
        )

    if is_bracketed(s):
        single = _range_bounds(bracket_fields(s))
        if single is not None:
            return RangeValueResult(initial_min=single[0], initial_max=single[1])

    value = parse_float(s)
    if value is not None:
        return RangeValueResult(initial_min=value, initial_max=value)
    return RangeValueResult()


# === Range + keyframes ===

def parse_range_with_keyframes(
    s: str,
    thresholds: ParserThresholds = DEFAULT_THRESHOLDS,
) -> Optional[ParseResult]:
    """
    Parse "[min max] value,time ..."

    Each trailing pair is (value, time); a time above
    `thresholds.normalized_time_max` is a percentage and is divided by 100.
    The range stays the initial-value source: the caller prepends the sampled
    start value to the keyframes.
    """
    if not s.startswith('['):
        return None
    close = s.find(']')
    if close <= 0 or close >= len(s) - 1:
        return None

    tail = s[close + 1:].strip()
    # A second bracket group is a double range, not keyframes
    if not tail or tail.startswith('['):
        return None

    range_fields = bracket_fields(s[:close + 1])
    if len(range_fields) != 2:
        return None
    values = parse_floats(range_fields)
    if values is None:
        return None

    keyframes = []
    for token in tail.split():
        if ',' not in token:
            continue
        pair = split_pair(token)
        if pair is None:
            continue
        value, time = pair
        if time > thresholds.normalized_time_max:
            time = time / 100.0
        keyframes.append(Keyframe(time, value))

    return ParseResult(min=values[0], max=values[1], keyframes=tuple(keyframes))


# === Initial value → random target ===

def parse_initial_to_random(s: str, sampler: Optional[UniformSampler] = None) -> Optional[ParseResult]:
    """
    Parse "v [min max]"

    Moves from v at t=0 to one random draw from [min, max] at t=1,
    e.g. a position field "0 [-40 10]".
    """
    if s.startswith('[') or not s.endswith(']'):
        return None
    bracket = s.find('[')
    if bracket <= 0:
        return None

    initial = parse_float(s[:bracket])
    if initial is None:
        return None

    range_fields = bracket_fields(s[bracket:])
    if len(range_fields) != 2:
        return None
    values = parse_floats(range_fields)
    if values is None:
        return None

    end = _draw(sampler, values[0], values[1])
    return ParseResult(
        keyframes=(Keyframe(0.0, initial), Keyframe(1.0, end)),
        interpolation=InterpolationMode.LINEAR,
    )
