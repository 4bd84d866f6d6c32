"""
Particle value language - parsers, evaluator and sampler
"""

from .curves import get_curve
from .evaluator import evaluate_keyframes
from .sampler import UniformSampler, random_in_range
from .range_parser import (
    parse_range,
    parse_double_range_random,
    parse_double_range_width,
    parse_range_value,
    parse_range_with_keyframes,
    parse_initial_to_random,
)
from .keyframe_parser import KeyframeSequenceParser, extract_interpolation, parse_keyframe_sequence
from .value_parser import ValueParser, parse_value, is_trivial_result
from .property import ParticleProperty, PropertyCurve, RangeProperty

__all__ = [
    'get_curve',
    'evaluate_keyframes',
    'UniformSampler',
    'random_in_range',
    'parse_range',
    'parse_double_range_random',
    'parse_double_range_width',
    'parse_range_value',
    'parse_range_with_keyframes',
    'parse_initial_to_random',
    'KeyframeSequenceParser',
    'extract_interpolation',
    'parse_keyframe_sequence',
    'ValueParser',
    'parse_value',
    'is_trivial_result',
    'ParticleProperty',
    'PropertyCurve',
    'RangeProperty',
]
