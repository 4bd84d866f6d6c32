"""
Models package - Data models for particle value parsing
"""

from .enums import (
    InterpolationMode,
    DoubleRangeMode,
    ValueFormat,
    SequenceRule,
    LogLevel,
    LogCategory,
)
from .keyframe import Keyframe, ParseResult, RangeValueResult
from .config import ParserThresholds, ParserSettings

__all__ = [
    'InterpolationMode',
    'DoubleRangeMode',
    'ValueFormat',
    'SequenceRule',
    'LogLevel',
    'LogCategory',
    'Keyframe',
    'ParseResult',
    'RangeValueResult',
    'ParserThresholds',
    'ParserSettings',
]
