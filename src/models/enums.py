"""
Enums for particle value parsing and evaluation
"""

from enum import Enum, auto
from typing import Optional


class InterpolationMode(Enum):
    """
    Easing applied between two keyframes

    The value is the keyword used in effect definition strings
    (".4 Linear 10,9.999999"). UNSPECIFIED behaves exactly like LINEAR.
    """
    UNSPECIFIED = ""
    LINEAR = "Linear"
    EASE_IN = "EaseIn"
    EASE_OUT = "EaseOut"
    FAST_IN_OUT_WEAK = "FastInOutWeak"

    @property
    def keyword(self) -> str:
        return self.value

    @classmethod
    def from_keyword(cls, keyword: Optional[str]) -> 'InterpolationMode':
        """Map a keyword to a mode; unknown or empty keywords give UNSPECIFIED"""
        if isinstance(keyword, InterpolationMode):
            return keyword
        for mode in cls:
            if mode.value == keyword:
                return mode
        return cls.UNSPECIFIED


# Search order used when extracting a keyword from a value string
INTERPOLATION_KEYWORDS = (
    InterpolationMode.LINEAR,
    InterpolationMode.EASE_IN,
    InterpolationMode.EASE_OUT,
    InterpolationMode.FAST_IN_OUT_WEAK,
)


class DoubleRangeMode(Enum):
    """
    Meaning of "[a b] [c d]" for the value dispatcher

    RANDOM: sample each range, interpolate start sample → end sample
    WIDTH: interpolate |b - a| → |d - c| (emitter box sizes)
    """
    RANDOM = auto()
    WIDTH = auto()


class ValueFormat(Enum):
    """Sub-format recognized by the value dispatcher"""
    EMPTY = auto()                 # "" or whitespace only
    RANGE_WITH_KEYFRAMES = auto()  # "[-720 720] 0,39.999996"
    DOUBLE_RANGE = auto()          # "[.4 .6] [.8 1.2]"
    INITIAL_TO_RANDOM = auto()     # "0 [-40 10]"
    RANGE = auto()                 # "[0.7 0.9]" / "[5]"
    KEYFRAMES = auto()             # "0,2 1,2 4,21" / ".4 Linear 10,9.999999"
    TWO_VALUES = auto()            # "200 100"
    FIXED = auto()                 # "1500"
    INVALID = auto()               # anything unparseable


class SequenceRule(Enum):
    """Rule of the keyframe-sequence parser that consumed a token"""
    INITIAL_VALUE = auto()         # bare scalar before any keyframe
    HOLD_WITH_INITIAL = auto()     # "0 10,50 0" middle + final after an initial value
    TRIGGER = auto()               # "1,50 0,50" jump at a percentage
    HOLD_THEN_DECAY = auto()       # ".9,70 0" hold, then decay to final
    PERCENT_VALUE = auto()         # ".3 .3,39.999996 0,50" value at percentage
    QUICK_INTERPOLATE = auto()     # ".4 10,9.999999" reach value quickly, then hold
    TIME_VALUE = auto()            # "0,2 1,2" classic time,value pair
    IGNORED = auto()               # malformed token, skipped


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    PARSER = auto()      # Value string classification
    EFFECT = auto()      # Effect definition files, emitters
