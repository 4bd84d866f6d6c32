"""
Keyframe models

Immutable value types produced by the value parsers. Created once per
definition string and shared read-only by every particle that uses it.
"""

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from models.enums import InterpolationMode


@dataclass(frozen=True)
class Keyframe:
    """
    A (time, value) sample point

    time is a normalized fraction (0-1) for most definitions, but absolute
    times ("0,2 1,2 4,21") are preserved as written.
    """
    time: float
    value: float


def as_keyframes(items: Iterable) -> Tuple[Keyframe, ...]:
    """Coerce keyframes or (time, value) pairs into a keyframe tuple"""
    result = []
    for item in items:
        if isinstance(item, Keyframe):
            result.append(item)
        else:
            time, value = item
            result.append(Keyframe(float(time), float(value)))
    return tuple(result)


@dataclass(frozen=True)
class ParseResult:
    """
    Normalized descriptor of one value string

    Either the range (min, max) or the keyframe sequence is the active form.
    The hybrid "[min max] v,p" form carries both: the range gives the initial
    value and the keyframes describe where it goes afterwards.
    """
    min: float = 0.0
    max: float = 0.0
    keyframes: Tuple[Keyframe, ...] = field(default_factory=tuple)
    interpolation: InterpolationMode = InterpolationMode.UNSPECIFIED

    def __post_init__(self):
        # Lists are accepted for convenience, stored as tuples
        if not isinstance(self.keyframes, tuple):
            object.__setattr__(self, 'keyframes', as_keyframes(self.keyframes))
        if not isinstance(self.interpolation, InterpolationMode):
            object.__setattr__(self, 'interpolation', InterpolationMode.from_keyword(self.interpolation))

    @classmethod
    def zero(cls) -> 'ParseResult':
        return cls()

    @classmethod
    def fixed(cls, value: float) -> 'ParseResult':
        return cls(min=value, max=value)

    @property
    def has_keyframes(self) -> bool:
        return len(self.keyframes) > 0

    @property
    def has_range(self) -> bool:
        return self.min != 0 or self.max != 0

    @property
    def is_hybrid(self) -> bool:
        """Range supplies the initial value, keyframes the follow-up"""
        return self.has_keyframes and self.has_range

    @property
    def is_zero(self) -> bool:
        return not self.has_keyframes and not self.has_range


@dataclass(frozen=True)
class RangeValueResult:
    """
    Range whose bounds move over time (emitter boxes)

    "[-130 0] [-100 0]" gives initial (-130, 0), a min track -130 → -100 and
    a width track 130 → 100. Single ranges and fixed values have empty tracks.
    """
    initial_min: float = 0.0
    initial_max: float = 0.0
    min_keyframes: Tuple[Keyframe, ...] = field(default_factory=tuple)
    width_keyframes: Tuple[Keyframe, ...] = field(default_factory=tuple)
    interpolation: InterpolationMode = InterpolationMode.UNSPECIFIED

    @property
    def is_animated(self) -> bool:
        return len(self.min_keyframes) > 0 or len(self.width_keyframes) > 0
