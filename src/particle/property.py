"""
Property binding

Connects parsed descriptors to the two ways emitters consume them:
resolve as range (one draw per spawned particle) and resolve as curve
(evaluated every frame over the particle's normalized age).
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from models.enums import InterpolationMode
from models.keyframe import Keyframe, ParseResult, RangeValueResult
from particle.evaluator import evaluate_keyframes
from particle.range_parser import parse_range_value
from particle.sampler import UniformSampler
from particle.value_parser import ValueParser, parse_value


@dataclass(frozen=True)
class PropertyCurve:
    """Per-particle curve: keyframes plus mode, or a constant"""
    keyframes: Tuple[Keyframe, ...] = field(default_factory=tuple)
    interpolation: InterpolationMode = InterpolationMode.UNSPECIFIED
    constant: float = 0.0

    @property
    def is_constant(self) -> bool:
        return not self.keyframes

    def value_at(self, t: float) -> float:
        if not self.keyframes:
            return self.constant
        return evaluate_keyframes(self.keyframes, t, self.interpolation)


@dataclass(frozen=True)
class ParticleProperty:
    """
    A named emitter property with its parsed descriptor

    Example:
        spin = ParticleProperty.from_string("ParticleSpinSpeed", "[-720 720] 0,39.999996")
        curve = spin.resolve_curve(sampler)
        curve.value_at(0.0)   # random start in [-720, 720]
        curve.value_at(0.5)   # 0 (decayed at 40%)
    """
    name: str
    raw: str
    result: ParseResult

    @classmethod
    def from_string(cls, name: str, raw: Optional[str], parser: Optional[ValueParser] = None) -> 'ParticleProperty':
        if parser is None:
            result = parse_value(raw)
        else:
            result = parser.parse(raw)
        return cls(name=name, raw=raw or '', result=result)

    @property
    def is_defined(self) -> bool:
        return bool(self.raw.strip())

    @property
    def is_animated(self) -> bool:
        return self.result.has_keyframes

    def resolve_range(self, sampler: UniformSampler) -> float:
        """
        Spawn-time value

        Range (including the hybrid form) → one uniform draw.
        Keyframes only → value of the first keyframe.
        """
        result = self.result
        if result.has_keyframes and not result.has_range:
            return result.keyframes[0].value
        return sampler.sample(result.min, result.max)

    def resolve_curve(self, sampler: UniformSampler) -> PropertyCurve:
        """
        Curve for one particle

        For the hybrid form the sampled start value is prepended at t=0 when
        the first keyframe starts later, so the particle begins at its random
        value and then follows the keyframes.
        """
        result = self.result
        if not result.has_keyframes:
            return PropertyCurve(constant=sampler.sample(result.min, result.max))

        keyframes = result.keyframes
        if result.has_range and keyframes[0].time > 0:
            start = sampler.sample(result.min, result.max)
            keyframes = (Keyframe(0.0, start),) + keyframes
        return PropertyCurve(keyframes=keyframes, interpolation=result.interpolation)


@dataclass(frozen=True)
class RangeProperty:
    """
    Emitter-box style property: a range whose min and width move over time

    "[-130 0] [-100 0]" spans [-130, 0] at t=0 and [-100, 0] at t=1.
    """
    name: str
    raw: str
    result: RangeValueResult

    @classmethod
    def from_string(cls, name: str, raw: Optional[str]) -> 'RangeProperty':
        return cls(name=name, raw=raw or '', result=parse_range_value(raw or ''))

    @property
    def is_animated(self) -> bool:
        return self.result.is_animated

    def min_at(self, t: float) -> float:
        if not self.result.min_keyframes:
            return self.result.initial_min
        return evaluate_keyframes(self.result.min_keyframes, t, self.result.interpolation)

    def width_at(self, t: float) -> float:
        if not self.result.width_keyframes:
            return self.result.initial_max - self.result.initial_min
        return evaluate_keyframes(self.result.width_keyframes, t, self.result.interpolation)

    def max_at(self, t: float) -> float:
        return self.min_at(t) + self.width_at(t)

    def sample_at(self, t: float, sampler: UniformSampler) -> float:
        return sampler.sample(self.min_at(t), self.max_at(t))
