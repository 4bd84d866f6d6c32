"""
Parser configuration models

Heuristic thresholds of the keyframe-sequence and hybrid parsers, plus the
settings block read from parser.yaml. Defaults reproduce the behaviour of the
effect data this parser was tuned against.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

from models.enums import DoubleRangeMode, LogLevel
from models.errors import ConfigError


@dataclass(frozen=True)
class ParserThresholds:
    """
    Magnitude thresholds that decide how "a,b" pairs are read

    Attributes:
        normalized_time_max: Hybrid "[min max] v,p" - p above this is a percentage
        hold_percent_min: Rule 1 (middle + final after initial) needs b above this
        trigger_percent_min: Rules 2 and 3 (trigger, hold-then-decay) need b above this
        trigger_tolerance: Max distance between the two percentages of a trigger
        percent_min: Rule 4 lower bound (exclusive)
        percent_max: Rule 4 upper bound (exclusive)
        quick_percent_max: Rule 5 (quick interpolate) needs b at or below this
    """
    normalized_time_max: float = 1.0
    hold_percent_min: float = 1.0
    trigger_percent_min: float = 10.0
    trigger_tolerance: float = 0.001
    percent_min: float = 10.0
    percent_max: float = 200.0
    quick_percent_max: float = 10.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ParserThresholds':
        """
        Build thresholds from a (possibly partial) mapping

        Unknown keys are returned to the caller through `unknown_keys()`;
        values that are not numbers raise ConfigError.
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        overrides = {}
        for key, value in data.items():
            if key not in known:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(
                    f"Threshold '{key}' must be a number",
                    details={"key": key, "value": repr(value)},
                )
            overrides[key] = float(value)
        return replace(cls(), **overrides)

    @classmethod
    def unknown_keys(cls, data: Optional[Dict[str, Any]]) -> list:
        known = {f.name for f in fields(cls)}
        return sorted(k for k in (data or {}) if k not in known)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ParserSettings:
    """Everything parser.yaml can configure"""
    thresholds: ParserThresholds = field(default_factory=ParserThresholds)
    double_range: DoubleRangeMode = DoubleRangeMode.WIDTH
    log_level: LogLevel = LogLevel.INFO
    log_colors: bool = True
    seed: Optional[int] = None
