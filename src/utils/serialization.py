"""
Serialization utilities - Canonical text and dict forms of parse results

Provides bidirectional conversion between:
- Enums ↔ Strings (InterpolationMode, DoubleRangeMode, LogLevel, ...)
- ParseResult ↔ canonical value string (re-parses to the same result)
- ParseResult / RangeValueResult ↔ JSON-compatible dicts
"""

import math
from typing import TypeVar, Type, Any, Dict, List, Optional
from enum import Enum

from models.enums import InterpolationMode, LogCategory
from models.keyframe import Keyframe, ParseResult, RangeValueResult, as_keyframes
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.PARSER)

T = TypeVar('T', bound=Enum)


def format_number(value: float) -> str:
    """Shortest text that reads back as the same float ("1.0" → "1")"""
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


class Serializer:
    """Central serialization for parse results"""

    # ========================================================================
    # ENUM SERIALIZATION
    # ========================================================================

    @staticmethod
    def enum_to_str(value: Optional[Enum]) -> Optional[str]:
        """Convert any enum to string name"""
        return value.name if value else None

    @staticmethod
    def str_to_enum(value: str, enum_type: Type[T]) -> T:
        """Convert string to enum (name, case-insensitive), raise ValueError if invalid"""
        if isinstance(value, enum_type):
            return value
        try:
            return enum_type[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid {enum_type.__name__}: {value}")

    # ========================================================================
    # CANONICAL VALUE STRINGS
    # ========================================================================

    @staticmethod
    def to_value_string(result: ParseResult) -> str:
        """
        Canonical definition string for a parse result

        Forms:
            zero result             → ""
            fixed value             → "v"
            range                   → "[min max]"
            two linear keyframes    → "v1 v2"
            hold then decay         → "a,P f" (P = hold time×100)
            trigger jump            → "a,P b,P"
            other keyframes         → "t,v K t,v ..." (K = keyword, if any)
            range + keyframes       → "[min max] v,p ..." (p = time, or time×100 above 1)

        Keyframe forms are checked by parsing them back; when the plain pair
        list would trip the hold or trigger rules, the pairs are written with
        a bare "," between them, which the sequence parser skips.
        """
        if not result.has_keyframes:
            if not result.has_range:
                return ""
            if result.min == result.max:
                return format_number(result.min)
            return f"[{format_number(result.min)} {format_number(result.max)}]"

        if result.has_range:
            tokens = [f"[{format_number(result.min)} {format_number(result.max)}]"]
            for kf in result.keyframes:
                time = kf.time if kf.time <= 1.0 else kf.time * 100.0
                tokens.append(f"{format_number(kf.value)},{format_number(time)}")
            return " ".join(tokens)

        from particle.value_parser import parse_value

        candidates = [_shorthand_tokens(result), _pair_tokens(result), _pair_tokens(result, separated=True)]
        texts = [_join(tokens, result.interpolation) for tokens in candidates if tokens]
        for text in texts:
            if parse_value(text) == result:
                return text
        log.debug("No keyframe encoding reads back exactly", keyframes=len(result.keyframes))
        return texts[-1]

    # ========================================================================
    # DICT CONVERSION
    # ========================================================================

    @staticmethod
    def to_dict(result: ParseResult) -> Dict[str, Any]:
        """
        Serialize parse result to JSON-compatible dict

        Returns:
            Dict with min, max, keyframes ([[time, value], ...]) and interpolation keyword
        """
        return {
            "min": result.min,
            "max": result.max,
            "keyframes": [[kf.time, kf.value] for kf in result.keyframes],
            "interpolation": result.interpolation.keyword,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ParseResult:
        """
        Deserialize dict to ParseResult

        Raises:
            ValueError: malformed keyframe entries or numbers
        """
        try:
            return ParseResult(
                min=float(data.get("min", 0.0)),
                max=float(data.get("max", 0.0)),
                keyframes=as_keyframes(data.get("keyframes", [])),
                interpolation=InterpolationMode.from_keyword(data.get("interpolation", "")),
            )
        except (TypeError, ValueError) as e:
            log.error(f"Failed to deserialize parse result: {e}")
            raise ValueError(f"Invalid parse result data: {e}") from e

    @staticmethod
    def range_value_to_dict(result: RangeValueResult) -> Dict[str, Any]:
        return {
            "initial_min": result.initial_min,
            "initial_max": result.initial_max,
            "min_keyframes": [[kf.time, kf.value] for kf in result.min_keyframes],
            "width_keyframes": [[kf.time, kf.value] for kf in result.width_keyframes],
            "interpolation": result.interpolation.keyword,
        }

    @staticmethod
    def keyframe_to_str(kf: Keyframe) -> str:
        """Display form "(time, value)"; not parseable, see to_value_string"""
        return f"({format_number(kf.time)}, {format_number(kf.value)})"


def _pair_tokens(result: ParseResult, separated: bool = False) -> List[str]:
    tokens = []
    for kf in result.keyframes:
        if separated and tokens:
            tokens.append(",")
        tokens.append(f"{format_number(kf.time)},{format_number(kf.value)}")
    return tokens


def _shorthand_tokens(result: ParseResult) -> Optional[List[str]]:
    """Source-language form of a two-value, hold-then-decay or trigger result"""
    kfs = result.keyframes
    if kfs[0].time != 0.0:
        return None

    if len(kfs) == 2 and kfs[1].time == 1.0 and result.interpolation is InterpolationMode.LINEAR:
        return [format_number(kfs[0].value), format_number(kfs[1].value)]

    if len(kfs) == 3 and kfs[1].value == kfs[0].value and kfs[2].time == 1.0 and 0.0 < kfs[1].time < 1.0:
        percent = format_number(kfs[1].time * 100.0)
        return [f"{format_number(kfs[0].value)},{percent}", format_number(kfs[2].value)]

    if len(kfs) == 2 and kfs[1].time > 0.0:
        percent = format_number(kfs[1].time * 100.0)
        return [f"{format_number(kfs[0].value)},{percent}", f"{format_number(kfs[1].value)},{percent}"]

    return None


def _join(tokens: List[str], interpolation: InterpolationMode) -> str:
    # "v1 v2" already means linear; a keyword there would turn it into a sequence
    if interpolation is not InterpolationMode.UNSPECIFIED and not (len(tokens) == 2 and ',' not in tokens[0]):
        tokens = tokens[:1] + [interpolation.keyword] + tokens[1:]
    return " ".join(tokens)
