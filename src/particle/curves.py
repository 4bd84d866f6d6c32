"""
Interpolation curves

Each curve maps a progress ratio (0.0-1.0) to an eased ratio (0.0-1.0).
"""

from typing import Callable, Union

from models.enums import InterpolationMode

EaseFunction = Callable[[float], float]


def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Progress (0.0 = start, 1.0 = end)

    Returns:
        Eased progress (0.0 to 1.0)
    """
    return t


def ease_in(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


def ease_fast_in_out_weak(t: float) -> float:
    """Smoothstep (slow start → fast middle → slow end)"""
    return t * t * (3 - 2 * t)


CURVES = {
    InterpolationMode.UNSPECIFIED: ease_linear,
    InterpolationMode.LINEAR: ease_linear,
    InterpolationMode.EASE_IN: ease_in,
    InterpolationMode.EASE_OUT: ease_out,
    InterpolationMode.FAST_IN_OUT_WEAK: ease_fast_in_out_weak,
}


def get_curve(mode: Union[InterpolationMode, str, None]) -> EaseFunction:
    """Curve for a mode or keyword; unknown keywords fall back to linear"""
    return CURVES.get(InterpolationMode.from_keyword(mode), ease_linear)
