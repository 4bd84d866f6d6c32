"""
Keyframe evaluator

Samples a keyframe sequence at a query time. Times are not clamped to 0-1:
absolute-time sequences ("0,2 1,2 4,21") are evaluated as written, and the
value is held flat before the first and after the last keyframe.
"""

from typing import Sequence, Union

from models.enums import InterpolationMode
from models.keyframe import Keyframe
from particle.curves import get_curve


def evaluate_keyframes(
    keyframes: Sequence[Keyframe],
    t: float,
    interpolation: Union[InterpolationMode, str, None] = InterpolationMode.UNSPECIFIED,
) -> float:
    """
    Interpolated value of a keyframe sequence at time t

    Args:
        keyframes: Keyframes sorted by time (not modified)
        t: Query time, normalized or absolute
        interpolation: Mode or keyword; unknown keywords behave as Linear

    Returns:
        0 for an empty sequence, the only value for a single keyframe,
        otherwise the eased blend of the interval containing t.
    """
    if not keyframes:
        return 0.0
    if len(keyframes) == 1:
        return keyframes[0].value

    first = keyframes[0]
    last = keyframes[-1]
    if t < first.time:
        return first.value
    if t >= last.time:
        return last.value

    ease = get_curve(interpolation)
    for k0, k1 in zip(keyframes, keyframes[1:]):
        if k0.time <= t <= k1.time:
            duration = k1.time - k0.time
            if duration <= 0:
                return k0.value
            ratio = ease((t - k0.time) / duration)
            return k0.value + ratio * (k1.value - k0.value)

    # Unsorted sequences can leave t outside every interval
    return last.value
