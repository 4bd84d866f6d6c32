"""
Uniform sampler

Draws spawn-time values from [min, max]. The random source is injected so
that simulations can be replayed; a module-level generator is used only when
no source is given.
"""

import random
from typing import Optional


class UniformSampler:
    """
    Uniform draws from a range with an explicit random source

    Example:
        sampler = UniformSampler(random.Random(42))
        alpha = sampler.sample(0.7, 0.9)
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def seeded(cls, seed: int) -> 'UniformSampler':
        return cls(random.Random(seed))

    def sample(self, min_value: float, max_value: float) -> float:
        """min + random()·(max - min); degenerate or inverted ranges return min"""
        return random_in_range(min_value, max_value, self.rng)


def random_in_range(min_value: float, max_value: float, rng: Optional[random.Random] = None) -> float:
    if min_value >= max_value:
        return min_value
    source = rng if rng is not None else random
    return min_value + source.random() * (max_value - min_value)
