"""
Injectable randomness for character sampling.

Usage:
    rng = RandomSource()           # system entropy (secrets.SystemRandom)
    rng = RandomSource(seed=123)   # deterministic, for tests and reproducible runs
    index = rng.randbelow(10)
    rng.shuffle(items)
"""

import random
import secrets
from typing import Any, List, Optional


class RandomSource:
    """Uniform random index and shuffle capability."""

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        if seed is None:
            self._rng: random.Random = secrets.SystemRandom()
        else:
            self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def deterministic(self) -> bool:
        return self._seed is not None

    def randbelow(self, upper: int) -> int:
        """Return a uniformly chosen int in [0, upper)."""
        if upper <= 0:
            raise ValueError("upper must be positive")
        return self._rng.randrange(upper)

    def shuffle(self, items: List[Any]) -> None:
        """Shuffle items in place (Fisher-Yates, uniform over permutations)."""
        self._rng.shuffle(items)


def default_random_source() -> RandomSource:
    """Return a fresh entropy-backed source."""
    return RandomSource()
