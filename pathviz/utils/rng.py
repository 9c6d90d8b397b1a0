"""Seeded random number generator for reproducible layouts."""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class SeededRNG:
    """
    Thin wrapper over random.Random that remembers its seed.
    Layout generators take one explicitly instead of sharing a global.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> Optional[int]:
        """Get the current seed."""
        return self._seed

    def reseed(self, seed: Optional[int]):
        """Restart the sequence from a new seed."""
        self._seed = seed
        self._rng.seed(seed)

    def random(self) -> float:
        """Generate a random float in [0.0, 1.0)."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Generate a random integer N such that a <= N <= b."""
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        return self._rng.choice(seq)

    def shuffle(self, seq: list) -> None:
        """Shuffle the sequence in place."""
        self._rng.shuffle(seq)

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        """Choose k unique random elements from the population."""
        return self._rng.sample(population, k)
