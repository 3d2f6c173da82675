"""
Entropy sources shared by every game engine.

All draws are derived from a single primitive, `randbelow(n)`, so that a
scripted source fully determines shuffles, wheel draws, hazard placement,
reel stops and drop paths.

>>> rng = FixedSequenceSource([3, 0, 1])
>>> rng.randbelow(37), rng.randbelow(2), rng.randbelow(2)
(3, 0, 1)
"""

import itertools
import random
from abc import ABC, abstractmethod
from typing import Iterable, List, MutableSequence, Sequence


class RandomSource(ABC):
    """
    Abstract entropy provider.

    Subclasses implement `randbelow`; everything else is built on top of it.
    """

    @abstractmethod
    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed integer in ``[0, n)``."""

    def coin(self) -> int:
        """Return 0 or 1 with equal probability."""
        return self.randbelow(2)

    def random(self, resolution: int = 2**53) -> float:
        """Return a float in ``[0, 1)``."""
        return self.randbelow(resolution) / resolution

    def shuffle(self, items: MutableSequence) -> None:
        """Shuffle a sequence in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]

    def sample(self, n: int, k: int) -> List[int]:
        """
        Choose ``k`` distinct positions out of ``range(n)``.

        Uses a partial Fisher-Yates pass so every k-subset is equally likely.
        """
        if not 0 <= k <= n:
            raise ValueError(f"Cannot sample {k} positions from {n}")
        pool = list(range(n))
        for i in range(k):
            j = i + self.randbelow(n - i)
            pool[i], pool[j] = pool[j], pool[i]
        return pool[:k]

    def weighted_index(self, weights: Sequence[int]) -> int:
        """Pick an index with probability proportional to its integer weight."""
        total = sum(weights)
        if total <= 0:
            raise ValueError("Weights must sum to a positive value")
        roll = self.randbelow(total)
        for index, weight in enumerate(weights):
            if roll < weight:
                return index
            roll -= weight
        raise AssertionError("unreachable: roll exceeded total weight")


class SystemRandomSource(RandomSource):
    """Production source backed by the operating system's entropy pool."""

    def __init__(self):
        self._random = random.SystemRandom()

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("n must be positive")
        return self._random.randrange(n)


class SeededRandomSource(RandomSource):
    """Reproducible source for simulations."""

    def __init__(self, seed=None):
        self.seed = seed
        self._random = random.Random(seed)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("n must be positive")
        return self._random.randrange(n)


class FixedSequenceSource(RandomSource):
    """
    Scripted source that replays a fixed sequence of values, cycling forever.

    Each value must be valid for the request it answers, otherwise a
    ValueError is raised so that a mis-scripted test fails loudly.
    """

    def __init__(self, values: Iterable[int]):
        self.values = list(values)
        if not self.values:
            raise ValueError("FixedSequenceSource needs at least one value")
        self._iter = itertools.cycle(self.values)
        self.calls = 0

    def randbelow(self, n: int) -> int:
        value = next(self._iter)
        self.calls += 1
        if not 0 <= value < n:
            raise ValueError(f"Scripted value {value} out of range for randbelow({n})")
        return value


def default_source() -> RandomSource:
    """Return the source used when the caller does not inject one."""
    return SystemRandomSource()
