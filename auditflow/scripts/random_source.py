"""Seeded random source and shuffle used by every sampling method.

The generator is a plain linear-congruential generator so that a given seed
yields the same stream on every platform and in every implementation that
uses the same constants. A new instance must be created for each sampling
call and passed explicitly to the helpers that consume it.
"""

import math
from typing import List, Sequence, TypeVar

from auditflow.scripts.parameter import lcg_increment, lcg_modulus, lcg_multiplier

T = TypeVar("T")


class SeededRandom:
    """Linear-congruential generator producing floats in [0, 1).

    Args:
        seed: Integer seed, used as the initial state without any mixing
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed
        self.draws = 0

    def next(self) -> float:
        """Advance the generator and return the next value in [0, 1)."""
        self._state = (self._state * lcg_multiplier + lcg_increment) % lcg_modulus
        self.draws += 1
        return self._state / lcg_modulus

    def random(self) -> float:
        """Alias of :meth:`next` matching the ``random.Random`` interface."""
        return self.next()

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed}, draws={self.draws})"


def shuffle(items: Sequence[T], rng: SeededRandom) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``items``.

    Walks from the last index down to 1 and swaps each element with one drawn
    from ``[0, i]``. Consumes exactly ``len(items) - 1`` draws from ``rng``
    (none for sequences of length 0 or 1). The input is never mutated.

    Args:
        items: Sequence to shuffle
        rng: Random source shared with the caller

    Returns:
        New list holding the permuted items
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = math.floor(rng.next() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
