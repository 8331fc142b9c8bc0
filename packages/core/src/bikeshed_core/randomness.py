"""Single seedable source for every random decision the bot makes.

Concern inclusion, severity, template choice, meeting hour and meeting title
all draw from one RandomSource so a run can be replayed from a seed and tests
can substitute a scripted source.
"""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in the closed range [low, high]."""
        return self._rng.randint(low, high)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot choose from an empty sequence.")
        return items[self._rng.randrange(len(items))]

    def chance(self, probability: float) -> bool:
        """Return True with the given probability (0.0 never, 1.0 always)."""
        return self._rng.random() < probability
