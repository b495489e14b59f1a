"""Injectable uniform random source.

Every stochastic decision in the simulation draws from a ``RandomSource``:
a zero-argument callable returning a float in ``[0, 1)``. Production code
passes ``random.Random(seed).random``; tests pass a constant or a scripted
sequence so fill, sale and offer outcomes can be asserted exactly.
"""

from __future__ import annotations

import math
import random
from typing import Callable, Sequence, TypeVar

RandomSource = Callable[[], float]

T = TypeVar("T")


def seeded(seed: int | None = None) -> RandomSource:
    """Return a random source backed by its own ``random.Random`` instance."""
    return random.Random(seed).random


def chance(rand: RandomSource, probability: float) -> bool:
    """Return True with the given probability (0.0 to 1.0)."""
    return rand() < probability


def uniform(rand: RandomSource, low: float, high: float) -> float:
    """Draw a float uniformly from ``[low, high)``."""
    return low + (high - low) * rand()


def randint(rand: RandomSource, low: int, high: int) -> int:
    """Draw an integer uniformly from ``[low, high]`` inclusive."""
    value = low + math.floor(rand() * (high - low + 1))
    return min(value, high)


def choice(rand: RandomSource, options: Sequence[T]) -> T:
    """Pick one element uniformly."""
    return options[randint(rand, 0, len(options) - 1)]


class ScriptedRandom:
    """Random source that replays a fixed sequence, then repeats the last value.

    Parameters
    ----------
    values : Sequence[float]
        Values to return in order. Must not be empty.
    """

    def __init__(self, values: Sequence[float]) -> None:
        if not values:
            raise ValueError("ScriptedRandom needs at least one value")
        self._values = list(values)
        self._index = 0

    def __call__(self) -> float:
        if self._index < len(self._values):
            value = self._values[self._index]
            self._index += 1
            return value
        return self._values[-1]
