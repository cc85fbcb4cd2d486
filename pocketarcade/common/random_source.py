"""
Injectable randomness for the game engines.

Engines never touch the ``random`` module directly. They receive a
``RandomSource`` and derive every random decision from ``uniform_float``,
so a recorded sequence of floats replays a session exactly.
"""

import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSourceExhausted(RuntimeError):
    """Raised when a scripted source has no values left."""


class RandomSource(ABC):
    """
    Abstract source of uniform random floats.

    Subclasses only implement ``uniform_float``; the helpers below are
    built on top of it so every implementation draws the same number of
    values for the same decision.
    """

    @abstractmethod
    def uniform_float(self) -> float:
        """Return a float in the half-open interval [0, 1)."""

    def randrange(self, n: int) -> int:
        """Return an integer in ``range(n)`` using a single draw."""
        if n <= 0:
            raise ValueError("randrange() needs a positive bound")
        # Guard against scripted values of exactly 1.0
        return min(int(self.uniform_float() * n), n - 1)

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence uniformly."""
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.randrange(len(seq))]

    def shuffled(self, items: Iterable[T]) -> List[T]:
        """
        Return a uniformly shuffled copy of ``items``.

        Fisher-Yates, walking from the last index down to 1 with one draw
        per step.
        """
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.randrange(i + 1)
            result[i], result[j] = result[j], result[i]
        return result


class SeededRandomSource(RandomSource):
    """Production source backed by ``random.Random``."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def uniform_float(self) -> float:
        return self._random.random()


class ScriptedRandomSource(RandomSource):
    """
    Replays a fixed list of floats.

    Used in tests to force specific spawns, shuffles and tie-breaks.
    """

    __test__ = False

    def __init__(self, values: Iterable[float]):
        self._values = list(values)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def uniform_float(self) -> float:
        if self._position >= len(self._values):
            raise RandomSourceExhausted(
                f"scripted source exhausted after {self._position} values"
            )
        value = self._values[self._position]
        self._position += 1
        return value


class RecordingRandomSource(RandomSource):
    """Wraps another source and keeps every value it hands out."""

    def __init__(self, inner: RandomSource):
        self._inner = inner
        self.recorded: List[float] = []

    def uniform_float(self) -> float:
        value = self._inner.uniform_float()
        self.recorded.append(value)
        return value

    def replay(self) -> ScriptedRandomSource:
        """Return a scripted source that yields the recorded values."""
        return ScriptedRandomSource(self.recorded)
