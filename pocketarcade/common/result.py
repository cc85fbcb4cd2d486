"""
Result taxonomy shared by all game transitions.

Every transition returns the new state together with a member of a
game-specific ``TransitionResult`` enum. Each member carries a short label
and a ``ResultCategory`` so the presentation layer can treat outcomes from
different games uniformly.
"""

from enum import Enum, auto


class ResultCategory(Enum):
    """Broad classes of transition outcomes."""

    APPLIED = auto()
    REJECTED = auto()  # precondition failed, state unchanged
    TERMINAL = auto()  # game finished, or action refused on a finished game
    EXHAUSTED = auto()  # hints or attempts used up


class TransitionResult(Enum):
    """
    Base class for per-game result enums.

    Members are declared as ``NAME = ("label", ResultCategory.X)``.
    """

    def __init__(self, label: str, category: ResultCategory):
        self.label = label
        self.category = category

    @property
    def applied(self) -> bool:
        return self.category is ResultCategory.APPLIED

    @property
    def rejected(self) -> bool:
        return self.category is ResultCategory.REJECTED

    @property
    def terminal(self) -> bool:
        return self.category is ResultCategory.TERMINAL

    @property
    def exhausted(self) -> bool:
        return self.category is ResultCategory.EXHAUSTED

    def __str__(self) -> str:
        return self.label
