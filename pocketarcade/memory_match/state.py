"""
Immutable state models for the memory match game.

Cards move from hidden to face-up to matched. Two face-up cards with
different symbols stay visible until the caller hides them, so the
mismatch is a state of its own rather than something that clears itself.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple

from pocketarcade.common.result import ResultCategory, TransitionResult


class FlipResult(TransitionResult):
    """Possible results of memory match transitions."""

    FLIPPED = ("flipped", ResultCategory.APPLIED)
    MATCHED = ("matched", ResultCategory.APPLIED)
    MISMATCHED = ("mismatched", ResultCategory.APPLIED)
    HIDDEN = ("hidden", ResultCategory.APPLIED)
    COMPLETED = ("completed", ResultCategory.TERMINAL)
    PENDING_MISMATCH = ("pending_mismatch", ResultCategory.REJECTED)
    ALREADY_REVEALED = ("already_revealed", ResultCategory.REJECTED)
    OUT_OF_RANGE = ("out_of_range", ResultCategory.REJECTED)
    NOTHING_TO_HIDE = ("nothing_to_hide", ResultCategory.REJECTED)
    GAME_OVER = ("game_over", ResultCategory.TERMINAL)


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of a memory match game.

    Attributes:
        cards: Symbol on each card, in table order
        face_up: Indices turned face-up and not yet matched, in flip order
        matched: Indices of cards that belong to a found pair
        move_count: Completed flip pairs in this game
        best_moves: Fewest moves of any won game, None before the first win
    """

    cards: Tuple[str, ...] = ()
    face_up: Tuple[int, ...] = ()
    matched: FrozenSet[int] = frozenset()
    move_count: int = 0
    best_moves: Optional[int] = None

    @property
    def pair_count(self) -> int:
        return len(self.cards) // 2

    @property
    def awaiting_hide(self) -> bool:
        """True while two unequal cards are showing."""
        return len(self.face_up) == 2

    @property
    def completed(self) -> bool:
        return bool(self.cards) and len(self.matched) == len(self.cards)

    def is_revealed(self, index: int) -> bool:
        return index in self.face_up or index in self.matched

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cards": list(self.cards),
            "face_up": list(self.face_up),
            "matched": sorted(self.matched),
            "move_count": self.move_count,
            "best_moves": self.best_moves,
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """Hidden cards are sent as None so a client cannot peek."""
        return {
            "game": "memory_match",
            "cards": [
                symbol if self.is_revealed(i) else None
                for i, symbol in enumerate(self.cards)
            ],
            "matched": sorted(self.matched),
            "moves": self.move_count,
            "best_moves": self.best_moves,
            "awaiting_hide": self.awaiting_hide,
            "completed": self.completed,
        }
