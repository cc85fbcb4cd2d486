"""
Immutable state models for the tile merge game.

This module provides dataclasses for representing the state of a tile merge
game in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple
from enum import Enum

from pocketarcade.common.result import ResultCategory, TransitionResult
from pocketarcade.tile_merge.constants import BOARD_SIZE

Board = Tuple[Tuple[int, ...], ...]


def empty_board(size: int = BOARD_SIZE) -> Board:
    """Return a size x size board of zeros."""
    return tuple(tuple(0 for _ in range(size)) for _ in range(size))


class Direction(Enum):
    """Directions a move can slide the tiles."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class MoveResult(TransitionResult):
    """Possible results of a move."""

    MOVED = ("moved", ResultCategory.APPLIED)
    WON = ("won", ResultCategory.APPLIED)  # 2048 reached, play continues
    LOST = ("lost", ResultCategory.TERMINAL)
    NO_CHANGE = ("no_change", ResultCategory.REJECTED)
    INVALID_DIRECTION = ("invalid_direction", ResultCategory.REJECTED)
    GAME_OVER = ("game_over", ResultCategory.TERMINAL)


@dataclass(frozen=True)
class MoveOutcome:
    """
    What a move did.

    Attributes:
        result: Result of the move
        changed: Whether any tile slid or merged
        score_delta: Points gained from merges in this move
    """

    result: MoveResult
    changed: bool = False
    score_delta: int = 0


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the tile merge game state.

    Attributes:
        board: Rows of cell values, 0 for an empty cell
        score: Points scored in the current game
        best_score: Highest score reached across games
        over: Whether no further move can change the board
        won: Whether the winning tile has appeared in this game
    """

    board: Board = field(default_factory=empty_board)
    score: int = 0
    best_score: int = 0
    over: bool = False
    won: bool = False

    @property
    def size(self) -> int:
        return len(self.board)

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Coordinates of empty cells in row-major order."""
        return [
            (row, col)
            for row, cells in enumerate(self.board)
            for col, value in enumerate(cells)
            if value == 0
        ]

    def is_blank(self) -> bool:
        return all(value == 0 for cells in self.board for value in cells)

    @property
    def max_tile(self) -> int:
        return max(value for cells in self.board for value in cells)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "board": [list(cells) for cells in self.board],
            "score": self.score,
            "bestScore": self.best_score,
            "gameOver": self.over,
            "hasWon": self.won,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """
        Rebuild a state from ``to_dict`` output.

        Raises:
            ValueError: If the board is not a square grid of powers of two
        """
        try:
            board = tuple(tuple(int(value) for value in row) for row in data["board"])
            state = cls(
                board=board,
                score=int(data.get("score", 0)),
                best_score=int(data.get("bestScore", 0)),
                over=bool(data.get("gameOver", False)),
                won=bool(data.get("hasWon", False)),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed tile merge state: {e}") from e

        if not board or any(len(row) != len(board) for row in board):
            raise ValueError("Tile merge board must be a non-empty square grid")
        for value in (v for row in board for v in row):
            if value < 0 or (value and value & (value - 1)) or value == 1:
                raise ValueError(f"Invalid tile value: {value}")
        return state

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the game state to a format suitable for platform adapters.

        Returns:
            Dictionary in adapter-friendly format
        """
        return {
            "game": "tile_merge",
            "board": [list(cells) for cells in self.board],
            "score": self.score,
            "best_score": self.best_score,
            "game_over": self.over,
            "won": self.won,
        }
