"""
Immutable state models for tic-tac-toe.

This module provides dataclasses for representing the state of a
tic-tac-toe game in an immutable manner. These classes are designed to be
used with pure transition functions that create new state instances rather
than modifying existing ones.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum

from pocketarcade.common.result import ResultCategory, TransitionResult
from pocketarcade.tictactoe.constants import BOARD_SIZE

Coordinate = Tuple[int, int]
Line = Tuple[Coordinate, Coordinate, Coordinate]


class Cell(Enum):
    """Contents of a board cell; X and O double as player symbols."""

    EMPTY = ""
    X = "X"
    O = "O"

    @property
    def other(self) -> "Cell":
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        return Cell.EMPTY


class GameMode(Enum):
    """Who plays the second symbol."""

    TWO_PLAYER = "TWO_PLAYERS"
    VS_COMPUTER = "VS_COMPUTER"


class TicTacToeResult(TransitionResult):
    """Possible results of tic-tac-toe transitions."""

    PLACED = ("placed", ResultCategory.APPLIED)
    RESET = ("reset", ResultCategory.APPLIED)
    MODE_CHANGED = ("mode_changed", ResultCategory.APPLIED)
    STATS_RESET = ("stats_reset", ResultCategory.APPLIED)
    WON = ("won", ResultCategory.TERMINAL)
    DRAW = ("draw", ResultCategory.TERMINAL)
    OCCUPIED = ("occupied", ResultCategory.REJECTED)
    OUT_OF_RANGE = ("out_of_range", ResultCategory.REJECTED)
    NOT_YOUR_TURN = ("not_your_turn", ResultCategory.REJECTED)
    NOT_COMPUTER_TURN = ("not_computer_turn", ResultCategory.REJECTED)
    INVALID_SYMBOL = ("invalid_symbol", ResultCategory.REJECTED)
    GAME_OVER = ("game_over", ResultCategory.TERMINAL)


def empty_board() -> Tuple[Tuple[Cell, ...], ...]:
    return tuple(tuple(Cell.EMPTY for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE))


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of a tic-tac-toe game.

    Attributes:
        board: 3x3 grid of cells
        current_player: Symbol to move next
        winner: Symbol that completed a line, if any
        winning_line: Coordinates of the completed line, if any
        over: Whether the game ended in a win or a draw
        mode: Two players or versus the computer
        human_symbol: Symbol controlled by the human in VS_COMPUTER mode
        x_wins: Games won by X
        o_wins: Games won by O
        draws: Games drawn
    """

    board: Tuple[Tuple[Cell, ...], ...] = field(default_factory=empty_board)
    current_player: Cell = Cell.X
    winner: Optional[Cell] = None
    winning_line: Optional[Line] = None
    over: bool = False
    mode: GameMode = GameMode.TWO_PLAYER
    human_symbol: Cell = Cell.X
    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0

    @property
    def computer_symbol(self) -> Cell:
        return self.human_symbol.other

    @property
    def is_full(self) -> bool:
        return all(cell != Cell.EMPTY for row in self.board for cell in row)

    @property
    def is_draw(self) -> bool:
        return self.winner is None and self.is_full

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.mode == GameMode.VS_COMPUTER
            and not self.over
            and self.current_player == self.computer_symbol
        )

    def empty_cells(self) -> List[Coordinate]:
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.board[row][col] == Cell.EMPTY
        ]

    def stats_dict(self) -> Dict[str, int]:
        """The persisted summary: cumulative win and draw counters."""
        return {"xWins": self.x_wins, "oWins": self.o_wins, "draws": self.draws}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "board": [[cell.value or None for cell in row] for row in self.board],
            "currentPlayer": self.current_player.value,
            "winner": self.winner.value if self.winner else None,
            "winningLine": (
                [list(coord) for coord in self.winning_line]
                if self.winning_line
                else None
            ),
            "gameOver": self.over,
            "gameMode": self.mode.value,
            "userChoice": self.human_symbol.value,
            **self.stats_dict(),
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the game state to a format suitable for platform adapters.

        Returns:
            Dictionary in adapter-friendly format
        """
        return {
            "game": "tictactoe",
            "board": [[cell.value for cell in row] for row in self.board],
            "current_player": self.current_player.value,
            "winner": self.winner.value if self.winner else None,
            "winning_line": list(self.winning_line) if self.winning_line else None,
            "draw": self.is_draw,
            "game_over": self.over,
            "mode": self.mode.value,
            "stats": self.stats_dict(),
        }
