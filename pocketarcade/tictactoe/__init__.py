"""
Tic-tac-toe game.

Two players share a device, or one player faces a rule-based computer
opponent. Win and draw counters persist across games.
"""

from pocketarcade.tictactoe.state import (
    Cell,
    GameMode,
    GameState,
    TicTacToeResult,
)
from pocketarcade.tictactoe.transitions import StateTransitionEngine

__all__ = [
    "Cell",
    "GameMode",
    "GameState",
    "TicTacToeResult",
    "StateTransitionEngine",
]
