"""
Snake game.

Steer a growing snake around a 15x15 grid, eat food and avoid the walls and
your own tail.
"""

from pocketarcade.snake.state import (
    Direction,
    GameState,
    Position,
    SnakeResult,
)
from pocketarcade.snake.transitions import StateTransitionEngine

__all__ = [
    "Direction",
    "GameState",
    "Position",
    "SnakeResult",
    "StateTransitionEngine",
]
