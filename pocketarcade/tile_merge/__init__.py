"""
Tile merge (2048-style) game.

Slide tiles on a 4x4 grid, merge equal neighbours and reach the 2048 tile.
"""

from pocketarcade.tile_merge.state import (
    Direction,
    GameState,
    MoveOutcome,
    MoveResult,
)
from pocketarcade.tile_merge.transitions import StateTransitionEngine

__all__ = [
    "Direction",
    "GameState",
    "MoveOutcome",
    "MoveResult",
    "StateTransitionEngine",
]
