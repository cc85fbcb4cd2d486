"""
Memory match game.

Flip cards two at a time to find every pair in as few moves as possible.
"""

from pocketarcade.memory_match.state import FlipResult, GameState
from pocketarcade.memory_match.transitions import StateTransitionEngine

__all__ = ["FlipResult", "GameState", "StateTransitionEngine"]
