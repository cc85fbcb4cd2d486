"""
Session engines that run the games against a platform adapter.
"""

from pocketarcade.engine.base import GameEngine
from pocketarcade.engine.memory_match import MemoryMatchEngine
from pocketarcade.engine.snake import SnakeEngine
from pocketarcade.engine.tictactoe import TicTacToeEngine
from pocketarcade.engine.tile_merge import TileMergeEngine
from pocketarcade.engine.word_puzzle import WordPuzzleEngine

__all__ = [
    "GameEngine",
    "MemoryMatchEngine",
    "SnakeEngine",
    "TicTacToeEngine",
    "TileMergeEngine",
    "WordPuzzleEngine",
]
