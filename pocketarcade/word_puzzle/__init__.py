"""
Word unscramble game.

Guess the word hidden behind a scramble of its letters, with hints and three
attempts per word.
"""

from pocketarcade.word_puzzle.state import GameState, WordPuzzleResult
from pocketarcade.word_puzzle.transitions import StateTransitionEngine

__all__ = ["GameState", "WordPuzzleResult", "StateTransitionEngine"]
