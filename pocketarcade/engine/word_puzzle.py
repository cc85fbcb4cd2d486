"""
Word puzzle session engine.

This module provides the WordPuzzleEngine class. The whole puzzle is
persisted so a session resumes on the same scrambled word.
"""

from typing import Any, Optional
import logging

from pocketarcade.engine.base import GameEngine
from pocketarcade.word_puzzle.constants import STORAGE_KEY, WORD_BANK
from pocketarcade.word_puzzle.state import GameState, WordPuzzleResult
from pocketarcade.word_puzzle.transitions import StateTransitionEngine

logger = logging.getLogger("pocketarcade.engine.word_puzzle")


class WordPuzzleEngine(GameEngine):
    """
    Engine for the word puzzle game.

    Config keys:
        word_bank: Uppercase words to draw puzzles from (default: built-in bank)
    """

    game_name = "word_puzzle"
    storage_key = STORAGE_KEY

    @property
    def word_bank(self):
        return tuple(self.config.get("word_bank", WORD_BANK))

    def restore(self, data: Optional[Any]) -> GameState:
        if data is not None:
            try:
                return GameState.from_dict(data, self.word_bank)
            except (ValueError, AttributeError) as e:
                logger.warning(f"Discarding saved word puzzle: {e}")
        return StateTransitionEngine.new_puzzle(self.rng, word_bank=self.word_bank)

    def persisted_data(self) -> Any:
        return self.state.to_dict()

    async def start_game(self) -> None:
        await self.reset_game()

    async def submit_guess(self, guess: str) -> WordPuzzleResult:
        """
        Submit a typed guess.

        When the puzzle ends the adapter is told the answer it ended on.
        """
        new_state, result = StateTransitionEngine.submit_guess(self.state, guess, self.rng)
        ended = result in (WordPuzzleResult.CORRECT, WordPuzzleResult.OUT_OF_ATTEMPTS)
        return await self.apply(
            (new_state, result),
            guess=guess.strip().upper(),
            answer=new_state.last_answer if ended else None,
        )

    async def submit_selection(self) -> WordPuzzleResult:
        return await self.submit_guess(self.state.current_input)

    async def request_hint(self) -> WordPuzzleResult:
        return await self.apply(StateTransitionEngine.request_hint(self.state))

    async def skip(self) -> WordPuzzleResult:
        skipped = self.state.target_word
        return await self.apply(
            StateTransitionEngine.skip(self.state, self.rng), answer=skipped
        )

    async def select_letter(self, index: int) -> WordPuzzleResult:
        return await self.apply(
            StateTransitionEngine.select_letter(self.state, index), index=index
        )

    async def clear_selection(self) -> WordPuzzleResult:
        return await self.apply(StateTransitionEngine.clear_selection(self.state))

    async def reset_game(self) -> WordPuzzleResult:
        """
        Start over from the first level; the best score is kept.
        """
        return await self.apply(StateTransitionEngine.reset_game(self.state, self.rng))
