"""
Tile merge session engine.

This module provides the TileMergeEngine class, which keeps a tile merge
game going across sessions and applies swipes from the shell.
"""

from typing import Any, Optional, Union
import logging

from pocketarcade.engine.base import GameEngine
from pocketarcade.tile_merge.constants import STORAGE_KEY
from pocketarcade.tile_merge.state import Direction, GameState, MoveOutcome, MoveResult
from pocketarcade.tile_merge.transitions import StateTransitionEngine

logger = logging.getLogger("pocketarcade.engine.tile_merge")


class TileMergeEngine(GameEngine):
    """
    Engine for the tile merge game.

    The whole state is persisted, so an unfinished board resumes where it
    was left.
    """

    game_name = "tile_merge"
    storage_key = STORAGE_KEY

    def restore(self, data: Optional[Any]) -> GameState:
        if data is None:
            return StateTransitionEngine.new_game(self.rng)

        try:
            state = GameState.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.warning(f"Discarding saved tile merge game: {e}")
            return StateTransitionEngine.new_game(self.rng)

        if state.is_blank():
            return StateTransitionEngine.new_game(self.rng, best_score=state.best_score)
        return state

    def persisted_data(self) -> Any:
        return self.state.to_dict()

    async def start_game(self) -> None:
        """
        Start a new board; the best score carries over.
        """
        best = self.state.best_score if self.state else 0
        self.state = StateTransitionEngine.new_game(self.rng, best_score=best)
        await self.save_if_changed()
        await self.render_state()

    async def move(self, direction: Union[Direction, str]) -> MoveOutcome:
        """
        Apply a swipe.

        Args:
            direction: A Direction or its name ("UP", "left", ...)

        Returns:
            What the move did; INVALID_DIRECTION for an unknown name
        """
        if isinstance(direction, str):
            try:
                direction = Direction(direction.upper())
            except ValueError:
                outcome = MoveOutcome(MoveResult.INVALID_DIRECTION)
                await self.reject_input(outcome.result, direction=direction)
                return outcome

        new_state, outcome = StateTransitionEngine.move(self.state, direction, self.rng)
        await self.apply(
            (new_state, outcome.result),
            direction=direction.value,
            score_delta=outcome.score_delta,
        )
        return outcome
