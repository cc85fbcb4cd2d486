"""
Snake session engine.

This module provides the SnakeEngine class. Only the high score is
persisted. The engine can drive its own timer with ``run``; shells with
their own timer call ``tick`` instead and read ``state.tick_interval_ms``
after each tick to reschedule.
"""

from typing import Any, Optional, Union
import asyncio
import logging

from pocketarcade.engine.base import GameEngine
from pocketarcade.snake.constants import GRID_SIZE, STORAGE_KEY
from pocketarcade.snake.state import Direction, GameState, SnakeResult
from pocketarcade.snake.transitions import StateTransitionEngine

logger = logging.getLogger("pocketarcade.engine.snake")


class SnakeEngine(GameEngine):
    """
    Engine for the snake game.

    Config keys:
        grid_size: Width and height of the grid (default: 15)
    """

    game_name = "snake"
    storage_key = STORAGE_KEY

    @property
    def grid_size(self) -> int:
        return int(self.config.get("grid_size", GRID_SIZE))

    def restore(self, data: Optional[Any]) -> GameState:
        high_score = 0
        if data is not None:
            try:
                high_score = max(0, int(data))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring unreadable snake high score: {data!r}")
        return StateTransitionEngine.new_game(
            self.rng, high_score=high_score, grid_size=self.grid_size
        )

    def persisted_data(self) -> Any:
        return self.state.high_score

    async def start_game(self) -> None:
        """
        Start a new game; the high score carries over.
        """
        high_score = self.state.high_score if self.state else 0
        self.state = StateTransitionEngine.new_game(
            self.rng, high_score=high_score, grid_size=self.grid_size
        )
        await self.render_state()

    async def set_direction(self, direction: Union[Direction, str]) -> SnakeResult:
        if isinstance(direction, str):
            try:
                direction = Direction(direction.upper())
            except ValueError:
                return await self.reject_input(
                    SnakeResult.INVALID_DIRECTION, direction=direction
                )
        return await self.apply(
            StateTransitionEngine.set_direction(self.state, direction),
            direction=direction.value,
        )

    async def toggle_pause(self) -> SnakeResult:
        return await self.apply(StateTransitionEngine.toggle_pause(self.state))

    async def tick(self) -> SnakeResult:
        """
        Advance one step.

        Ticks after the game has ended are harmless no-ops.
        """
        before = self.state.tick_interval_ms
        result = await self.apply(
            StateTransitionEngine.tick(self.state, self.rng),
            score=self.state.score,
        )
        if self.state.tick_interval_ms != before:
            logger.debug(
                f"Snake speed up: {before}ms -> {self.state.tick_interval_ms}ms"
            )
        return result

    async def run(self, max_ticks: Optional[int] = None) -> GameState:
        """
        Tick at the current interval until the game ends.

        Cancel the task running this coroutine to stop early.

        Args:
            max_ticks: Stop after this many ticks even if the game goes on

        Returns:
            The state when the loop stopped
        """
        ticks = 0
        while not self.state.over:
            if max_ticks is not None and ticks >= max_ticks:
                break
            await asyncio.sleep(self.state.tick_interval_ms / 1000.0)
            await self.tick()
            ticks += 1
        return self.state
