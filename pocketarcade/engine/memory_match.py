"""
Memory match session engine.

This module provides the MemoryMatchEngine class. Only the fewest-moves
record is persisted.
"""

from typing import Any, Optional
import asyncio
import logging

from pocketarcade.engine.base import GameEngine
from pocketarcade.memory_match.constants import CARD_SYMBOLS, STORAGE_KEY
from pocketarcade.memory_match.state import FlipResult, GameState
from pocketarcade.memory_match.transitions import StateTransitionEngine

logger = logging.getLogger("pocketarcade.engine.memory_match")


class MemoryMatchEngine(GameEngine):
    """
    Engine for the memory match game.

    Config keys:
        symbols: Card symbols, one per pair (default: eight animals)
        mismatch_delay: Seconds an unmatched pair stays visible (default: 1.0)
        auto_hide: Hide an unmatched pair after the delay (default: True)
    """

    game_name = "memory_match"
    storage_key = STORAGE_KEY

    def _deal(self, best_moves: Optional[int]) -> GameState:
        symbols = self.config.get("symbols", CARD_SYMBOLS)
        return StateTransitionEngine.new_game(self.rng, best_moves=best_moves, symbols=symbols)

    def restore(self, data: Optional[Any]) -> GameState:
        best_moves = None
        if data:
            try:
                best_moves = int(data)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring unreadable memory match record: {data!r}")
        # Zero was stored by older clients to mean "no record"
        if best_moves is not None and best_moves <= 0:
            best_moves = None
        return self._deal(best_moves)

    def persisted_data(self) -> Any:
        return self.state.best_moves

    async def start_game(self) -> None:
        """
        Deal a new table; the best result carries over.
        """
        self.state = self._deal(self.state.best_moves if self.state else None)
        await self.render_state()

    async def flip(self, index: int) -> FlipResult:
        """
        Turn a card face-up.

        An unmatched pair is turned back after ``mismatch_delay`` unless
        ``auto_hide`` is off, in which case the shell calls
        ``hide_mismatch`` itself.
        """
        result = await self.apply(StateTransitionEngine.flip(self.state, index), index=index)

        if result == FlipResult.MISMATCHED and self.config.get("auto_hide", True):
            await asyncio.sleep(self.config.get("mismatch_delay", 1.0))
            if self.state.awaiting_hide:
                await self.hide_mismatch()

        return result

    async def hide_mismatch(self) -> FlipResult:
        return await self.apply(StateTransitionEngine.hide_mismatch(self.state))
