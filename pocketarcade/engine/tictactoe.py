"""
Tic-tac-toe session engine.

This module provides the TicTacToeEngine class. The win and draw counters
are persisted; the board is not. In VS_COMPUTER mode the engine answers a
human move with the computer's move after a short pause.
"""

from typing import Any, Optional, Union
import asyncio
import logging

from pocketarcade.engine.base import GameEngine
from pocketarcade.tictactoe.constants import STORAGE_KEY
from pocketarcade.tictactoe.state import Cell, GameState, TicTacToeResult
from pocketarcade.tictactoe.transitions import StateTransitionEngine

logger = logging.getLogger("pocketarcade.engine.tictactoe")


class TicTacToeEngine(GameEngine):
    """
    Engine for tic-tac-toe.

    Config keys:
        computer_delay: Seconds to wait before the computer moves (default: 0.3)
        auto_play: Let the computer reply on its own (default: True)
    """

    game_name = "tictactoe"
    storage_key = STORAGE_KEY

    def restore(self, data: Optional[Any]) -> GameState:
        if not isinstance(data, dict):
            return GameState()
        try:
            counters = {
                name: max(0, int(data.get(key, 0)))
                for name, key in (("x_wins", "xWins"), ("o_wins", "oWins"), ("draws", "draws"))
            }
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unreadable tic-tac-toe stats: {data!r}")
            return GameState()
        return GameState(**counters)

    def persisted_data(self) -> Any:
        return self.state.stats_dict()

    async def start_game(self) -> None:
        await self.reset()

    async def _computer_reply(self) -> Optional[TicTacToeResult]:
        if not self.config.get("auto_play", True) or not self.state.is_computer_turn:
            return None

        await asyncio.sleep(self.config.get("computer_delay", 0.3))

        # The board may have been reset while waiting
        if not self.state.is_computer_turn:
            return None
        return await self.computer_move()

    async def place(self, row: int, col: int) -> TicTacToeResult:
        """
        Place the current player's mark, then let the computer answer.

        Returns:
            The result of the human's move
        """
        result = await self.apply(
            StateTransitionEngine.place(self.state, row, col), row=row, col=col
        )
        if result.applied:
            await self._computer_reply()
        return result

    async def computer_move(self) -> TicTacToeResult:
        return await self.apply(StateTransitionEngine.computer_move(self.state, self.rng))

    async def choose_symbol(self, symbol: Union[Cell, str]) -> TicTacToeResult:
        """
        Play against the computer as ``symbol``.

        Picking O hands the first move to the computer.
        """
        if isinstance(symbol, str):
            try:
                symbol = Cell(symbol.upper())
            except ValueError:
                return await self.reject_input(
                    TicTacToeResult.INVALID_SYMBOL, symbol=symbol
                )
        result = await self.apply(
            StateTransitionEngine.choose_symbol(self.state, symbol),
            symbol=symbol.value,
        )
        if result.applied:
            await self._computer_reply()
        return result

    async def set_two_player(self) -> TicTacToeResult:
        return await self.apply(StateTransitionEngine.set_two_player(self.state))

    async def reset(self) -> TicTacToeResult:
        result = await self.apply(StateTransitionEngine.reset(self.state))
        await self._computer_reply()
        return result

    async def reset_stats(self) -> TicTacToeResult:
        return await self.apply(StateTransitionEngine.reset_stats(self.state))
