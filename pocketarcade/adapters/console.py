"""
Console adapter for the Pocket Arcade engines.

This module provides an adapter that draws each game as plain text, for
manual play from a terminal.
"""

from typing import Any, Callable, Dict, Union
from enum import Enum

from pocketarcade.adapters.base import PlatformAdapter


class ConsoleAdapter(PlatformAdapter):
    """
    Text adapter writing through an output callable.

    Args:
        output: Function receiving each line of text (default: print)
        show_events: Also print every gameplay notification
    """

    def __init__(self, output: Callable[[str], Any] = print, show_events: bool = True):
        self.output = output
        self.show_events = show_events
        self._renderers = {
            "tile_merge": self._render_tile_merge,
            "snake": self._render_snake,
            "tictactoe": self._render_tictactoe,
            "memory_match": self._render_memory_match,
            "word_puzzle": self._render_word_puzzle,
        }

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the console.

        Args:
            state: Output of the state's ``to_adapter_format``
        """
        renderer = self._renderers.get(state.get("game"))
        if renderer is None:
            self.output(str(state))
            return
        renderer(state)

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        if not self.show_events:
            return
        name = event_type.name if isinstance(event_type, Enum) else event_type
        if data.get("category") == "REJECTED":
            self.output(f"(not allowed: {name.replace('_', ' ')})")
        elif data.get("category") in ("TERMINAL", "EXHAUSTED"):
            self.output(f"*** {name.replace('_', ' ')} ***")

    def _render_tile_merge(self, state: Dict[str, Any]) -> None:
        self.output(f"\nScore: {state['score']}  Best: {state['best_score']}")
        for row in state["board"]:
            self.output(" ".join(f"{value or '.':>5}" for value in row))
        if state["won"]:
            self.output("You reached 2048! Keep going.")

    def _render_snake(self, state: Dict[str, Any]) -> None:
        size = state["grid_size"]
        snake = {tuple(p) for p in state["snake"]}
        head = tuple(state["snake"][0])
        food = tuple(state["food"]) if state["food"] else None

        self.output(f"\nScore: {state['score']}  High: {state['high_score']}")
        for y in range(size):
            line = []
            for x in range(size):
                if (x, y) == head:
                    line.append("@")
                elif (x, y) in snake:
                    line.append("o")
                elif (x, y) == food:
                    line.append("*")
                else:
                    line.append(".")
            self.output(" ".join(line))
        if state["paused"]:
            self.output("[paused]")

    def _render_tictactoe(self, state: Dict[str, Any]) -> None:
        self.output("")
        for i, row in enumerate(state["board"]):
            self.output(" | ".join(cell or " " for cell in row))
            if i < len(state["board"]) - 1:
                self.output("--+---+--")

        stats = state["stats"]
        self.output(f"X: {stats['xWins']}  O: {stats['oWins']}  Draws: {stats['draws']}")
        if state["winner"]:
            self.output(f"{state['winner']} wins!")
        elif state["draw"]:
            self.output("Draw.")
        else:
            self.output(f"{state['current_player']} to move")

    def _render_memory_match(self, state: Dict[str, Any]) -> None:
        self.output(f"\nMoves: {state['moves']}  Best: {state['best_moves'] or '-'}")
        cards = state["cards"]
        for start in range(0, len(cards), 4):
            self.output(
                "  ".join(
                    f"{i:>2}:{card if card is not None else '??'}"
                    for i, card in enumerate(cards[start:start + 4], start)
                )
            )
        if state["completed"]:
            self.output(f"All pairs found in {state['moves']} moves!")

    def _render_word_puzzle(self, state: Dict[str, Any]) -> None:
        if state["last_answer"]:
            self.output(f"\nThe word was {state['last_answer']}")
        self.output(f"\nLevel {state['level']}  Score: {state['score']}  Best: {state['best_score']}")
        self.output(" ".join(state["scrambled"]))
        self.output(" ".join(str(i) for i in range(len(state["scrambled"]))))
        if state["hints"]:
            self.output(f"Hints: {', '.join(state['hints'])}")
        if state["input"]:
            self.output(f"Input: {state['input']}")
        self.output(f"Attempts left: {state['remaining_attempts']}")
