"""
Dummy adapter used for testing and headless play.

Records everything it is asked to show so tests can inspect it.
"""

from typing import Any, Dict, List, Tuple, Union
from enum import Enum

from pocketarcade.adapters.base import PlatformAdapter


class DummyAdapter(PlatformAdapter):
    """
    Non-interactive adapter.

    Attributes:
        rendered_states: Every state passed to ``render_game_state``
        events: Every (event_type, data) pair passed to ``notify_game_event``
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.rendered_states: List[Dict[str, Any]] = []
        self.events: List[Tuple[str, Dict[str, Any]]] = []
        self.initialized = False
        self.shut_down = False

    @property
    def last_state(self) -> Dict[str, Any]:
        return self.rendered_states[-1] if self.rendered_states else {}

    def event_names(self) -> List[str]:
        return [name for name, _ in self.events]

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        self.rendered_states.append(state)

        if self.verbose:
            print(f"\n=== {state.get('game', 'game')} ===")
            for key, value in state.items():
                if key != "game":
                    print(f"{key}: {value}")

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        name = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append((name, data))

        if self.verbose:
            print(f"[{name}] {data}")

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.shut_down = True
