"""
Base adapter interface for the Pocket Arcade engines.

This module defines the interface that platform-specific adapters must
implement to present an engine's state. Adapters never drive the engines;
the shell calls engine actions one at a time and the engine reports back
through the adapter.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union
from enum import Enum


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    Implementations bridge the platform-agnostic engines and a concrete
    presentation layer.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the platform.

        Args:
            state: Adapter-format snapshot produced by ``to_adapter_format``
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event, such as a win or a rejected move.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    async def initialize(self) -> None:
        """Set up platform resources before the first render."""
        pass

    async def shutdown(self) -> None:
        """Release platform resources."""
        pass
