"""
Base engine class for the Pocket Arcade games.

This module provides the abstract base class for the session engines. An
engine owns the current immutable state of one game, applies transitions on
behalf of the presentation shell, persists the game's summary and reports
every outcome to the platform adapter.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple
import logging
import time

from pocketarcade.adapters import PlatformAdapter
from pocketarcade.common.random_source import RandomSource, SeededRandomSource
from pocketarcade.common.result import TransitionResult
from pocketarcade.events import EventBus, EngineEventType
from pocketarcade.persistence import PersistenceService

logger = logging.getLogger("pocketarcade.engine")

_UNSAVED = object()


class GameEngine(ABC):
    """
    Abstract base class for all session engines.

    Subclasses set ``game_name`` and ``storage_key`` and implement the
    conversion between state and persisted data.

    Config keys shared by every engine:
        seed: Seed for the default random source (default: None)
    """

    game_name: str = ""
    storage_key: str = ""

    def __init__(
        self,
        adapter: PlatformAdapter,
        persistence: Optional[PersistenceService] = None,
        rng: Optional[RandomSource] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the engine.

        Args:
            adapter: Platform adapter to use for rendering and notifications
            persistence: Where to keep data between sessions; None disables saving
            rng: Random source for the game; defaults to a seeded ``random.Random``
            config: Configuration options for the game
        """
        self.adapter = adapter
        self.persistence = persistence
        self.config = config or {}
        self.rng = rng or SeededRandomSource(self.config.get("seed"))
        self.event_bus = EventBus.get_instance()
        self.state = None
        self._last_saved: Any = _UNSAVED

    @abstractmethod
    def restore(self, data: Optional[Any]) -> Any:
        """
        Build the starting state from persisted data.

        Args:
            data: Decoded persisted data, or None when nothing was stored

        Returns:
            The state to start from; never raises on bad data
        """

    @abstractmethod
    def persisted_data(self) -> Any:
        """Return the JSON-compatible summary of the state to persist."""

    @abstractmethod
    async def start_game(self) -> None:
        """Start a new game, keeping whatever carries across games."""

    async def initialize(self) -> None:
        """
        Initialize the engine: load saved data and render the first state.
        """
        await self.adapter.initialize()

        data = await self.load()
        self.state = self.restore(data)
        self._last_saved = data if data is not None else _UNSAVED

        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {
                "engine_type": self.game_name,
                "config": self.config,
                "restored": data is not None,
                "timestamp": time.time(),
            },
        )

        await self.render_state()

    async def shutdown(self) -> None:
        """
        Save and shut down.
        """
        await self.save()

        self.event_bus.emit(
            EngineEventType.ENGINE_SHUTDOWN,
            {"engine_type": self.game_name, "timestamp": time.time()},
        )

        await self.adapter.shutdown()

    async def load(self) -> Optional[Any]:
        """Fetch persisted data; any failure reads as nothing stored."""
        if self.persistence is None:
            return None

        data = await self.persistence.load_json(self.storage_key)
        if data is not None:
            self.event_bus.emit(
                EngineEventType.STATE_LOADED,
                {"engine_type": self.game_name, "key": self.storage_key},
            )
        return data

    async def save(self) -> bool:
        """
        Persist the current summary.

        Returns:
            True if the data was stored
        """
        if self.persistence is None or self.state is None:
            return False

        data = self.persisted_data()
        ok = await self.persistence.save_json(self.storage_key, data)
        if ok:
            self._last_saved = data
            self.event_bus.emit(
                EngineEventType.STATE_SAVED,
                {"engine_type": self.game_name, "key": self.storage_key},
            )
        else:
            logger.warning(f"Could not save {self.game_name} state; continuing")
            self.event_bus.emit(
                EngineEventType.PERSISTENCE_FAILED,
                {"engine_type": self.game_name, "key": self.storage_key},
            )
        return ok

    async def save_if_changed(self) -> bool:
        """Persist only when the summary differs from the last save."""
        if self.persisted_data() == self._last_saved:
            return False
        return await self.save()

    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        await self.adapter.render_game_state(self.state.to_adapter_format())

    async def apply(
        self, transition: Tuple[Any, TransitionResult], **details
    ) -> TransitionResult:
        """
        Adopt the outcome of a transition and report it.

        Args:
            transition: The (new state, result) pair a transition returned
            details: Extra data for the adapter notification

        Returns:
            The transition result
        """
        new_state, result = transition
        self.state = new_state

        if not result.rejected:
            await self.save_if_changed()
            await self.render_state()

        await self.adapter.notify_game_event(
            result.label,
            {"game": self.game_name, "category": result.category.name, **details},
        )

        return result

    async def reject_input(
        self, result: TransitionResult, **details
    ) -> TransitionResult:
        """
        Report shell input that could not be turned into an action.

        The state is left as it is and the adapter gets the rejection.
        """
        logger.debug(f"Rejected {self.game_name} input {details}: {result.label}")
        self.event_bus.emit(
            EngineEventType.ACTION_REJECTED,
            {"game": self.game_name, "reason": result.label, **details},
        )
        return await self.apply((self.state, result), **details)
