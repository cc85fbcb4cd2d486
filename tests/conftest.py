"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the game, persistence and
engine tests.
"""

import pytest

from pocketarcade.adapters import DummyAdapter
from pocketarcade.events import EventBus
from pocketarcade.persistence import MemoryPersistence


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def adapter():
    """A recording adapter."""
    return DummyAdapter()


@pytest.fixture
def persistence():
    """An empty in-memory store."""
    return MemoryPersistence()


@pytest.fixture
def events():
    """Record every event emitted on the bus as (name, data) pairs."""
    recorded = []
    EventBus.get_instance().on_any(recorded.append)
    return recorded
