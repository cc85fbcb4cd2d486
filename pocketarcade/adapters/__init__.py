"""
Platform adapters for the Pocket Arcade engines.

This package provides adapters that translate between the game engines and
whatever renders them (a mobile shell, a terminal, a test harness).
"""

from pocketarcade.adapters.base import PlatformAdapter
from pocketarcade.adapters.console import ConsoleAdapter
from pocketarcade.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "ConsoleAdapter", "DummyAdapter"]
