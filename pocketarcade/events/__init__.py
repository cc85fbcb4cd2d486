"""
Event system for the Pocket Arcade engines.

This package provides the in-process event bus shared by the game
transitions and the session engines.
"""

from pocketarcade.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
