"""Shared primitives used by every game package."""

from pocketarcade.common.random_source import (
    RandomSource,
    SeededRandomSource,
    ScriptedRandomSource,
    RecordingRandomSource,
    RandomSourceExhausted,
)
from pocketarcade.common.result import ResultCategory, TransitionResult

__all__ = [
    "RandomSource",
    "SeededRandomSource",
    "ScriptedRandomSource",
    "RecordingRandomSource",
    "RandomSourceExhausted",
    "ResultCategory",
    "TransitionResult",
]
