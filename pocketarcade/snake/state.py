"""
Immutable state models for the snake game.

This module provides dataclasses for representing the state of a snake game
in an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from enum import Enum

from pocketarcade.common.result import ResultCategory, TransitionResult
from pocketarcade.snake.constants import (
    GRID_SIZE,
    INITIAL_TICK_INTERVAL_MS,
    START_X,
    START_Y,
)


class Direction(Enum):
    """Headings the snake can move in, with their grid step."""

    UP = "UP"
    RIGHT = "RIGHT"
    DOWN = "DOWN"
    LEFT = "LEFT"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class SnakeResult(TransitionResult):
    """Possible results of snake transitions."""

    MOVED = ("moved", ResultCategory.APPLIED)
    ATE_FOOD = ("ate_food", ResultCategory.APPLIED)
    DIRECTION_BUFFERED = ("direction_buffered", ResultCategory.APPLIED)
    PAUSED = ("paused", ResultCategory.APPLIED)
    RESUMED = ("resumed", ResultCategory.APPLIED)
    COLLIDED = ("collided", ResultCategory.TERMINAL)
    BOARD_FILLED = ("board_filled", ResultCategory.TERMINAL)
    OPPOSITE_DIRECTION = ("opposite_direction", ResultCategory.REJECTED)
    IGNORED_WHILE_PAUSED = ("ignored_while_paused", ResultCategory.REJECTED)
    INVALID_DIRECTION = ("invalid_direction", ResultCategory.REJECTED)
    GAME_OVER = ("game_over", ResultCategory.TERMINAL)


@dataclass(frozen=True)
class Position:
    """A cell on the grid, 0-indexed from the top-left corner."""

    x: int
    y: int

    def step(self, direction: Direction) -> "Position":
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self, size: int = GRID_SIZE) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the snake game state.

    Attributes:
        snake: Body segments, head first
        food: Cell holding the food, never on the snake
        direction: Heading used by the most recent tick
        next_direction: Heading buffered for the next tick
        score: Food eaten in this game
        high_score: Best score across games
        tick_interval_ms: Delay the caller should wait between ticks
        over: Whether the snake has crashed
        paused: Whether ticks are currently ignored
    """

    snake: Tuple[Position, ...] = (Position(START_X, START_Y),)
    food: Optional[Position] = None
    direction: Direction = Direction.RIGHT
    next_direction: Direction = Direction.RIGHT
    score: int = 0
    high_score: int = 0
    tick_interval_ms: int = INITIAL_TICK_INTERVAL_MS
    over: bool = False
    paused: bool = False
    grid_size: int = GRID_SIZE

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    def occupies(self, position: Position) -> bool:
        return position in self.snake

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "snake": [{"x": p.x, "y": p.y} for p in self.snake],
            "food": {"x": self.food.x, "y": self.food.y} if self.food else None,
            "direction": self.direction.value,
            "next_direction": self.next_direction.value,
            "score": self.score,
            "high_score": self.high_score,
            "tick_interval_ms": self.tick_interval_ms,
            "over": self.over,
            "paused": self.paused,
            "grid_size": self.grid_size,
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the game state to a format suitable for platform adapters.

        Returns:
            Dictionary in adapter-friendly format
        """
        return {
            "game": "snake",
            "snake": [(p.x, p.y) for p in self.snake],
            "food": (self.food.x, self.food.y) if self.food else None,
            "direction": self.direction.value,
            "score": self.score,
            "high_score": self.high_score,
            "game_over": self.over,
            "paused": self.paused,
            "grid_size": self.grid_size,
        }
