"""
State transition functions for the snake game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. Time never advances on its
own: the caller drives ``tick`` from a timer running at
``state.tick_interval_ms``.
"""

from typing import Optional, Sequence, Tuple
from dataclasses import replace

from pocketarcade.common.random_source import RandomSource
from pocketarcade.events import EventBus, EngineEventType
from pocketarcade.snake.constants import (
    GRID_SIZE,
    INITIAL_TICK_INTERVAL_MS,
    MIN_TICK_INTERVAL_MS,
    POINTS_PER_SPEEDUP,
    START_X,
    START_Y,
    TICK_INTERVAL_STEP_MS,
)
from pocketarcade.snake.state import Direction, GameState, Position, SnakeResult


class StateTransitionEngine:
    """
    Pure functions for state transitions in the snake game.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def place_food(
        snake: Sequence[Position], rng: RandomSource, grid_size: int = GRID_SIZE
    ) -> Optional[Position]:
        """
        Pick a random cell that is not covered by the snake.

        Draws x then y and retries while the cell is taken.

        Returns:
            The food position, or None when the snake fills the grid
        """
        if len(set(snake)) >= grid_size * grid_size:
            return None

        while True:
            candidate = Position(rng.randrange(grid_size), rng.randrange(grid_size))
            if candidate not in snake:
                return candidate

    @staticmethod
    def new_game(
        rng: RandomSource, high_score: int = 0, grid_size: int = GRID_SIZE
    ) -> GameState:
        """
        Start a game with a one-segment snake heading right.

        Args:
            rng: Source for the food position
            high_score: High score carried over from earlier games
            grid_size: Width and height of the grid

        Returns:
            New game state
        """
        snake = (Position(START_X, START_Y),)
        state = GameState(
            snake=snake,
            food=StateTransitionEngine.place_food(snake, rng, grid_size),
            direction=Direction.RIGHT,
            next_direction=Direction.RIGHT,
            high_score=high_score,
            tick_interval_ms=INITIAL_TICK_INTERVAL_MS,
            grid_size=grid_size,
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_STARTED,
            {"game": "snake", "tick_interval_ms": state.tick_interval_ms},
        )

        return state

    @staticmethod
    def set_direction(
        state: GameState, direction: Direction
    ) -> Tuple[GameState, SnakeResult]:
        """
        Buffer a heading for the next tick.

        The request is checked against the heading of the last tick, so two
        quick turns between ticks cannot reverse the snake into itself.

        Args:
            state: Current game state
            direction: Requested heading

        Returns:
            Tuple of (new game state, result)
        """
        if state.over:
            return state, SnakeResult.GAME_OVER

        if direction == state.direction.opposite:
            event_bus = EventBus.get_instance()
            event_bus.emit(
                EngineEventType.ACTION_REJECTED,
                {
                    "game": "snake",
                    "direction": direction.value,
                    "reason": SnakeResult.OPPOSITE_DIRECTION.label,
                },
            )
            return state, SnakeResult.OPPOSITE_DIRECTION

        return replace(state, next_direction=direction), SnakeResult.DIRECTION_BUFFERED

    @staticmethod
    def toggle_pause(state: GameState) -> Tuple[GameState, SnakeResult]:
        """
        Pause or resume the game.

        Returns:
            Tuple of (new game state, PAUSED or RESUMED)
        """
        if state.over:
            return state, SnakeResult.GAME_OVER

        paused = not state.paused
        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_PAUSED if paused else EngineEventType.GAME_RESUMED,
            {"game": "snake", "score": state.score},
        )

        return (
            replace(state, paused=paused),
            SnakeResult.PAUSED if paused else SnakeResult.RESUMED,
        )

    @staticmethod
    def _end_game(state: GameState, result: SnakeResult) -> Tuple[GameState, SnakeResult]:
        new_state = replace(
            state, over=True, high_score=max(state.high_score, state.score)
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_ENDED,
            {
                "game": "snake",
                "reason": result.label,
                "score": new_state.score,
                "high_score": new_state.high_score,
            },
        )

        return new_state, result

    @staticmethod
    def tick(state: GameState, rng: RandomSource) -> Tuple[GameState, SnakeResult]:
        """
        Advance the snake one cell.

        Args:
            state: Current game state
            rng: Source for the next food position

        Returns:
            Tuple of (new game state, result)
        """
        if state.over:
            return state, SnakeResult.GAME_OVER
        if state.paused:
            return state, SnakeResult.IGNORED_WHILE_PAUSED

        direction = state.next_direction
        new_head = state.head.step(direction)

        if not new_head.in_bounds(state.grid_size) or state.occupies(new_head):
            return StateTransitionEngine._end_game(state, SnakeResult.COLLIDED)

        body = (new_head,) + state.snake
        event_bus = EventBus.get_instance()

        if new_head != state.food:
            new_state = replace(state, snake=body[:-1], direction=direction)
            event_bus.emit(
                EngineEventType.SNAKE_MOVED,
                {"game": "snake", "head": (new_head.x, new_head.y)},
            )
            return new_state, SnakeResult.MOVED

        # Food eaten: keep the tail
        score = state.score + 1
        interval = state.tick_interval_ms
        if score % POINTS_PER_SPEEDUP == 0 and interval > MIN_TICK_INTERVAL_MS:
            interval = max(MIN_TICK_INTERVAL_MS, interval - TICK_INTERVAL_STEP_MS)
            event_bus.emit(
                EngineEventType.SPEED_CHANGED,
                {"game": "snake", "tick_interval_ms": interval},
            )

        food = StateTransitionEngine.place_food(body, rng, state.grid_size)
        new_state = replace(
            state,
            snake=body,
            food=food,
            direction=direction,
            score=score,
            tick_interval_ms=interval,
        )

        event_bus.emit(
            EngineEventType.FOOD_EATEN,
            {"game": "snake", "score": score, "length": len(body)},
        )

        if food is None:
            return StateTransitionEngine._end_game(new_state, SnakeResult.BOARD_FILLED)

        return new_state, SnakeResult.ATE_FOOD
