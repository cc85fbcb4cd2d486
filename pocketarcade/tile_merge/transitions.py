"""
State transition functions for the tile merge game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects.
"""

from typing import List, Tuple
from dataclasses import replace

from pocketarcade.common.random_source import RandomSource
from pocketarcade.events import EventBus, EngineEventType
from pocketarcade.tile_merge.constants import (
    BOARD_SIZE,
    INITIAL_TILES,
    SPAWN_HIGH_VALUE,
    SPAWN_LOW_VALUE,
    SPAWN_TWO_PROBABILITY,
    WIN_TILE,
)
from pocketarcade.tile_merge.state import (
    Board,
    Direction,
    GameState,
    MoveOutcome,
    MoveResult,
    empty_board,
)


def _slide_line(line: List[int]) -> Tuple[List[int], int, bool]:
    """
    Slide one line toward index 0.

    Cells nearest the target edge are handled first. A tile may only merge
    into a blocker lying beyond the last merge position, so every tile merges
    at most once per move.
    """
    cells = list(line)
    last_merge = -1
    score_delta = 0
    changed = False

    for j in range(1, len(cells)):
        if cells[j] == 0:
            continue

        position = j
        while position > 0 and cells[position - 1] == 0:
            position -= 1

        if (
            position > 0
            and cells[position - 1] == cells[j]
            and position - 1 > last_merge
        ):
            cells[position - 1] *= 2
            cells[j] = 0
            score_delta += cells[position - 1]
            last_merge = position - 1
            changed = True
        elif position != j:
            cells[position] = cells[j]
            cells[j] = 0
            changed = True

    return cells, score_delta, changed


def _extract_lines(board: Board, direction: Direction) -> List[List[int]]:
    """Lines of the board, each ordered from the target edge outward."""
    size = len(board)
    if direction == Direction.LEFT:
        return [list(row) for row in board]
    if direction == Direction.RIGHT:
        return [list(reversed(row)) for row in board]
    columns = [[board[row][col] for row in range(size)] for col in range(size)]
    if direction == Direction.UP:
        return columns
    return [list(reversed(column)) for column in columns]


def _assemble_board(lines: List[List[int]], direction: Direction) -> Board:
    """Inverse of ``_extract_lines``."""
    size = len(lines)
    if direction == Direction.LEFT:
        return tuple(tuple(line) for line in lines)
    if direction == Direction.RIGHT:
        return tuple(tuple(reversed(line)) for line in lines)
    if direction == Direction.DOWN:
        lines = [list(reversed(line)) for line in lines]
    return tuple(tuple(lines[col][row] for col in range(size)) for row in range(size))


class StateTransitionEngine:
    """
    Pure functions for state transitions in the tile merge game.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def new_game(rng: RandomSource, best_score: int = 0) -> GameState:
        """
        Create a fresh board with the starting tiles.

        Args:
            rng: Source for tile positions and values
            best_score: Best score carried over from earlier games

        Returns:
            New game state
        """
        state = GameState(board=empty_board(BOARD_SIZE), best_score=best_score)
        for _ in range(INITIAL_TILES):
            state = StateTransitionEngine.spawn_tile(state, rng)

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_STARTED,
            {"game": "tile_merge", "board": [list(r) for r in state.board]},
        )

        return state

    @staticmethod
    def spawn_tile(state: GameState, rng: RandomSource) -> GameState:
        """
        Place a 2 (90%) or a 4 (10%) on a uniformly chosen empty cell.

        Args:
            state: Current game state
            rng: Source for the cell and the value; the cell is drawn first

        Returns:
            New game state, or the same state when the board is full
        """
        empty = state.empty_cells()
        if not empty:
            return state

        row, col = rng.choice(empty)
        value = (
            SPAWN_LOW_VALUE
            if rng.uniform_float() < SPAWN_TWO_PROBABILITY
            else SPAWN_HIGH_VALUE
        )

        cells = [list(r) for r in state.board]
        cells[row][col] = value
        new_state = replace(state, board=tuple(tuple(r) for r in cells))

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.TILE_SPAWNED,
            {"game": "tile_merge", "row": row, "col": col, "value": value},
        )

        return new_state

    @staticmethod
    def slide(board: Board, direction: Direction) -> Tuple[Board, bool, int]:
        """
        Slide and merge every line of the board in one direction.

        Args:
            board: Board to slide
            direction: Direction of the move

        Returns:
            Tuple of (new board, whether anything changed, points scored)
        """
        new_lines = []
        changed = False
        score_delta = 0

        for line in _extract_lines(board, direction):
            new_line, line_delta, line_changed = _slide_line(line)
            new_lines.append(new_line)
            score_delta += line_delta
            changed = changed or line_changed

        return _assemble_board(new_lines, direction), changed, score_delta

    @staticmethod
    def has_won(board: Board) -> bool:
        return any(value == WIN_TILE for row in board for value in row)

    @staticmethod
    def is_lost(board: Board) -> bool:
        """
        Check whether the board is full with no equal neighbours.

        Only a full board can be lost.
        """
        size = len(board)
        for row in range(size):
            for col in range(size):
                if board[row][col] == 0:
                    return False

        for row in range(size):
            for col in range(size):
                value = board[row][col]
                if col < size - 1 and board[row][col + 1] == value:
                    return False
                if row < size - 1 and board[row + 1][col] == value:
                    return False

        return True

    @staticmethod
    def move(
        state: GameState, direction: Direction, rng: RandomSource
    ) -> Tuple[GameState, MoveOutcome]:
        """
        Slide the board, spawn a tile and check for win or loss.

        A move that changes nothing is rejected: the same state is returned
        and no tile is spawned.

        Args:
            state: Current game state
            direction: Direction of the move
            rng: Source for the spawned tile

        Returns:
            Tuple of (new game state, move outcome)
        """
        event_bus = EventBus.get_instance()

        if state.over:
            return state, MoveOutcome(MoveResult.GAME_OVER)

        board, changed, score_delta = StateTransitionEngine.slide(
            state.board, direction
        )

        if not changed:
            event_bus.emit(
                EngineEventType.ACTION_REJECTED,
                {
                    "game": "tile_merge",
                    "direction": direction.value,
                    "reason": MoveResult.NO_CHANGE.label,
                },
            )
            return state, MoveOutcome(MoveResult.NO_CHANGE)

        score = state.score + score_delta
        new_state = replace(
            state,
            board=board,
            score=score,
            best_score=max(state.best_score, score),
        )

        event_bus.emit(
            EngineEventType.TILES_MOVED,
            {
                "game": "tile_merge",
                "direction": direction.value,
                "score_delta": score_delta,
                "score": score,
            },
        )

        new_state = StateTransitionEngine.spawn_tile(new_state, rng)

        just_won = not state.won and StateTransitionEngine.has_won(new_state.board)
        lost = StateTransitionEngine.is_lost(new_state.board)
        new_state = replace(new_state, won=state.won or just_won, over=lost)

        if just_won:
            event_bus.emit(
                EngineEventType.GAME_WON,
                {"game": "tile_merge", "score": new_state.score},
            )

        if lost:
            event_bus.emit(
                EngineEventType.GAME_ENDED,
                {
                    "game": "tile_merge",
                    "score": new_state.score,
                    "best_score": new_state.best_score,
                },
            )
            result = MoveResult.LOST
        elif just_won:
            result = MoveResult.WON
        else:
            result = MoveResult.MOVED

        return new_state, MoveOutcome(result, True, score_delta)
