"""
State transition functions for tic-tac-toe.

This module provides pure functions for transitioning between game states,
without modifying the original state objects, plus the rule-based computer
opponent.
"""

from typing import Optional, Tuple
from dataclasses import replace

from pocketarcade.common.random_source import RandomSource
from pocketarcade.events import EventBus, EngineEventType
from pocketarcade.tictactoe.constants import BOARD_SIZE, CENTER, CORNERS, WINNING_LINES
from pocketarcade.tictactoe.state import (
    Cell,
    Coordinate,
    GameMode,
    GameState,
    Line,
    TicTacToeResult,
    empty_board,
)

Board = Tuple[Tuple[Cell, ...], ...]


def _with_mark(board: Board, row: int, col: int, mark: Cell) -> Board:
    cells = [list(r) for r in board]
    cells[row][col] = mark
    return tuple(tuple(r) for r in cells)


class StateTransitionEngine:
    """
    Pure functions for state transitions in tic-tac-toe.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def find_winner(board: Board) -> Tuple[Optional[Cell], Optional[Line]]:
        """
        Look for three identical non-empty cells on any of the eight lines.

        Returns:
            Tuple of (winning symbol, winning line), or (None, None)
        """
        for line in WINNING_LINES:
            (r1, c1), (r2, c2), (r3, c3) = line
            mark = board[r1][c1]
            if mark != Cell.EMPTY and mark == board[r2][c2] == board[r3][c3]:
                return mark, line
        return None, None

    @staticmethod
    def _apply_mark(
        state: GameState, row: int, col: int
    ) -> Tuple[GameState, TicTacToeResult]:
        """Place the current player's mark on a cell already known to be legal."""
        mark = state.current_player
        board = _with_mark(state.board, row, col, mark)
        winner, line = StateTransitionEngine.find_winner(board)
        event_bus = EventBus.get_instance()

        event_bus.emit(
            EngineEventType.MARK_PLACED,
            {"game": "tictactoe", "row": row, "col": col, "mark": mark.value},
        )

        if winner is not None:
            new_state = replace(
                state,
                board=board,
                winner=winner,
                winning_line=line,
                over=True,
                x_wins=state.x_wins + (1 if winner == Cell.X else 0),
                o_wins=state.o_wins + (1 if winner == Cell.O else 0),
            )
            event_bus.emit(
                EngineEventType.GAME_WON,
                {
                    "game": "tictactoe",
                    "winner": winner.value,
                    "line": [list(c) for c in line],
                },
            )
            return new_state, TicTacToeResult.WON

        if all(cell != Cell.EMPTY for r in board for cell in r):
            new_state = replace(state, board=board, over=True, draws=state.draws + 1)
            event_bus.emit(
                EngineEventType.GAME_ENDED, {"game": "tictactoe", "draw": True}
            )
            return new_state, TicTacToeResult.DRAW

        return replace(state, board=board, current_player=mark.other), TicTacToeResult.PLACED

    @staticmethod
    def _reject(
        state: GameState, result: TicTacToeResult, **details
    ) -> Tuple[GameState, TicTacToeResult]:
        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.ACTION_REJECTED,
            {"game": "tictactoe", "reason": result.label, **details},
        )
        return state, result

    @staticmethod
    def place(state: GameState, row: int, col: int) -> Tuple[GameState, TicTacToeResult]:
        """
        Place the current player's mark.

        Rejected when the cell is off the board or occupied, the game is
        over, or in VS_COMPUTER mode it is the computer's turn.

        Args:
            state: Current game state
            row: Target row
            col: Target column

        Returns:
            Tuple of (new game state, result)
        """
        if state.over:
            return state, TicTacToeResult.GAME_OVER

        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            return StateTransitionEngine._reject(
                state, TicTacToeResult.OUT_OF_RANGE, row=row, col=col
            )

        if state.board[row][col] != Cell.EMPTY:
            return StateTransitionEngine._reject(
                state, TicTacToeResult.OCCUPIED, row=row, col=col
            )

        if (
            state.mode == GameMode.VS_COMPUTER
            and state.current_player != state.human_symbol
        ):
            return StateTransitionEngine._reject(
                state, TicTacToeResult.NOT_YOUR_TURN, row=row, col=col
            )

        return StateTransitionEngine._apply_mark(state, row, col)

    @staticmethod
    def reset(state: GameState) -> Tuple[GameState, TicTacToeResult]:
        """
        Clear the board for a new game; counters and mode are kept.

        Returns:
            Tuple of (new game state, RESET)
        """
        new_state = replace(
            state,
            board=empty_board(),
            current_player=Cell.X,
            winner=None,
            winning_line=None,
            over=False,
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_STARTED,
            {"game": "tictactoe", "mode": new_state.mode.value},
        )

        return new_state, TicTacToeResult.RESET

    @staticmethod
    def choose_symbol(
        state: GameState, symbol: Cell
    ) -> Tuple[GameState, TicTacToeResult]:
        """
        Enter VS_COMPUTER mode with the human playing ``symbol``.

        The board is reset. When the human picks O the computer moves first.

        Returns:
            Tuple of (new game state, MODE_CHANGED)
        """
        if symbol == Cell.EMPTY:
            return StateTransitionEngine._reject(state, TicTacToeResult.INVALID_SYMBOL)

        new_state, _ = StateTransitionEngine.reset(
            replace(state, mode=GameMode.VS_COMPUTER, human_symbol=symbol)
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.MODE_CHANGED,
            {
                "game": "tictactoe",
                "mode": GameMode.VS_COMPUTER.value,
                "human_symbol": symbol.value,
            },
        )

        return new_state, TicTacToeResult.MODE_CHANGED

    @staticmethod
    def set_two_player(state: GameState) -> Tuple[GameState, TicTacToeResult]:
        """
        Leave VS_COMPUTER mode and reset the board.

        Returns:
            Tuple of (new game state, MODE_CHANGED)
        """
        new_state, _ = StateTransitionEngine.reset(
            replace(state, mode=GameMode.TWO_PLAYER)
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.MODE_CHANGED,
            {"game": "tictactoe", "mode": GameMode.TWO_PLAYER.value},
        )

        return new_state, TicTacToeResult.MODE_CHANGED

    @staticmethod
    def reset_stats(state: GameState) -> Tuple[GameState, TicTacToeResult]:
        """
        Zero the win and draw counters; the board is untouched.

        Returns:
            Tuple of (new game state, STATS_RESET)
        """
        event_bus = EventBus.get_instance()
        event_bus.emit(EngineEventType.STATS_RESET, {"game": "tictactoe"})

        return replace(state, x_wins=0, o_wins=0, draws=0), TicTacToeResult.STATS_RESET

    @staticmethod
    def _completing_cell(board: Board, mark: Cell) -> Optional[Coordinate]:
        """First empty cell, row-major, that would give ``mark`` three in a row."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if board[row][col] != Cell.EMPTY:
                    continue
                winner, _ = StateTransitionEngine.find_winner(
                    _with_mark(board, row, col, mark)
                )
                if winner == mark:
                    return row, col
        return None

    @staticmethod
    def choose_computer_cell(
        state: GameState, rng: RandomSource
    ) -> Optional[Coordinate]:
        """
        Pick the computer's cell by fixed priority.

        1. Complete a line for the computer.
        2. Block a line the opponent could complete.
        3. Take the center.
        4. Take a random empty corner.
        5. Take a random empty cell.

        Only steps 4 and 5 draw from ``rng``.

        Returns:
            The chosen cell, or None when the board is full
        """
        me = state.current_player
        board = state.board

        winning = StateTransitionEngine._completing_cell(board, me)
        if winning is not None:
            return winning

        blocking = StateTransitionEngine._completing_cell(board, me.other)
        if blocking is not None:
            return blocking

        center_row, center_col = CENTER
        if board[center_row][center_col] == Cell.EMPTY:
            return CENTER

        corners = [(r, c) for r, c in CORNERS if board[r][c] == Cell.EMPTY]
        if corners:
            return rng.choice(corners)

        empty = state.empty_cells()
        if empty:
            return rng.choice(empty)

        return None

    @staticmethod
    def computer_move(
        state: GameState, rng: RandomSource
    ) -> Tuple[GameState, TicTacToeResult]:
        """
        Let the computer play its turn.

        Rejected unless the game is in VS_COMPUTER mode, still running and
        the computer is to move.

        Args:
            state: Current game state
            rng: Source for corner and fallback tie-breaks

        Returns:
            Tuple of (new game state, result)
        """
        if state.over:
            return state, TicTacToeResult.GAME_OVER

        if not state.is_computer_turn:
            return StateTransitionEngine._reject(
                state, TicTacToeResult.NOT_COMPUTER_TURN
            )

        cell = StateTransitionEngine.choose_computer_cell(state, rng)
        if cell is None:
            return state, TicTacToeResult.GAME_OVER

        row, col = cell
        return StateTransitionEngine._apply_mark(state, row, col)
