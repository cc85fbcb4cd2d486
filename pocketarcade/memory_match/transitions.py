"""
State transition functions for the memory match game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects.
"""

from typing import Optional, Sequence, Tuple
from dataclasses import replace

from pocketarcade.common.random_source import RandomSource
from pocketarcade.events import EventBus, EngineEventType
from pocketarcade.memory_match.constants import CARD_SYMBOLS
from pocketarcade.memory_match.state import FlipResult, GameState


class StateTransitionEngine:
    """
    Pure functions for state transitions in the memory match game.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def new_game(
        rng: RandomSource,
        best_moves: Optional[int] = None,
        symbols: Sequence[str] = CARD_SYMBOLS,
    ) -> GameState:
        """
        Deal a fresh table: every symbol twice, uniformly shuffled.

        Args:
            rng: Source for the shuffle
            best_moves: Best result carried over from earlier games
            symbols: Distinct symbols, one per pair

        Returns:
            New game state
        """
        if len(set(symbols)) != len(symbols):
            raise ValueError("Card symbols must be distinct")

        cards = tuple(rng.shuffled(list(symbols) * 2))
        state = GameState(cards=cards, best_moves=best_moves)

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.GAME_STARTED,
            {"game": "memory_match", "pairs": state.pair_count},
        )

        return state

    @staticmethod
    def _reject(
        state: GameState, result: FlipResult, index: int
    ) -> Tuple[GameState, FlipResult]:
        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.ACTION_REJECTED,
            {"game": "memory_match", "index": index, "reason": result.label},
        )
        return state, result

    @staticmethod
    def flip(state: GameState, index: int) -> Tuple[GameState, FlipResult]:
        """
        Turn a card face-up.

        The second card of a pair counts as one move. Equal symbols are
        matched at once; unequal ones stay face-up until ``hide_mismatch``.

        Args:
            state: Current game state
            index: Position of the card on the table

        Returns:
            Tuple of (new game state, result)
        """
        if state.completed:
            return state, FlipResult.GAME_OVER
        if not 0 <= index < len(state.cards):
            return StateTransitionEngine._reject(state, FlipResult.OUT_OF_RANGE, index)
        if state.awaiting_hide:
            return StateTransitionEngine._reject(
                state, FlipResult.PENDING_MISMATCH, index
            )
        if state.is_revealed(index):
            return StateTransitionEngine._reject(
                state, FlipResult.ALREADY_REVEALED, index
            )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.CARD_REVEALED,
            {"game": "memory_match", "index": index, "symbol": state.cards[index]},
        )

        if not state.face_up:
            return replace(state, face_up=(index,)), FlipResult.FLIPPED

        first = state.face_up[0]
        moves = state.move_count + 1

        if state.cards[first] != state.cards[index]:
            return (
                replace(state, face_up=(first, index), move_count=moves),
                FlipResult.MISMATCHED,
            )

        matched = state.matched | {first, index}
        new_state = replace(state, face_up=(), matched=matched, move_count=moves)

        event_bus.emit(
            EngineEventType.PAIR_MATCHED,
            {
                "game": "memory_match",
                "indices": [first, index],
                "symbol": state.cards[index],
            },
        )

        if not new_state.completed:
            return new_state, FlipResult.MATCHED

        if state.best_moves is None or moves < state.best_moves:
            new_state = replace(new_state, best_moves=moves)

        event_bus.emit(
            EngineEventType.GAME_WON,
            {
                "game": "memory_match",
                "moves": moves,
                "best_moves": new_state.best_moves,
            },
        )

        return new_state, FlipResult.COMPLETED

    @staticmethod
    def hide_mismatch(state: GameState) -> Tuple[GameState, FlipResult]:
        """
        Turn an unmatched pair face-down again.

        Called by the caller's timer once the mismatch has been shown.

        Returns:
            Tuple of (new game state, HIDDEN or NOTHING_TO_HIDE)
        """
        if not state.awaiting_hide:
            return state, FlipResult.NOTHING_TO_HIDE

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.CARD_HIDDEN,
            {"game": "memory_match", "indices": list(state.face_up)},
        )

        return replace(state, face_up=()), FlipResult.HIDDEN
