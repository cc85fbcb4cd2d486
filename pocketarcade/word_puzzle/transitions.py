"""
State transition functions for the word puzzle game.

This module provides pure functions for transitioning between game states,
without modifying the original state objects. A puzzle ends when the word
is guessed or the attempts run out; either way the returned state already
holds the next puzzle and ``last_answer`` names the word that just ended.
"""

from typing import AbstractSet, Optional, Sequence, Tuple
from dataclasses import replace

from pocketarcade.common.random_source import RandomSource
from pocketarcade.events import EventBus, EngineEventType
from pocketarcade.word_puzzle.constants import (
    MAX_ATTEMPTS,
    MIN_GUESS_LENGTH,
    POINTS_PER_LETTER,
    WORD_BANK,
)
from pocketarcade.word_puzzle.state import GameState, WordPuzzleResult


class StateTransitionEngine:
    """
    Pure functions for state transitions in the word puzzle game.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def scramble(word: str, rng: RandomSource) -> str:
        """
        Shuffle the letters of ``word``, retrying until the result differs.

        Raises:
            ValueError: If the word has no distinct rearrangement
        """
        if len(set(word)) < 2:
            raise ValueError(f"{word!r} cannot be scrambled")

        while True:
            scrambled = "".join(rng.shuffled(word))
            if scrambled != word:
                return scrambled

    @staticmethod
    def pick_word_index(
        completed: AbstractSet[int], rng: RandomSource, word_bank: Sequence[str]
    ) -> int:
        """Pick an unsolved word, or any word once all are solved."""
        available = [i for i in range(len(word_bank)) if i not in completed]
        return rng.choice(available or list(range(len(word_bank))))

    @staticmethod
    def new_puzzle(
        rng: RandomSource,
        completed_indices: AbstractSet[int] = frozenset(),
        score: int = 0,
        best_score: int = 0,
        word_bank: Sequence[str] = WORD_BANK,
    ) -> GameState:
        """
        Pick a word and scramble it.

        Args:
            rng: Source for the word choice and the scramble
            completed_indices: Word bank positions already solved
            score: Score carried into the puzzle
            best_score: Best score carried into the puzzle
            word_bank: Words to draw from

        Returns:
            New game state
        """
        bank = tuple(word_bank)
        completed = frozenset(completed_indices)
        index = StateTransitionEngine.pick_word_index(completed, rng, bank)
        word = bank[index]

        state = GameState(
            word_index=index,
            target_word=word,
            scrambled_word=StateTransitionEngine.scramble(word, rng),
            remaining_attempts=MAX_ATTEMPTS,
            score=score,
            best_score=max(best_score, score),
            completed_word_indices=completed,
            word_bank=bank,
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.PUZZLE_STARTED,
            {
                "game": "word_puzzle",
                "level": state.level,
                "scrambled": state.scrambled_word,
            },
        )

        return state

    @staticmethod
    def _next_puzzle(
        state: GameState,
        rng: RandomSource,
        completed: Optional[AbstractSet[int]] = None,
        score: Optional[int] = None,
        last_answer: Optional[str] = None,
    ) -> GameState:
        """Start the following puzzle; unset arguments carry over from ``state``."""
        next_state = StateTransitionEngine.new_puzzle(
            rng,
            completed_indices=(
                state.completed_word_indices if completed is None else completed
            ),
            score=state.score if score is None else score,
            best_score=state.best_score,
            word_bank=state.word_bank,
        )
        return replace(next_state, last_answer=last_answer)

    @staticmethod
    def _reject(
        state: GameState, result: WordPuzzleResult, **details
    ) -> Tuple[GameState, WordPuzzleResult]:
        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.ACTION_REJECTED,
            {"game": "word_puzzle", "reason": result.label, **details},
        )
        return state, result

    @staticmethod
    def submit_guess(
        state: GameState, guess: str, rng: RandomSource
    ) -> Tuple[GameState, WordPuzzleResult]:
        """
        Check a guess against the target word.

        Guesses are compared case-insensitively. Short or repeated guesses
        are rejected without costing an attempt.

        Args:
            state: Current game state
            guess: The player's guess
            rng: Source for the next puzzle, used when this one ends

        Returns:
            Tuple of (new game state, result)
        """
        normalized = guess.strip().upper()

        if len(normalized) < MIN_GUESS_LENGTH:
            return StateTransitionEngine._reject(
                state, WordPuzzleResult.TOO_SHORT, guess=normalized
            )
        if normalized in state.attempted_guesses:
            return StateTransitionEngine._reject(
                state, WordPuzzleResult.ALREADY_TRIED, guess=normalized
            )

        event_bus = EventBus.get_instance()
        correct = normalized == state.target_word
        event_bus.emit(
            EngineEventType.GUESS_SUBMITTED,
            {"game": "word_puzzle", "guess": normalized, "correct": correct},
        )

        if correct:
            score = state.score + POINTS_PER_LETTER * len(state.target_word)
            new_state = StateTransitionEngine._next_puzzle(
                state,
                rng,
                completed=state.completed_word_indices | {state.word_index},
                score=score,
                last_answer=state.target_word,
            )
            return new_state, WordPuzzleResult.CORRECT

        remaining = state.remaining_attempts - 1
        if remaining <= 0:
            event_bus.emit(
                EngineEventType.GAME_ENDED,
                {
                    "game": "word_puzzle",
                    "answer": state.target_word,
                    "score": state.score,
                },
            )
            new_state = StateTransitionEngine._next_puzzle(
                state, rng, last_answer=state.target_word
            )
            return new_state, WordPuzzleResult.OUT_OF_ATTEMPTS

        new_state = replace(
            state,
            attempted_guesses=state.attempted_guesses | {normalized},
            remaining_attempts=remaining,
            selected_indices=(),
        )
        return new_state, WordPuzzleResult.INCORRECT

    @staticmethod
    def submit_selection(
        state: GameState, rng: RandomSource
    ) -> Tuple[GameState, WordPuzzleResult]:
        """Submit the letters tapped so far as a guess."""
        return StateTransitionEngine.submit_guess(state, state.current_input, rng)

    @staticmethod
    def request_hint(state: GameState) -> Tuple[GameState, WordPuzzleResult]:
        """
        Reveal the earliest letter of the target not revealed yet.

        A letter that occurs several times is revealed once.

        Returns:
            Tuple of (new game state, HINT_REVEALED or NO_HINTS_LEFT)
        """
        for letter in state.target_word:
            if letter not in state.revealed_letters:
                break
        else:
            return state, WordPuzzleResult.NO_HINTS_LEFT

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.HINT_REVEALED,
            {"game": "word_puzzle", "letter": letter},
        )

        return (
            replace(state, revealed_letters=state.revealed_letters + (letter,)),
            WordPuzzleResult.HINT_REVEALED,
        )

    @staticmethod
    def skip(state: GameState, rng: RandomSource) -> Tuple[GameState, WordPuzzleResult]:
        """
        Abandon the current word without marking it solved.

        Returns:
            Tuple of (new game state, SKIPPED)
        """
        return StateTransitionEngine._next_puzzle(state, rng), WordPuzzleResult.SKIPPED

    @staticmethod
    def select_letter(
        state: GameState, index: int
    ) -> Tuple[GameState, WordPuzzleResult]:
        """
        Toggle a scrambled-word letter in or out of the current input.

        Args:
            state: Current game state
            index: Position in the scrambled word

        Returns:
            Tuple of (new game state, result)
        """
        if not 0 <= index < len(state.scrambled_word):
            return StateTransitionEngine._reject(
                state, WordPuzzleResult.OUT_OF_RANGE, index=index
            )

        if index in state.selected_indices:
            selected = tuple(i for i in state.selected_indices if i != index)
            return replace(state, selected_indices=selected), WordPuzzleResult.LETTER_UNSELECTED

        return (
            replace(state, selected_indices=state.selected_indices + (index,)),
            WordPuzzleResult.LETTER_SELECTED,
        )

    @staticmethod
    def clear_selection(state: GameState) -> Tuple[GameState, WordPuzzleResult]:
        return replace(state, selected_indices=()), WordPuzzleResult.SELECTION_CLEARED

    @staticmethod
    def reset_game(
        state: GameState, rng: RandomSource
    ) -> Tuple[GameState, WordPuzzleResult]:
        """
        Start over: score and solved words are cleared, best score is kept.

        Returns:
            Tuple of (new game state, RESET)
        """
        new_state = StateTransitionEngine._next_puzzle(
            state, rng, completed=frozenset(), score=0
        )
        return new_state, WordPuzzleResult.RESET
