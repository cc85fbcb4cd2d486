"""
Immutable state models for the word puzzle game.

This module provides dataclasses for representing the state of a word
puzzle in an immutable manner. These classes are designed to be used with
pure transition functions that create new state instances rather than
modifying existing ones.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Sequence, Tuple

from pocketarcade.common.result import ResultCategory, TransitionResult
from pocketarcade.word_puzzle.constants import MAX_ATTEMPTS, WORD_BANK


class WordPuzzleResult(TransitionResult):
    """Possible results of word puzzle transitions."""

    CORRECT = ("correct", ResultCategory.APPLIED)
    INCORRECT = ("incorrect", ResultCategory.APPLIED)
    HINT_REVEALED = ("hint_revealed", ResultCategory.APPLIED)
    SKIPPED = ("skipped", ResultCategory.APPLIED)
    LETTER_SELECTED = ("letter_selected", ResultCategory.APPLIED)
    LETTER_UNSELECTED = ("letter_unselected", ResultCategory.APPLIED)
    SELECTION_CLEARED = ("selection_cleared", ResultCategory.APPLIED)
    RESET = ("reset", ResultCategory.APPLIED)
    TOO_SHORT = ("too_short", ResultCategory.REJECTED)
    ALREADY_TRIED = ("already_tried", ResultCategory.REJECTED)
    OUT_OF_RANGE = ("out_of_range", ResultCategory.REJECTED)
    OUT_OF_ATTEMPTS = ("out_of_attempts", ResultCategory.EXHAUSTED)
    NO_HINTS_LEFT = ("no_hints_left", ResultCategory.EXHAUSTED)


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the word puzzle state.

    Attributes:
        word_index: Position of the target word in the word bank
        target_word: Word to guess, uppercase
        scrambled_word: Permutation of the target, never equal to it
        revealed_letters: Letters given away by hints, in word order
        attempted_guesses: Wrong guesses already made for this word
        remaining_attempts: Wrong guesses left before the word is lost
        score: Points in the current run
        best_score: Highest score across runs
        completed_word_indices: Word bank positions already solved
        selected_indices: Scrambled-word positions tapped, in tap order
        last_answer: Target of the puzzle that just ended, if any
        word_bank: Words the puzzles are drawn from
    """

    word_index: int = 0
    target_word: str = ""
    scrambled_word: str = ""
    revealed_letters: Tuple[str, ...] = ()
    attempted_guesses: FrozenSet[str] = frozenset()
    remaining_attempts: int = MAX_ATTEMPTS
    score: int = 0
    best_score: int = 0
    completed_word_indices: FrozenSet[int] = frozenset()
    selected_indices: Tuple[int, ...] = ()
    last_answer: Optional[str] = None
    word_bank: Tuple[str, ...] = WORD_BANK

    @property
    def level(self) -> int:
        return len(self.completed_word_indices) + 1

    @property
    def current_input(self) -> str:
        return "".join(self.scrambled_word[i] for i in self.selected_indices)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        The word bank is not stored; ``from_dict`` takes it as an argument.
        """
        return {
            "wordIndex": self.word_index,
            "currentLevel": self.level,
            "currentWord": self.target_word,
            "scrambledWord": self.scrambled_word,
            "guessedLetters": list(self.revealed_letters),
            "attemptedWords": sorted(self.attempted_guesses),
            "remainingAttempts": self.remaining_attempts,
            "score": self.score,
            "bestScore": self.best_score,
            "completedLevels": sorted(self.completed_word_indices),
            "lastAnswer": self.last_answer,
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], word_bank: Sequence[str] = WORD_BANK
    ) -> "GameState":
        """
        Rebuild a state from ``to_dict`` output.

        Raises:
            ValueError: If the saved puzzle does not fit the word bank
        """
        bank = tuple(word_bank)
        try:
            target = str(data["currentWord"])
            scrambled = str(data["scrambledWord"])
            if "wordIndex" in data:
                word_index = int(data["wordIndex"])
            else:
                word_index = bank.index(target)
            state = cls(
                word_index=word_index,
                target_word=target,
                scrambled_word=scrambled,
                revealed_letters=tuple(data.get("guessedLetters", ())),
                attempted_guesses=frozenset(data.get("attemptedWords", ())),
                remaining_attempts=int(data.get("remainingAttempts", MAX_ATTEMPTS)),
                score=int(data.get("score", 0)),
                best_score=int(data.get("bestScore", 0)),
                completed_word_indices=frozenset(
                    int(i) for i in data.get("completedLevels", ())
                ),
                last_answer=data.get("lastAnswer"),
                word_bank=bank,
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed word puzzle state: {e}") from e

        if not 0 <= word_index < len(bank) or bank[word_index] != target:
            raise ValueError(f"Word {target!r} is not at index {word_index}")
        if Counter(scrambled) != Counter(target) or scrambled == target:
            raise ValueError("Scrambled word is not a rearrangement of the target")
        if not 0 < state.remaining_attempts <= MAX_ATTEMPTS:
            raise ValueError(f"Invalid attempt count: {state.remaining_attempts}")
        return state

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the game state to a format suitable for platform adapters.

        The target word is only sent once it is no longer the live puzzle.
        """
        return {
            "game": "word_puzzle",
            "level": self.level,
            "scrambled": self.scrambled_word,
            "hints": list(self.revealed_letters),
            "input": self.current_input,
            "selected": list(self.selected_indices),
            "remaining_attempts": self.remaining_attempts,
            "score": self.score,
            "best_score": self.best_score,
            "last_answer": self.last_answer,
        }
