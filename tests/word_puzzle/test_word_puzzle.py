"""
Tests for the word puzzle state and transitions.
"""

from collections import Counter
from dataclasses import replace

import pytest

from pocketarcade.common import ScriptedRandomSource, SeededRandomSource
from pocketarcade.word_puzzle import GameState, StateTransitionEngine, WordPuzzleResult
from pocketarcade.word_puzzle.constants import WORD_BANK

STATE_INDEX = WORD_BANK.index("STATE")


@pytest.fixture
def puzzle():
    """The STATE puzzle, scrambled as TASTE."""
    return GameState(
        word_index=STATE_INDEX,
        target_word="STATE",
        scrambled_word="TASTE",
    )


def test_scramble_is_a_different_permutation():
    rng = SeededRandomSource(3)
    for _ in range(50):
        scrambled = StateTransitionEngine.scramble("STATE", rng)
        assert Counter(scrambled) == Counter("STATE")
        assert scrambled != "STATE"


def test_scramble_retries_identity_shuffle():
    # 0.9 keeps "AB" as is and is retried; 0.0 swaps the letters
    rng = ScriptedRandomSource([0.9, 0.0])
    assert StateTransitionEngine.scramble("AB", rng) == "BA"
    assert rng.remaining == 0


def test_scramble_needs_two_distinct_letters():
    with pytest.raises(ValueError):
        StateTransitionEngine.scramble("AAA", SeededRandomSource(1))


def test_new_puzzle_avoids_completed_words():
    completed = frozenset(i for i in range(len(WORD_BANK)) if i != 4)
    state = StateTransitionEngine.new_puzzle(SeededRandomSource(2), completed_indices=completed)

    assert state.word_index == 4
    assert state.target_word == WORD_BANK[4]
    assert state.level == len(WORD_BANK)
    assert state.remaining_attempts == 3


def test_new_puzzle_when_every_word_is_done():
    completed = frozenset(range(len(WORD_BANK)))
    state = StateTransitionEngine.new_puzzle(SeededRandomSource(2), completed_indices=completed)
    assert state.target_word in WORD_BANK


def test_correct_guess_scores_ten_per_letter(puzzle):
    state = replace(puzzle, score=20, best_score=30)
    new_state, result = StateTransitionEngine.submit_guess(state, " state ", SeededRandomSource(1))

    assert result == WordPuzzleResult.CORRECT
    assert new_state.score == 70
    assert new_state.best_score == 70
    assert STATE_INDEX in new_state.completed_word_indices
    assert new_state.last_answer == "STATE"
    assert new_state.target_word != "STATE"
    assert new_state.level == 2
    assert new_state.remaining_attempts == 3
    assert new_state.attempted_guesses == frozenset()


def test_wrong_guesses_use_attempts(puzzle):
    rng = SeededRandomSource(1)

    state, result = StateTransitionEngine.submit_guess(puzzle, "taste", rng)
    assert result == WordPuzzleResult.INCORRECT
    assert state.remaining_attempts == 2
    assert state.attempted_guesses == {"TASTE"}

    same, result = StateTransitionEngine.submit_guess(state, "TASTE", rng)
    assert result == WordPuzzleResult.ALREADY_TRIED
    assert same is state

    same, result = StateTransitionEngine.submit_guess(state, "s", rng)
    assert result == WordPuzzleResult.TOO_SHORT
    assert same.remaining_attempts == 2

    state, result = StateTransitionEngine.submit_guess(state, "SETAT", rng)
    assert result == WordPuzzleResult.INCORRECT
    assert state.remaining_attempts == 1


def test_running_out_of_attempts_moves_on(puzzle):
    state = replace(puzzle, remaining_attempts=1, score=40, completed_word_indices=frozenset({0}))
    new_state, result = StateTransitionEngine.submit_guess(state, "TESTA", SeededRandomSource(4))

    assert result == WordPuzzleResult.OUT_OF_ATTEMPTS
    assert result.exhausted
    assert new_state.last_answer == "STATE"
    assert new_state.completed_word_indices == {0}
    assert new_state.score == 40
    assert new_state.remaining_attempts == 3


def test_hints_reveal_letters_in_word_order(puzzle):
    state = puzzle
    revealed = []
    for _ in range(4):
        state, result = StateTransitionEngine.request_hint(state)
        assert result == WordPuzzleResult.HINT_REVEALED
        revealed.append(state.revealed_letters[-1])

    assert revealed == ["S", "T", "A", "E"]

    same, result = StateTransitionEngine.request_hint(state)
    assert result == WordPuzzleResult.NO_HINTS_LEFT
    assert same is state


def test_letter_selection(puzzle):
    state, result = StateTransitionEngine.select_letter(puzzle, 1)
    assert result == WordPuzzleResult.LETTER_SELECTED
    state, _ = StateTransitionEngine.select_letter(state, 0)
    assert state.current_input == "AT"

    state, result = StateTransitionEngine.select_letter(state, 1)
    assert result == WordPuzzleResult.LETTER_UNSELECTED
    assert state.current_input == "T"

    same, result = StateTransitionEngine.select_letter(state, 9)
    assert result == WordPuzzleResult.OUT_OF_RANGE
    assert same is state

    state, result = StateTransitionEngine.clear_selection(state)
    assert result == WordPuzzleResult.SELECTION_CLEARED
    assert state.current_input == ""


def test_submit_selection(puzzle):
    state = puzzle
    # T A S T E -> S T A T E
    for index in (2, 0, 1, 3, 4):
        state, _ = StateTransitionEngine.select_letter(state, index)
    assert state.current_input == "STATE"

    new_state, result = StateTransitionEngine.submit_selection(state, SeededRandomSource(8))
    assert result == WordPuzzleResult.CORRECT
    assert new_state.score == 50
    assert new_state.selected_indices == ()


def test_skip_keeps_score_and_progress(puzzle):
    state = replace(puzzle, score=30)
    new_state, result = StateTransitionEngine.skip(state, SeededRandomSource(5))

    assert result == WordPuzzleResult.SKIPPED
    assert new_state.score == 30
    assert new_state.completed_word_indices == frozenset()


def test_reset_game_keeps_best_score(puzzle):
    state = replace(puzzle, score=90, best_score=90, completed_word_indices=frozenset({1, 2}))
    new_state, result = StateTransitionEngine.reset_game(state, SeededRandomSource(6))

    assert result == WordPuzzleResult.RESET
    assert new_state.score == 0
    assert new_state.best_score == 90
    assert new_state.level == 1


def test_to_dict_and_from_dict(puzzle):
    state = replace(puzzle, revealed_letters=("S",), attempted_guesses=frozenset({"TASTE"}),
                    remaining_attempts=2, score=50, best_score=60,
                    completed_word_indices=frozenset({3}), last_answer="HOOK")
    data = state.to_dict()

    assert data["currentWord"] == "STATE"
    assert data["currentLevel"] == 2
    assert GameState.from_dict(data) == state


@pytest.mark.parametrize(
    "changes",
    [
        {"scrambledWord": "STATE"},
        {"scrambledWord": "SSATE"},
        {"currentWord": "NOTAWORD"},
        {"remainingAttempts": 0},
    ],
)
def test_from_dict_rejects_inconsistent_data(puzzle, changes):
    data = {**puzzle.to_dict(), **changes}
    with pytest.raises(ValueError):
        GameState.from_dict(data)
