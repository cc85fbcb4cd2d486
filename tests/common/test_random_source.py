"""
Tests for the injectable random sources and the result taxonomy.
"""

import pytest

from pocketarcade.common import (
    RandomSourceExhausted,
    RecordingRandomSource,
    ResultCategory,
    ScriptedRandomSource,
    SeededRandomSource,
)
from pocketarcade.tile_merge.state import MoveResult


def test_seeded_source_is_reproducible():
    a = SeededRandomSource(42)
    b = SeededRandomSource(42)
    assert [a.uniform_float() for _ in range(5)] == [b.uniform_float() for _ in range(5)]


def test_seeded_source_range():
    rng = SeededRandomSource(1)
    for _ in range(1000):
        assert 0.0 <= rng.uniform_float() < 1.0


def test_randrange_floors_the_draw():
    rng = ScriptedRandomSource([0.0, 0.24, 0.25, 0.99])
    assert [rng.randrange(4) for _ in range(4)] == [0, 0, 1, 3]


def test_randrange_clamps_a_scripted_one():
    """A scripted value of exactly 1.0 must still give a valid index."""
    assert ScriptedRandomSource([1.0]).randrange(3) == 2


def test_randrange_rejects_empty_range():
    with pytest.raises(ValueError):
        ScriptedRandomSource([0.5]).randrange(0)


def test_choice():
    rng = ScriptedRandomSource([0.5])
    assert rng.choice(["a", "b", "c", "d"]) == "c"


def test_choice_empty_sequence():
    with pytest.raises(IndexError):
        ScriptedRandomSource([0.5]).choice([])


def test_shuffled_draws_once_per_step_and_keeps_input():
    items = [1, 2, 3, 4]
    # j = 0 at every step: i=3 swaps with 0, i=2 with 0, i=1 with 0
    rng = ScriptedRandomSource([0.0, 0.0, 0.0])
    assert rng.shuffled(items) == [2, 3, 4, 1]
    assert rng.remaining == 0
    assert items == [1, 2, 3, 4]


def test_shuffled_identity_when_each_item_stays():
    # j = i at every step
    rng = ScriptedRandomSource([0.99, 0.99, 0.99])
    assert rng.shuffled("abcd") == ["a", "b", "c", "d"]


def test_scripted_source_exhausted():
    rng = ScriptedRandomSource([0.1])
    rng.uniform_float()
    with pytest.raises(RandomSourceExhausted):
        rng.uniform_float()


def test_recording_source_replays():
    recorder = RecordingRandomSource(SeededRandomSource(7))
    first = recorder.shuffled(range(10))
    replay = recorder.replay()
    assert replay.shuffled(range(10)) == first
    assert replay.remaining == 0


def test_result_categories():
    assert MoveResult.MOVED.applied
    assert MoveResult.NO_CHANGE.rejected
    assert MoveResult.LOST.terminal
    assert MoveResult.WON.category is ResultCategory.APPLIED
    assert str(MoveResult.NO_CHANGE) == "no_change"
