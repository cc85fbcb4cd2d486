"""
Tests for the per-game session engines.

These tests run the engines against a DummyAdapter and an in-memory store,
with every delay set to zero.
"""

import asyncio
import json
from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest

from pocketarcade.adapters import DummyAdapter
from pocketarcade.common import (
    RecordingRandomSource,
    ScriptedRandomSource,
    SeededRandomSource,
)
from pocketarcade.engine import (
    MemoryMatchEngine,
    SnakeEngine,
    TicTacToeEngine,
    TileMergeEngine,
    WordPuzzleEngine,
)
from pocketarcade.memory_match import FlipResult
from pocketarcade.memory_match import GameState as MemoryState
from pocketarcade.snake import Direction, Position, SnakeResult
from pocketarcade.tictactoe import Cell, GameMode, TicTacToeResult
from pocketarcade.tile_merge import GameState as TileMergeState
from pocketarcade.tile_merge import MoveResult
from pocketarcade.word_puzzle import WordPuzzleResult
from pocketarcade.word_puzzle import GameState as WordPuzzleState
from pocketarcade.word_puzzle.constants import WORD_BANK


# Tile merge


@pytest.mark.asyncio
async def test_tile_merge_blank_saved_board_starts_fresh(adapter, persistence):
    blank = TileMergeState(board=((0,) * 4,) * 4, best_score=512)
    persistence.data["game2048State"] = json.dumps(blank.to_dict())

    engine = TileMergeEngine(adapter, persistence, rng=SeededRandomSource(1))
    await engine.initialize()

    assert not engine.state.is_blank()
    assert engine.state.best_score == 512


@pytest.mark.asyncio
async def test_tile_merge_corrupt_save_starts_fresh(adapter, persistence, caplog):
    persistence.data["game2048State"] = json.dumps({"board": [[3]]})
    engine = TileMergeEngine(adapter, persistence, rng=SeededRandomSource(1))
    await engine.initialize()

    assert len([v for row in engine.state.board for v in row if v]) == 2
    assert "Discarding saved tile merge game" in caplog.text


@pytest.mark.asyncio
async def test_tile_merge_resumes_saved_game(adapter, persistence):
    saved = TileMergeState(board=((2, 4, 8, 16),) + ((0,) * 4,) * 3, score=28, best_score=40)
    persistence.data["game2048State"] = json.dumps(saved.to_dict())

    engine = TileMergeEngine(adapter, persistence)
    await engine.initialize()
    assert engine.state == saved


@pytest.mark.asyncio
async def test_tile_merge_new_game_keeps_best(adapter, persistence):
    engine = TileMergeEngine(adapter, persistence, rng=SeededRandomSource(4))
    await engine.initialize()
    engine.state = replace(engine.state, score=300, best_score=300)

    await engine.start_game()

    assert engine.state.score == 0
    assert engine.state.best_score == 300
    assert json.loads(persistence.data["game2048State"])["score"] == 0


# Snake


@pytest.mark.asyncio
async def test_snake_restores_high_score(adapter, persistence):
    persistence.data["snakeGameHighScore"] = "7"
    engine = SnakeEngine(adapter, persistence, rng=SeededRandomSource(1))
    await engine.initialize()

    assert engine.state.high_score == 7
    assert engine.state.snake == (Position(5, 5),)


@pytest.mark.asyncio
async def test_snake_run_until_wall(adapter, persistence):
    # Food at (0, 0), out of the snake's way
    engine = SnakeEngine(adapter, persistence, rng=ScriptedRandomSource([0.0, 0.0]))
    await engine.initialize()
    engine.state = replace(engine.state, tick_interval_ms=0)

    final = await engine.run()

    assert final.over
    assert final.head == Position(14, 5)
    assert adapter.events[-1][0] == "collided"
    assert json.loads(persistence.data["snakeGameHighScore"]) == 0


@pytest.mark.asyncio
async def test_snake_run_waits_at_current_interval(adapter):
    engine = SnakeEngine(adapter, rng=ScriptedRandomSource([0.0, 0.0]))
    await engine.initialize()

    with patch("pocketarcade.engine.snake.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        state = await engine.run(max_ticks=3)

    assert state.head == Position(8, 5)
    assert not state.over
    assert [c.args[0] for c in mock_sleep.await_args_list] == [0.2, 0.2, 0.2]


@pytest.mark.asyncio
async def test_snake_high_score_saved_on_game_over(adapter, persistence):
    engine = SnakeEngine(adapter, persistence, rng=ScriptedRandomSource([0.0, 0.0]))
    await engine.initialize()
    engine.state = replace(engine.state, snake=(Position(14, 5),), score=12)

    result = await engine.tick()

    assert result == SnakeResult.COLLIDED
    assert json.loads(persistence.data["snakeGameHighScore"]) == 12


@pytest.mark.asyncio
async def test_snake_direction_and_pause(adapter):
    engine = SnakeEngine(adapter, rng=ScriptedRandomSource([0.0, 0.0]))
    await engine.initialize()

    assert await engine.set_direction("left") == SnakeResult.OPPOSITE_DIRECTION
    assert await engine.set_direction(Direction.DOWN) == SnakeResult.DIRECTION_BUFFERED
    assert await engine.toggle_pause() == SnakeResult.PAUSED
    assert await engine.tick() == SnakeResult.IGNORED_WHILE_PAUSED
    assert await engine.toggle_pause() == SnakeResult.RESUMED
    assert await engine.tick() == SnakeResult.MOVED
    assert engine.state.head == Position(5, 6)


@pytest.mark.asyncio
async def test_snake_run_can_be_cancelled(adapter):
    engine = SnakeEngine(adapter, rng=ScriptedRandomSource([0.0, 0.0]))
    await engine.initialize()

    task = asyncio.create_task(engine.run())
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert not engine.state.over


# Tic-tac-toe


@pytest.mark.asyncio
async def test_tictactoe_restores_and_saves_stats(adapter, persistence):
    persistence.data["ticTacToeStats"] = json.dumps({"xWins": 2, "oWins": 1, "draws": 3})
    engine = TicTacToeEngine(adapter, persistence)
    await engine.initialize()
    assert engine.state.stats_dict() == {"xWins": 2, "oWins": 1, "draws": 3}

    for row, col in [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]:
        result = await engine.place(row, col)

    assert result == TicTacToeResult.WON
    assert json.loads(persistence.data["ticTacToeStats"])["xWins"] == 3


@pytest.mark.asyncio
async def test_tictactoe_computer_replies(adapter):
    engine = TicTacToeEngine(adapter, config={"computer_delay": 0})
    await engine.initialize()

    assert await engine.choose_symbol("o") == TicTacToeResult.MODE_CHANGED
    # Computer plays X first and takes the center
    assert engine.state.board[1][1] == Cell.X
    assert engine.state.current_player == Cell.O

    assert await engine.place(0, 0) == TicTacToeResult.PLACED
    assert engine.state.current_player == Cell.O
    assert sum(cell != Cell.EMPTY for row in engine.state.board for cell in row) == 3


@pytest.mark.asyncio
async def test_tictactoe_manual_computer_move(adapter):
    engine = TicTacToeEngine(adapter, config={"auto_play": False})
    await engine.initialize()
    await engine.choose_symbol(Cell.X)

    assert await engine.computer_move() == TicTacToeResult.NOT_COMPUTER_TURN
    await engine.place(0, 0)
    assert engine.state.is_computer_turn
    assert await engine.computer_move() == TicTacToeResult.PLACED
    assert engine.state.board[1][1] == Cell.O


@pytest.mark.asyncio
async def test_tictactoe_two_player_and_stats_reset(adapter, persistence):
    persistence.data["ticTacToeStats"] = json.dumps({"xWins": 5, "oWins": 5, "draws": 5})
    engine = TicTacToeEngine(adapter, persistence, config={"computer_delay": 0})
    await engine.initialize()

    await engine.choose_symbol("x")
    assert await engine.set_two_player() == TicTacToeResult.MODE_CHANGED
    assert engine.state.mode == GameMode.TWO_PLAYER

    assert await engine.reset_stats() == TicTacToeResult.STATS_RESET
    assert json.loads(persistence.data["ticTacToeStats"]) == {"xWins": 0, "oWins": 0, "draws": 0}


# Memory match


@pytest.mark.asyncio
@pytest.mark.parametrize("stored, expected", [(None, None), ("0", None), ("14", 14)])
async def test_memory_match_restores_best_moves(adapter, persistence, stored, expected):
    if stored is not None:
        persistence.data["memoryGameBestScore"] = stored
    engine = MemoryMatchEngine(adapter, persistence, rng=SeededRandomSource(1))
    await engine.initialize()

    assert engine.state.best_moves == expected
    assert len(engine.state.cards) == 16


@pytest.mark.asyncio
async def test_memory_match_hides_mismatch_after_delay(adapter):
    engine = MemoryMatchEngine(adapter, config={"mismatch_delay": 0})
    await engine.initialize()
    engine.state = MemoryState(cards=("A", "B", "A", "B"))

    await engine.flip(0)
    result = await engine.flip(1)

    assert result == FlipResult.MISMATCHED
    assert engine.state.face_up == ()
    assert engine.state.move_count == 1
    assert adapter.events[-1][0] == "hidden"


@pytest.mark.asyncio
async def test_memory_match_manual_hide(adapter):
    engine = MemoryMatchEngine(adapter, config={"auto_hide": False})
    await engine.initialize()
    engine.state = MemoryState(cards=("A", "B", "A", "B"))

    await engine.flip(0)
    await engine.flip(1)
    assert engine.state.awaiting_hide
    assert await engine.flip(2) == FlipResult.PENDING_MISMATCH

    assert await engine.hide_mismatch() == FlipResult.HIDDEN
    assert await engine.hide_mismatch() == FlipResult.NOTHING_TO_HIDE


@pytest.mark.asyncio
async def test_memory_match_saves_best_on_completion(adapter, persistence):
    engine = MemoryMatchEngine(adapter, persistence, config={"symbols": ("A", "B")})
    await engine.initialize()
    engine.state = MemoryState(cards=("A", "B", "A", "B"), best_moves=5)

    for index in (0, 2, 1, 3):
        result = await engine.flip(index)

    assert result == FlipResult.COMPLETED
    assert json.loads(persistence.data["memoryGameBestScore"]) == 2

    await engine.start_game()
    assert engine.state.best_moves == 2
    assert sorted(engine.state.cards) == ["A", "A", "B", "B"]


# Word puzzle


@pytest.mark.asyncio
async def test_word_puzzle_resumes_saved_puzzle(adapter, persistence):
    saved = WordPuzzleState(word_index=WORD_BANK.index("HOOK"), target_word="HOOK",
                            scrambled_word="OKOH", score=40, best_score=40)
    persistence.data["wordPuzzleState"] = json.dumps(saved.to_dict())

    engine = WordPuzzleEngine(adapter, persistence)
    await engine.initialize()
    assert engine.state == saved


@pytest.mark.asyncio
async def test_word_puzzle_corrupt_save_starts_fresh(adapter, persistence):
    persistence.data["wordPuzzleState"] = json.dumps({"currentWord": "HOOK"})
    engine = WordPuzzleEngine(adapter, persistence, rng=SeededRandomSource(3))
    await engine.initialize()

    assert engine.state.target_word in WORD_BANK
    assert engine.state.score == 0


@pytest.mark.asyncio
async def test_word_puzzle_custom_bank_and_guess(adapter, persistence):
    engine = WordPuzzleEngine(
        adapter, persistence, rng=SeededRandomSource(3), config={"word_bank": ["ALPHA", "OMEGA"]}
    )
    await engine.initialize()
    target = engine.state.target_word
    assert target in ("ALPHA", "OMEGA")

    assert await engine.submit_guess(target.lower()) == WordPuzzleResult.CORRECT
    assert engine.state.score == 50
    assert adapter.events[-1][1]["answer"] == target

    saved = json.loads(persistence.data["wordPuzzleState"])
    assert saved["score"] == 50
    assert saved["lastAnswer"] == target


@pytest.mark.asyncio
async def test_word_puzzle_selection_hint_skip_reset(adapter):
    engine = WordPuzzleEngine(adapter, rng=SeededRandomSource(5))
    await engine.initialize()
    engine.state = WordPuzzleState(word_index=WORD_BANK.index("STATE"), target_word="STATE",
                                   scrambled_word="TASTE", score=10, best_score=10)

    assert await engine.select_letter(2) == WordPuzzleResult.LETTER_SELECTED
    assert await engine.clear_selection() == WordPuzzleResult.SELECTION_CLEARED
    for index in (2, 0, 1, 3, 4):
        await engine.select_letter(index)
    assert await engine.submit_selection() == WordPuzzleResult.CORRECT
    assert engine.state.score == 60

    assert await engine.request_hint() == WordPuzzleResult.HINT_REVEALED
    assert await engine.skip() == WordPuzzleResult.SKIPPED
    assert await engine.reset_game() == WordPuzzleResult.RESET
    assert engine.state.score == 0
    assert engine.state.best_score == 60


# Replay


@pytest.mark.asyncio
async def test_recorded_session_replays_exactly():
    moves = ["LEFT", "UP", "RIGHT", "DOWN"] * 5

    async def play(rng):
        adapter = DummyAdapter()
        engine = TileMergeEngine(adapter, rng=rng)
        await engine.initialize()
        for direction in moves:
            await engine.move(direction)
        return engine.state, adapter.rendered_states

    recorder = RecordingRandomSource(SeededRandomSource(17))
    original = await play(recorder)
    replayed_rng = recorder.replay()
    replayed = await play(replayed_rng)

    assert replayed == original
    assert replayed_rng.remaining == 0


# Unparseable shell input


@pytest.mark.asyncio
async def test_unknown_names_are_rejected_not_raised(adapter, events):
    tile_merge = TileMergeEngine(adapter, rng=SeededRandomSource(1))
    await tile_merge.initialize()
    board = tile_merge.state
    outcome = await tile_merge.move("diagonal")
    assert outcome.result == MoveResult.INVALID_DIRECTION
    assert tile_merge.state is board

    snake = SnakeEngine(adapter, rng=ScriptedRandomSource([0.0, 0.0]))
    await snake.initialize()
    assert await snake.set_direction("north") == SnakeResult.INVALID_DIRECTION
    assert snake.state.next_direction == Direction.RIGHT

    tictactoe = TicTacToeEngine(adapter)
    await tictactoe.initialize()
    assert await tictactoe.choose_symbol("z") == TicTacToeResult.INVALID_SYMBOL
    assert tictactoe.state.mode == GameMode.TWO_PLAYER

    assert [name for name, _ in adapter.events] == [
        "invalid_direction",
        "invalid_direction",
        "invalid_symbol",
    ]
    assert all(data["category"] == "REJECTED" for _, data in adapter.events)
    rejected = [data for name, data in events if name == "ACTION_REJECTED"]
    assert [data["reason"] for data in rejected] == [
        "invalid_direction",
        "invalid_direction",
        "invalid_symbol",
    ]
