"""
Tests for the terminal front end.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from pocketarcade.cli import HANDLERS, build_persistence, main, parse_args, play
from pocketarcade.common import ScriptedRandomSource, SeededRandomSource
from pocketarcade.engine import TicTacToeEngine, TileMergeEngine, WordPuzzleEngine
from pocketarcade.persistence import FilePersistence, MemoryPersistence, SQLitePersistence
from pocketarcade.tictactoe import Cell


def scripted_input(*lines):
    """A read_line stand-in that raises EOFError once the lines run out."""
    remaining = list(lines)

    def read_line(prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read_line


@pytest.mark.asyncio
async def test_play_until_quit(adapter, persistence):
    engine = TileMergeEngine(adapter, persistence, rng=SeededRandomSource(3))
    printed = []

    await play(
        engine,
        HANDLERS["tile_merge"],
        read_line=scripted_input("a", "bogus", "new", "quit", "d"),
        output=printed.append,
    )

    assert printed == ["Unknown command: 'bogus'"]
    assert adapter.initialized and adapter.shut_down
    assert "game2048State" in persistence.data


@pytest.mark.asyncio
async def test_play_until_end_of_input(adapter):
    engine = TicTacToeEngine(adapter)
    await play(engine, HANDLERS["tictactoe"], read_line=scripted_input("0 0", "1 1", "9"))

    assert engine.state.board[0][0] == Cell.X
    assert engine.state.board[1][1] == Cell.O
    assert adapter.shut_down


@pytest.mark.asyncio
async def test_word_puzzle_commands(adapter):
    engine = WordPuzzleEngine(adapter, rng=ScriptedRandomSource([0.0] * 20))
    printed = []
    await play(
        engine,
        HANDLERS["word_puzzle"],
        read_line=scripted_input("#0", "#1", "hint", ""),
        output=printed.append,
    )

    assert engine.state.selected_indices == (0, 1)
    assert len(engine.state.revealed_letters) == 1
    assert printed == ["Unknown command: ''"]


def test_parse_args():
    args = parse_args(["snake", "--seed", "7", "--data-dir", "saves"])
    assert args.game == "snake"
    assert args.seed == 7
    assert args.data_dir == "saves"
    assert args.db is None
    assert args.trials == 10000


def test_parse_args_rejects_unknown_game():
    with pytest.raises(SystemExit):
        parse_args(["solitaire"])


def test_build_persistence(tmp_path):
    assert isinstance(build_persistence(parse_args(["snake"])), MemoryPersistence)
    assert isinstance(
        build_persistence(parse_args(["snake", "--data-dir", str(tmp_path)])), FilePersistence
    )
    store = build_persistence(parse_args(["snake", "--db", str(tmp_path / "a.db")]))
    assert isinstance(store, SQLitePersistence)
    store.close()


@pytest.mark.asyncio
async def test_audit_command(capsys):
    code = await main(["audit", "--seed", "5", "--trials", "500"])

    summary = json.loads(capsys.readouterr().out)
    assert summary["trials"] == 500
    assert len(summary["audits"]) == 5
    assert code == (0 if summary["passed"] else 1)


@pytest.mark.asyncio
async def test_main_closes_sqlite_store(tmp_path, monkeypatch):
    monkeypatch.setattr("pocketarcade.cli.play", AsyncMock())

    with patch.object(SQLitePersistence, "close", autospec=True) as mock_close:
        code = await main(["snake", "--db", str(tmp_path / "saves.db")])

    assert code == 0
    mock_close.assert_called_once()
