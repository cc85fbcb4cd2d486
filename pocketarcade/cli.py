"""
Terminal front end for the Pocket Arcade games.

Usage:
    pocketarcade tile_merge
    pocketarcade snake --seed 7
    pocketarcade word_puzzle --data-dir ~/.pocketarcade
    pocketarcade audit --trials 20000
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pocketarcade.adapters import ConsoleAdapter
from pocketarcade.common.random_source import SeededRandomSource
from pocketarcade.engine import (
    GameEngine,
    MemoryMatchEngine,
    SnakeEngine,
    TicTacToeEngine,
    TileMergeEngine,
    WordPuzzleEngine,
)
from pocketarcade.persistence import (
    FilePersistence,
    MemoryPersistence,
    PersistenceService,
    SQLitePersistence,
)
from pocketarcade.verification import FairnessAuditor

ENGINES = {
    "tile_merge": TileMergeEngine,
    "snake": SnakeEngine,
    "tictactoe": TicTacToeEngine,
    "memory_match": MemoryMatchEngine,
    "word_puzzle": WordPuzzleEngine,
}

HELP = {
    "tile_merge": "w/a/s/d to slide, 'new' for a new board",
    "snake": "w/a/s/d to turn, enter to step, 'p' to pause, 'new' to restart",
    "tictactoe": "'row col' to play, 'x'/'o' to play the computer, '2p' for two players, "
    "'new', 'stats reset'",
    "memory_match": "card number to flip, 'new' for a new table",
    "word_puzzle": "type a guess, '#n' to pick letter n, 'submit', 'clear', 'hint', "
    "'skip', 'new'",
}

_KEYS = {"w": "UP", "a": "LEFT", "s": "DOWN", "d": "RIGHT"}

Handler = Callable[[GameEngine, str], Awaitable[bool]]


async def _tile_merge(engine: TileMergeEngine, command: str) -> bool:
    direction = _KEYS.get(command, command.upper())
    if direction not in _KEYS.values():
        return False
    await engine.move(direction)
    return True


async def _snake(engine: SnakeEngine, command: str) -> bool:
    if command == "p":
        await engine.toggle_pause()
        return True
    if command:
        direction = _KEYS.get(command, command.upper())
        if direction not in _KEYS.values():
            return False
        await engine.set_direction(direction)
    await engine.tick()
    return True


async def _tictactoe(engine: TicTacToeEngine, command: str) -> bool:
    if command in ("x", "o"):
        await engine.choose_symbol(command)
    elif command == "2p":
        await engine.set_two_player()
    elif command == "stats reset":
        await engine.reset_stats()
    else:
        parts = command.split()
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            return False
        await engine.place(int(parts[0]), int(parts[1]))
    return True


async def _memory_match(engine: MemoryMatchEngine, command: str) -> bool:
    if not command.isdigit():
        return False
    await engine.flip(int(command))
    return True


async def _word_puzzle(engine: WordPuzzleEngine, command: str) -> bool:
    if command == "hint":
        await engine.request_hint()
    elif command == "skip":
        await engine.skip()
    elif command == "clear":
        await engine.clear_selection()
    elif command == "submit":
        await engine.submit_selection()
    elif command.startswith("#") and command[1:].isdigit():
        await engine.select_letter(int(command[1:]))
    elif command:
        await engine.submit_guess(command)
    else:
        return False
    return True


HANDLERS: Dict[str, Handler] = {
    "tile_merge": _tile_merge,
    "snake": _snake,
    "tictactoe": _tictactoe,
    "memory_match": _memory_match,
    "word_puzzle": _word_puzzle,
}


def build_persistence(args: argparse.Namespace) -> PersistenceService:
    if args.db:
        return SQLitePersistence(args.db)
    if args.data_dir:
        return FilePersistence(args.data_dir)
    return MemoryPersistence()


async def play(
    engine: GameEngine,
    handler: Handler,
    read_line: Callable[[str], str] = input,
    output: Callable[[str], Any] = print,
) -> None:
    """
    Run the read-command loop until 'quit' or end of input.

    Args:
        engine: Engine for the chosen game
        handler: Turns a command line into engine calls
        read_line: Blocking line reader, run in a worker thread
        output: Where to report unknown commands
    """
    await engine.initialize()
    try:
        while True:
            try:
                line = await asyncio.to_thread(read_line, "> ")
            except EOFError:
                break

            command = line.strip().lower()
            if command in ("q", "quit", "exit"):
                break
            if command == "new":
                await engine.start_game()
            elif not await handler(engine, command):
                output(f"Unknown command: {line.strip()!r}")
    finally:
        await engine.shutdown()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play the Pocket Arcade games")
    parser.add_argument("game", choices=sorted(ENGINES) + ["audit"])
    parser.add_argument("--seed", type=int, help="Seed for reproducible play")
    parser.add_argument("--data-dir", help="Directory for saved games (JSON files)")
    parser.add_argument("--db", help="SQLite database for saved games")
    parser.add_argument(
        "--trials", type=int, default=10000, help="Draws per audit (audit only)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.game == "audit":
        auditor = FairnessAuditor(SeededRandomSource(args.seed), trials=args.trials)
        summary = auditor.summary()
        print(json.dumps(summary, indent=2))
        return 0 if summary["passed"] else 1

    adapter = ConsoleAdapter()
    persistence = build_persistence(args)
    engine = ENGINES[args.game](
        adapter,
        persistence=persistence,
        config={"seed": args.seed},
    )

    print(HELP[args.game] + ", 'quit' to leave")
    try:
        await play(engine, HANDLERS[args.game])
    except KeyboardInterrupt:
        print("\nGame interrupted. Exiting...")
    finally:
        if isinstance(persistence, SQLitePersistence):
            persistence.close()
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
