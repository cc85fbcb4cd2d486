"""
Statistical fairness audit for the random decisions of the games.

This module provides tools for checking that a ``RandomSource`` drives the
engines' random choices with the advertised distributions: uniform tile
spawn cells, 2/4 tile values at 90/10, uniform card shuffles, uniform food
cells and uniform corner tie-breaks.
"""

import itertools
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import scipy.stats as stats

from pocketarcade.common.random_source import RandomSource, SeededRandomSource
from pocketarcade.snake.state import Position
from pocketarcade.snake.transitions import StateTransitionEngine as SnakeTransitions
from pocketarcade.tictactoe.state import Cell, GameMode
from pocketarcade.tictactoe.state import GameState as TicTacToeState
from pocketarcade.tictactoe.transitions import (
    StateTransitionEngine as TicTacToeTransitions,
)
from pocketarcade.tile_merge.constants import (
    BOARD_SIZE,
    SPAWN_LOW_VALUE,
    SPAWN_TWO_PROBABILITY,
)
from pocketarcade.tile_merge.state import GameState as TileMergeState
from pocketarcade.tile_merge.state import empty_board
from pocketarcade.tile_merge.transitions import (
    StateTransitionEngine as TileMergeTransitions,
)

logger = logging.getLogger("pocketarcade.verification")

# Permutation counts grow factorially
MAX_SHUFFLE_ITEMS = 6

# Food placement retries while it hits the snake; a fair source needs a
# handful of draws, so running out of these means the source is stuck
MAX_DRAWS_PER_PLACEMENT = 200


class DrawBudgetExceeded(RuntimeError):
    """Raised when an audited helper needs more draws than it is allowed."""


class _BudgetedSource(RandomSource):
    """Passes draws through until ``remaining`` reaches zero."""

    def __init__(self, inner: RandomSource, budget: int):
        self._inner = inner
        self.remaining = budget

    def uniform_float(self) -> float:
        if self.remaining <= 0:
            raise DrawBudgetExceeded("draw budget exhausted")
        self.remaining -= 1
        return self._inner.uniform_float()


@dataclass
class AuditResult:
    """
    Outcome of one chi-square goodness-of-fit test.

    Attributes:
        name: Which random decision was audited
        statistic: The chi-square statistic
        p_value: Probability of a deviation this large under the expected distribution
        dof: Degrees of freedom
        sample_size: Number of draws tabulated
    """

    name: str
    statistic: float
    p_value: float
    dof: int
    sample_size: int

    def passed(self, alpha: float = 0.001) -> bool:
        """Check whether the sample is consistent with the expected distribution."""
        return self.p_value >= alpha

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary."""
        return {
            "name": self.name,
            "statistic": self.statistic,
            "p_value": self.p_value,
            "dof": self.dof,
            "sample_size": self.sample_size,
        }


class FairnessAuditor:
    """
    Runs the games' random helpers many times and tests the tallies.

    Each audit draws from the auditor's random source through the same
    transition code the engines use, so a source that is biased for the
    games fails here.
    """

    def __init__(self, rng: Optional[RandomSource] = None, trials: int = 10000):
        """
        Initialize the auditor.

        Args:
            rng: Source under audit; defaults to an unseeded ``SeededRandomSource``
            trials: Draws per audit
        """
        if trials <= 0:
            raise ValueError("trials must be positive")
        self.rng = rng or SeededRandomSource()
        self.trials = trials

    def _chi_square(
        self, name: str, observed: np.ndarray, probabilities: Sequence[float]
    ) -> AuditResult:
        observed = np.asarray(observed, dtype=float)
        expected = np.asarray(probabilities, dtype=float) * observed.sum()
        statistic, p_value = stats.chisquare(observed, expected)

        result = AuditResult(
            name=name,
            statistic=float(statistic),
            p_value=float(p_value),
            dof=len(observed) - 1,
            sample_size=int(observed.sum()),
        )
        logger.debug(
            f"Audit {name}: chi2={result.statistic:.3f} p={result.p_value:.4f}"
        )
        return result

    def audit_shuffle(self, n: int = 4) -> AuditResult:
        """
        Check that ``shuffled`` produces every permutation equally often.

        Args:
            n: Number of items to shuffle (2 to 6)
        """
        if not 2 <= n <= MAX_SHUFFLE_ITEMS:
            raise ValueError(f"n must be between 2 and {MAX_SHUFFLE_ITEMS}")

        items = list(range(n))
        index = {p: i for i, p in enumerate(itertools.permutations(items))}
        counts = np.zeros(len(index), dtype=int)

        for _ in range(self.trials):
            counts[index[tuple(self.rng.shuffled(items))]] += 1

        return self._chi_square(
            "shuffle", counts, np.full(len(index), 1.0 / len(index))
        )

    def _spawn_on_empty_board(self):
        state = TileMergeTransitions.spawn_tile(
            TileMergeState(board=empty_board(BOARD_SIZE)), self.rng
        )
        for row, cells in enumerate(state.board):
            for col, value in enumerate(cells):
                if value:
                    return row, col, value
        raise RuntimeError("spawn_tile left the board empty")

    def audit_spawn_values(self) -> AuditResult:
        """Check the 2/4 split of spawned tiles."""
        counts = np.zeros(2, dtype=int)
        for _ in range(self.trials):
            _, _, value = self._spawn_on_empty_board()
            counts[0 if value == SPAWN_LOW_VALUE else 1] += 1

        return self._chi_square(
            "spawn_values",
            counts,
            [SPAWN_TWO_PROBABILITY, 1.0 - SPAWN_TWO_PROBABILITY],
        )

    def audit_spawn_cells(self) -> AuditResult:
        """Check that a spawn on an empty board lands on every cell equally often."""
        cells = BOARD_SIZE * BOARD_SIZE
        counts = np.zeros(cells, dtype=int)
        for _ in range(self.trials):
            row, col, _ = self._spawn_on_empty_board()
            counts[row * BOARD_SIZE + col] += 1

        return self._chi_square("spawn_cells", counts, np.full(cells, 1.0 / cells))

    def audit_food_placement(self, grid_size: int = 5) -> AuditResult:
        """
        Check that food lands uniformly on the free cells.

        The snake is a single segment in the top-left corner. A source that
        keeps landing on the snake fails the audit with a p-value of 0.
        """
        snake = (Position(0, 0),)
        counts = np.zeros(grid_size * grid_size, dtype=int)
        free = grid_size * grid_size - 1
        source = _BudgetedSource(self.rng, MAX_DRAWS_PER_PLACEMENT)

        for trial in range(self.trials):
            source.remaining = MAX_DRAWS_PER_PLACEMENT
            try:
                food = SnakeTransitions.place_food(snake, source, grid_size)
            except DrawBudgetExceeded:
                logger.warning(
                    f"Food placement found no free cell in {MAX_DRAWS_PER_PLACEMENT} "
                    f"draws (trial {trial})"
                )
                return AuditResult(
                    name="food_placement",
                    statistic=math.inf,
                    p_value=0.0,
                    dof=free - 1,
                    sample_size=trial,
                )
            counts[food.y * grid_size + food.x] += 1

        # The occupied cell has no expected count and must be left out
        return self._chi_square("food_placement", counts[1:], np.full(free, 1.0 / free))

    def audit_corner_choice(self) -> AuditResult:
        """Check the computer's random pick among four empty corners."""
        board = tuple(
            tuple(Cell.X if (r, c) == (1, 1) else Cell.EMPTY for c in range(3))
            for r in range(3)
        )
        state = TicTacToeState(
            board=board,
            current_player=Cell.O,
            mode=GameMode.VS_COMPUTER,
            human_symbol=Cell.X,
        )

        corners = [(0, 0), (0, 2), (2, 0), (2, 2)]
        counts = np.zeros(len(corners), dtype=int)
        for _ in range(self.trials):
            cell = TicTacToeTransitions.choose_computer_cell(state, self.rng)
            counts[corners.index(cell)] += 1

        return self._chi_square("corner_choice", counts, np.full(4, 0.25))

    def run_all(self) -> List[AuditResult]:
        """Run every audit."""
        return [
            self.audit_shuffle(),
            self.audit_spawn_values(),
            self.audit_spawn_cells(),
            self.audit_food_placement(),
            self.audit_corner_choice(),
        ]

    def summary(self, alpha: float = 0.001) -> Dict[str, Any]:
        """
        Run every audit and report the results.

        Args:
            alpha: Significance level below which an audit fails

        Returns:
            Dictionary with per-audit results and an overall verdict
        """
        results = self.run_all()
        failed = [r.name for r in results if not r.passed(alpha)]
        if failed:
            logger.warning(f"Fairness audits failed: {', '.join(failed)}")

        return {
            "trials": self.trials,
            "alpha": alpha,
            "audits": [dict(r.to_dict(), passed=r.passed(alpha)) for r in results],
            "passed": not failed,
        }
