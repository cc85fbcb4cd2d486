"""Tic-tac-toe board layout, winning lines and storage key."""

BOARD_SIZE = 3

# Rows, columns, then the two diagonals, as (row, col) triples
WINNING_LINES = (
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)

CENTER = (1, 1)
CORNERS = ((0, 0), (0, 2), (2, 0), (2, 2))

STORAGE_KEY = "ticTacToeStats"
