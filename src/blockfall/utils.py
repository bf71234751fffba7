"""Utility helpers for the game engine."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .board import Board
from .shapes import CELL_VALUES
from .tetromino import Tetromino


# Ticks per automatic descent at the start of a game, and the fastest the
# game is allowed to get.
BASE_SPEED = 10
MIN_SPEED = 5
LINES_PER_SPEED_STEP = 10


def descent_interval(score: int) -> int:
    """Return how many ticks pass between automatic descents at ``score``.

    Every ten cleared lines shave one tick off the interval until it reaches
    :data:`MIN_SPEED`.
    """

    return max(MIN_SPEED, BASE_SPEED - score // LINES_PER_SPEED_STEP)


def is_legal(board: Board, tetromino: Tetromino) -> bool:
    """Return ``True`` if ``tetromino`` may stand where it is on ``board``.

    This is the only collision test the engine uses: the piece must lie
    within the board and every block must land on an empty cell.
    """

    return board.is_in_bounds(tetromino) and board.is_free(tetromino)


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without locking the piece.  Cells occupied by the active piece receive the
    mapped integer value for the piece's kind; blocks above or beside the
    board are skipped.
    """

    grid = [[int(v) for v in row] for row in board.grid]
    if active is not None:
        for r, c in active.blocks():
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r][c] = CELL_VALUES[active.kind]
    return grid


def format_grid(grid: Sequence[Sequence[int]]) -> str:
    """Return ``grid`` as text, ``#`` for occupied and ``.`` for empty cells."""

    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)
