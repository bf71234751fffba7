"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .shapes import CELL_VALUES, KIND_BY_VALUE, PieceKind
from .tetromino import Tetromino


# Dimensions of the playfield.
ROWS = 20
COLUMNS = 10

Grid = NDArray[np.uint8]

_VALID_VALUES = np.array(sorted(KIND_BY_VALUE), dtype=np.uint8)


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((ROWS, COLUMNS), dtype=np.uint8)


class Board:
    """Immutable grid of locked cells.

    Cells hold the integer from :data:`~blockfall.shapes.CELL_VALUES` of the
    kind that occupies them, ``0`` meaning empty.  The underlying array is
    marked read-only; every operation that changes cells returns a new board.
    """

    width: int = COLUMNS
    height: int = ROWS

    __slots__ = ("_grid",)

    def __init__(self, grid: Optional[Sequence[Sequence[int]] | Grid] = None) -> None:
        if grid is None:
            data = create_empty_grid()
        else:
            data = np.array(grid, dtype=np.int64)
            if data.shape != (self.height, self.width):
                raise ValueError(
                    f"Board must be {self.height}x{self.width}, got {'x'.join(map(str, data.shape))}"
                )
            if not np.isin(data, _VALID_VALUES).all():
                raise ValueError("Board contains values that do not map to a piece kind")
            data = data.astype(np.uint8)
        data.setflags(write=False)
        self._grid: Grid = data

    @classmethod
    def _wrap(cls, data: Grid) -> "Board":
        # Skips validation for arrays produced by the board itself.
        board = cls.__new__(cls)
        data.setflags(write=False)
        board._grid = data
        return board

    @property
    def grid(self) -> Grid:
        """Read-only view of the cell values."""

        return self._grid

    def __len__(self) -> int:
        return self.height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())

    def __repr__(self) -> str:
        occupied = int(np.count_nonzero(self._grid))
        return f"Board({self.height}x{self.width}, occupied={occupied})"

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self._grid[row, col])
        raise IndexError("Cell out of bounds")

    def kind_at(self, row: int, col: int) -> PieceKind:
        """Return the :class:`PieceKind` occupying ``(row, col)``."""

        return KIND_BY_VALUE[self.get_cell(row, col)]

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.  This makes
        collision detection simpler as off-board positions are automatically
        rejected.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self._grid[row, col] == 0)
        return False

    def is_in_bounds(self, piece: Tetromino) -> bool:
        """Return ``True`` if every cell of ``piece`` lies on the board."""

        return all(
            0 <= row < self.height and 0 <= col < self.width for row, col in piece.blocks()
        )

    def is_free(self, piece: Tetromino) -> bool:
        """Return ``True`` if every cell of ``piece`` maps to an empty cell."""

        return all(self.is_empty(row, col) for row, col in piece.blocks())

    def place(self, piece: Tetromino) -> "Board":
        """Return a new board with ``piece`` locked into the grid.

        Raises:
            IndexError: If any block of ``piece`` lies outside the board.  The
                engine only ever locks a piece that was legal on the previous
                tick, so hitting this is a programming error.
        """

        coordinates = np.asarray(piece.blocks(), dtype=np.int16)
        rows, cols = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")

        grid = self._grid.copy()
        grid[rows, cols] = np.uint8(CELL_VALUES[piece.kind])
        return Board._wrap(grid)

    def clear_full_rows(self) -> Tuple["Board", int]:
        """Remove completed rows.

        Returns the compacted board and how many rows were removed.  Cleared
        rows are replaced by empty rows at the top so the grid keeps its size
        and the surviving rows keep their relative order.
        """

        full = np.all(self._grid != 0, axis=1)
        cleared = int(np.count_nonzero(full))
        if not cleared:
            return self, 0
        remaining = self._grid[~full]
        new_rows = np.zeros((cleared, self.width), dtype=self._grid.dtype)
        return Board._wrap(np.vstack((new_rows, remaining))), cleared

    def rows(self) -> list[list[PieceKind]]:
        """Return the grid as nested lists of :class:`PieceKind` values."""

        return [[KIND_BY_VALUE[int(v)] for v in row] for row in self._grid]

    def with_cells(self, cells: Iterable[Tuple[int, int]], kind: PieceKind) -> "Board":
        """Return a copy with ``cells`` set to ``kind``.

        Meant for building positions in tests and tools; gameplay goes through
        :meth:`place`.
        """

        grid = self._grid.copy()
        value = np.uint8(CELL_VALUES[kind])
        for row, col in cells:
            if not (0 <= row < self.height and 0 <= col < self.width):
                raise IndexError("Cell out of bounds")
            grid[row, col] = value
        return Board._wrap(grid)
