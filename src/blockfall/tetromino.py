"""Falling piece value type and the operations that move it around.

A :class:`Tetromino` is an immutable description of a piece: which kind it is,
which rotation state it is in and where the top-left corner of its bounding
box sits on the board.  Moving or rotating a piece produces a new value; no
bounds checking happens here, validity is decided by the engine against a
board.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Tuple

from .shapes import PieceKind, rotation_count, shape_blocks

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Tetromino:
    """Falling or previewed piece on the board."""

    kind: PieceKind
    rotation: int = 0
    x: int = 0  # column of the bounding box's left edge
    y: int = 0  # row of the bounding box's top edge

    def __post_init__(self) -> None:
        if self.kind is PieceKind.EMPTY:
            raise ValueError("A tetromino cannot be of the empty kind")

    def rotate(self) -> "Tetromino":
        """Return a copy advanced to the next rotation state.

        The rotation index wraps around the number of states the kind owns,
        so rotating an ``O`` piece is always a no-op.
        """

        return replace(self, rotation=(self.rotation + 1) % rotation_count(self.kind))

    def translate(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy moved by ``dx`` columns and ``dy`` rows."""

        return replace(self, x=self.x + dx, y=self.y + dy)

    def blocks(self) -> list[Cell]:
        """Return the global ``(row, col)`` coordinates of the piece's cells."""

        return [(self.y + dr, self.x + dc) for dr, dc in shape_blocks(self.kind, self.rotation)]

    def occupied_cells(self) -> FrozenSet[Cell]:
        """Return the set of board cells covered by this piece."""

        return frozenset(self.blocks())


def spawn(kind: PieceKind, columns: int) -> Tetromino:
    """Return ``kind`` in its first rotation at the top centre of the board."""

    return Tetromino(kind, rotation=0, x=columns // 2, y=0)
