"""Static catalogue of tetromino kinds and their rotation states.

Every playable :class:`PieceKind` owns an ordered, cyclic sequence of
rotation states.  Each state is a small rectangular occupancy matrix whose
top-left corner is anchored at the piece's origin on the board.  The table is
validated when the module is imported so that a malformed entry fails fast
instead of surfacing as a strange collision later on.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Sequence, Tuple

RotationShape = Tuple[Tuple[bool, ...], ...]
BlockOffsets = Tuple[Tuple[int, int], ...]


class ShapeCatalogError(ValueError):
    """Raised when the shape table contains an inconsistent entry."""


class PieceKind(str, Enum):
    """The seven standard tetromino kinds plus the empty-cell sentinel."""

    T = "T"
    I = "I"
    O = "O"
    J = "J"
    L = "L"
    S = "S"
    Z = "Z"
    EMPTY = "empty"


PLAYABLE_KINDS: Tuple[PieceKind, ...] = tuple(k for k in PieceKind if k is not PieceKind.EMPTY)

# Integer stored in the board grid for each kind.  ``0`` must stay the empty
# cell so that ``numpy`` truthiness means "occupied".
CELL_VALUES: Dict[PieceKind, int] = {PieceKind.EMPTY: 0}
CELL_VALUES.update({kind: i + 1 for i, kind in enumerate(PLAYABLE_KINDS)})

KIND_BY_VALUE: Dict[int, PieceKind] = {value: kind for kind, value in CELL_VALUES.items()}


def _matrix(*rows: str) -> RotationShape:
    return tuple(tuple(ch == "#" for ch in row) for row in rows)


_RAW_SHAPES: Dict[PieceKind, Tuple[RotationShape, ...]] = {
    PieceKind.T: (
        _matrix("###", ".#.", "..."),
        _matrix(".#.", "##.", ".#."),
        _matrix(".#.", "###", "..."),
        _matrix(".#.", ".##", ".#."),
    ),
    PieceKind.I: (
        _matrix(".#..", ".#..", ".#..", ".#.."),
        _matrix("####", "....", "....", "...."),
    ),
    PieceKind.O: (
        _matrix("##", "##"),
    ),
    PieceKind.J: (
        _matrix(".##", ".#.", ".#."),
        _matrix("###", "..#", "..."),
        _matrix(".#.", ".#.", "##."),
        _matrix("#..", "###", "..."),
    ),
    PieceKind.L: (
        _matrix("##.", ".#.", ".#."),
        _matrix("..#", "###", "..."),
        _matrix(".#.", ".#.", ".##"),
        _matrix("###", "#..", "..."),
    ),
    PieceKind.S: (
        _matrix(".##", "##.", "..."),
        _matrix(".#.", ".##", "..#"),
    ),
    PieceKind.Z: (
        _matrix("##.", ".##", "..."),
        _matrix("..#", ".##", ".#."),
    ),
}


def validate_catalog(catalog: Mapping[PieceKind, Sequence[RotationShape]]) -> None:
    """Check the structural integrity of ``catalog``.

    Every playable kind needs at least one rotation, every rotation must be a
    non-empty rectangle, all rotations of a kind must share dimensions and
    occupy the same number of cells.

    Raises:
        ShapeCatalogError: On the first inconsistency found.
    """

    missing = [kind.value for kind in PLAYABLE_KINDS if kind not in catalog]
    if missing:
        raise ShapeCatalogError(f"No rotations defined for {', '.join(missing)}")

    for kind, rotations in catalog.items():
        if kind is PieceKind.EMPTY:
            raise ShapeCatalogError("The empty sentinel cannot own rotations")
        if not rotations:
            raise ShapeCatalogError(f"{kind.value}: rotation sequence is empty")

        dims = None
        cells = None
        for index, matrix in enumerate(rotations):
            if not matrix or not matrix[0]:
                raise ShapeCatalogError(f"{kind.value}[{index}]: empty matrix")
            width = len(matrix[0])
            if any(len(row) != width for row in matrix):
                raise ShapeCatalogError(f"{kind.value}[{index}]: ragged matrix")
            count = sum(bool(cell) for row in matrix for cell in row)
            if count == 0:
                raise ShapeCatalogError(f"{kind.value}[{index}]: no occupied cells")
            if dims is None:
                dims, cells = (len(matrix), width), count
                continue
            if (len(matrix), width) != dims:
                raise ShapeCatalogError(
                    f"{kind.value}[{index}]: {len(matrix)}x{width} differs from {dims[0]}x{dims[1]}"
                )
            if count != cells:
                raise ShapeCatalogError(
                    f"{kind.value}[{index}]: {count} cells differs from {cells}"
                )


validate_catalog(_RAW_SHAPES)

SHAPES: Dict[PieceKind, Tuple[RotationShape, ...]] = dict(_RAW_SHAPES)


def _offsets(matrix: RotationShape) -> BlockOffsets:
    return tuple(
        (r, c) for r, row in enumerate(matrix) for c, filled in enumerate(row) if filled
    )


_BLOCK_OFFSETS: Dict[PieceKind, Tuple[BlockOffsets, ...]] = {
    kind: tuple(_offsets(m) for m in rotations) for kind, rotations in SHAPES.items()
}


def rotation_count(kind: PieceKind) -> int:
    """Return how many rotation states ``kind`` cycles through."""

    return len(SHAPES[kind])


def shape_blocks(kind: PieceKind, rotation: int) -> BlockOffsets:
    """Return the ``(row, col)`` offsets occupied by ``kind`` at ``rotation``.

    Parameters
    ----------
    kind:
        The playable :class:`PieceKind` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    states = _BLOCK_OFFSETS[kind]
    return states[rotation % len(states)]
