import pytest

from blockfall.shapes import (
    CELL_VALUES,
    KIND_BY_VALUE,
    PLAYABLE_KINDS,
    SHAPES,
    PieceKind,
    ShapeCatalogError,
    rotation_count,
    shape_blocks,
    validate_catalog,
)


def test_catalog_covers_the_seven_kinds():
    assert set(SHAPES) == set(PLAYABLE_KINDS)
    assert PieceKind.EMPTY not in PLAYABLE_KINDS
    assert len(PLAYABLE_KINDS) == 7


def test_rotation_counts_follow_piece_symmetry():
    assert rotation_count(PieceKind.O) == 1
    for kind in (PieceKind.I, PieceKind.S, PieceKind.Z):
        assert rotation_count(kind) == 2
    for kind in (PieceKind.T, PieceKind.J, PieceKind.L):
        assert rotation_count(kind) == 4


def test_every_rotation_has_four_blocks():
    for kind in PLAYABLE_KINDS:
        for rotation in range(rotation_count(kind)):
            assert len(shape_blocks(kind, rotation)) == 4


def test_shape_blocks_wraps_rotation_index():
    assert shape_blocks(PieceKind.T, 5) == shape_blocks(PieceKind.T, 1)
    assert shape_blocks(PieceKind.I, -1) == shape_blocks(PieceKind.I, 1)


def test_cell_values_reserve_zero_for_empty():
    assert CELL_VALUES[PieceKind.EMPTY] == 0
    assert sorted(CELL_VALUES[k] for k in PLAYABLE_KINDS) == list(range(1, 8))
    for kind, value in CELL_VALUES.items():
        assert KIND_BY_VALUE[value] is kind


def _catalog_with(kind, rotations):
    catalog = dict(SHAPES)
    catalog[kind] = rotations
    return catalog


def test_inconsistent_rotation_dimensions_fail_fast():
    bad = (
        ((True, True, True), (False, True, False), (False, False, False)),
        ((True, True), (True, True)),
    )
    with pytest.raises(ShapeCatalogError, match="differs"):
        validate_catalog(_catalog_with(PieceKind.T, bad))


def test_ragged_and_empty_entries_fail_fast():
    ragged = (((True, True), (True,)),)
    with pytest.raises(ShapeCatalogError, match="ragged"):
        validate_catalog(_catalog_with(PieceKind.O, ragged))
    with pytest.raises(ShapeCatalogError, match="empty"):
        validate_catalog(_catalog_with(PieceKind.O, ()))


def test_missing_kind_fails_fast():
    catalog = dict(SHAPES)
    del catalog[PieceKind.L]
    with pytest.raises(ShapeCatalogError, match="L"):
        validate_catalog(catalog)


def test_catalog_error_is_a_value_error():
    assert issubclass(ShapeCatalogError, ValueError)
