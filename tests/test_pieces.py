from __future__ import annotations

import dataclasses

import pytest

from falling_blocks.game import Piece, PieceCatalog, TetrominoType, parse_points


@pytest.fixture(scope="module")
def catalog() -> PieceCatalog:
    return PieceCatalog()


def test_catalog_has_seven_pieces_in_standard_order(catalog):
    kinds = [p.kind for p in catalog.get_pieces()]
    assert kinds == [
        TetrominoType.I,
        TetrominoType.L,
        TetrominoType.J,
        TetrominoType.S,
        TetrominoType.Z,
        TetrominoType.O,
        TetrominoType.T,
    ]


def test_catalog_returns_the_same_shared_pieces(catalog):
    assert catalog.get_pieces() is catalog.get_pieces()
    assert catalog.pieces[0] is catalog.piece(TetrominoType.I)


@pytest.mark.parametrize(
    "kind,length",
    [
        (TetrominoType.I, 2),
        (TetrominoType.L, 4),
        (TetrominoType.J, 4),
        (TetrominoType.S, 2),
        (TetrominoType.Z, 2),
        (TetrominoType.O, 1),
        (TetrominoType.T, 4),
    ],
)
def test_rotation_cycle_lengths(catalog, kind, length):
    cycle = catalog.cycle(kind)
    assert len(cycle) == length
    head = cycle.head
    piece = head
    for _ in range(length):
        piece = piece.next_rotation()
    assert piece is head
    # Four quarter turns always come back to the start.
    piece = head
    for _ in range(4):
        piece = piece.next_rotation()
    assert piece.same_shape(head)


def test_rotation_states_are_distinct(catalog):
    for head in catalog:
        states = list(catalog.cycle(head.kind))
        for i, a in enumerate(states):
            assert a.rotation == i
            for b in states[i + 1:]:
                assert not a.same_shape(b)


def test_i_piece_dimensions_and_skirt(catalog):
    i_piece = catalog.piece(TetrominoType.I)
    assert (i_piece.width, i_piece.height) == (1, 4)
    assert i_piece.skirt == (0,)
    flat = i_piece.next_rotation()
    assert (flat.width, flat.height) == (4, 1)
    assert flat.skirt == (0, 0, 0, 0)


def test_t_piece_rotates_counterclockwise(catalog):
    t_piece = catalog.piece(TetrominoType.T)
    assert (t_piece.width, t_piece.height) == (3, 2)
    assert t_piece.skirt == (0, 0, 0)
    turned = t_piece.next_rotation()
    assert set(turned.body) == {(0, 2), (0, 1), (1, 1), (0, 0)}
    assert (turned.width, turned.height) == (2, 3)
    assert turned.skirt == (0, 1)


def test_skirts_of_canonical_pieces(catalog):
    assert catalog.piece(TetrominoType.L).skirt == (0, 0)
    assert catalog.piece(TetrominoType.J).skirt == (0, 0)
    assert catalog.piece(TetrominoType.S).skirt == (0, 0, 1)
    assert catalog.piece(TetrominoType.Z).skirt == (1, 0, 0)
    assert catalog.piece(TetrominoType.O).skirt == (0, 0)


def test_same_shape_ignores_cell_order():
    a = Piece(TetrominoType.O, ((0, 0), (0, 1), (1, 0), (1, 1)))
    b = Piece(TetrominoType.O, ((1, 1), (1, 0), (0, 1), (0, 0)))
    c = Piece(TetrominoType.S, ((0, 0), (1, 0), (1, 1), (2, 1)))
    assert a.same_shape(b)
    assert not a.same_shape(c)


def test_piece_outside_catalog_rotates_on_demand():
    bar = Piece(TetrominoType.I, parse_points("0 0 1 0 2 0"))
    upright = bar.next_rotation()
    assert upright.cycle is None
    assert set(upright.body) == {(0, 2), (0, 1), (0, 0)}


def test_pieces_are_immutable(catalog):
    with pytest.raises(dataclasses.FrozenInstanceError):
        catalog.piece(TetrominoType.O).width = 5


def test_parse_points_accepts_commas():
    assert parse_points("0,0 0,1 0,2 0,3") == ((0, 0), (0, 1), (0, 2), (0, 3))
    with pytest.raises(ValueError):
        parse_points("0 0 1")


def test_empty_body_is_rejected():
    with pytest.raises(ValueError):
        Piece(TetrominoType.O, ())
