import pytest

from arcadenotes.blocks.piece import (
    BLOCK_TYPE_MAX,
    FIELD_BLOCK_COUNT_X,
    PIECES,
    Angle,
    BlockType,
    Piece,
    transpose,
)

f = False
t = True

_LAYOUTS = {
    BlockType.TYPE_1: [[f, f, f, f], [t, t, t, t], [f, f, f, f], [f, f, f, f]],
    BlockType.TYPE_2: [[t, f, f], [t, t, t], [f, f, f]],
    BlockType.TYPE_3: [[f, t, f], [t, t, t], [f, f, f]],
    BlockType.TYPE_4: [[f, f, t], [t, t, t], [f, f, f]],
    BlockType.TYPE_5: [[t, t, f], [f, t, t], [f, f, f]],
    BlockType.TYPE_6: [[f, t, t], [t, t, f], [f, f, f]],
    BlockType.TYPE_7: [[t, t], [t, t]],
}


class _Everywhere:
    def is_blocked(self, x, y):
        return True


class _Nowhere:
    def is_blocked(self, x, y):
        return False


class _Recorder:
    def __init__(self):
        self.cells = {}

    def is_blocked(self, x, y):
        return (x, y) in self.cells

    def set_block(self, x, y, block_type):
        self.cells[(x, y)] = block_type


def _count(piece, angle):
    return sum(
        piece.is_blocked(i, j, angle)
        for i in range(piece.size)
        for j in range(piece.size)
    )


def test_rotate_right_wraps():
    assert Angle.ANGLE_270.rotate_right() is Angle.ANGLE_0
    assert Angle.ANGLE_0.rotate_left() is Angle.ANGLE_270


@pytest.mark.parametrize("angle", list(Angle))
def test_rotations_are_inverse(angle):
    start = Angle(angle.value)
    assert start is angle
    assert start.rotate_right().rotate_left() is angle
    a = start
    for _ in range(4):
        a = a.rotate_right()
    assert a is angle


def test_transpose_swaps_rows_and_columns():
    assert transpose([[1, 2], [3, 4]]) == [[1, 3], [2, 4]]


def test_transpose_twice_is_identity():
    rows = [[True, False, False], [True, True, True], [False, False, False]]
    assert transpose(transpose(rows)) == rows


def test_every_block_type_has_a_piece():
    assert set(PIECES) == {bt for bt in BlockType if bt is not BlockType.NONE}
    assert BLOCK_TYPE_MAX is BlockType.TYPE_7
    for block_type, piece in PIECES.items():
        assert piece.block_type is block_type


@pytest.mark.parametrize("block_type", list(_LAYOUTS))
def test_pieces_match_source_layouts(block_type):
    piece = Piece(block_type, transpose(_LAYOUTS[block_type]))
    assert piece.blocks == PIECES[block_type].blocks


@pytest.mark.parametrize("block_type", list(_LAYOUTS))
def test_initial_position_puts_top_row_at_zero(block_type):
    piece = Piece(block_type, transpose(_LAYOUTS[block_type]))
    x, y = piece.initial_position()
    assert x == (FIELD_BLOCK_COUNT_X - piece.size) // 2
    top = -y
    assert any(piece.blocks[i][top] for i in range(piece.size))
    for j in range(top):
        assert not any(piece.blocks[i][j] for i in range(piece.size))


@pytest.mark.parametrize("block_type", list(_LAYOUTS))
def test_rotation_keeps_block_count(block_type):
    piece = Piece(block_type, transpose(_LAYOUTS[block_type]))
    counts = {_count(piece, angle) for angle in Angle}
    assert counts == {_count(piece, Angle.ANGLE_0)}


def test_square_piece_looks_the_same_at_every_angle():
    piece = Piece(BlockType.TYPE_7, transpose(_LAYOUTS[BlockType.TYPE_7]))
    for angle in Angle:
        assert all(piece.is_blocked(i, j, angle) for i in range(2) for j in range(2))


def test_t_piece_cells_follow_source_layout():
    piece = Piece(BlockType.TYPE_3, transpose(_LAYOUTS[BlockType.TYPE_3]))
    assert piece.is_blocked(1, 0, Angle.ANGLE_0)
    assert not piece.is_blocked(0, 0, Angle.ANGLE_0)
    assert piece.is_blocked(1, 2, Angle.ANGLE_180)


def test_collides_depends_on_field():
    piece = Piece(BlockType.TYPE_2, transpose(_LAYOUTS[BlockType.TYPE_2]))
    assert piece.collides(_Everywhere(), 0, 0, Angle.ANGLE_0) is True
    assert piece.collides(_Nowhere(), 0, 0, Angle.ANGLE_0) is False


@pytest.mark.parametrize("angle", list(Angle))
def test_absorb_into_writes_every_block(angle):
    piece = Piece(BlockType.TYPE_5, transpose(_LAYOUTS[BlockType.TYPE_5]))
    field = _Recorder()
    piece.absorb_into(field, 3, 4, angle)
    assert len(field.cells) == _count(piece, angle)
    assert set(field.cells.values()) == {BlockType.TYPE_5}
    assert piece.collides(field, 3, 4, angle)


def test_piece_stores_blocks_as_tuples():
    piece = Piece(BlockType.TYPE_7, [[True, True], [True, True]])
    assert piece.blocks == ((True, True), (True, True))