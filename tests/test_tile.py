import random

import pytest

from arcadenotes.twenty48.tile import (
    MAX_MOVING_COUNT,
    MAX_POPPING_COUNT,
    Dir,
    NoSpaceError,
    Tile,
    TileData,
    add_random_tile,
    current_or_next_tile_at,
    move_tiles,
    tile_at,
)

SIZE = 4


def cells_to_tiles(cells, size):
    tiles = set()
    for j in range(size):
        for i in range(size):
            c = cells[i + j * size]
            if c:
                tiles.add(Tile(c, i, j))
    return tiles


def tiles_to_cells(tiles, size):
    cells = [0] * (size * size)
    next_cells = [0] * (size * size)
    for t in tiles:
        x, y = t.pos()
        cells[x + y * size] = t.value()
        if t.is_moving():
            if t.next_value() == 0:
                continue
            nx, ny = t.next_pos()
            next_cells[nx + ny * size] = t.next_value()
        else:
            next_cells[x + y * size] = t.value()
    return cells, next_cells


MOVE_CASES = [
    (Dir.UP,
     [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
     [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]),
    (Dir.RIGHT,
     [2, 0, 0, 0, 0, 2, 0, 0, 0, 0, 2, 0, 0, 0, 0, 2],
     [0, 0, 0, 2, 0, 0, 0, 2, 0, 0, 0, 2, 0, 0, 0, 2]),
    (Dir.UP,
     [2, 0, 0, 0, 0, 2, 0, 0, 0, 0, 2, 0, 0, 0, 0, 2],
     [2, 2, 2, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]),
    (Dir.LEFT,
     [0, 2, 2, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
     [4, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]),
    (Dir.RIGHT,
     [0, 0, 0, 2, 0, 0, 2, 2, 0, 2, 2, 2, 2, 2, 2, 2],
     [0, 0, 0, 2, 0, 0, 0, 4, 0, 0, 2, 4, 0, 0, 4, 4]),
    (Dir.LEFT,
     [0, 0, 0, 2, 0, 0, 2, 2, 0, 2, 2, 2, 2, 2, 2, 2],
     [2, 0, 0, 0, 4, 0, 0, 0, 4, 2, 0, 0, 4, 4, 0, 0]),
    (Dir.RIGHT,
     [4, 8, 8, 4, 8, 8, 4, 4, 4, 4, 8, 8, 8, 4, 4, 8],
     [0, 4, 16, 4, 0, 0, 16, 8, 0, 0, 8, 16, 0, 8, 8, 8]),
    (Dir.DOWN,
     [4, 8, 8, 4, 8, 8, 4, 4, 4, 4, 8, 8, 8, 4, 4, 8],
     [4, 0, 8, 0, 8, 0, 4, 0, 4, 16, 8, 8, 8, 8, 4, 16]),
    (Dir.LEFT,
     [4, 8, 8, 4, 8, 8, 4, 4, 4, 4, 8, 8, 8, 4, 4, 8],
     [4, 16, 4, 0, 16, 8, 0, 0, 8, 16, 0, 0, 8, 8, 8, 0]),
    (Dir.UP,
     [4, 8, 8, 4, 8, 8, 4, 4, 4, 4, 8, 8, 8, 4, 4, 8],
     [4, 16, 8, 8, 8, 8, 4, 16, 4, 0, 8, 0, 8, 0, 4, 0]),
    (Dir.UP,
     [2, 4, 2, 4, 4, 2, 4, 2, 2, 4, 2, 4, 4, 2, 4, 2],
     [2, 4, 2, 4, 4, 2, 4, 2, 2, 4, 2, 4, 4, 2, 4, 2]),
]


@pytest.mark.parametrize("direction, cells, expected", MOVE_CASES)
def test_move_tiles(direction, cells, expected):
    want, _ = tiles_to_cells(cells_to_tiles(expected, SIZE), SIZE)
    tiles = cells_to_tiles(cells, SIZE)
    moved = move_tiles(tiles, SIZE, direction)
    before, got = tiles_to_cells(tiles, SIZE)
    if not moved:
        got = before
    assert got == want


def test_move_tiles_reports_no_move_and_clears_state():
    tiles = cells_to_tiles([2, 4, 2, 4, 4, 2, 4, 2, 2, 4, 2, 4, 4, 2, 4, 2], SIZE)
    assert move_tiles(tiles, SIZE, Dir.LEFT) is False
    assert all(t.next == TileData() and not t.is_moving() for t in tiles)


def test_dir_vectors_and_names():
    assert Dir.UP.vector() == (0, -1)
    assert Dir.RIGHT.vector() == (1, 0)
    assert Dir.DOWN.vector() == (0, 1)
    assert Dir.LEFT.vector() == (-1, 0)
    assert [str(d) for d in Dir] == ["Up", "Right", "Down", "Left"]


def test_new_tile_state():
    t = Tile(8, 1, 2)
    assert t.pos() == (1, 2)
    assert t.value() == 8
    assert t.next_value() == 0
    assert t.start_popping_count == MAX_POPPING_COUNT
    assert not t.is_moving()


def test_merge_animation_finishes_with_popping():
    tiles = cells_to_tiles([2, 2, 0, 0] + [0] * 12, SIZE)
    for t in tiles:
        t.stop_animation()
    assert move_tiles(tiles, SIZE, Dir.LEFT)
    assert all(t.moving_count == MAX_MOVING_COUNT for t in tiles)
    for _ in range(MAX_MOVING_COUNT):
        for t in tiles:
            t.update()
    assert not any(t.is_moving() for t in tiles)
    merged = [t for t in tiles if t.value() == 4]
    vanished = [t for t in tiles if t.value() == 0]
    assert len(merged) == 1 and len(vanished) == 1
    assert merged[0].pos() == (0, 0)
    assert merged[0].popping_count == MAX_POPPING_COUNT
    assert vanished[0].popping_count == 0


def test_update_counts_down_start_popping():
    t = Tile(2, 0, 0)
    t.update()
    assert t.start_popping_count == MAX_POPPING_COUNT - 1


def test_stop_animation_jumps_to_next():
    tiles = cells_to_tiles([0, 0, 0, 2] + [0] * 12, SIZE)
    assert move_tiles(tiles, SIZE, Dir.LEFT)
    (t,) = tiles
    t.stop_animation()
    assert t.pos() == (0, 0)
    assert t.value() == 2
    assert not t.is_moving()
    assert t.start_popping_count == 0


def test_tile_at_and_current_or_next():
    tiles = cells_to_tiles([0, 0, 0, 2] + [0] * 12, SIZE)
    (t,) = tiles
    assert tile_at(tiles, 3, 0) is t
    assert tile_at(tiles, 0, 0) is None
    move_tiles(tiles, SIZE, Dir.LEFT)
    assert current_or_next_tile_at(tiles, 0, 0) is t
    assert current_or_next_tile_at(tiles, 3, 0) is None


def test_tile_at_rejects_duplicates():
    tiles = {Tile(2, 1, 1), Tile(4, 1, 1)}
    with pytest.raises(RuntimeError):
        tile_at(tiles, 1, 1)


def test_add_random_tile_fills_only_empty_cell():
    cells = [2] * 16
    cells[5] = 0
    tiles = cells_to_tiles(cells, SIZE)
    new = add_random_tile(tiles, SIZE, random.Random(1))
    assert new in tiles
    assert new.pos() == (1, 1)
    assert new.value() in (2, 4)
    assert len(tiles) == 16


def test_add_random_tile_full_board():
    tiles = cells_to_tiles([2] * 16, SIZE)
    with pytest.raises(NoSpaceError):
        add_random_tile(tiles, SIZE, random.Random(0))


def test_add_random_tile_values_are_mostly_two():
    rng = random.Random(42)
    values = [add_random_tile(set(), SIZE, rng).value() for _ in range(500)]
    assert set(values) <= {2, 4}
    assert values.count(2) > values.count(4) > 0