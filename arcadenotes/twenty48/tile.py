"""Tiles of the 2048 board and the rules that slide and merge them."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, MutableSet, Optional

MAX_MOVING_COUNT = 5
MAX_POPPING_COUNT = 6

TILE_SIZE = 80
TILE_MARGIN = 4


class NoSpaceError(Exception):
    """Raised when a new tile is requested but every cell is occupied."""


class Dir(IntEnum):
    """A direction in which the tiles can be pushed."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def __str__(self) -> str:
        return self.name.title()

    def vector(self) -> tuple[int, int]:
        """Return the unit step (dx, dy) for this direction."""
        return _VECTORS[self]


_VECTORS = {
    Dir.UP: (0, -1),
    Dir.RIGHT: (1, 0),
    Dir.DOWN: (0, 1),
    Dir.LEFT: (-1, 0),
}


@dataclass(frozen=True)
class TileData:
    """A tile's value and grid position."""

    value: int = 0
    x: int = 0
    y: int = 0


_EMPTY = TileData()


class Tile:
    """A tile with its current state, its pending move and animation counters."""

    def __init__(self, value: int, x: int, y: int) -> None:
        self.current = TileData(value, x, y)
        # The state after moving; empty while the tile is not about to move.
        self.next = _EMPTY
        self.moving_count = 0
        self.start_popping_count = MAX_POPPING_COUNT
        self.popping_count = 0

    def __repr__(self) -> str:
        return f"Tile(current={self.current!r}, next={self.next!r})"

    def pos(self) -> tuple[int, int]:
        return self.current.x, self.current.y

    def next_pos(self) -> tuple[int, int]:
        return self.next.x, self.next.y

    def value(self) -> int:
        return self.current.value

    def next_value(self) -> int:
        return self.next.value

    def is_moving(self) -> bool:
        return self.moving_count > 0

    def stop_animation(self) -> None:
        """Finish any running move at once and clear the animation counters."""
        if self.moving_count > 0:
            self.current = self.next
            self.next = _EMPTY
        self.moving_count = 0
        self.start_popping_count = 0
        self.popping_count = 0

    def update(self) -> None:
        """Advance the tile's animation by one frame."""
        if self.moving_count > 0:
            self.moving_count -= 1
            if self.moving_count == 0:
                if self.current.value != self.next.value and self.next.value > 0:
                    self.popping_count = MAX_POPPING_COUNT
                self.current = self.next
                self.next = _EMPTY
        elif self.start_popping_count > 0:
            self.start_popping_count -= 1
        elif self.popping_count > 0:
            self.popping_count -= 1


def _single(matches: Iterable[Tile]) -> Optional[Tile]:
    result = None
    for tile in matches:
        if result is not None:
            raise RuntimeError("two tiles occupy the same cell")
        result = tile
    return result


def tile_at(tiles: Iterable[Tile], x: int, y: int) -> Optional[Tile]:
    """Return the tile whose current position is (x, y), or None."""
    return _single(t for t in tiles if t.current.x == x and t.current.y == y)


def current_or_next_tile_at(tiles: Iterable[Tile], x: int, y: int) -> Optional[Tile]:
    """Return the tile that is at, or is moving with a value to, (x, y)."""

    def occupies(t: Tile) -> bool:
        if t.moving_count > 0:
            return t.next.x == x and t.next.y == y and t.next.value != 0
        return t.current.x == x and t.current.y == y

    return _single(t for t in tiles if occupies(t))


def move_tiles(tiles: Iterable[Tile], size: int, direction: Dir) -> bool:
    """Schedule the moves for pushing all tiles in the given direction.

    Returns True if any tile is to move. No tile may be moving beforehand.
    """
    tiles = list(tiles)
    vx, vy = direction.vector()
    xs = list(range(size))
    ys = list(range(size))
    if vx > 0:
        xs.reverse()
    if vy > 0:
        ys.reverse()

    moved = False
    for j in ys:
        for i in xs:
            tile = tile_at(tiles, i, j)
            if tile is None:
                continue
            if tile.next != _EMPTY or tile.is_moving():
                raise RuntimeError("tile is already moving")
            # Advance (ii, jj) until a mergeable tile is met or the way is blocked.
            ii, jj = i, j
            while True:
                ni, nj = ii + vx, jj + vy
                if not (0 <= ni < size and 0 <= nj < size):
                    break
                other = current_or_next_tile_at(tiles, ni, nj)
                if other is None:
                    ii, jj = ni, nj
                    moved = True
                    continue
                if tile.current.value != other.current.value:
                    break
                if other.moving_count > 0 and other.current.value != other.next.value:
                    # The other tile is already being merged.
                    break
                ii, jj = ni, nj
                moved = True
                break

            next_value = tile.current.value
            other = current_or_next_tile_at(tiles, ii, jj)
            if other is not None and other is not tile:
                next_value = tile.current.value + other.current.value
                other.next = TileData(0, ii, jj)
                other.moving_count = MAX_MOVING_COUNT
            upcoming = TileData(next_value, ii, jj)
            if tile.current != upcoming:
                tile.next = upcoming
                tile.moving_count = MAX_MOVING_COUNT

    if not moved:
        for tile in tiles:
            tile.next = _EMPTY
            tile.moving_count = 0
    return moved


def add_random_tile(tiles: MutableSet[Tile], size: int, rng=None) -> Tile:
    """Put a new 2 (or, one time in ten, a 4) on a random empty cell."""
    if rng is None:
        rng = random
    occupied = set()
    for tile in tiles:
        if tile.is_moving():
            raise RuntimeError("cannot add a tile while tiles are moving")
        occupied.add(tile.current.x + tile.current.y * size)
    available = [c for c in range(size * size) if c not in occupied]
    if not available:
        raise NoSpaceError("there is no space to add a new tile")
    cell = available[rng.randrange(len(available))]
    value = 4 if rng.randrange(10) == 0 else 2
    new_tile = Tile(value, cell % size, cell // size)
    tiles.add(new_tile)
    return new_tile