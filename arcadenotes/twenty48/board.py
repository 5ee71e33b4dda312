"""The 2048 board: its tiles and the queued steps of a move."""

from __future__ import annotations

import random
from collections import deque
from typing import Callable, Optional

from arcadenotes.twenty48.tile import (
    TILE_MARGIN,
    TILE_SIZE,
    Dir,
    Tile,
    add_random_tile,
    move_tiles,
    tile_at,
)


class Board:
    """A square board of tiles."""

    def __init__(self, grid_size: int, rng: Optional[random.Random] = None) -> None:
        self.grid_size = grid_size
        self.tiles: set[Tile] = set()
        self._rng = rng if rng is not None else random.Random()
        # Each task returns True once it has finished.
        self._tasks: deque[Callable[[], bool]] = deque()
        for _ in range(2):
            add_random_tile(self.tiles, self.grid_size, self._rng)

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        return tile_at(self.tiles, x, y)

    def update(self, direction: Optional[Dir] = None) -> None:
        """Advance animations and pending tasks, or start a move."""
        for tile in self.tiles:
            tile.update()
        if self._tasks:
            if self._tasks[0]():
                self._tasks.popleft()
            return
        if direction is not None:
            self.move(direction)

    def move(self, direction: Dir) -> None:
        """Queue the steps of pushing the tiles in ``direction``."""
        for tile in self.tiles:
            tile.stop_animation()
        if not move_tiles(self.tiles, self.grid_size, direction):
            return
        self._tasks.append(self._wait_for_moves)
        self._tasks.append(self._settle)

    def _wait_for_moves(self) -> bool:
        return not any(tile.is_moving() for tile in self.tiles)

    def _settle(self) -> bool:
        survivors = set()
        for tile in self.tiles:
            if tile.is_moving() or tile.next_value() != 0:
                raise RuntimeError("tile still moving after the move finished")
            if tile.value() != 0:
                survivors.add(tile)
        self.tiles = survivors
        add_random_tile(self.tiles, self.grid_size, self._rng)
        return True

    def size(self) -> tuple[int, int]:
        """Return the board's size in pixels."""
        side = self.grid_size * TILE_SIZE + (self.grid_size + 1) * TILE_MARGIN
        return side, side