"""The 2048 game: wires input and board together and draws them with pygame."""

from __future__ import annotations

import argparse
import functools
import random
from typing import Mapping, Optional, Sequence

import pygame

from arcadenotes.twenty48.board import Board
from arcadenotes.twenty48.colors import (
    BACKGROUND_COLOR,
    FRAME_COLOR,
    tile_background_color,
    tile_color,
)
from arcadenotes.twenty48.input import Input
from arcadenotes.twenty48.tile import (
    MAX_MOVING_COUNT,
    MAX_POPPING_COUNT,
    TILE_MARGIN,
    TILE_SIZE,
    Dir,
    Tile,
)

SCREEN_WIDTH = 420
SCREEN_HEIGHT = 600
BOARD_SIZE = 4

_KEY_ORDER = (
    (pygame.K_UP, Dir.UP),
    (pygame.K_LEFT, Dir.LEFT),
    (pygame.K_RIGHT, Dir.RIGHT),
    (pygame.K_DOWN, Dir.DOWN),
)


def _mean(a: int, b: int, rate: float) -> int:
    return int(a * (1 - rate) + b * rate)


def _mean_f(a: float, b: float, rate: float) -> float:
    return a * (1 - rate) + b * rate


def _cell_origin(i: int) -> int:
    return i * TILE_SIZE + (i + 1) * TILE_MARGIN


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _blend_rect(surface: pygame.Surface, rect: pygame.Rect, color) -> None:
    if rect.width <= 0 or rect.height <= 0:
        return
    patch = pygame.Surface(rect.size, pygame.SRCALPHA)
    patch.fill(color)
    surface.blit(patch, rect.topleft)


def draw_tile(surface: pygame.Surface, tile: Tile) -> None:
    """Draw a tile, with its move or pop animation, onto the board surface."""
    v = tile.value()
    if v == 0:
        return
    i, j = tile.pos()
    ni, nj = tile.next_pos()
    x, y = _cell_origin(i), _cell_origin(j)
    scale = 1.0
    if tile.moving_count > 0:
        rate = 1 - tile.moving_count / MAX_MOVING_COUNT
        x = _mean(x, _cell_origin(ni), rate)
        y = _mean(y, _cell_origin(nj), rate)
    elif tile.start_popping_count > 0:
        rate = 1 - tile.start_popping_count / MAX_POPPING_COUNT
        scale = _mean_f(0.0, 1.0, rate)
    elif tile.popping_count > 0:
        max_scale = 1.2
        third = MAX_POPPING_COUNT // 3
        if MAX_POPPING_COUNT * 2 // 3 <= tile.popping_count:
            rate = 1 - (tile.popping_count - 2 * third) / third
        else:
            rate = tile.popping_count / (MAX_POPPING_COUNT * 2 // 3)
        scale = _mean_f(1.0, max_scale, rate)

    side = round(TILE_SIZE * scale)
    rect = pygame.Rect(0, 0, side, side)
    rect.center = (x + TILE_SIZE // 2, y + TILE_SIZE // 2)
    _blend_rect(surface, rect, tile_background_color(v))

    label = str(v)
    size = 48
    if len(label) > 3:
        size = 24
    elif len(label) > 2:
        size = 32
    rendered = _font(size).render(label, True, tile_color(v)[:3])
    text_rect = rendered.get_rect(center=(x + TILE_SIZE / 2, y + TILE_SIZE / 2))
    surface.blit(rendered, text_rect)


def _draw_board(surface: pygame.Surface, board: Board) -> None:
    surface.fill(FRAME_COLOR[:3])
    empty = tile_background_color(0)
    for j in range(board.grid_size):
        for i in range(board.grid_size):
            rect = pygame.Rect(_cell_origin(i), _cell_origin(j), TILE_SIZE, TILE_SIZE)
            _blend_rect(surface, rect, empty)
    tiles = list(board.tiles)
    for tile in (t for t in tiles if not t.is_moving()):
        draw_tile(surface, tile)
    for tile in (t for t in tiles if t.is_moving()):
        draw_tile(surface, tile)


class Game:
    """The whole game state: input tracking and the board."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.input = Input()
        self.board = Board(BOARD_SIZE, rng)
        self._board_image: Optional[pygame.Surface] = None

    def layout(self, outside_width: int, outside_height: int) -> tuple[int, int]:
        return SCREEN_WIDTH, SCREEN_HEIGHT

    def update(
        self,
        key_direction: Optional[Dir] = None,
        mouse_pressed: bool = False,
        cursor: tuple[int, int] = (0, 0),
        touches: Optional[Mapping[int, tuple[int, int]]] = None,
    ) -> None:
        """Advance one frame with this frame's input."""
        self.input.update(mouse_pressed, cursor, touches or {})
        self.board.update(self.input.direction(key_direction))

    def draw(self, screen: pygame.Surface) -> None:
        if self._board_image is None:
            self._board_image = pygame.Surface(self.board.size())
        screen.fill(BACKGROUND_COLOR[:3])
        _draw_board(self._board_image, self.board)
        sw, sh = screen.get_size()
        bw, bh = self._board_image.get_size()
        screen.blit(self._board_image, ((sw - bw) // 2, (sh - bh) // 2))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game in a window."""
    parser = argparse.ArgumentParser(prog="twenty48", description="Play 2048.")
    parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("2048")
        clock = pygame.time.Clock()
        game = Game()
        touches: dict[int, tuple[int, int]] = {}
        running = True
        while running:
            pressed_keys = set()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    pressed_keys.add(event.key)
                elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
                    touches[event.finger_id] = (
                        int(event.x * SCREEN_WIDTH),
                        int(event.y * SCREEN_HEIGHT),
                    )
                elif event.type == pygame.FINGERUP:
                    touches.pop(event.finger_id, None)
            key_direction = next(
                (d for key, d in _KEY_ORDER if key in pressed_keys), None
            )
            game.update(
                key_direction,
                pygame.mouse.get_pressed()[0],
                pygame.mouse.get_pos(),
                dict(touches),
            )
            game.draw(screen)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())