import random

import pygame

from arcadenotes.twenty48.app import SCREEN_HEIGHT, SCREEN_WIDTH, Game, draw_tile
from arcadenotes.twenty48.colors import (
    BACKGROUND_COLOR,
    FRAME_COLOR,
    tile_background_color,
)
from arcadenotes.twenty48.tile import TILE_MARGIN, Dir, Tile


def _settled(*tiles):
    for t in tiles:
        t.stop_animation()
    return set(tiles)


def test_layout_is_fixed():
    game = Game(random.Random(0))
    assert game.layout(1000, 1000) == (SCREEN_WIDTH, SCREEN_HEIGHT)
    assert game.layout(10, 20) == (420, 600)


def test_draw_tile_fills_cell():
    surface = pygame.Surface((400, 400))
    surface.fill((0, 0, 0))
    tile = Tile(2, 0, 0)
    tile.stop_animation()
    draw_tile(surface, tile)
    corner = surface.get_at((TILE_MARGIN + 2, TILE_MARGIN + 2))
    assert tuple(corner)[:3] == tile_background_color(2)[:3]


def test_draw_empty_tile_draws_nothing():
    surface = pygame.Surface((200, 200))
    surface.fill((1, 2, 3))
    draw_tile(surface, Tile(0, 0, 0))
    assert tuple(surface.get_at((TILE_MARGIN + 2, TILE_MARGIN + 2)))[:3] == (1, 2, 3)


def test_new_tile_starts_invisible():
    surface = pygame.Surface((200, 200))
    surface.fill((1, 2, 3))
    draw_tile(surface, Tile(2, 0, 0))
    assert tuple(surface.get_at((TILE_MARGIN + 2, TILE_MARGIN + 2)))[:3] == (1, 2, 3)


def test_game_draw_background_and_frame():
    game = Game(random.Random(4))
    screen = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
    game.draw(screen)
    assert tuple(screen.get_at((0, 0)))[:3] == BACKGROUND_COLOR[:3]
    bw, bh = game.board.size()
    x, y = (SCREEN_WIDTH - bw) // 2, (SCREEN_HEIGHT - bh) // 2
    assert tuple(screen.get_at((x + 1, y + 1)))[:3] == FRAME_COLOR[:3]


def test_game_update_with_key_merges():
    game = Game(random.Random(6))
    game.board.tiles = _settled(Tile(2, 0, 0), Tile(2, 1, 0))
    game.update(Dir.LEFT)
    for _ in range(30):
        game.update()
    assert game.board.tile_at(0, 0).value() == 4
    assert len(game.board.tiles) == 2


def test_game_update_with_mouse_drag():
    game = Game(random.Random(8))
    game.board.tiles = _settled(Tile(2, 0, 0))
    game.update(None, True, (100, 100), {})
    game.update(None, False, (200, 100), {})
    for _ in range(30):
        game.update()
    assert game.board.tile_at(3, 0).value() == 2
    assert len(game.board.tiles) == 2