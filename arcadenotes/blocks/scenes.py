"""The title, game and gamepad-configuration scenes of the blocks game."""

from __future__ import annotations

import functools
import random
from typing import Optional, Sequence

import pygame

from arcadenotes.blocks.field import MAX_FLUSH_COUNT, ColorTransform, Field, flushing_color
from arcadenotes.blocks.font import Align, draw_text_with_shadow
from arcadenotes.blocks.gamepad import VIRTUAL_BUTTONS
from arcadenotes.blocks.input import KEY_ESCAPE, KEY_SPACE, Input
from arcadenotes.blocks.piece import (
    BLOCK_HEIGHT,
    BLOCK_TYPE_MAX,
    BLOCK_WIDTH,
    FIELD_BLOCK_COUNT_X,
    FIELD_BLOCK_COUNT_Y,
    PIECES,
    Angle,
    BlockType,
    Piece,
)
from arcadenotes.blocks.scenemanager import GameState

SCREEN_WIDTH = 256
SCREEN_HEIGHT = 240
TPS = 60

FIELD_WIDTH = BLOCK_WIDTH * FIELD_BLOCK_COUNT_X
FIELD_HEIGHT = BLOCK_HEIGHT * FIELD_BLOCK_COUNT_Y

FONT_COLOR = (0x40, 0x40, 0xFF, 0xFF)
_WHITE = (0xFF, 0xFF, 0xFF, 0xFF)
_WINDOW_COLOR = (0, 0, 0, 0xC0)
_GAMEOVER_SHADE = (0, 0, 0, 0x80)
_GAME_BACKGROUND = (0xC8, 0xC8, 0xC8)
_MAX_CARRY = 60

_SCORE_BASES = {1: 100, 2: 300, 3: 600, 4: 1000}

_BLOCK_COLORS = {
    BlockType.TYPE_1: (0x40, 0xC0, 0xF0),
    BlockType.TYPE_2: (0x40, 0x60, 0xE0),
    BlockType.TYPE_3: (0xA0, 0x50, 0xD0),
    BlockType.TYPE_4: (0xF0, 0xA0, 0x30),
    BlockType.TYPE_5: (0xE0, 0x40, 0x40),
    BlockType.TYPE_6: (0x50, 0xC0, 0x50),
    BlockType.TYPE_7: (0xF0, 0xE0, 0x40),
}


def _field_window_position() -> tuple[int, int]:
    return 20, 20


def _next_window_label_position() -> tuple[int, int]:
    x, y = _field_window_position()
    return x + FIELD_WIDTH + 2 * BLOCK_WIDTH, y


def _next_window_position() -> tuple[int, int]:
    x, y = _next_window_label_position()
    return x, y + BLOCK_HEIGHT


def _text_box_width() -> int:
    x, _ = _next_window_position()
    return SCREEN_WIDTH - 2 * BLOCK_WIDTH - x


def _score_text_box_position() -> tuple[int, int]:
    x, y = _next_window_position()
    return x, y + 6 * BLOCK_HEIGHT


def _level_text_box_position() -> tuple[int, int]:
    x, y = _score_text_box_position()
    return x, y + 4 * BLOCK_HEIGHT


def _lines_text_box_position() -> tuple[int, int]:
    x, y = _level_text_box_position()
    return x, y + 4 * BLOCK_HEIGHT


def _blend_rect(surface: pygame.Surface, rect: pygame.Rect, color: Sequence[int]) -> None:
    if rect.width <= 0 or rect.height <= 0:
        return
    if len(color) < 4 or color[3] >= 255:
        surface.fill(tuple(color[:3]), rect)
        return
    patch = pygame.Surface(rect.size, pygame.SRCALPHA)
    patch.fill(tuple(color))
    surface.blit(patch, rect.topleft)


def _draw_window(surface: pygame.Surface, x: int, y: int, width: int, height: int) -> None:
    _blend_rect(surface, pygame.Rect(x, y, width, height), _WINDOW_COLOR)


def _draw_text_box(surface: pygame.Surface, label: str, x: int, y: int, width: int) -> None:
    draw_text_with_shadow(surface, label, x, y, 1, FONT_COLOR, Align.START, Align.START)
    _draw_window(surface, x, y + BLOCK_HEIGHT, width, 2 * BLOCK_HEIGHT)


def _draw_text_box_content(
    surface: pygame.Surface, content: str, x: int, y: int, width: int
) -> None:
    y += BLOCK_HEIGHT
    draw_text_with_shadow(
        surface,
        content,
        x + width - 2 * BLOCK_HEIGHT // 4,
        y + 2 * BLOCK_HEIGHT // 2,
        1,
        _WHITE,
        Align.END,
        Align.CENTER,
    )


def _tinted(rgb: Sequence[int], transform: Optional[ColorTransform]) -> tuple[int, int, int, int]:
    if transform is None:
        return (*rgb, 255)
    scale, offset = transform
    channels = [c / 255 for c in rgb] + [1.0]
    out = [min(1.0, max(0.0, c * s + o)) for c, s, o in zip(channels, scale, offset)]
    return tuple(round(c * 255) for c in out)  # type: ignore[return-value]


def _draw_block(
    surface: pygame.Surface,
    block: BlockType,
    x: int,
    y: int,
    transform: Optional[ColorTransform] = None,
) -> None:
    if block is BlockType.NONE:
        return
    color = _tinted(_BLOCK_COLORS[block], transform)
    _blend_rect(surface, pygame.Rect(x, y, BLOCK_WIDTH, BLOCK_HEIGHT), color)


def _draw_piece(surface: pygame.Surface, piece: Piece, x: int, y: int, angle: Angle) -> None:
    for i in range(piece.size):
        for j in range(piece.size):
            if piece.is_blocked(i, j, angle):
                _draw_block(surface, piece.block_type, i * BLOCK_WIDTH + x, j * BLOCK_HEIGHT + y)


def _draw_piece_at_center(
    surface: pygame.Surface,
    piece: Piece,
    x: int,
    y: int,
    width: int,
    height: int,
    angle: Angle,
) -> None:
    x += (width - len(piece.blocks[0]) * BLOCK_WIDTH) // 2
    y += (height - len(piece.blocks) * BLOCK_HEIGHT) // 2
    _draw_piece(surface, piece, x, y, angle)


def _draw_field(surface: pygame.Surface, field: Field, x: int, y: int) -> None:
    tint = flushing_color(field.flush_count / MAX_FLUSH_COUNT)
    for j in range(FIELD_BLOCK_COUNT_Y):
        transform = tint if field.flushable_line(j) else None
        for i in range(FIELD_BLOCK_COUNT_X):
            _draw_block(
                surface,
                field.block_at(i, j),
                i * BLOCK_WIDTH + x,
                j * BLOCK_HEIGHT + y,
                transform,
            )


def any_gamepad_virtual_button_just_pressed(input: Input) -> bool:
    """Report whether any virtual button of the selected gamepad went down this frame."""
    config = input.gamepad_config
    if not config.is_gamepad_id_initialized():
        return False
    pad = input.current_pad()
    return any(config.is_button_just_pressed(b, pad) for b in VIRTUAL_BUTTONS)


@functools.lru_cache(maxsize=None)
def _title_tile() -> pygame.Surface:
    tile = pygame.Surface((32, 32))
    tile.fill((0xE8, 0xE0, 0xC8))
    tile.fill((0xD0, 0xC4, 0xA8), pygame.Rect(0, 0, 16, 16))
    tile.fill((0xD0, 0xC4, 0xA8), pygame.Rect(16, 16, 16, 16))
    return tile


class TitleScene:
    """The title screen, waiting for a start key or a gamepad."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.count = 0
        self._rng = rng

    def update(self, state: GameState) -> None:
        self.count += 1
        inp = state.input
        manager = state.scene_manager
        if inp.keyboard.is_just_pressed(KEY_SPACE) or any_gamepad_virtual_button_just_pressed(
            inp
        ):
            manager.go_to(GameScene(self._rng))
            return

        config = inp.gamepad_config
        if config.is_gamepad_id_initialized():
            return

        # An unmapped gamepad with a button held leads to its configuration.
        pad_id = inp.gamepad_id_button_pressed(inp.pads)
        if pad_id is None:
            return
        config.set_gamepad_id(pad_id)
        if config.needs_configuration(inp.pads[pad_id]):
            manager.go_to(GamepadScene(pad_id, self._rng))

    def _draw_background(self, surface: pygame.Surface) -> None:
        tile = _title_tile()
        w, h = tile.get_size()
        columns = SCREEN_WIDTH // w + 1
        dx = -((self.count // 4) % w)
        dy = (self.count // 4) % h
        for i in range(columns * (SCREEN_HEIGHT // h + 2)):
            dst_x = (i % columns) * w + dx
            dst_y = (i // columns - 1) * h + dy
            surface.blit(tile, (dst_x, dst_y))

    def draw(self, surface: pygame.Surface) -> None:
        self._draw_background(surface)
        draw_text_with_shadow(
            surface, "BLOCKS", SCREEN_WIDTH // 2, 32, 4, (0x00, 0x00, 0x80, 0xFF),
            Align.CENTER, Align.START,
        )
        draw_text_with_shadow(
            surface, "PRESS SPACE TO START", SCREEN_WIDTH // 2, SCREEN_HEIGHT - 48, 1,
            (0x80, 0, 0, 0xFF), Align.CENTER, Align.START,
        )


class GameScene:
    """A game in progress: the field, the falling piece, score and lines."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.field = Field()
        self.current_piece: Optional[Piece] = None
        self.current_piece_x = 0
        self.current_piece_y = 0
        self.current_piece_y_carry = 0
        self.current_piece_angle = Angle.ANGLE_0
        self.next_piece: Optional[Piece] = None
        self.landing_count = 0
        self.score = 0
        self.lines = 0
        self.gameover = False

    def _choose_piece(self) -> Piece:
        return PIECES[BlockType(self._rng.randrange(int(BLOCK_TYPE_MAX)) + 1)]

    def _init_current_piece(self, piece: Piece) -> None:
        self.current_piece = piece
        self.current_piece_x, self.current_piece_y = piece.initial_position()
        self.current_piece_y_carry = 0
        self.current_piece_angle = Angle.ANGLE_0

    def level(self) -> int:
        return self.lines // 10

    def add_score(self, lines: int) -> None:
        """Add the reward for clearing 1 to 4 lines at once."""
        try:
            base = _SCORE_BASES[lines]
        except KeyError:
            raise ValueError(f"cannot score {lines} lines at once") from None
        self.score += (self.level() + 1) * base

    def update(self, state: GameState) -> None:
        self.field.update()
        inp = state.input

        if self.gameover:
            if inp.keyboard.is_just_pressed(KEY_SPACE) or any_gamepad_virtual_button_just_pressed(
                inp
            ):
                state.scene_manager.go_to(TitleScene(self._rng))
            return

        if self.current_piece is None:
            self._init_current_piece(self._choose_piece())
        if self.next_piece is None:
            self.next_piece = self._choose_piece()

        field = self.field
        piece = self.current_piece
        angle = self.current_piece_angle

        if not field.is_flush_animating():
            x, y = self.current_piece_x, self.current_piece_y
            if inp.is_rotate_right_just_pressed():
                self.current_piece_angle = field.rotate_piece_right(piece, x, y, angle)
            elif inp.is_rotate_left_just_pressed():
                self.current_piece_angle = field.rotate_piece_left(piece, x, y, angle)
            elif (held := inp.state_for_left()) == 1 or (held >= 10 and held % 2 == 0):
                self.current_piece_x = field.move_piece_to_left(piece, x, y, angle)
            elif (held := inp.state_for_right()) == 1 or (held >= 10 and held % 2 == 0):
                self.current_piece_x = field.move_piece_to_right(piece, x, y, angle)
            elif inp.state_for_down() % 2 == 1:
                self.current_piece_y = field.drop_piece(piece, x, y, angle)
                if self.current_piece_y != y:
                    self.score += 1

        # Gravity.
        if not field.is_flush_animating():
            self.current_piece_y_carry += 2 * self.level() + 1
            while self.current_piece_y_carry >= _MAX_CARRY:
                self.current_piece_y_carry -= _MAX_CARRY
                self.current_piece_y = field.drop_piece(
                    piece, self.current_piece_x, self.current_piece_y, self.current_piece_angle
                )

        if not field.is_flush_animating() and not field.piece_droppable(
            piece, self.current_piece_x, self.current_piece_y, angle
        ):
            self.landing_count += 10 if inp.state_for_down() > 0 else 1
            if self.landing_count >= TPS:
                field.absorb_piece(piece, self.current_piece_x, self.current_piece_y, angle)
                if field.is_flush_animating():
                    field.set_end_flush_animating(self._on_lines_cleared)
                else:
                    self._go_next_piece()

    def _on_lines_cleared(self, lines: int) -> None:
        self.lines += lines
        if lines > 0:
            self.add_score(lines)
        self._go_next_piece()

    def _go_next_piece(self) -> None:
        self._init_current_piece(self.next_piece)
        self.next_piece = self._choose_piece()
        self.landing_count = 0
        if self.current_piece.collides(
            self.field, self.current_piece_x, self.current_piece_y, self.current_piece_angle
        ):
            self.gameover = True

    def _draw_windows(self, surface: pygame.Surface) -> None:
        x, y = _field_window_position()
        _draw_window(surface, x, y, FIELD_WIDTH, FIELD_HEIGHT)
        x, y = _next_window_label_position()
        draw_text_with_shadow(surface, "NEXT", x, y, 1, FONT_COLOR, Align.START, Align.START)
        x, y = _next_window_position()
        _draw_window(surface, x, y, 5 * BLOCK_WIDTH, 5 * BLOCK_HEIGHT)
        width = _text_box_width()
        for label, position in (
            ("SCORE", _score_text_box_position()),
            ("LEVEL", _level_text_box_position()),
            ("LINES", _lines_text_box_position()),
        ):
            _draw_text_box(surface, label, *position, width)

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(_GAME_BACKGROUND)
        self._draw_windows(surface)

        width = _text_box_width()
        _draw_text_box_content(surface, str(self.score), *_score_text_box_position(), width)
        _draw_text_box_content(surface, str(self.level()), *_level_text_box_position(), width)
        _draw_text_box_content(surface, str(self.lines), *_lines_text_box_position(), width)

        field_x, field_y = _field_window_position()
        _draw_field(surface, self.field, field_x, field_y)
        if self.current_piece is not None and not self.field.is_flush_animating():
            _draw_piece(
                surface,
                self.current_piece,
                field_x + self.current_piece_x * BLOCK_WIDTH,
                field_y + self.current_piece_y * BLOCK_HEIGHT,
                self.current_piece_angle,
            )
        if self.next_piece is not None:
            x, y = _next_window_position()
            _draw_piece_at_center(
                surface, self.next_piece, x, y, BLOCK_WIDTH * 5, BLOCK_HEIGHT * 5, Angle.ANGLE_0
            )

        if self.gameover:
            _blend_rect(surface, pygame.Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT), _GAMEOVER_SHADE)
            draw_text_with_shadow(
                surface, "GAME OVER\n\nPRESS SPACE", SCREEN_WIDTH // 2,
                (SCREEN_HEIGHT - BLOCK_HEIGHT) // 2, 1, _WHITE, Align.CENTER, Align.START,
            )


_GAMEPAD_TEMPLATE = """GAMEPAD CONFIGURATION
(PRESS ESC TO CANCEL)


MOVE LEFT:    {}

MOVE RIGHT:   {}

DROP:         {}

ROTATE LEFT:  {}

ROTATE RIGHT: {}



{}"""


class GamepadScene:
    """Asks the player to press, one after another, the inputs for each virtual button."""

    def __init__(self, gamepad_id: int = 0, rng: Optional[random.Random] = None) -> None:
        self.gamepad_id = gamepad_id
        self.current_index = 0
        self.count_after_setting = 0
        self.button_states: Optional[list[str]] = None
        self._rng = rng

    def update(self, state: GameState) -> None:
        inp = state.input
        config = inp.gamepad_config
        if self.current_index == 0:
            config.reset()
        if inp.keyboard.is_just_pressed(KEY_ESCAPE):
            config.reset()
            config.reset_gamepad_id()
            state.scene_manager.go_to(TitleScene(self._rng))
            return

        states = []
        for i, button in enumerate(VIRTUAL_BUTTONS):
            if i < self.current_index:
                states.append(config.button_name(button).upper())
            elif i == self.current_index:
                states.append("_")
            else:
                states.append("")
        self.button_states = states

        if self.count_after_setting > 0:
            self.count_after_setting -= 1
            if self.count_after_setting <= 0:
                state.scene_manager.go_to(TitleScene(self._rng))
            return

        button = VIRTUAL_BUTTONS[self.current_index]
        if config.scan(button, inp.current_pad()):
            self.current_index += 1
            if self.current_index == len(VIRTUAL_BUTTONS):
                self.count_after_setting = TPS

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill((0, 0, 0))
        if self.button_states is None:
            return
        message = "OK!" if self.current_index == len(VIRTUAL_BUTTONS) else ""
        text = _GAMEPAD_TEMPLATE.format(*self.button_states, message)
        draw_text_with_shadow(surface, text, 16, 16, 1, _WHITE, Align.START, Align.START)