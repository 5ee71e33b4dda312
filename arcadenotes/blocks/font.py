"""Drawing of the arcade-style text with a drop shadow."""

from __future__ import annotations

import functools
from enum import Enum
from typing import Sequence

import pygame

ARCADE_FONT_BASE_SIZE = 8
SHADOW_COLOR = (0, 0, 0, 0x80)


class Align(Enum):
    """Where a point lies relative to the text anchored at it."""

    START = 0
    CENTER = 1
    END = 2


def _shift(position: float, extent: float, align: Align) -> float:
    if align is Align.CENTER:
        return position - extent / 2
    if align is Align.END:
        return position - extent
    return position


def aligned_origin(
    width: float,
    height: float,
    x: float,
    y: float,
    primary_align: Align,
    secondary_align: Align,
) -> tuple[float, float]:
    """Return the top-left corner of a width x height box anchored at (x, y).

    The primary alignment is horizontal and the secondary vertical.
    """
    return _shift(x, width, primary_align), _shift(y, height, secondary_align)


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _draw_lines(
    surface: pygame.Surface,
    lines: list[str],
    x: float,
    y: float,
    size: int,
    color: Sequence[int],
    primary_align: Align,
    secondary_align: Align,
) -> pygame.Rect:
    font = _font(size)
    rgb = tuple(color[:3])
    alpha = color[3] if len(color) > 3 else 255
    line_spacing = size
    _, top = aligned_origin(0, line_spacing * len(lines), x, y, primary_align, secondary_align)
    bounds = None
    for index, line in enumerate(lines):
        rendered = font.render(line, True, rgb)
        if alpha < 255:
            rendered.set_alpha(alpha)
        left, _ = aligned_origin(rendered.get_width(), 0, x, y, primary_align, secondary_align)
        position = (round(left), round(top + index * line_spacing))
        rect = surface.blit(rendered, position)
        rect = pygame.Rect(position, rendered.get_size())
        bounds = rect if bounds is None else bounds.union(rect)
    return bounds if bounds is not None else pygame.Rect(round(x), round(y), 0, 0)


def draw_text_with_shadow(
    surface: pygame.Surface,
    text: str,
    x: int,
    y: int,
    scale: int,
    color: Sequence[int],
    primary_align: Align = Align.START,
    secondary_align: Align = Align.START,
) -> pygame.Rect:
    """Draw ``text`` at (x, y) over a shadow one pixel down and right.

    Returns the area covered by the text itself.
    """
    size = ARCADE_FONT_BASE_SIZE * scale
    lines = text.split("\n")
    _draw_lines(surface, lines, x + 1, y + 1, size, SHADOW_COLOR, primary_align, secondary_align)
    return _draw_lines(surface, lines, x, y, size, color, primary_align, secondary_align)