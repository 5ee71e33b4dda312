"""The classic fire effect: a palette-indexed field cooling as it rises."""

from __future__ import annotations

import argparse
import random
from typing import Optional, Sequence

SCREEN_WIDTH = 100
SCREEN_HEIGHT = 50

FIRE_PALETTE: tuple[tuple[int, int, int, int], ...] = (
    (7, 7, 7, 255),
    (31, 7, 7, 255),
    (47, 15, 7, 255),
    (71, 15, 7, 255),
    (87, 23, 7, 255),
    (103, 31, 7, 255),
    (119, 31, 7, 255),
    (143, 39, 7, 255),
    (159, 47, 7, 255),
    (175, 63, 7, 255),
    (191, 71, 7, 255),
    (199, 71, 7, 255),
    (223, 79, 7, 255),
    (223, 87, 7, 255),
    (223, 87, 7, 255),
    (215, 95, 7, 255),
    (215, 95, 7, 255),
    (215, 103, 15, 255),
    (207, 111, 15, 255),
    (207, 119, 15, 255),
    (207, 127, 15, 255),
    (207, 135, 23, 255),
    (199, 135, 23, 255),
    (199, 143, 23, 255),
    (199, 151, 31, 255),
    (191, 159, 31, 255),
    (191, 159, 31, 255),
    (191, 167, 39, 255),
    (191, 167, 39, 255),
    (191, 175, 47, 255),
    (183, 175, 47, 255),
    (183, 183, 47, 255),
    (183, 183, 55, 255),
    (207, 207, 111, 255),
    (223, 223, 159, 255),
    (239, 239, 199, 255),
    (255, 255, 255, 255),
)

HOTTEST = len(FIRE_PALETTE) - 1


class Fire:
    """A grid of palette indices; the bottom row is the heat source."""

    def __init__(
        self,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.width = width
        self.height = height
        self._rng = rng if rng is not None else random.Random()
        size = width * height
        self.indices = bytearray(size)
        self.indices[size - width:] = bytes([HOTTEST]) * width

    def update(self) -> None:
        """Spread the heat upwards by one step, column by column."""
        for i in range(self.width):
            for j in range(self.height):
                self.update_pixel(i + self.width * j)

    def update_pixel(self, index: int) -> None:
        """Copy the cell below ``index``, cooled and shifted left at random."""
        below = index + self.width
        if below >= len(self.indices):
            return
        decay = self._rng.randrange(3)
        cooled = max(self.indices[below] - decay, 0)
        if index - decay < 0:
            return
        self.indices[index - decay] = cooled

    def render_pixels(self) -> bytes:
        """Return the fire as RGBA bytes, row by row."""
        return b"".join(bytes(FIRE_PALETTE[v]) for v in self.indices)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Show the fire in a window."""
    parser = argparse.ArgumentParser(prog="doomfire", description="Show the fire effect.")
    parser.parse_args(argv)

    import pygame

    pygame.init()
    try:
        window = pygame.display.set_mode((SCREEN_WIDTH * 6, SCREEN_HEIGHT * 6))
        pygame.display.set_caption("Doom Fire")
        clock = pygame.time.Clock()
        fire = Fire()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
            fire.update()
            frame = pygame.image.frombuffer(
                fire.render_pixels(), (fire.width, fire.height), "RGBA"
            )
            pygame.transform.scale(frame, window.get_size(), window)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())