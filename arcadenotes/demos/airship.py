"""Steering of the air ship over a wrapping ground, and the horizon fog."""

from __future__ import annotations

import math
from dataclasses import dataclass

MAX_ANGLE = 256
MAX_LEAN = 16

SKY_COLOR = (0x66, 0xCC, 0xFF, 0xFF)


def _round(x: float) -> float:
    return math.floor(x + 0.5)


@dataclass
class Player:
    """The ship's position over a ground of ground_width x ground_height pixels.

    ``x16`` and ``y16`` are fixed point with 4 fractional bits; ``angle`` is in
    [0, MAX_ANGLE) and ``lean`` in [-MAX_LEAN, MAX_LEAN].
    """

    ground_width: int
    ground_height: int
    x16: int = 16 * 100
    y16: int = 16 * 200
    angle: int = MAX_ANGLE * 3 // 4
    lean: int = 0

    def move_forward(self) -> None:
        """Move ahead along the current angle, wrapping around the ground."""
        theta = self.angle * 2 * math.pi / MAX_ANGLE
        self.x16 += int(_round(16 * math.cos(theta)) * 2)
        self.y16 += int(_round(16 * math.sin(theta)) * 2)
        self.x16 %= self.ground_width * 16
        self.y16 %= self.ground_height * 16

    def rotate_right(self) -> None:
        self.angle = (self.angle + 1) % MAX_ANGLE
        self.lean = min(self.lean + 1, MAX_LEAN)

    def rotate_left(self) -> None:
        self.angle = (self.angle - 1) % MAX_ANGLE
        self.lean = max(self.lean - 1, -MAX_LEAN)

    def stabilize(self) -> None:
        """Bring the lean one step back towards level."""
        if self.lean > 0:
            self.lean -= 1
        elif self.lean < 0:
            self.lean += 1


def fog_colors(height: int) -> list[tuple[int, int, int, int]]:
    """Return the premultiplied sky colour of each fog row, fading from opaque to clear."""
    if height < 2:
        raise ValueError("the fog needs at least two rows")
    r, g, b, opaque = SKY_COLOR
    rows = []
    for j in range(height):
        a = int((height - 1 - j) * 0xFF / (height - 1))
        rows.append((r * a // opaque, g * a // opaque, b * a // opaque, a))
    return rows