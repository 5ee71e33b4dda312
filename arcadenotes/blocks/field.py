"""The playing field of the blocks game and its line-clearing animation."""

from __future__ import annotations

from typing import Callable, Optional

from arcadenotes.blocks.piece import (
    FIELD_BLOCK_COUNT_X,
    FIELD_BLOCK_COUNT_Y,
    Angle,
    BlockType,
    Piece,
)

MAX_FLUSH_COUNT = 20

ColorTransform = tuple[tuple[float, float, float, float], tuple[float, float, float, float]]


def flushing_color(rate: float) -> ColorTransform:
    """Return the tint for a line being cleared, as (rgba scale, rgba offset).

    ``rate`` runs from 1 at the start of the animation to 0 at its end; the
    line fades out while turning red.
    """
    alpha = min(1.0, rate * 2)
    red = min(1.0, (1 - rate) * 2)
    return (1.0, 1.0, 1.0, alpha), (red, 0.0, 0.0, 0.0)


class Field:
    """A grid of blocks, FIELD_BLOCK_COUNT_X wide and FIELD_BLOCK_COUNT_Y high."""

    def __init__(self) -> None:
        self._blocks = [
            [BlockType.NONE] * FIELD_BLOCK_COUNT_Y for _ in range(FIELD_BLOCK_COUNT_X)
        ]
        self._flush_count = 0
        self._on_end_flush: Optional[Callable[[int], None]] = None

    @property
    def flush_count(self) -> int:
        """Frames left in the current clearing animation."""
        return self._flush_count

    @staticmethod
    def _check(x: int, y: int) -> None:
        if not (0 <= x < FIELD_BLOCK_COUNT_X and 0 <= y < FIELD_BLOCK_COUNT_Y):
            raise IndexError(f"cell ({x}, {y}) is outside the field")

    def is_blocked(self, x: int, y: int) -> bool:
        """Report whether (x, y) is a wall, the floor or a filled cell.

        Cells above the field are free.
        """
        if x < 0 or x >= FIELD_BLOCK_COUNT_X:
            return True
        if y < 0:
            return False
        if y >= FIELD_BLOCK_COUNT_Y:
            return True
        return self._blocks[x][y] is not BlockType.NONE

    def block_at(self, x: int, y: int) -> BlockType:
        self._check(x, y)
        return self._blocks[x][y]

    def set_block(self, x: int, y: int, block_type: BlockType) -> None:
        self._check(x, y)
        self._blocks[x][y] = BlockType(block_type)

    def move_piece_to_left(self, piece: Piece, x: int, y: int, angle: Angle) -> int:
        """Return the piece's x after trying to move it one cell left."""
        return x if piece.collides(self, x - 1, y, angle) else x - 1

    def move_piece_to_right(self, piece: Piece, x: int, y: int, angle: Angle) -> int:
        """Return the piece's x after trying to move it one cell right."""
        return x if piece.collides(self, x + 1, y, angle) else x + 1

    def piece_droppable(self, piece: Piece, x: int, y: int, angle: Angle) -> bool:
        return not piece.collides(self, x, y + 1, angle)

    def drop_piece(self, piece: Piece, x: int, y: int, angle: Angle) -> int:
        """Return the piece's y after trying to move it one cell down."""
        return y if piece.collides(self, x, y + 1, angle) else y + 1

    def rotate_piece_right(self, piece: Piece, x: int, y: int, angle: Angle) -> Angle:
        turned = angle.rotate_right()
        return angle if piece.collides(self, x, y, turned) else turned

    def rotate_piece_left(self, piece: Piece, x: int, y: int, angle: Angle) -> Angle:
        turned = angle.rotate_left()
        return angle if piece.collides(self, x, y, turned) else turned

    def absorb_piece(self, piece: Piece, x: int, y: int, angle: Angle) -> None:
        """Fix the piece into the field, starting the clearing animation if needed."""
        piece.absorb_into(self, x, y, angle)
        if self._flushable():
            self._flush_count = MAX_FLUSH_COUNT

    def is_flush_animating(self) -> bool:
        return self._flush_count > 0

    def set_end_flush_animating(self, callback: Callable[[int], None]) -> None:
        """Set the callback run when clearing ends, given the number of lines cleared."""
        self._on_end_flush = callback

    def _flushable(self) -> bool:
        return any(self.flushable_line(j) for j in range(FIELD_BLOCK_COUNT_Y))

    def flushable_line(self, j: int) -> bool:
        """Report whether row j is completely filled."""
        return all(column[j] is not BlockType.NONE for column in self._blocks)

    def _flush_line(self, j: int) -> bool:
        if not self.flushable_line(j):
            return False
        for column in self._blocks:
            del column[j]
            column.insert(0, BlockType.NONE)
        return True

    def _end_flush_animating(self) -> int:
        flushed = 0
        for j in reversed(range(FIELD_BLOCK_COUNT_Y)):
            if self._flush_line(j + flushed):
                flushed += 1
        return flushed

    def update(self) -> None:
        """Advance the clearing animation; clear the lines when it ends."""
        if self._flush_count == 0:
            return
        self._flush_count -= 1
        if self._flush_count > 0:
            return
        if self._on_end_flush is not None:
            self._on_end_flush(self._end_flush_animating())