"""Falling pieces of the blocks game: their shapes, rotation and collisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, Sequence

BLOCK_WIDTH = 10
BLOCK_HEIGHT = 10
FIELD_BLOCK_COUNT_X = 10
FIELD_BLOCK_COUNT_Y = 20


class Angle(IntEnum):
    """A quarter-turn orientation of a piece."""

    ANGLE_0 = 0
    ANGLE_90 = 1
    ANGLE_180 = 2
    ANGLE_270 = 3

    def rotate_right(self) -> "Angle":
        return Angle((self + 1) % 4)

    def rotate_left(self) -> "Angle":
        return Angle((self - 1) % 4)


class BlockType(IntEnum):
    """The kind of a block; NONE marks an empty cell."""

    NONE = 0
    TYPE_1 = 1
    TYPE_2 = 2
    TYPE_3 = 3
    TYPE_4 = 4
    TYPE_5 = 5
    TYPE_6 = 6
    TYPE_7 = 7


BLOCK_TYPE_MAX = BlockType.TYPE_7


class _FieldLike(Protocol):
    def is_blocked(self, x: int, y: int) -> bool: ...

    def set_block(self, x: int, y: int, block_type: BlockType) -> None: ...


def transpose(bs: Sequence[Sequence[bool]]) -> list[list[bool]]:
    """Return the transpose of a square matrix given as rows."""
    return [list(column) for column in zip(*bs)]


@dataclass(frozen=True)
class Piece:
    """A piece shape; ``blocks[i][j]`` is the cell at column i, row j."""

    block_type: BlockType
    blocks: tuple[tuple[bool, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(tuple(col) for col in self.blocks))

    @property
    def size(self) -> int:
        return len(self.blocks)

    def initial_position(self) -> tuple[int, int]:
        """Return where the piece appears: centred, with its top row at row 0."""
        size = self.size
        x = (FIELD_BLOCK_COUNT_X - size) // 2
        y = 0
        for j in range(size):
            if any(self.blocks[i][j] for i in range(size)):
                break
            y -= 1
        return x, y

    def is_blocked(self, i: int, j: int, angle: Angle) -> bool:
        """Report whether cell (i, j) of the piece, turned by ``angle``, is filled."""
        last = self.size - 1
        if angle is Angle.ANGLE_90:
            i, j = j, last - i
        elif angle is Angle.ANGLE_180:
            i, j = last - i, last - j
        elif angle is Angle.ANGLE_270:
            i, j = last - j, i
        return self.blocks[i][j]

    def _cells(self, angle: Angle):
        size = self.size
        for i in range(size):
            for j in range(size):
                if self.is_blocked(i, j, angle):
                    yield i, j

    def collides(self, field: _FieldLike, x: int, y: int, angle: Angle) -> bool:
        """Report whether the piece at (x, y) overlaps a block or wall of the field."""
        return any(field.is_blocked(x + i, y + j) for i, j in self._cells(angle))

    def absorb_into(self, field: _FieldLike, x: int, y: int, angle: Angle) -> None:
        """Write the piece's blocks into the field."""
        for i, j in self._cells(angle):
            field.set_block(x + i, y + j, self.block_type)


_f, _t = False, True

PIECES: dict[BlockType, Piece] = {
    BlockType.TYPE_1: Piece(
        BlockType.TYPE_1,
        transpose([[_f, _f, _f, _f], [_t, _t, _t, _t], [_f, _f, _f, _f], [_f, _f, _f, _f]]),
    ),
    BlockType.TYPE_2: Piece(
        BlockType.TYPE_2, transpose([[_t, _f, _f], [_t, _t, _t], [_f, _f, _f]])
    ),
    BlockType.TYPE_3: Piece(
        BlockType.TYPE_3, transpose([[_f, _t, _f], [_t, _t, _t], [_f, _f, _f]])
    ),
    BlockType.TYPE_4: Piece(
        BlockType.TYPE_4, transpose([[_f, _f, _t], [_t, _t, _t], [_f, _f, _f]])
    ),
    BlockType.TYPE_5: Piece(
        BlockType.TYPE_5, transpose([[_t, _t, _f], [_f, _t, _t], [_f, _f, _f]])
    ),
    BlockType.TYPE_6: Piece(
        BlockType.TYPE_6, transpose([[_f, _t, _t], [_t, _t, _f], [_f, _f, _f]])
    ),
    BlockType.TYPE_7: Piece(BlockType.TYPE_7, transpose([[_t, _t], [_t, _t]])),
}