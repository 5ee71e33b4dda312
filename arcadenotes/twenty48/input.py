"""Turns mouse drags, touch swipes and arrow keys into 2048 moves."""

from __future__ import annotations

from enum import Enum, auto
from typing import Mapping, Optional

from arcadenotes.twenty48.tile import Dir

_MIN_SWIPE = 4


class _MouseState(Enum):
    NONE = auto()
    PRESSING = auto()
    SETTLED = auto()


class _TouchState(Enum):
    NONE = auto()
    PRESSING = auto()
    SETTLED = auto()
    INVALID = auto()


def vec_to_dir(dx: int, dy: int) -> Optional[Dir]:
    """Return the direction of a swipe, or None if it is too short."""
    if abs(dx) < _MIN_SWIPE and abs(dy) < _MIN_SWIPE:
        return None
    if abs(dx) < abs(dy):
        return Dir.UP if dy < 0 else Dir.DOWN
    return Dir.LEFT if dx < 0 else Dir.RIGHT


class Input:
    """Tracks pointer gestures from frame to frame."""

    def __init__(self) -> None:
        self._mouse_state = _MouseState.NONE
        self._mouse_init = (0, 0)
        self._mouse_dir = Dir.UP

        self._touch_state = _TouchState.NONE
        self._touch_id: Optional[int] = None
        self._touch_init = (0, 0)
        self._touch_last = (0, 0)
        self._touch_dir = Dir.UP

    def update(
        self,
        mouse_pressed: bool,
        cursor: tuple[int, int],
        touches: Mapping[int, tuple[int, int]],
    ) -> None:
        """Advance the gesture state.

        ``touches`` maps each active touch id to its position, in the order
        the touches began.
        """
        self._update_mouse(mouse_pressed, cursor)
        self._update_touches(touches)

    def _update_mouse(self, pressed: bool, cursor: tuple[int, int]) -> None:
        if self._mouse_state is _MouseState.NONE:
            if pressed:
                self._mouse_init = tuple(cursor)
                self._mouse_state = _MouseState.PRESSING
        elif self._mouse_state is _MouseState.PRESSING:
            if not pressed:
                x0, y0 = self._mouse_init
                d = vec_to_dir(cursor[0] - x0, cursor[1] - y0)
                if d is None:
                    self._mouse_state = _MouseState.NONE
                else:
                    self._mouse_dir = d
                    self._mouse_state = _MouseState.SETTLED
        else:
            self._mouse_state = _MouseState.NONE

    def _update_touches(self, touches: Mapping[int, tuple[int, int]]) -> None:
        ids = list(touches)
        state = self._touch_state
        if state is _TouchState.NONE:
            if len(ids) == 1:
                self._touch_id = ids[0]
                pos = tuple(touches[ids[0]])
                self._touch_init = pos
                self._touch_last = pos
                self._touch_state = _TouchState.PRESSING
        elif state is _TouchState.PRESSING:
            if len(ids) >= 2:
                return
            if len(ids) == 1:
                if ids[0] != self._touch_id:
                    self._touch_state = _TouchState.INVALID
                else:
                    self._touch_last = tuple(touches[ids[0]])
                return
            x0, y0 = self._touch_init
            x1, y1 = self._touch_last
            d = vec_to_dir(x1 - x0, y1 - y0)
            if d is None:
                self._touch_state = _TouchState.NONE
            else:
                self._touch_dir = d
                self._touch_state = _TouchState.SETTLED
        elif state is _TouchState.SETTLED:
            self._touch_state = _TouchState.NONE
        elif not ids:
            self._touch_state = _TouchState.NONE

    def direction(self, key_direction: Optional[Dir] = None) -> Optional[Dir]:
        """Return the requested move for this frame, or None.

        ``key_direction`` is the arrow key pressed in this frame, if any;
        it takes precedence over pointer gestures.
        """
        if key_direction is not None:
            return key_direction
        if self._mouse_state is _MouseState.SETTLED:
            return self._mouse_dir
        if self._touch_state is _TouchState.SETTLED:
            return self._touch_dir
        return None