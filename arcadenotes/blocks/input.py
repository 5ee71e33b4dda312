"""Keyboard and gamepad input of the blocks game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from arcadenotes.blocks.gamepad import (
    VIRTUAL_BUTTONS,
    GamepadConfig,
    GamepadSnapshot,
    VirtualButton,
)

KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_DOWN = "down"
KEY_SPACE = "space"
KEY_X = "x"
KEY_Z = "z"
KEY_ESCAPE = "escape"

_NO_PAD = GamepadSnapshot()


@dataclass
class Keyboard:
    """How many frames each key has been held; absent keys are released."""

    durations: Mapping[str, int] = field(default_factory=dict)

    def press_duration(self, key: str) -> int:
        return self.durations.get(key, 0)

    def is_just_pressed(self, key: str) -> bool:
        return self.press_duration(key) == 1


class Input:
    """The input state of one frame, with held-frame counts for virtual buttons."""

    def __init__(self) -> None:
        self.gamepad_config = GamepadConfig()
        self.keyboard = Keyboard()
        self.pads: Mapping[int, GamepadSnapshot] = {}
        self._button_states: dict[VirtualButton, int] = {}

    def gamepad_id_button_pressed(self, pads: Mapping[int, GamepadSnapshot]) -> Optional[int]:
        """Return the id of the first gamepad with a button held, or None."""
        return next((pad_id for pad_id, pad in pads.items() if pad.pressed), None)

    def update(
        self,
        keyboard: Optional[Keyboard] = None,
        pads: Optional[Mapping[int, GamepadSnapshot]] = None,
    ) -> None:
        """Take in this frame's keyboard and gamepads."""
        self.keyboard = keyboard if keyboard is not None else Keyboard()
        self.pads = dict(pads or {})
        pad = self.current_pad()
        if pad is None:
            return
        for button in VIRTUAL_BUTTONS:
            if self.gamepad_config.is_button_pressed(button, pad):
                self._button_states[button] = self._button_states.get(button, 0) + 1
            else:
                self._button_states[button] = 0

    def current_pad(self) -> Optional[GamepadSnapshot]:
        """Return the selected gamepad's state, or None if none is selected.

        A selected gamepad that is not connected reads as idle.
        """
        if not self.gamepad_config.is_gamepad_id_initialized():
            return None
        return self.pads.get(self.gamepad_config.gamepad_id, _NO_PAD)

    def _state(self, button: VirtualButton) -> int:
        return self._button_states.get(button, 0)

    def is_rotate_right_just_pressed(self) -> bool:
        if self.keyboard.is_just_pressed(KEY_SPACE) or self.keyboard.is_just_pressed(KEY_X):
            return True
        return self._state(VirtualButton.BUTTON_B) == 1

    def is_rotate_left_just_pressed(self) -> bool:
        if self.keyboard.is_just_pressed(KEY_Z):
            return True
        return self._state(VirtualButton.BUTTON_A) == 1

    def _state_for(self, key: str, button: VirtualButton) -> int:
        held = self.keyboard.press_duration(key)
        return held if held > 0 else self._state(button)

    def state_for_left(self) -> int:
        return self._state_for(KEY_LEFT, VirtualButton.LEFT)

    def state_for_right(self) -> int:
        return self._state_for(KEY_RIGHT, VirtualButton.RIGHT)

    def state_for_down(self) -> int:
        return self._state_for(KEY_DOWN, VirtualButton.DOWN)