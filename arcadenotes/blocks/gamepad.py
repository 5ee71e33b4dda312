"""Mapping of a physical gamepad onto the virtual buttons of the blocks game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

AXIS_THRESHOLD = 0.75
_AXIS_DELTA = 0.25
_STICK_THRESHOLD = 0.7


class StandardButton(Enum):
    """Buttons of a gamepad with the standard layout that the game uses."""

    LEFT_LEFT = auto()
    LEFT_RIGHT = auto()
    LEFT_BOTTOM = auto()
    RIGHT_BOTTOM = auto()
    RIGHT_RIGHT = auto()


class VirtualButton(Enum):
    """A button as the game sees it, whatever physical input drives it."""

    LEFT = 0
    RIGHT = 1
    DOWN = 2
    BUTTON_A = 3
    BUTTON_B = 4

    @property
    def standard_button(self) -> StandardButton:
        """The standard-layout button that drives this virtual button."""
        return _STANDARD_BUTTONS[self]


_STANDARD_BUTTONS = {
    VirtualButton.LEFT: StandardButton.LEFT_LEFT,
    VirtualButton.RIGHT: StandardButton.LEFT_RIGHT,
    VirtualButton.DOWN: StandardButton.LEFT_BOTTOM,
    VirtualButton.BUTTON_A: StandardButton.RIGHT_BOTTOM,
    VirtualButton.BUTTON_B: StandardButton.RIGHT_RIGHT,
}

VIRTUAL_BUTTONS = tuple(VirtualButton)


@dataclass(frozen=True)
class Axis:
    """One direction of a physical axis."""

    id: int
    positive: bool


@dataclass(frozen=True)
class GamepadSnapshot:
    """The state of one physical gamepad in the current frame."""

    standard_layout: bool = False
    pressed: frozenset = frozenset()
    just_pressed: frozenset = frozenset()
    axes: tuple = ()
    standard_pressed: frozenset = frozenset()
    standard_just_pressed: frozenset = frozenset()
    left_stick: tuple = (0.0, 0.0)

    def __post_init__(self) -> None:
        for name in ("pressed", "just_pressed", "standard_pressed", "standard_just_pressed"):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        object.__setattr__(self, "axes", tuple(float(v) for v in self.axes))
        object.__setattr__(self, "left_stick", tuple(float(v) for v in self.left_stick))

    def axis(self, index: int) -> float:
        """Return the value of an axis, or 0 if the pad has no such axis."""
        if 0 <= index < len(self.axes):
            return self.axes[index]
        return 0.0


class GamepadConfig:
    """Remembers which gamepad is in use and how its inputs map to virtual buttons."""

    def __init__(self) -> None:
        self.gamepad_id = 0
        self._initialized = False
        self._buttons: dict[VirtualButton, int] = {}
        self._axes: dict[VirtualButton, Axis] = {}
        self._assigned_buttons: set[int] = set()
        self._assigned_axes: set[Axis] = set()
        self._default_axes: Optional[dict[int, float]] = None

    def set_gamepad_id(self, gamepad_id: int) -> None:
        self.gamepad_id = gamepad_id
        self._initialized = True

    def reset_gamepad_id(self) -> None:
        self.gamepad_id = 0
        self._initialized = False

    def is_gamepad_id_initialized(self) -> bool:
        return self._initialized

    def needs_configuration(self, pad: GamepadSnapshot) -> bool:
        """Report whether the pad lacks the standard layout and must be mapped by hand."""
        return not pad.standard_layout

    def _require(self) -> None:
        if not self._initialized:
            raise RuntimeError("no gamepad is selected")

    def _initialize(self, pad: GamepadSnapshot) -> None:
        self._require()
        if pad.standard_layout:
            return
        # Resting axis values, taken while nothing is pressed, so that axes that
        # rest away from zero are not mistaken for presses.
        if self._default_axes is None:
            self._default_axes = dict(enumerate(pad.axes))

    def reset(self) -> None:
        """Forget all button and axis assignments."""
        self._buttons.clear()
        self._axes.clear()
        self._assigned_buttons.clear()
        self._assigned_axes.clear()

    def _assign_axis(self, button: VirtualButton, axis: Axis) -> bool:
        if axis in self._assigned_axes:
            return False
        self._axes[button] = axis
        self._assigned_axes.add(axis)
        return True

    def scan(self, button: VirtualButton, pad: GamepadSnapshot) -> bool:
        """Assign ``button`` to a newly pressed physical input; report whether one was found."""
        self._initialize(pad)
        self._buttons.pop(button, None)
        self._axes.pop(button, None)

        for physical in sorted(pad.just_pressed):
            if physical in self._assigned_buttons:
                continue
            self._buttons[button] = physical
            self._assigned_buttons.add(physical)
            return True

        defaults = self._default_axes or {}
        for index, value in enumerate(pad.axes):
            rest = defaults.get(index, 0.0)
            away = value < rest - _AXIS_DELTA or rest + _AXIS_DELTA < value
            # Values above 1 are reported by some buttons by mistake; ignore them.
            if AXIS_THRESHOLD <= value <= 1.0 and away:
                if self._assign_axis(button, Axis(index, True)):
                    return True
            if -1.0 <= value <= -AXIS_THRESHOLD and away:
                if self._assign_axis(button, Axis(index, False)):
                    return True
        return False

    def is_button_pressed(self, button: VirtualButton, pad: GamepadSnapshot) -> bool:
        """Report whether the virtual button is held down."""
        self._require()
        if pad.standard_layout:
            if button.standard_button in pad.standard_pressed:
                return True
            horizontal, vertical = pad.left_stick
            if button is VirtualButton.LEFT:
                return horizontal < -_STICK_THRESHOLD
            if button is VirtualButton.RIGHT:
                return horizontal > _STICK_THRESHOLD
            if button is VirtualButton.DOWN:
                return vertical > _STICK_THRESHOLD
            return False

        self._initialize(pad)
        if button in self._buttons:
            return self._buttons[button] in pad.pressed
        axis = self._axes.get(button)
        if axis is not None:
            value = pad.axis(axis.id)
            if axis.positive:
                return AXIS_THRESHOLD <= value <= 1.0
            return -1.0 <= value <= -AXIS_THRESHOLD
        return False

    def is_button_just_pressed(self, button: VirtualButton, pad: GamepadSnapshot) -> bool:
        """Report whether the virtual button went down in this frame."""
        self._require()
        if pad.standard_layout:
            return button.standard_button in pad.standard_just_pressed
        self._initialize(pad)
        if button in self._buttons:
            return self._buttons[button] in pad.just_pressed
        return False

    def button_name(self, button: VirtualButton) -> str:
        """Return the name of the physical input assigned to ``button``, or ""."""
        self._require()
        if button in self._buttons:
            return f"Button {self._buttons[button]}"
        axis = self._axes.get(button)
        if axis is not None:
            return f"Axis {axis.id}{'+' if axis.positive else '-'}"
        return ""