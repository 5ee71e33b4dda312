"""The blocks game: scene management, input polling and the window loop."""

from __future__ import annotations

import argparse
import random
import time
from typing import Mapping, Optional, Sequence

import pygame

from arcadenotes.blocks.gamepad import GamepadSnapshot
from arcadenotes.blocks.input import (
    KEY_DOWN,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_SPACE,
    KEY_X,
    KEY_Z,
    Input,
    Keyboard,
)
from arcadenotes.blocks.scenemanager import SceneManager
from arcadenotes.blocks.scenes import SCREEN_HEIGHT, SCREEN_WIDTH, TPS, TitleScene

_KEY_NAMES = {
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_SPACE: KEY_SPACE,
    pygame.K_x: KEY_X,
    pygame.K_z: KEY_Z,
    pygame.K_ESCAPE: KEY_ESCAPE,
}


class Game:
    """The whole game: a scene manager that starts at the title screen."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.scene_manager: Optional[SceneManager] = None
        self.input = Input()
        self._rng = rng

    def layout(self, outside_width: int, outside_height: int) -> tuple[int, int]:
        return SCREEN_WIDTH, SCREEN_HEIGHT

    def update(
        self,
        keyboard: Optional[Keyboard] = None,
        pads: Optional[Mapping[int, GamepadSnapshot]] = None,
    ) -> None:
        """Advance one frame with this frame's keyboard and gamepads."""
        if self.scene_manager is None:
            self.scene_manager = SceneManager()
            self.scene_manager.go_to(TitleScene(self._rng))
        self.input.update(keyboard, pads)
        self.scene_manager.update(self.input)

    def draw(self, screen: pygame.Surface) -> None:
        if self.scene_manager is None:
            raise RuntimeError("the game has not been updated yet")
        self.scene_manager.draw(screen)


class _KeyTracker:
    """Counts for how many frames each game key has been held."""

    def __init__(self) -> None:
        self._durations: dict[str, int] = {}

    def poll(self) -> Keyboard:
        pressed = pygame.key.get_pressed()
        for code, name in _KEY_NAMES.items():
            if pressed[code]:
                self._durations[name] = self._durations.get(name, 0) + 1
            else:
                self._durations.pop(name, None)
        return Keyboard(dict(self._durations))


class _PadTracker:
    """Builds per-frame snapshots of the connected joysticks."""

    def __init__(self) -> None:
        self._joysticks: dict[int, "pygame.joystick.JoystickType"] = {}
        self._previous: dict[int, frozenset] = {}

    def handle(self, event: pygame.event.Event) -> None:
        if event.type == pygame.JOYDEVICEADDED:
            joystick = pygame.joystick.Joystick(event.device_index)
            self._joysticks[joystick.get_instance_id()] = joystick
        elif event.type == pygame.JOYDEVICEREMOVED:
            self._joysticks.pop(event.instance_id, None)
            self._previous.pop(event.instance_id, None)

    def poll(self) -> dict[int, GamepadSnapshot]:
        snapshots = {}
        for pad_id, joystick in self._joysticks.items():
            pressed = frozenset(
                b for b in range(joystick.get_numbuttons()) if joystick.get_button(b)
            )
            just = pressed - self._previous.get(pad_id, frozenset())
            self._previous[pad_id] = pressed
            axes = tuple(joystick.get_axis(a) for a in range(joystick.get_numaxes()))
            snapshots[pad_id] = GamepadSnapshot(pressed=pressed, just_pressed=just, axes=axes)
        return snapshots


class _FrameProfile:
    """Collects the CPU time spent updating and drawing each frame."""

    def __init__(self) -> None:
        self.update_times: list[float] = []
        self.draw_times: list[float] = []

    def write(self, path: str) -> None:
        frames = len(self.update_times)
        total_update = sum(self.update_times)
        total_draw = sum(self.draw_times)
        with open(path, "w", encoding="utf-8") as out:
            out.write(f"frames: {frames}\n")
            out.write(f"update_cpu_seconds: {total_update:.6f}\n")
            out.write(f"draw_cpu_seconds: {total_draw:.6f}\n")
            if frames:
                out.write(f"update_mean_ms: {total_update / frames * 1000:.3f}\n")
                out.write(f"draw_mean_ms: {total_draw / frames * 1000:.3f}\n")
                out.write(f"update_max_ms: {max(self.update_times) * 1000:.3f}\n")
                out.write(f"draw_max_ms: {max(self.draw_times) * 1000:.3f}\n")


def _run(profile: Optional[_FrameProfile] = None) -> None:
    pygame.init()
    pygame.joystick.init()
    try:
        window = pygame.display.set_mode((SCREEN_WIDTH * 2, SCREEN_HEIGHT * 2))
        pygame.display.set_caption("Blocks")
        canvas = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
        clock = pygame.time.Clock()
        game = Game()
        keys = _KeyTracker()
        pads = _PadTracker()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    pads.handle(event)
            started = time.process_time()
            game.update(keys.poll(), pads.poll())
            updated = time.process_time()
            canvas.fill((0, 0, 0))
            game.draw(canvas)
            drawn = time.process_time()
            if profile is not None:
                profile.update_times.append(updated - started)
                profile.draw_times.append(drawn - updated)
            pygame.transform.scale(canvas, window.get_size(), window)
            pygame.display.flip()
            clock.tick(TPS)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the blocks game in a window."""
    parser = argparse.ArgumentParser(prog="blocks", description="Play blocks.")
    parser.add_argument("--cpuprofile", default="", help="write cpu profile to file")
    args = parser.parse_args(argv)

    if not args.cpuprofile:
        _run()
        return 0
    # Open the file first so a bad path fails before the game starts.
    with open(args.cpuprofile, "w", encoding="utf-8"):
        pass
    profile = _FrameProfile()
    try:
        _run(profile)
    finally:
        profile.write(args.cpuprofile)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())