"""Switching between the scenes of the blocks game, with a cross-fade."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

import pygame

if TYPE_CHECKING:
    from arcadenotes.blocks.input import Input

TRANSITION_MAX_COUNT = 20


class Scene(Protocol):
    """Something that can be advanced one frame and drawn."""

    def update(self, state: "GameState") -> None: ...

    def draw(self, surface: pygame.Surface) -> None: ...


@dataclass
class GameState:
    """What a scene gets each frame: the manager and the input."""

    scene_manager: "SceneManager"
    input: "Input"


class SceneManager:
    """Holds the current scene and fades into the next one."""

    def __init__(self) -> None:
        self.current: Optional[Scene] = None
        self.next: Optional[Scene] = None
        self.transition_count = 0
        self._offscreens: dict[tuple[int, tuple[int, int]], pygame.Surface] = {}

    def _require_current(self) -> Scene:
        if self.current is None:
            raise RuntimeError("no scene has been set")
        return self.current

    def update(self, input: "Input") -> None:
        """Update the current scene, or advance a running transition."""
        if self.transition_count == 0:
            self._require_current().update(GameState(self, input))
            return
        self.transition_count -= 1
        if self.transition_count > 0:
            return
        self.current = self.next
        self.next = None

    def transition_alpha(self) -> float:
        """Return the opacity of the incoming scene, 1 when there is no transition."""
        return 1 - self.transition_count / TRANSITION_MAX_COUNT

    def _offscreen(self, slot: int, size: tuple[int, int]) -> pygame.Surface:
        key = (slot, size)
        surface = self._offscreens.get(key)
        if surface is None:
            surface = pygame.Surface(size, pygame.SRCALPHA)
            self._offscreens[key] = surface
        surface.fill((0, 0, 0, 0))
        return surface

    def draw(self, surface: pygame.Surface) -> None:
        current = self._require_current()
        if self.transition_count == 0 or self.next is None:
            current.draw(surface)
            return
        size = surface.get_size()
        source = self._offscreen(0, size)
        current.draw(source)
        target = self._offscreen(1, size)
        self.next.draw(target)
        surface.blit(source, (0, 0))
        target.set_alpha(round(self.transition_alpha() * 255))
        surface.blit(target, (0, 0))
        target.set_alpha(None)

    def go_to(self, scene: Scene) -> None:
        """Switch to ``scene``, at once if there is none yet, otherwise by fading."""
        if self.current is None:
            self.current = scene
        else:
            self.next = scene
            self.transition_count = TRANSITION_MAX_COUNT