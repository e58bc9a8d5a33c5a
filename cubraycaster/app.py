"""The game window: key handling, frame rendering and the command entry point."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .constants import (
    KEY_DOWN,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_UP,
    KEY_W,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Facing,
)
from .raycast import Player
from .render import Frame, Texture, draw_minimap, draw_view
from .scene import Scene, SceneError
from .textutil import format_error
from .validate import load_scene

_TITLE = "cub3D"


@dataclass(eq=False)
class Game:
    """A running scene: the map, the player, the wall textures and the frame."""

    grid: list[str]
    player: Player
    textures: Sequence[Texture]
    width: int = int(WINDOW_WIDTH)
    height: int = int(WINDOW_HEIGHT)
    running: bool = True
    frame: Frame | None = None

    def __post_init__(self) -> None:
        if len(self.textures) != len(Facing):
            raise ValueError("one texture per wall face is required")

    @classmethod
    def from_scene(
        cls,
        scene: Scene,
        textures: Sequence[Texture],
        width: int = int(WINDOW_WIDTH),
        height: int = int(WINDOW_HEIGHT),
    ) -> "Game":
        """Start a game on a validated scene."""
        if scene.direction is None:
            raise SceneError("No player position in map")
        player = Player.from_grid(scene.grid, scene.direction)
        return cls(list(scene.grid), player, list(textures), width, height)

    def handle_key(self, key: int) -> Frame | None:
        """React to a key code, then redraw; ESC stops the game instead."""
        if key == KEY_ESC:
            print("You closed the game using ESC key !")
            self.running = False
            return self.frame
        if key in (KEY_UP, KEY_W):
            self.player.move_forward(self.grid)
        elif key in (KEY_DOWN, KEY_S):
            self.player.move_backward(self.grid)
        elif key in (KEY_RIGHT, KEY_LEFT):
            self.player.rotate(key)
        return self.render()

    def render(self) -> Frame:
        """Draw a fresh frame of the view and the minimap."""
        frame = Frame(self.width, self.height)
        draw_view(frame, self.grid, self.player, self.textures)
        draw_minimap(frame, self.grid, self.player)
        self.frame = frame
        return frame

    def run(self) -> None:
        """Open a window and play until ESC or the window is closed."""
        import pygame

        keys = {
            pygame.K_ESCAPE: KEY_ESC,
            pygame.K_UP: KEY_UP,
            pygame.K_DOWN: KEY_DOWN,
            pygame.K_LEFT: KEY_LEFT,
            pygame.K_RIGHT: KEY_RIGHT,
            pygame.K_w: KEY_W,
            pygame.K_s: KEY_S,
        }
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption(_TITLE)
            pygame.key.set_repeat(200, 30)
            clock = pygame.time.Clock()
            _show(pygame, screen, self.render())
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        print("Exit the program with the X !!")
                        self.running = False
                        break
                    if event.type == pygame.KEYDOWN:
                        frame = self.handle_key(keys.get(event.key, event.key))
                        if not self.running:
                            break
                        if frame is not None:
                            _show(pygame, screen, frame)
                clock.tick(60)
        finally:
            pygame.quit()


def _show(pygame, screen, frame: Frame) -> None:
    surface = pygame.surfarray.make_surface(np.ascontiguousarray(frame.to_rgb().swapaxes(0, 1)))
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def _load_textures(scene: Scene) -> list[Texture]:
    paths = scene.texture_paths
    return [Texture.load(paths[facing]) for facing in Facing]


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene file named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        sys.stderr.write(format_error("Invalid number of arguments!"))
        return 1
    try:
        scene = load_scene(args[0])
        textures = _load_textures(scene)
    except SceneError as exc:
        sys.stderr.write(format_error(str(exc)))
        return 1
    Game.from_scene(scene, textures).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())