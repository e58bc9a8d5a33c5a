"""Drawing the textured 3-D view, the minimap and the ray overview."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np
from PIL import Image

from .constants import (
    BLACK,
    BLUE,
    CEILING_COLOR,
    FLOOR_COLOR,
    FOV,
    GREEN,
    GREY,
    HALF_FOV,
    MINI_TILE,
    OPEN_CHARS,
    TILE,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    YELLOW,
)
from .raycast import Player, RayHit, cast_ray
from .scene import SceneError

_TWO_PI = math.pi * 2.0
_MINI_RAY_LENGTH = 10


@dataclass(eq=False)
class Frame:
    """An image of packed 0xRRGGBB pixels, indexed as ``pixels[y, x]``.

    The last row and the last column are never drawn on.
    """

    width: int = int(WINDOW_WIDTH)
    height: int = int(WINDOW_HEIGHT)
    pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame dimensions must be positive")
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def put_pixel(self, x: float, y: float, color: int) -> None:
        """Set one pixel; points outside the drawable area are ignored."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        xi, yi = int(x), int(y)
        if yi + 1 >= self.height or xi + 1 >= self.width or yi < 0 or xi < 0:
            return
        self.pixels[yi, xi] = color & 0xFFFFFFFF

    def to_rgb(self) -> np.ndarray:
        """Return the frame as an array of shape (height, width, 3) of bytes."""
        p = self.pixels
        return np.stack(((p >> 16) & 0xFF, (p >> 8) & 0xFF, p & 0xFF), axis=-1).astype(
            np.uint8
        )

    def _plot(self, xs: np.ndarray, ys: np.ndarray, color: int) -> None:
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        finite = np.isfinite(xs) & np.isfinite(ys)
        xi = np.trunc(xs[finite]).astype(np.int64)
        yi = np.trunc(ys[finite]).astype(np.int64)
        keep = (xi >= 0) & (yi >= 0) & (xi + 1 < self.width) & (yi + 1 < self.height)
        self.pixels[yi[keep], xi[keep]] = color

    def _paint_column(self, x: int, top: int, colors: np.ndarray) -> None:
        if x < 0 or x + 1 >= self.width:
            return
        stop = min(top + len(colors), self.height - 1)
        if stop > top:
            self.pixels[top:stop, x] = colors[: stop - top]

    def _fill_rect(self, left: int, top: int, width: int, height: int, color: int) -> None:
        x0, x1 = max(left, 0), min(left + width, self.width - 1)
        y0, y1 = max(top, 0), min(top + height, self.height - 1)
        if x0 < x1 and y0 < y1:
            self.pixels[y0:y1, x0:x1] = color


@dataclass(eq=False)
class Texture:
    """A wall texture of packed 0xRRGGBB pixels, indexed as ``pixels[y, x]``."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        self.pixels = np.asarray(self.pixels, dtype=np.uint32)
        if self.pixels.ndim != 2 or 0 in self.pixels.shape:
            raise ValueError("texture must be a non-empty 2-D array")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None) -> "Texture":
        """Read an image file into a texture."""
        if path is None:
            raise SceneError("corrupted xpm")
        try:
            with Image.open(path) as image:
                rgb = np.asarray(image.convert("RGB"), dtype=np.uint32)
        except (OSError, ValueError) as exc:
            raise SceneError("corrupted xpm") from exc
        return cls((rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2])

    def color_at(self, offset: int, texture_y: float) -> int:
        """Return the colour for a wall hit ``offset`` and texture row."""
        return int(self._column(offset, np.array([texture_y], dtype=float))[0])

    def _column(self, offset: int, ys: np.ndarray) -> np.ndarray:
        xt = int(math.fmod(offset, TILE))
        xt = math.floor(xt / TILE * self.width)
        xt = min(max(xt, 0), self.width - 1)
        rows = np.nan_to_num(np.floor(np.asarray(ys, dtype=float)), nan=0.0)
        rows = np.clip(rows, 0, self.height - 1).astype(np.intp)
        return self.pixels[rows, xt]


def _ray_angles(angle: float, count: int) -> Iterator[float]:
    """Yield the angles of ``count`` rays spread over the field of view."""
    ray = angle - HALF_FOV
    step = FOV / count
    for _ in range(count):
        if ray > _TWO_PI:
            ray -= _TWO_PI
        if ray < 0.0:
            ray += _TWO_PI
        yield ray
        ray += step


def draw_column(
    frame: Frame,
    hit: RayHit,
    distance: float,
    x: float,
    textures: Sequence[Texture],
) -> None:
    """Draw one screen column: ceiling, textured wall slice, then floor.

    ``textures`` holds the north, east, south and west textures in that order.
    """
    column = int(x)
    height = frame.height
    wall_len = height * TILE / distance if distance > 0 else math.inf
    start = height / 2.0 - wall_len / 2.0
    end = height / 2.0 + wall_len / 2.0
    top = 0 if start <= 0 else min(math.ceil(start), height)
    bottom = height if end >= height else max(math.ceil(end), top)

    frame._paint_column(column, 0, np.full(top, CEILING_COLOR, dtype=np.uint32))
    if hit.facing is not None and bottom > top:
        texture = textures[hit.facing.texture_index]
        step = texture.height / wall_len
        first = step * abs(start) if start < 0 and math.isfinite(start) else 0.0
        ys = first + step * np.arange(bottom - top, dtype=float)
        frame._paint_column(column, top, texture._column(hit.offset, ys))
    frame._paint_column(
        column, bottom, np.full(height - bottom, FLOOR_COLOR, dtype=np.uint32)
    )


def draw_view(
    frame: Frame, grid: Sequence[str], player: Player, textures: Sequence[Texture]
) -> None:
    """Draw the first-person view, one ray per screen column."""
    for x, angle in enumerate(_ray_angles(player.angle, frame.width)):
        hit = cast_ray(grid, player.x, player.y, angle)
        distance = abs(math.cos(player.angle - angle) * hit.distance)
        draw_column(frame, hit, distance, x, textures)


def _draw_tile(frame: Frame, col: int, row: int, size: float, color: int) -> None:
    s = int(size)
    left, top = col * s, row * s
    frame._fill_rect(left, top, s, s, color)
    frame._fill_rect(left, top, s, 1, BLUE)
    frame._fill_rect(left, top, 1, s, BLUE)


def draw_minimap(frame: Frame, grid: Sequence[str], player: Player) -> None:
    """Draw the small map in the top-left corner with the player's view cone."""
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char == "1":
                _draw_tile(frame, x, y, MINI_TILE, GREY)
            elif char in OPEN_CHARS:
                _draw_tile(frame, x, y, MINI_TILE, BLACK)
    angles = np.fromiter(_ray_angles(player.angle, frame.width), dtype=float)
    steps = np.arange(_MINI_RAY_LENGTH, dtype=float)
    cx = player.x / TILE * MINI_TILE
    cy = player.y / TILE * MINI_TILE
    xs = cx + np.outer(np.cos(angles), steps)
    ys = cy + np.outer(np.sin(angles), steps)
    frame._plot(xs.ravel(), ys.ravel(), GREEN)


def draw_rays(frame: Frame, grid: Sequence[str], player: Player) -> None:
    """Draw the map at full tile size with every cast ray on top of it."""
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            _draw_tile(frame, x, y, TILE, GREY if char == "1" else BLACK)
    for angle in _ray_angles(player.angle, frame.width):
        hit = cast_ray(grid, player.x, player.y, angle)
        count = math.ceil(hit.distance) if hit.distance > 0 else 0
        steps = np.arange(count, dtype=float)
        color = GREEN if hit.vertical else YELLOW
        frame._plot(
            player.x + steps * math.cos(angle),
            player.y + steps * math.sin(angle),
            color,
        )