"""Casting rays through the map grid and moving the player around it."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import count
from typing import Sequence

from .constants import (
    KEY_LEFT,
    KEY_RIGHT,
    OPEN_CHARS,
    PLAYER_CHARS,
    ROTATION_STEP,
    STEP,
    TILE,
    Facing,
)

_TWO_PI = math.pi * 2.0
_FRONT_REACH = 38.0
_BACK_REACH = 32.0
_SIDE_REACH = 17.0
_SIDE_ANGLE = math.pi * 30.0 / 180.0


@dataclass(frozen=True)
class RayHit:
    """Where a ray meets a wall.

    ``offset`` is the truncated coordinate of the hit along the wall face:
    the y coordinate for a vertical grid line, the x coordinate otherwise.
    A ray cast exactly along an axis hits nothing and has distance 0.
    """

    distance: float
    facing: Facing | None
    offset: int
    vertical: bool


def _cell(grid: Sequence[str], row: float, col: float) -> str:
    """Return the map character at a truncated position, or '' outside."""
    r, c = math.trunc(row), math.trunc(col)
    if r < 0 or c < 0 or r >= len(grid) or c >= len(grid[r]):
        return ""
    return grid[r][c]


def is_wall_intersection(x: float, y: float, grid: Sequence[str]) -> bool:
    """Return whether the point lies on a wall or outside the map."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return True
    xi, yi = math.trunc(x), math.trunc(y)
    if yi < 0 or yi >= len(grid) * TILE or xi < 0:
        return True
    row = grid[math.trunc(yi / TILE)]
    if xi >= len(row) * TILE:
        return True
    return row[math.trunc(xi / TILE)] not in OPEN_CHARS


def _quadrant(angle: float) -> tuple[int, int] | None:
    """Return the x and y stepping signs of a ray, or None along an axis."""
    if 3.0 * math.pi / 2.0 < angle < _TWO_PI:
        return 1, -1
    if 0.0 < angle < math.pi / 2.0:
        return 1, 1
    if math.pi / 2.0 < angle < math.pi:
        return -1, 1
    if math.pi < angle < 3.0 * math.pi / 2.0:
        return -1, -1
    return None


def cast_ray(grid: Sequence[str], px: float, py: float, angle: float) -> RayHit:
    """Cast a ray from ``(px, py)`` and return the nearest wall it meets."""
    signs = _quadrant(angle)
    if signs is None:
        return RayHit(0.0, None, 0, False)
    sx, sy = signs
    slope = abs(math.tan(angle))
    base_x = math.floor(px / TILE) * TILE
    base_y = math.floor(py / TILE) * TILE

    x_v = y_v = 0.0
    for k in count(1 if sx > 0 else 0):
        x_v = base_x + sx * TILE * k
        y_v = py + sy * abs(slope * (x_v - px))
        if is_wall_intersection(x_v + sx, y_v, grid):
            break
    vertical_len = math.hypot(x_v - px, y_v - py)

    x_h = y_h = 0.0
    for k in count(1 if sy > 0 else 0):
        y_h = base_y + sy * TILE * k
        x_h = px + sx * abs(y_h - py) / slope
        if is_wall_intersection(x_h, y_h + sy, grid):
            break
    horizontal_len = math.hypot(x_h - px, y_h - py)

    if vertical_len < horizontal_len:
        facing = Facing.EAST if sx > 0 else Facing.WEST
        return RayHit(vertical_len, facing, math.trunc(y_v), True)
    facing = Facing.SOUTH if sy > 0 else Facing.NORTH
    return RayHit(horizontal_len, facing, math.trunc(x_h), False)


def initial_angle(direction: Facing) -> float:
    """Return the view angle, in radians, for a starting direction."""
    direction = Facing(direction)
    if direction is Facing.NORTH:
        return math.pi / 2.0 * 3.0
    if direction is Facing.EAST:
        return 0.0
    if direction is Facing.SOUTH:
        return math.pi / 2.0
    return math.pi


def find_spawn(grid: Sequence[str]) -> tuple[float, float]:
    """Return the centre of the first player cell, scanning row by row."""
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char in PLAYER_CHARS:
                return x * TILE + TILE / 2, y * TILE + TILE / 2
    raise ValueError("no player position in map")


def _blocked(grid: Sequence[str], px: float, py: float, i: float, j: float) -> bool:
    """Return whether the probe point ``(j, i)`` is a wall or a wall corner."""
    cell = _cell(grid, i / TILE, j / TILE)
    if cell == "1":
        return True
    if cell != "0":
        return False

    def wall(row: float, col: float) -> bool:
        return _cell(grid, row, col) == "1"

    if (
        py > i
        and px < j
        and wall(i / TILE, j - 1)
        and wall((i + 1) / TILE, j / TILE)
    ):
        return True
    if (
        py > i
        and px > j
        and wall((i + 1) / TILE, j / TILE)
        and wall(i / TILE, (j + 1) / TILE)
    ):
        return True
    if (
        py < i
        and px < j
        and wall((i - 1) / TILE, j / TILE)
        and wall(i / TILE, (j - 1) / TILE)
    ):
        return True
    return (
        py < i
        and px > j
        and wall((i - 1) / TILE, j / TILE)
        and wall(i / TILE, (j + 1) / TILE)
    )


@dataclass
class Player:
    """Position, in map pixels, and view angle of the player."""

    x: float
    y: float
    angle: float

    @classmethod
    def from_grid(cls, grid: Sequence[str], direction: Facing) -> "Player":
        """Place a player on the spawn cell of ``grid`` facing ``direction``."""
        x, y = find_spawn(grid)
        return cls(x, y, initial_angle(direction))

    def is_wall_front(self, grid: Sequence[str]) -> bool:
        """Return whether a wall blocks a step forward."""
        i = self.y + _FRONT_REACH * math.sin(self.angle)
        j = self.x + _FRONT_REACH * math.cos(self.angle)
        return _blocked(grid, self.x, self.y, i, j)

    def is_wall_back(self, grid: Sequence[str]) -> bool:
        """Return whether a wall blocks a step backward."""
        i = self.y - _BACK_REACH * math.sin(self.angle)
        j = self.x - _BACK_REACH * math.cos(self.angle)
        return _blocked(grid, self.x, self.y, i, j)

    def _side_wall(self, grid: Sequence[str], angle: float) -> bool:
        row = (self.y + _SIDE_REACH * math.sin(angle)) / TILE
        col = (self.x + _SIDE_REACH * math.cos(angle)) / TILE
        return _cell(grid, row, col) == "1"

    def is_wall_right(self, grid: Sequence[str]) -> bool:
        """Return whether a wall lies just ahead to the right."""
        return self._side_wall(grid, self.angle + _SIDE_ANGLE)

    def is_wall_left(self, grid: Sequence[str]) -> bool:
        """Return whether a wall lies just ahead to the left."""
        return self._side_wall(grid, self.angle - _SIDE_ANGLE)

    def rotate(self, direction: int) -> None:
        """Turn three degrees for the right or left arrow key code."""
        if direction == KEY_RIGHT:
            self.angle += ROTATION_STEP
            if self.angle > _TWO_PI:
                self.angle -= _TWO_PI
        elif direction == KEY_LEFT:
            self.angle -= ROTATION_STEP
            if self.angle <= 0.0:
                self.angle += _TWO_PI
        else:
            raise ValueError(f"not a rotation key: {direction}")

    def move_forward(self, grid: Sequence[str]) -> bool:
        """Step forward unless a wall is in the way; return whether it moved."""
        if self.is_wall_front(grid):
            return False
        self.x += STEP * math.cos(self.angle)
        self.y += STEP * math.sin(self.angle)
        return True

    def move_backward(self, grid: Sequence[str]) -> bool:
        """Step backward unless a wall is in the way; return whether it moved."""
        if self.is_wall_back(grid):
            return False
        self.x -= STEP * math.cos(self.angle)
        self.y -= STEP * math.sin(self.angle)
        return True