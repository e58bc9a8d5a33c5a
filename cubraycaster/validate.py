"""Checks on colours and the map, and loading a whole scene file."""

from __future__ import annotations

import os
import re
from itertools import zip_longest

from .constants import MAP_CHARS, OPEN_CHARS, WHITESPACE, Facing
from .scene import Scene, SceneError, check_map_name, check_paths, read_scene_lines
from .textutil import split_words

_BAD_COLOR = "Invalid color code"
_OPEN_BORDER = "The map must be closed by walls"
_DIGITS = re.compile(r"[0-9]*")
_MIN_LINES = 8
# The last player character found in this order decides the direction.
_DIRECTION_PRIORITY = "WSEN"


def parse_component(text: str) -> int:
    """Parse one colour component, which must lie between 0 and 255."""
    rest = text.lstrip(WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = _DIGITS.match(rest).group()
    value = int(digits) if digits else 0
    if value > 255:
        raise SceneError(_BAD_COLOR)
    value *= sign
    if value < 0:
        raise SceneError(_BAD_COLOR)
    return value


def check_color_chars(text: str | None) -> str:
    """Check the characters of a colour value and return it.

    Only digits, commas and ``+`` are allowed, with exactly two commas.
    """
    text = text or ""
    pluses = commas = 0
    for char, following in zip_longest(text, text[1:], fillvalue=""):
        is_digit = char in "0123456789"
        if not is_digit and char not in ",+":
            raise SceneError(_BAD_COLOR)
        if is_digit and following == "+":
            raise SceneError(_BAD_COLOR)
        if char == "+" and following:
            raise SceneError(_BAD_COLOR)
        pluses += char == "+"
        commas += char == ","
    if commas != 2 or pluses > 3:
        raise SceneError(_BAD_COLOR)
    return text


def parse_color(text: str) -> int:
    """Parse ``R,G,B`` into a packed 0xRRGGBB integer."""
    color = 0
    for index, part in enumerate(split_words(text, ",")):
        value = parse_component(part)
        if index < 3:
            color += value << (16 - 8 * index)
    return color


def check_colors(scene: Scene) -> None:
    """Check both colour values and store their packed form on ``scene``."""
    check_color_chars(scene.ceiling_spec)
    check_color_chars(scene.floor_spec)
    scene.floor_color = parse_color(scene.floor_spec)
    scene.ceiling_color = parse_color(scene.ceiling_spec)


def check_map_chars(grid: list[str]) -> None:
    """Reject any map character other than space, 0, 1, N, S, E and W."""
    for row in grid:
        if not set(row) <= MAP_CHARS:
            raise SceneError("Invalid character in map !!")


def count_players(scene: Scene) -> dict[str, int]:
    """Count the player characters of the map; exactly one is required."""
    counts = {char: sum(row.count(char) for row in scene.grid) for char in "NSEW"}
    scene.player_counts = counts
    if sum(counts.values()) != 1:
        raise SceneError("The map needs one player, not more, not less!!")
    return counts


def check_borders(grid: list[str]) -> None:
    """Reject a map whose open cells touch its edge or a space."""
    last = len(grid) - 1
    for i, row in enumerate(grid):
        for j, char in enumerate(row):
            if char not in OPEN_CHARS:
                continue
            if i == 0 or i == last or j == 0 or j == len(row) - 1:
                raise SceneError(_OPEN_BORDER)
            above, below = grid[i - 1], grid[i + 1]
            if (
                len(below) <= j
                or below[j] == " "
                or len(above) <= j
                or above[j] == " "
                or row[j + 1] == " "
                or row[j - 1] == " "
            ):
                raise SceneError(_OPEN_BORDER)


def player_direction(scene: Scene) -> Facing:
    """Return and store the direction the player starts facing."""
    for char in _DIRECTION_PRIORITY:
        if scene.player_counts.get(char):
            scene.direction = Facing.from_char(char)
            return scene.direction
    raise SceneError("No player position in map")


def validate_scene(scene: Scene) -> Scene:
    """Run every check on a scene read from a file and return it."""
    if len(scene.lines) <= _MIN_LINES:
        raise SceneError("Incomplete map")
    check_paths(scene)
    check_colors(scene)
    check_map_chars(scene.grid)
    count_players(scene)
    check_borders(scene.grid)
    player_direction(scene)
    return scene


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and validate the ``.cub`` scene file at ``path``."""
    name = check_map_name(path)
    try:
        with open(name, encoding="utf-8", errors="replace") as stream:
            lines = read_scene_lines(stream)
    except OSError:
        raise SceneError("File not found or permission denied!") from None
    return validate_scene(Scene(lines=lines))