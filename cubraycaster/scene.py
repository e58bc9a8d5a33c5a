"""Reading a scene description: its element lines and its map rows."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import IO

from .constants import WHITESPACE, Facing
from .textutil import (
    collapse_whitespace,
    has_content,
    has_suffix,
    iter_lines,
    rtrim_map_line,
    split_words,
    trim,
)

ELEMENT_COUNT = 6

_ELEMENT_FIELDS = {
    "NO": "path_no",
    "SO": "path_so",
    "WE": "path_we",
    "EA": "path_ea",
    "F": "floor_spec",
    "C": "ceiling_spec",
}

_TEXTURE_PREFIXES = ("NO ", "SO ", "WE ", "EA ")
_COLOR_PREFIXES = ("F ", "C ")


class SceneError(ValueError):
    """Raised when a scene file cannot be read or is not valid."""


@dataclass
class Scene:
    """Everything read from a scene file."""

    lines: list[str] = field(default_factory=list)
    grid: list[str] = field(default_factory=list)
    path_no: str | None = None
    path_so: str | None = None
    path_we: str | None = None
    path_ea: str | None = None
    floor_spec: str | None = None
    ceiling_spec: str | None = None
    floor_color: int = 0
    ceiling_color: int = 0
    width: int = 0
    player_counts: dict[str, int] = field(default_factory=dict)
    direction: Facing | None = None

    @property
    def texture_paths(self) -> dict[Facing, str | None]:
        """Texture path of each wall face."""
        return {
            Facing.NORTH: self.path_no,
            Facing.EAST: self.path_ea,
            Facing.SOUTH: self.path_so,
            Facing.WEST: self.path_we,
        }


def check_map_name(path: str | os.PathLike[str]) -> str:
    """Return ``path`` as a string if it names a ``.cub`` file."""
    name = str(os.fspath(path))
    if not has_suffix(name, ".cub", 4):
        raise SceneError("Invalid file type, use .cub")
    return name


def read_scene_lines(stream: IO[str]) -> list[str]:
    """Read the element lines and map rows of a scene.

    The first six non-blank lines are element lines and are trimmed on both
    sides; later lines are map rows, which keep their leading spaces. Blank
    lines are skipped before the map starts; once the map has a row, a blank
    line is an error.
    """
    lines: list[str] = []
    for raw in iter_lines(stream):
        content = has_content(raw)
        if len(lines) < ELEMENT_COUNT:
            if content:
                lines.append(trim(raw, WHITESPACE))
        elif content:
            lines.append(rtrim_map_line(raw, WHITESPACE))
        elif len(lines) > ELEMENT_COUNT:
            raise SceneError("Empty line in map")
    if not lines:
        raise SceneError("Empty map")
    return lines


def identifier_error(lines: list[str], prefix: str) -> bool:
    """Return whether ``prefix`` does not start exactly one element line."""
    found = sum(1 for line in lines[:ELEMENT_COUNT] if line.startswith(prefix))
    return found != 1


def split_element_line(line: str) -> list[str]:
    """Split an element line into its words.

    A line may hold at most one run of blanks between its words.
    """
    collapsed = collapse_whitespace(line)
    if not line or collapsed.count(" ") > 1:
        raise SceneError(f"Malformed element line: {line!r}")
    return split_words(collapsed, " ")


def assign_element(scene: Scene, words: list[str]) -> None:
    """Store the value of one element line on ``scene``."""
    if not words:
        raise SceneError("Empty element line")
    try:
        attribute = _ELEMENT_FIELDS[words[0]]
    except KeyError:
        raise SceneError(f"Unknown element identifier: {words[0]!r}") from None
    setattr(scene, attribute, words[1] if len(words) > 1 else None)


def load_elements(scene: Scene) -> None:
    """Read the six element lines of ``scene`` into its fields."""
    for line in scene.lines[:ELEMENT_COUNT]:
        assign_element(scene, split_element_line(line))


def map_width(lines: list[str]) -> int:
    """Return the length of the longest map row."""
    return max((len(row) for row in lines[ELEMENT_COUNT:]), default=0)


def check_paths(scene: Scene) -> None:
    """Check the element identifiers, then split off the map and elements."""
    if any(identifier_error(scene.lines, prefix) for prefix in _TEXTURE_PREFIXES):
        raise SceneError("Invalid path to the textures")
    if any(identifier_error(scene.lines, prefix) for prefix in _COLOR_PREFIXES):
        raise SceneError("Invalid type color identifier")
    scene.width = map_width(scene.lines)
    scene.grid = scene.lines[ELEMENT_COUNT:]
    load_elements(scene)