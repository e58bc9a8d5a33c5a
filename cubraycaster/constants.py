"""Fixed values shared by the parser, the ray caster and the renderer."""

from __future__ import annotations

import enum
import math

# Key codes as delivered by the X11 window system.
KEY_ESC = 65307
KEY_A = 97
KEY_W = 119
KEY_S = 115
KEY_D = 100
KEY_DOWN = 65364
KEY_UP = 65362
KEY_LEFT = 65361
KEY_RIGHT = 65363

MOVE = 3
STEP = 6.0
ROTATION_STEP = math.pi / 180.0 * 3.0

WHITE = 16777215
YELLOW = 16776960
GREEN = 255 << 8
BLUE = 255
GREY = 12632256
BLACK = 0

CEILING_COLOR = WHITE
FLOOR_COLOR = (216 << 16) + (191 << 8) + 216

WINDOW_WIDTH = 1280.0
WINDOW_HEIGHT = 720.0

HALF_FOV = (math.pi * 30.0) / 180.0
FOV = (math.pi * 60.0) / 180.0

NORTH_COLOR = 126378464
EAST_COLOR = 65535
SOUTH_COLOR = 16770029
WEST_COLOR = 16739040

TILE = 64.0
MINI_TILE = 10.0

WHITESPACE = "\n \t\r\v\f"

MAP_CHARS = frozenset(" 01NSEW")
PLAYER_CHARS = frozenset("NSEW")
OPEN_CHARS = frozenset("0NSEW")


def rgb(red: int, green: int, blue: int) -> int:
    """Pack three 0-255 components into a 0xRRGGBB integer."""
    for name, value in (("red", red), ("green", green), ("blue", blue)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} component out of range: {value}")
    return (red << 16) + (green << 8) + blue


class Facing(enum.IntEnum):
    """Compass direction of a player or of a wall face."""

    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4

    @classmethod
    def from_char(cls, char: str) -> "Facing":
        """Return the direction named by a map character N, E, S or W."""
        try:
            return _FACING_CHARS[char]
        except KeyError:
            raise ValueError(f"not a player character: {char!r}") from None

    @property
    def texture_index(self) -> int:
        """Position of this face's texture in the texture list."""
        return self.value - 1

    @property
    def identifier(self) -> str:
        """Scene-file identifier of this face's texture path."""
        return _IDENTIFIERS[self]


_FACING_CHARS = {
    "N": Facing.NORTH,
    "E": Facing.EAST,
    "S": Facing.SOUTH,
    "W": Facing.WEST,
}

_IDENTIFIERS = {
    Facing.NORTH: "NO",
    Facing.EAST: "EA",
    Facing.SOUTH: "SO",
    Facing.WEST: "WE",
}