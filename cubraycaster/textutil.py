"""Small text helpers used while reading scene files."""

from __future__ import annotations

import re
from typing import IO, Iterator

_CHUNK_SIZE = 4096
_BLANK_RUN = re.compile(r"[\x00-\x20]+")

_ERROR_PREFIX = "\033[0;31mError:\033[0m \033[0;33m"
_ERROR_SUFFIX = "\033[0m\n"


def iter_lines(stream: IO[str]) -> Iterator[str]:
    """Yield the lines of a text stream, each keeping its trailing newline.

    Lines are split on ``"\\n"`` only; the last line is yielded without a
    newline when the stream does not end with one.
    """
    pending = ""
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        *complete, pending = pending.split("\n")
        for line in complete:
            yield line + "\n"
    if pending:
        yield pending


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on the single character ``sep``, dropping empty fields."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [word for word in text.split(sep) if word]


def trim(text: str, charset: str) -> str:
    """Remove characters in ``charset`` from both ends of ``text``."""
    return text.strip(charset)


def rtrim_map_line(text: str, charset: str) -> str:
    """Drop leading newlines and trailing ``charset`` characters of a map row.

    Leading spaces are kept, as they are part of the map layout.
    """
    return text.lstrip("\n").rstrip(charset)


def has_suffix(text: str, suffix: str, n: int) -> bool:
    """Return whether the last ``n`` characters of both strings are equal."""
    if n < 0:
        raise ValueError("n must not be negative")
    if n == 0:
        return True
    if len(text) < n or len(suffix) < n:
        return False
    return text[-n:] == suffix[-n:]


def has_content(text: str | None) -> bool:
    """Return whether ``text`` holds any character above the space."""
    return bool(text) and any(ord(char) > 32 for char in text)


def collapse_whitespace(line: str) -> str:
    """Replace every run of control characters and spaces with one space."""
    return _BLANK_RUN.sub(" ", line)


def format_error(message: str) -> str:
    """Return ``message`` as a coloured error line for a terminal."""
    return f"{_ERROR_PREFIX}{message}{_ERROR_SUFFIX}"