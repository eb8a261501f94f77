"""Reader for XPM pixmap images as used for wall textures."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from os import PathLike

from .colors import lookup_color

TRANSPARENT = 0xFF000000

_ATOI = re.compile(r"\s*([+-]?\d+)")
_STRTOL_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9A-Fa-f]))?([0-9A-Fa-f]*)")
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image: rows of 32-bit pixel values, top row first."""

    width: int
    height: int
    rows: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.rows[y][x]


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_unquoted(text: str, pattern: str) -> int:
    in_quote = False
    for index, char in enumerate(text):
        if char == '"':
            in_quote = not in_quote
        if not in_quote and text.startswith(pattern, index):
            return index
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside double quotes with spaces.

    The result has the same length as the input.
    """
    while (start := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 2)
    while (start := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 1)
    return text


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings in text."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def _parse_hex(digits: str) -> int:
    match = _STRTOL_HEX.match(digits)
    if match is None or not match.group(2):
        return 0
    value = int(match.group(2), 16)
    if match.group(1) == "-":
        value = -value
    return _to_int32(value)


def text_to_rgb(name: str, extra: str | None = None) -> int:
    """Resolve an XPM colour specification to a 0xRRGGBB value.

    ``#hex`` values are read directly. Otherwise ``name`` (joined with
    ``extra`` by a space when given) is looked up among the X colour names;
    unknown names give 0 and "none" gives -1.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_LIMIT]
    value = lookup_color(name)
    return 0 if value is None else value


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"incomplete XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid XPM header: {line!r}")
    width, height, ncolors, cpp = values
    return width, height, ncolors, cpp


def _parse_color_line(line: str, cpp: int) -> tuple[str, int]:
    if len(line) < cpp:
        raise XpmError(f"colour line shorter than key: {line!r}")
    words = split_words(line[cpp:])
    try:
        index = words.index("c") + 1
    except ValueError:
        raise XpmError(f"colour line without 'c' entry: {line!r}") from None
    if index >= len(words):
        raise XpmError(f"colour line without colour value: {line!r}")
    extra = words[index + 1] if index + 1 < len(words) else None
    return line[:cpp], text_to_rgb(words[index], extra)


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from its string values in order.

    The first string is the header, then one string per colour, then one
    per pixel row. Further strings are ignored.
    """
    source = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(source)
        except StopIteration:
            raise XpmError(f"XPM data ends before {what}") from None

    width, height, ncolors, cpp = _parse_header(next_line("the header"))
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        key, color = _parse_color_line(next_line("the colour table ends"), cpp)
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    rows = []
    for row_number in range(height):
        line = next_line(f"pixel row {row_number}")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {row_number} is too short")
        row = []
        for start in range(0, width * cpp, cpp):
            color = palette.get(line[start:start + cpp], 0)
            if color == -1:
                color = TRANSPARENT
            row.append(color & 0xFFFFFFFF)
        rows.append(tuple(row))
    return XpmImage(width, height, tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an image from the text of an XPM file."""
    return parse_xpm_lines(quoted_strings(strip_comments(text)))


def read_xpm(path: str | PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as error:
        raise XpmError(f"cannot read {path}: {error}") from error
    return parse_xpm_text(text)