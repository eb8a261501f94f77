"""Reading of .cub scene files: texture and colour settings followed by a map."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from os import PathLike

from .mapgrid import Face, MapError, Player, check_accessible, validate_map
from .xpm import XpmError, XpmImage, read_xpm

MAX_MAP_ROWS = 4096

_CONFIG_PREFIXES = ("NO ", "SO ", "WE ", "EA ", "F ", "C ")
_TEXTURE_KEYS = {
    "NO ": Face.NORTH,
    "SO ": Face.SOUTH,
    "WE ": Face.WEST,
    "EA ": Face.EAST,
}
_DIGITS = re.compile(r"[0-9]*")
_MAP_START = ("1", "0")


class SceneError(ValueError):
    """Raised when a scene file or one of its settings is invalid."""


@dataclass(frozen=True)
class Scene:
    """A fully validated scene: wall textures, colours, map grid and player."""

    textures: Mapping[Face, XpmImage]
    floor_color: int
    ceiling_color: int
    grid: tuple[str, ...]
    player: Player


def trim_whitespace(line: str) -> str:
    """Strip leading spaces and tabs, and trailing spaces, tabs and newlines."""
    return line.lstrip(" \t").rstrip(" \t\n")


def is_config_line(line: str) -> bool:
    """Tell whether a trimmed line sets a texture or a colour."""
    return line.startswith(_CONFIG_PREFIXES)


def is_valid_cub_file(filename: str | PathLike[str]) -> bool:
    """Tell whether a file name ends in ".cub"."""
    name = os.fspath(filename)
    return len(name) >= 4 and name.endswith(".cub")


def is_valid_xpm_file(filename: str | PathLike[str]) -> bool:
    """Tell whether a name ends in ".xpm" and names a readable file."""
    name = os.fspath(filename)
    if len(name) < 5 or not name.endswith(".xpm"):
        return False
    try:
        with open(name, "rb"):
            return True
    except OSError:
        return False


def parse_color(text: str) -> int:
    """Parse an "R,G,B" colour with channels 0-255 into 0xRRGGBB."""
    line = trim_whitespace(text)
    pos = 0
    channels = []
    for index in range(3):
        if index:
            if line[pos:pos + 1] != ",":
                raise SceneError(f"Invalid format -> {line}")
            pos += 1
        match = _DIGITS.match(line, pos)
        digits = match.group()
        channels.append(int(digits) if digits else 0)
        pos = match.end()
    if pos != len(line) or any(channel > 255 for channel in channels):
        raise SceneError("Invalid colour value")
    red, green, blue = channels
    return (red << 16) | (green << 8) | blue


def _load_texture(path: str) -> XpmImage:
    try:
        return read_xpm(trim_whitespace(path))
    except XpmError as error:
        raise SceneError("Invalid texture path") from error


@dataclass
class _Settings:
    base_dir: str | None
    textures: dict[Face, XpmImage] = field(default_factory=dict)
    floor: int | None = None
    ceiling: int | None = None

    def _resolve(self, path: str) -> str:
        return path if self.base_dir is None else os.path.join(self.base_dir, path)

    def apply(self, line: str) -> None:
        face = _TEXTURE_KEYS.get(line[:3])
        if face is not None:
            path = self._resolve(line[3:])
            if is_valid_xpm_file(path) and face not in self.textures:
                self.textures[face] = _load_texture(path)
                return
        if line.startswith("F ") and self.floor is None:
            self.floor = parse_color(line[2:])
        elif line.startswith("C ") and self.ceiling is None:
            self.ceiling = parse_color(line[2:])
        else:
            raise SceneError("Invalid map configuration")

    def complete(self) -> bool:
        return (
            len(self.textures) == len(_TEXTURE_KEYS)
            and self.floor is not None
            and self.ceiling is not None
        )


def _check_map_row(row: str) -> None:
    if "F" in row or "C" in row:
        raise SceneError("Invalid character in map")
    if any(char not in "01 NSEW" for char in row):
        raise SceneError("Invalid character in map")


def parse_scene_lines(
    lines: Iterable[str], base_dir: str | PathLike[str] | None = None
) -> Scene:
    """Build a scene from the lines of a .cub file.

    Settings come first; the map starts at the first line beginning with
    '1' or '0' once leading blanks are removed. Relative texture paths are
    taken against ``base_dir``, or the working directory when it is None.
    """
    settings = _Settings(None if base_dir is None else os.fspath(base_dir))
    rows: list[str] = []
    map_started = False
    for line in lines:
        if not map_started:
            if line in ("", "\n"):
                continue
            trimmed = trim_whitespace(line)
            if is_config_line(trimmed):
                settings.apply(trimmed)
                continue
            if not trimmed.startswith(_MAP_START):
                raise SceneError("Invalid line in file")
            map_started = True
            if not settings.complete():
                raise SceneError("Duplicate or missing texture")
            row = line.rstrip(" \t\n")
        else:
            row = line[:-1] if line.endswith("\n") else line
        if len(rows) >= MAX_MAP_ROWS:
            raise SceneError("Map too big")
        _check_map_row(row)
        rows.append(row)

    try:
        grid, player = validate_map(rows)
        check_accessible(grid, player)
    except MapError as error:
        raise SceneError(str(error)) from error
    assert settings.floor is not None and settings.ceiling is not None
    return Scene(
        textures=dict(settings.textures),
        floor_color=settings.floor,
        ceiling_color=settings.ceiling,
        grid=tuple(grid),
        player=player,
    )


def load_scene(path: str | PathLike[str]) -> Scene:
    """Read and validate a .cub scene file."""
    if not is_valid_cub_file(path):
        raise SceneError("Invalid file format (not .cub)")
    try:
        handle = open(path, encoding="latin-1")
    except OSError as error:
        raise SceneError("Couldn't open map file") from error
    with handle:
        return parse_scene_lines(handle)