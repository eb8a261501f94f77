"""Validation of the map grid of a scene: player start, walls and reachability."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

_PLAYER_CHARS = "NSEW"
_MAP_CHARS = frozenset("01NSEW ")


class MapError(ValueError):
    """Raised when a map grid is not a valid playable map."""


class Face(Enum):
    """Wall face hit by a ray, named by the texture key that draws it."""

    NORTH = "NO"
    SOUTH = "SO"
    WEST = "WE"
    EAST = "EA"


@dataclass(frozen=True)
class Player:
    """Start position and view of the player."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    angle: float
    facing: str


_ORIENTATIONS: dict[str, tuple[float, float, float, float, float]] = {
    "N": (0.0, -1.0, 0.66, 0.0, 3 * math.pi / 2),
    "S": (0.0, 1.0, -0.66, 0.0, math.pi / 2),
    "E": (1.0, 0.0, 0.0, 0.66, 0.0),
    "W": (-1.0, 0.0, 0.0, -0.66, math.pi),
}


def player_from_char(char: str, x: int, y: int) -> Player:
    """Build the player standing in the centre of cell (x, y) facing ``char``."""
    try:
        dir_x, dir_y, plane_x, plane_y, angle = _ORIENTATIONS[char]
    except KeyError:
        raise MapError(f"not a player orientation: {char!r}") from None
    return Player(x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y, angle, char)


def is_valid_map_char(char: str) -> bool:
    """Tell whether ``char`` may appear in a map grid."""
    return char in _MAP_CHARS


def map_dimensions(rows: Sequence[str]) -> tuple[int, int]:
    """Return (width, height): the longest row length and the row count."""
    return max((len(row) for row in rows), default=0), len(rows)


def pad_rows(rows: Iterable[str], width: int, fill: str) -> list[str]:
    """Pad rows to ``width`` with ``fill`` and turn spaces within it into ``fill``."""
    padded = []
    for row in rows:
        if len(row) < width:
            row = row + fill * (width - len(row))
        padded.append(row[:width].replace(" ", fill) + row[width:])
    return padded


def _mutable_grid(rows: Sequence[str], width: int) -> list[list[str]]:
    return [list(row.ljust(width)) for row in rows]


def _fill_reaches_border(
    grid: list[list[str]], x: int, y: int, width: int, height: int
) -> bool:
    touched = False
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if cx < 0 or cy < 0 or cx >= width or cy >= height:
            touched = True
            continue
        if grid[cy][cx] in ("1", "X"):
            continue
        grid[cy][cx] = "X"
        stack.extend(((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)))
    return touched


def touches_border(rows: Sequence[str], width: int, height: int) -> bool:
    """Tell whether open space can leak outside the grid.

    Row by row, the first remaining '0' is flooded through every cell that
    is not a wall; reaching beyond ``width`` x ``height`` means a leak.
    """
    grid = _mutable_grid(rows, width)
    for y in range(min(height, len(grid))):
        row = grid[y]
        if "0" in row:
            if _fill_reaches_border(grid, row.index("0"), y, width, height):
                return True
    return False


def unreachable_open_cells(
    rows: Sequence[str], start_x: int, start_y: int
) -> list[tuple[int, int]]:
    """Return the (x, y) of floor cells not reachable from the start cell."""
    width, height = map_dimensions(rows)
    grid = [list(row) for row in rows]
    stack = [(start_x, start_y)]
    while stack:
        x, y = stack.pop()
        if x < 0 or x >= width or y < 0 or y >= height:
            continue
        if x >= len(grid[y]) or grid[y][x] in ("1", "F"):
            continue
        grid[y][x] = "F"
        stack.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    return [
        (x, y)
        for y, row in enumerate(grid)
        for x, cell in enumerate(row)
        if cell == "0"
    ]


def validate_map(rows: Sequence[str]) -> tuple[list[str], Player]:
    """Check a raw map grid and return the playable grid and the player.

    In the returned grid every row has the map width, the player cell is
    floor and blank cells are walls.
    """
    width, height = map_dimensions(rows)
    grid = pad_rows(rows, width, " ")
    players: list[Player] = []
    cleaned = []
    for y, row in enumerate(grid):
        cells = []
        for x, char in enumerate(row):
            if not is_valid_map_char(char):
                raise MapError("Invalid map char")
            if char in _PLAYER_CHARS:
                players.append(player_from_char(char, x, y))
                char = "0"
            cells.append(char)
        cleaned.append("".join(cells))
    if not players:
        raise MapError("No player position")
    if len(players) > 1:
        raise MapError("Multiple player positions")
    if touches_border(cleaned, width, height):
        raise MapError("Map is not properly surrounded by walls")
    return pad_rows(cleaned, width, "1"), players[-1]


def check_accessible(rows: Sequence[str], player: Player) -> None:
    """Raise MapError if some floor cell cannot be reached by the player."""
    if unreachable_open_cells(rows, int(player.x), int(player.y)):
        raise MapError("Inaccessible areas")


def select_face(side: int, ray_dir_x: float, ray_dir_y: float) -> Face:
    """Pick the wall face hit by a ray on a vertical (0) or horizontal side."""
    if side == 0:
        return Face.EAST if ray_dir_x > 0 else Face.WEST
    return Face.SOUTH if ray_dir_y > 0 else Face.NORTH