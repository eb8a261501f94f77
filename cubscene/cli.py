"""Command line entry point: load a scene file and describe it."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .mapgrid import Face
from .scene import Scene, SceneError, load_scene


def _describe(scene: Scene) -> str:
    height = len(scene.grid)
    width = len(scene.grid[0]) if scene.grid else 0
    player = scene.player
    lines = [
        f"Map: {width}x{height}",
        f"Player: {player.x} {player.y} facing {player.facing}",
        f"Floor: #{scene.floor_color:06X}",
        f"Ceiling: #{scene.ceiling_color:06X}",
    ]
    for face in Face:
        image = scene.textures[face]
        lines.append(f"{face.value}: {image.width}x{image.height}")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="cubscene", description="Check a .cub scene file."
    )
    parser.add_argument("scene", help="path of the .cub file")
    args = parser.parse_args(argv)
    try:
        scene = load_scene(args.scene)
    except SceneError as error:
        print(f"Error\n{error}")
        return 1
    print(_describe(scene))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())