# cubscene

Reads `.cub` scene files for a grid-based raycaster, checks them, and loads
the XPM textures they refer to.

A scene file holds six settings lines, then a map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100001
10N001
111111
```

Rules checked when a scene is loaded:

- `NO`, `SO`, `WE` and `EA` each name an existing file ending in `.xpm`,
  which must decode as an XPM image. `F` (floor) and `C` (ceiling) give a
  colour as `R,G,B` with each channel from 0 to 255. Each setting appears
  exactly once, before the map; blank lines between settings are skipped.
- Texture paths given to `load_scene` are taken relative to the current
  working directory. `parse_scene_lines` accepts a `base_dir` to resolve
  them against instead.
- The map starts at the first line whose first non-blank character is `1`
  or `0`, and may hold at most 4096 rows. It may use `0` (floor), `1`
  (wall), a space, and exactly one of `N`, `S`, `E` or `W` for the player's
  start and facing.
- The map must be closed by walls, and every floor cell must be reachable
  from the player.

## Installing

```
pip install .
```

## Command line

```
cubscene path/to/map.cub
```

The command checks the scene and its textures. When the scene is valid it
prints the map size, the player's start position and facing, the floor and
ceiling colours as `#RRGGBB`, and the size of each texture, and exits with
status 0. Otherwise it prints `Error` followed by the reason and exits with
status 1.

## Library use

```python
from cubscene.scene import load_scene, SceneError

try:
    scene = load_scene("maps/level.cub")
except SceneError as err:
    print("Error", err, sep="\n")
else:
    print(scene.player.x, scene.player.y, scene.player.facing)
    print(hex(scene.floor_color), hex(scene.ceiling_color))
```

A `Scene` holds `textures` (a mapping from `Face` to `XpmImage`),
`floor_color`, `ceiling_color`, `grid` (the map rows, padded to the map
width with blanks turned into walls and the player's cell turned into floor)
and `player`.

`cubscene.scene` also offers `parse_scene_lines`, `parse_color`,
`trim_whitespace`, `is_config_line` and the file name checks
`is_valid_cub_file` and `is_valid_xpm_file`. Problems raise `SceneError`.

`cubscene.mapgrid` holds the map checks: `validate_map`, `check_accessible`,
`unreachable_open_cells`, `touches_border`, `map_dimensions`, `pad_rows`,
`is_valid_map_char`, `player_from_char` and `select_face`. `Player` holds
the start position, direction, camera plane and angle; `Face` names the four
wall faces. Problems raise `MapError`.

`cubscene.xpm` reads XPM images with `read_xpm`, `parse_xpm_text` or
`parse_xpm_lines`, and returns an `XpmImage` whose `pixel(x, y)` gives a
`0xRRGGBB` colour; pixels of colour `None` come back as `0xFF000000`.
Colour specifications may be `#hex` values or X11 colour names.
Unreadable or malformed images raise `XpmError`.

`cubscene.colors` maps X11 colour names to values with `lookup_color` and
packs colours for visuals shallower than 24 bits with `pack_color`.

## What it does not do

cubscene only reads and checks scenes. It opens no window, draws nothing and
has no game loop, movement or key handling; `select_face` and the `Player`
vectors are there for a renderer to use.

## Tests

```
pip install ".[test]"
pytest
```