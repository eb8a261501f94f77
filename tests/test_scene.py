import pytest

from cubscene.mapgrid import Face
from cubscene.scene import (
    MAX_MAP_ROWS,
    Scene,
    SceneError,
    is_config_line,
    is_valid_cub_file,
    is_valid_xpm_file,
    load_scene,
    parse_color,
    parse_scene_lines,
    trim_whitespace,
)

XPM_TEXT = """/* XPM */
static char *tex[] = {
"2 2 2 1",
"a c #FF0000",
"b c #00FF00",
"ab",
"ba"
};
"""

MAP_ROWS = ["111111", "100001", "10N001", "111111"]


def _textures(tmp_path):
    paths = {}
    for key in ("NO", "SO", "WE", "EA"):
        path = tmp_path / f"{key.lower()}.xpm"
        path.write_text(XPM_TEXT)
        paths[key] = path
    return paths


def _config(paths, floor="220,100,0", ceiling="0,0,255"):
    lines = [f"{key} {path}\n" for key, path in paths.items()]
    lines += [f"F {floor}\n", f"C {ceiling}\n", "\n"]
    return lines


def _lines(tmp_path, rows=MAP_ROWS, **colors):
    return _config(_textures(tmp_path), **colors) + [row + "\n" for row in rows]


def test_trim_whitespace_strips_both_ends():
    assert trim_whitespace("  \tNO ./a.xpm \t\n") == "NO ./a.xpm"


def test_trim_whitespace_keeps_leading_newline():
    assert trim_whitespace("\n x ") == "\n x"


@pytest.mark.parametrize(
    "line, expected",
    [
        ("NO a.xpm", True),
        ("SO a.xpm", True),
        ("WE a.xpm", True),
        ("EA a.xpm", True),
        ("F 1,2,3", True),
        ("C 1,2,3", True),
        ("NOa.xpm", False),
        ("111", False),
        ("X 1", False),
    ],
)
def test_is_config_line(line, expected):
    assert is_config_line(line) is expected


@pytest.mark.parametrize(
    "name, expected",
    [("map.cub", True), (".cub", True), ("map.cu", False), ("cub", False), ("map.cub.bak", False)],
)
def test_is_valid_cub_file(name, expected):
    assert is_valid_cub_file(name) is expected


def test_is_valid_xpm_file(tmp_path):
    good = tmp_path / "wall.xpm"
    good.write_text(XPM_TEXT)
    assert is_valid_xpm_file(good) is True
    assert is_valid_xpm_file(tmp_path / "missing.xpm") is False


def test_is_valid_xpm_file_needs_extension(tmp_path):
    other = tmp_path / "wall.png"
    other.write_text(XPM_TEXT)
    assert is_valid_xpm_file(other) is False
    assert is_valid_xpm_file(".xpm") is False


def test_parse_color_extremes():
    assert parse_color("255,255,255") == 0xFFFFFF
    assert parse_color("0,0,0") == 0


@pytest.mark.parametrize("red, green, blue", [(220, 100, 0), (1, 2, 3), (0, 255, 17)])
def test_parse_color_channels_round_trip(red, green, blue):
    value = parse_color(f" {red},{green},{blue} \n")
    assert (value >> 16) & 0xFF == red
    assert (value >> 8) & 0xFF == green
    assert value & 0xFF == blue


@pytest.mark.parametrize("text", ["1,2", "1;2;3", "-1,0,0", "1, 2,3"])
def test_parse_color_bad_format(text):
    with pytest.raises(SceneError, match="Invalid format"):
        parse_color(text)


@pytest.mark.parametrize("text", ["256,0,0", "0,0,300", "1,2,3x"])
def test_parse_color_bad_value(text):
    with pytest.raises(SceneError, match="Invalid colour value"):
        parse_color(text)


def test_parse_scene_lines_builds_scene(tmp_path):
    scene = parse_scene_lines(_lines(tmp_path, floor="255,255,255", ceiling="0,0,0"))
    assert isinstance(scene, Scene)
    assert set(scene.textures) == set(Face)
    assert all(image.width == 2 and image.height == 2 for image in scene.textures.values())
    assert scene.floor_color == 0xFFFFFF
    assert scene.ceiling_color == 0
    assert scene.grid == ("111111", "100001", "100001", "111111")
    assert (scene.player.x, scene.player.y, scene.player.facing) == (2.5, 2.5, "N")


def test_parse_scene_lines_resolves_against_base_dir(tmp_path):
    _textures(tmp_path)
    lines = [f"{key} {key.lower()}.xpm" for key in ("NO", "SO", "WE", "EA")]
    lines += ["F 1,2,3", "C 4,5,6", ""] + MAP_ROWS
    scene = parse_scene_lines(lines, tmp_path)
    assert set(scene.textures) == set(Face)
    assert scene.textures[Face.EAST].pixel(1, 0) == scene.textures[Face.WEST].pixel(0, 1)


def test_duplicate_texture_rejected(tmp_path):
    paths = _textures(tmp_path)
    lines = [f"NO {paths['NO']}\n"] + _lines(tmp_path)
    with pytest.raises(SceneError, match="Invalid map configuration"):
        parse_scene_lines(lines)


def test_duplicate_colour_rejected(tmp_path):
    lines = ["F 1,1,1\n"] + _lines(tmp_path)
    with pytest.raises(SceneError, match="Invalid map configuration"):
        parse_scene_lines(lines)


def test_missing_texture_rejected(tmp_path):
    lines = [line for line in _lines(tmp_path) if not line.startswith("EA ")]
    with pytest.raises(SceneError, match="Duplicate or missing texture"):
        parse_scene_lines(lines)


def test_missing_texture_file_rejected(tmp_path):
    lines = [f"NO {tmp_path / 'nothere.xpm'}\n"] + _lines(tmp_path)[1:]
    with pytest.raises(SceneError, match="Invalid map configuration"):
        parse_scene_lines(lines)


def test_unreadable_texture_content_rejected(tmp_path):
    broken = tmp_path / "broken.xpm"
    broken.write_text("no strings here")
    lines = [f"NO {broken}\n"] + _lines(tmp_path)[1:]
    with pytest.raises(SceneError, match="Invalid texture path"):
        parse_scene_lines(lines)


@pytest.mark.parametrize("bad", ["hello\n", "   \n", "\t\n"])
def test_invalid_line_before_map(tmp_path, bad):
    lines = [bad] + _lines(tmp_path)
    with pytest.raises(SceneError, match="Invalid line in file"):
        parse_scene_lines(lines)


@pytest.mark.parametrize("row", ["10F001", "10C001", "10X001", "1\t0001"])
def test_invalid_character_in_map(tmp_path, row):
    rows = ["111111", row, "10N001", "111111"]
    with pytest.raises(SceneError, match="Invalid character in map"):
        parse_scene_lines(_lines(tmp_path, rows=rows))


def test_setting_after_map_started_rejected(tmp_path):
    lines = _lines(tmp_path) + ["NO ./x.xpm\n"]
    with pytest.raises(SceneError, match="Invalid character in map"):
        parse_scene_lines(lines)


def test_open_map_rejected(tmp_path):
    rows = ["111111", "100001", "10N000", "111111"]
    with pytest.raises(SceneError, match="not properly surrounded"):
        parse_scene_lines(_lines(tmp_path, rows=rows))


def test_map_without_player_rejected(tmp_path):
    rows = ["1111", "1001", "1111"]
    with pytest.raises(SceneError, match="No player position"):
        parse_scene_lines(_lines(tmp_path, rows=rows))


def test_map_with_two_players_rejected(tmp_path):
    rows = ["11111", "1NS01", "11111"]
    with pytest.raises(SceneError, match="Multiple player positions"):
        parse_scene_lines(_lines(tmp_path, rows=rows))


def test_inaccessible_area_rejected(tmp_path):
    rows = ["1111111", "1N01001", "1111111"]
    with pytest.raises(SceneError, match="Inaccessible areas"):
        parse_scene_lines(_lines(tmp_path, rows=rows))


def test_map_too_big(tmp_path):
    rows = ["1"] * (MAX_MAP_ROWS + 1)
    with pytest.raises(SceneError, match="Map too big"):
        parse_scene_lines(_lines(tmp_path, rows=rows))


def test_load_scene_reads_file(tmp_path):
    cub = tmp_path / "level.cub"
    cub.write_text("".join(_lines(tmp_path)))
    scene = load_scene(cub)
    assert scene.grid[2] == "100001"
    assert scene.player.facing == "N"


def test_load_scene_rejects_extension(tmp_path):
    other = tmp_path / "level.txt"
    other.write_text("".join(_lines(tmp_path)))
    with pytest.raises(SceneError, match="not .cub"):
        load_scene(other)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError, match="Couldn't open map file"):
        load_scene(tmp_path / "absent.cub")