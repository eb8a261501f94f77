import pytest

from cubscene.colors import lookup_color, pack_color

RGB888 = (16, 8, 8, 8, 0, 8)
RGB565 = (11, 5, 5, 6, 0, 5)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("lightgoldenrodyellow", 0xFAFAD2),
        ("white", 0xFFFFFF),
        ("black", 0x0),
    ],
)
def test_lookup_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_ignores_case():
    assert lookup_color("RED") == lookup_color("red")
    assert lookup_color("Ghost White") == 0xF8F8FF


def test_lookup_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_lookup_none_is_transparent():
    assert lookup_color("none") == -1


def test_lookup_unknown_name():
    assert lookup_color("not a colour") is None
    assert lookup_color("") is None


def test_grey_and_gray_spellings_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


@pytest.mark.parametrize("color", [0, 0xFFFFFF, 0x123456, 0xFF0000, -1])
def test_deep_visual_keeps_color(color):
    assert pack_color(color, 24, RGB565) == color
    assert pack_color(color, 32, ()) == color


@pytest.mark.parametrize("name", ["snow", "navy", "tomato", "gray50", "thistle4"])
def test_eight_bit_channels_round_trip(name):
    color = lookup_color(name)
    assert pack_color(color, 16, RGB888) == color


def test_channels_combine_independently():
    combined = pack_color(0xFFFFFF, 16, RGB565)
    parts = (
        pack_color(0xFF0000, 16, RGB565)
        | pack_color(0x00FF00, 16, RGB565)
        | pack_color(0x0000FF, 16, RGB565)
    )
    assert combined == parts
    assert pack_color(0, 16, RGB565) == 0


def test_packed_value_fits_the_masks():
    for color in (0xFFFFFF, 0x808080, 0x00FF00):
        assert pack_color(color, 16, RGB565) < 1 << 16


def test_wrong_shift_count_rejected():
    with pytest.raises(ValueError):
        pack_color(0x123456, 16, (0, 8, 8))


def test_bit_count_out_of_range_rejected():
    with pytest.raises(ValueError):
        pack_color(0x123456, 16, (0, 17, 8, 8, 16, 8))