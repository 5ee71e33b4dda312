import pytest

from arcadenotes.twenty48.colors import tile_background_color, tile_color

TILE_VALUES = [1 << n for n in range(1, 17)]


def test_small_values_share_dark_text():
    assert tile_color(2) == (0x77, 0x6E, 0x65, 0xFF)
    assert tile_color(4) == tile_color(2)


def test_large_values_share_light_text():
    light = tile_color(8)
    assert light != tile_color(2)
    assert all(tile_color(v) == light for v in TILE_VALUES[2:])


@pytest.mark.parametrize("value", [0, 3, 6, 131072])
def test_tile_color_unknown_value(value):
    with pytest.raises(ValueError):
        tile_color(value)


@pytest.mark.parametrize("value", [1, 3, 100, 131072])
def test_background_unknown_value(value):
    with pytest.raises(ValueError):
        tile_background_color(value)


def test_empty_cell_is_translucent():
    assert tile_background_color(0)[3] == 0x59
    assert tile_background_color(0)[:3] == tile_background_color(2)[:3]


def test_backgrounds_are_distinct_up_to_2048():
    colors = [tile_background_color(v) for v in TILE_VALUES[:11]]
    assert len(set(colors)) == len(colors)
    assert all(c[3] == 0xFF for c in colors)


def test_backgrounds_beyond_2048_grow_more_opaque():
    alphas = [tile_background_color(v)[3] for v in TILE_VALUES[11:]]
    assert alphas == sorted(alphas)
    assert alphas[-1] == 0xFF
    rgb = {tile_background_color(v)[:3] for v in TILE_VALUES[11:]}
    assert len(rgb) == 1


@pytest.mark.parametrize("value", [0] + TILE_VALUES)
def test_background_components_are_bytes(value):
    color = tile_background_color(value)
    assert len(color) == 4
    assert all(0 <= c <= 255 for c in color)