"""Colours of the 2048 board, as non-premultiplied RGBA tuples."""

from __future__ import annotations

Color = tuple[int, int, int, int]

BACKGROUND_COLOR: Color = (0xFA, 0xF8, 0xEF, 0xFF)
FRAME_COLOR: Color = (0xBB, 0xAD, 0xA0, 0xFF)

_DARK_TEXT: Color = (0x77, 0x6E, 0x65, 0xFF)
_LIGHT_TEXT: Color = (0xF9, 0xF6, 0xF2, 0xFF)

_TEXT_COLORS: dict[int, Color] = {2: _DARK_TEXT, 4: _DARK_TEXT}
_TEXT_COLORS.update({1 << n: _LIGHT_TEXT for n in range(3, 17)})

_BACKGROUND_COLORS: dict[int, Color] = {
    0: (0xEE, 0xE4, 0xDA, 0x59),
    2: (0xEE, 0xE4, 0xDA, 0xFF),
    4: (0xED, 0xE0, 0xC8, 0xFF),
    8: (0xF2, 0xB1, 0x79, 0xFF),
    16: (0xF5, 0x95, 0x63, 0xFF),
    32: (0xF6, 0x7C, 0x5F, 0xFF),
    64: (0xF6, 0x5E, 0x3B, 0xFF),
    128: (0xED, 0xCF, 0x72, 0xFF),
    256: (0xED, 0xCC, 0x61, 0xFF),
    512: (0xED, 0xC8, 0x50, 0xFF),
    1024: (0xED, 0xC5, 0x3F, 0xFF),
    2048: (0xED, 0xC2, 0x2E, 0xFF),
    4096: (0xA3, 0x49, 0xA4, 0x7F),
    8192: (0xA3, 0x49, 0xA4, 0xB2),
    16384: (0xA3, 0x49, 0xA4, 0xCC),
    32768: (0xA3, 0x49, 0xA4, 0xE5),
    65536: (0xA3, 0x49, 0xA4, 0xFF),
}


def tile_color(value: int) -> Color:
    """Return the text colour for a tile value."""
    try:
        return _TEXT_COLORS[value]
    except KeyError:
        raise ValueError(f"no text colour for tile value {value}") from None


def tile_background_color(value: int) -> Color:
    """Return the background colour for a tile value; 0 is an empty cell."""
    try:
        return _BACKGROUND_COLORS[value]
    except KeyError:
        raise ValueError(f"no background colour for tile value {value}") from None