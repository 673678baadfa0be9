"""Glyph palette (v2), brightness quantizer (v1) and colour string helpers.

The v2 palette is a fixed 16-step ramp from the sparsest glyph (index 0, a
space) to the densest (index 15, a full block). The v1 quantizer buckets an
RGB colour by its mean brightness into one of 5 glyphs.
"""

import re

PALETTE: tuple[str, ...] = (' ', '.', ':', '-', '=', '+', '*', '#', '%', '&', '$', '@', 'Q', 'W', 'M', '█')

MAX_INDEX = len(PALETTE) - 1

_HEX_COLOUR = re.compile(r'[0-9A-Fa-f]{6}([0-9A-Fa-f]{2})?')
_DECIMAL = re.compile(r'[0-9]+')
_HEX_DIGIT = re.compile(r'[0-9A-Fa-f]')

# (upper bound exclusive, glyph), checked in ascending order
BRIGHTNESS_BUCKETS: tuple[tuple[int, str], ...] = (
    (50, ' '),
    (100, '.'),
    (150, '*'),
    (200, '#'),
)
BRIGHTEST_GLYPH = '@'


def glyph_for(index: int) -> str:
    """Return the palette glyph for a validated index in [0, 15]."""
    return PALETTE[index]


def brightness(r: int, g: int, b: int) -> float:
    return (r + g + b) / 3


def glyph_for_rgb(r: int, g: int, b: int) -> str:
    """Quantize an RGB colour to a display glyph. Alpha is not considered."""
    level = brightness(r, g, b)
    for bound, glyph in BRIGHTNESS_BUCKETS:
        if level < bound:
            return glyph
    return BRIGHTEST_GLYPH


def index_for_rgb(r: int, g: int, b: int) -> int:
    """Map an RGB colour to the palette index nearest its brightness."""
    return int(round(brightness(r, g, b) / 255 * MAX_INDEX))


def hex_to_rgba(value: str) -> tuple[int, int, int, int]:
    """Parse '#RRGGBB' or '#RRGGBBAA' (hash optional, any case).

    A missing alpha channel means fully opaque. Raises ValueError on
    anything else.
    """
    h = value.strip().lstrip('#')
    if not _HEX_COLOUR.fullmatch(h):
        raise ValueError(f'colour must be #RRGGBB or #RRGGBBAA, got {value!r}')
    channels = [int(h[i : i + 2], 16) for i in range(0, len(h), 2)]
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return (r, g, b, a)


def rgba_to_hex(rgba: tuple[int, int, int, int]) -> str:
    return '#' + ''.join(f'{c:02X}' for c in rgba)


def parse_index(value: str) -> int:
    """Parse a palette index given as decimal (0-15) or a single hex digit."""
    text = value.strip()
    if _DECIMAL.fullmatch(text):
        index = int(text, 10)
    elif _HEX_DIGIT.fullmatch(text):
        index = int(text, 16)
    else:
        raise ValueError(f'palette index must be 0-15 or a hex digit, got {value!r}')
    if not 0 <= index <= MAX_INDEX:
        raise ValueError(f'palette index out of range 0-{MAX_INDEX}: {index}')
    return index
