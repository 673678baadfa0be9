"""Rendering an EhexImage to terminal glyphs and to/from PIL images.

Text rendering: v2 cells map through the palette, v1 cells through the
brightness quantizer. The editor cursor cell is drawn as 'X'.

Raster conversion uses numpy arrays:
  v1 -> RGBA image, one output pixel per cell
  v2 -> greyscale 'L' image, level = index * 17 (0..255)
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from ehex.core.grid import INDEX_KIND, MAX_HEIGHT, MAX_WIDTH, RGBA_KIND, PixelGrid
from ehex.core.image import EhexImage
from ehex.core.palette import MAX_INDEX, index_for_rgb

CURSOR_GLYPH = 'X'
GREY_STEP = 255 // MAX_INDEX  # 17


def render_rows(image: EhexImage, cursor: tuple[int, int] | None = None) -> list[str]:
    lines = []
    for y in range(image.height):
        chars = []
        for x in range(image.width):
            if cursor is not None and (x, y) == cursor:
                chars.append(CURSOR_GLYPH)
            else:
                chars.append(image.cell_glyph(x, y))
        lines.append(''.join(chars))
    return lines


def render_cropped(
    image: EhexImage, max_width: int, max_height: int, cursor: tuple[int, int] | None = None
) -> list[str]:
    """Render into a max_width x max_height viewport.

    Cells past the image edge are blank; image cells past the viewport are
    cropped.
    """
    lines = []
    for y in range(max_height):
        chars = []
        for x in range(max_width):
            if cursor is not None and (x, y) == cursor:
                chars.append(CURSOR_GLYPH)
            elif x < image.width and y < image.height:
                chars.append(image.cell_glyph(x, y))
            else:
                chars.append(' ')
        lines.append(''.join(chars))
    return lines


def to_array(image: EhexImage) -> np.ndarray:
    """(H, W, 4) uint8 for v1, (H, W) uint8 palette indices for v2."""
    return np.array(list(image.grid.rows()), dtype=np.uint8)


def to_pil(image: EhexImage, scale: int = 1) -> Image.Image:
    arr = to_array(image)
    if image.format == 'v1':
        out = Image.fromarray(arr)
    else:
        out = Image.fromarray((arr.astype(int) * GREY_STEP).astype(np.uint8))
    if scale > 1:
        out = out.resize((image.width * scale, image.height * scale), Image.Resampling.NEAREST)
    return out


def from_pil(source: Image.Image, fmt: str = 'v2') -> EhexImage:
    """Build an image from a raster.

    Both formats first shrink the raster to fit 150x25 (nearest neighbour,
    aspect kept). v1 then keeps the RGBA values as-is; v2 maps each pixel's
    brightness to the nearest palette index.
    """
    rgba = source.convert('RGBA')
    if rgba.width > MAX_WIDTH or rgba.height > MAX_HEIGHT:
        rgba.thumbnail((MAX_WIDTH, MAX_HEIGHT), Image.Resampling.NEAREST)
    if fmt == 'v1':
        arr = np.array(rgba).astype(int)
        rows = [[tuple(int(c) for c in px) for px in row] for row in arr]
        return EhexImage(PixelGrid.from_rows(RGBA_KIND, rows))

    arr = np.array(rgba).astype(float)
    level = arr[..., :3].sum(axis=-1) / 3
    indices = np.rint(level / 255 * MAX_INDEX).astype(int)
    return EhexImage(PixelGrid.from_rows(INDEX_KIND, [[int(i) for i in row] for row in indices]))


def convert_to_v2(image: EhexImage) -> EhexImage:
    """Convert a v1 image to v2 by brightness, clamping to the canvas limit."""
    if image.format == 'v2':
        return EhexImage(image.grid.copy(), filename=image.filename)
    out = EhexImage.create(image.width, image.height, fmt='v2')
    for y in range(out.height):
        for x in range(out.width):
            r, g, b, _a = image.cell_value(x, y)
            out.paint_cell(x, y, index_for_rgb(r, g, b))
    return out
