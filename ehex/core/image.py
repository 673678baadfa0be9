"""EhexImage — the editable image consumed by the editor and the CLI.

Owns exactly one PixelGrid and the codec for its format generation. All
mutation goes through paint_cell / paint_brush / resize_canvas / new_image.
Loading replaces the grid wholesale. Saving encodes the whole grid and
writes it in one call; write errors propagate to the caller.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from ehex.core.codec import CODECS, V2, Codec, Metadata, codec_for, decode
from ehex.core.grid import PixelGrid, clamp_size
from ehex.core.palette import glyph_for, glyph_for_rgb

DEFAULT_WIDTH = 20
DEFAULT_HEIGHT = 10
BRUSH_SIZES = (1, 2, 3)


def _codec_named(fmt: str) -> Codec:
    try:
        return CODECS[fmt]
    except KeyError:
        raise ValueError(f'unknown format {fmt!r}, expected one of: {", ".join(sorted(CODECS))}') from None


def default_filename() -> str:
    """Name used when an unnamed image is saved: image_<unix-ms>.ehex."""
    return f'image_{int(time.time() * 1000)}.ehex'


class EhexImage:
    """An EHEX image: pixel grid plus header metadata."""

    def __init__(self, grid: PixelGrid[Any], filename: str | None = None):
        self.grid = grid
        self.codec = codec_for(grid)
        self.filename = filename

    @classmethod
    def create(cls, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT, fmt: str = 'v2') -> EhexImage:
        """New default-filled canvas, clamped to 150x25 in either format."""
        codec = _codec_named(fmt)
        return cls(PixelGrid(codec.kind, *clamp_size(width, height)))

    @classmethod
    def open(cls, path: str | Path, legacy: bool = False) -> EhexImage:
        """Load an image from disk. With legacy=False only v2 files are accepted."""
        image = cls.create()
        image.load_from_path(path, legacy=legacy)
        return image

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def format(self) -> str:
        return self.codec.name

    @property
    def metadata(self) -> Metadata:
        return self.codec.metadata_for(self.grid)

    def new_image(self, width: int, height: int) -> None:
        """Replace the canvas with a default-filled one of the same format, clamped to 150x25."""
        self.grid = PixelGrid(self.codec.kind, *clamp_size(width, height))
        self.filename = None

    def load_from_path(self, path: str | Path, legacy: bool = False) -> None:
        text = Path(path).read_text(encoding='utf-8')
        grid, _meta = decode(text) if legacy else V2.decode(text)
        self.grid = grid
        self.codec = codec_for(grid)
        self.filename = str(path)

    def save_to_path(self, path: str | Path | None = None) -> Path:
        """Write the image. Without a path, reuse the loaded name or pick a fresh one."""
        if path is None:
            path = self.filename or default_filename()
        target = Path(path)
        target.write_text(self.encode(), encoding='utf-8')
        self.filename = str(target)
        return target

    def encode(self) -> str:
        return self.codec.encode(self.grid)

    def paint_cell(self, x: int, y: int, value: Any) -> None:
        self.grid.set(x, y, value)

    def paint_brush(self, x: int, y: int, size: int, value: Any) -> int:
        """Paint a size x size square with its top-left corner at (x, y).

        Cells past the canvas edge are dropped. Returns the number of cells
        actually painted.
        """
        if size < 1:
            raise ValueError(f'brush size must be at least 1, got {size}')
        painted = 0
        for dy in range(size):
            for dx in range(size):
                if self.grid.in_bounds(x + dx, y + dy):
                    painted += 1
                self.grid.set(x + dx, y + dy, value)
        return painted

    def resize_canvas(self, width: int, height: int) -> None:
        self.grid = self.grid.resize(width, height)

    def cell_value(self, x: int, y: int) -> Any:
        return self.grid.get(x, y)

    def cell_glyph(self, x: int, y: int) -> str:
        value = self.grid.get(x, y)
        if self.format == 'v1':
            r, g, b, _a = value
            return glyph_for_rgb(r, g, b)
        return glyph_for(value)

    def histogram(self) -> dict[Any, int]:
        """Count how many cells hold each value."""
        counts: dict[Any, int] = {}
        for row in self.grid.rows():
            for value in row:
                counts[value] = counts.get(value, 0) + 1
        return counts


def next_brush_size(size: int) -> int:
    """Cycle the editor brush 1 -> 2 -> 3 -> 1."""
    return size + 1 if size < BRUSH_SIZES[-1] else BRUSH_SIZES[0]
