"""Generic pixel grid shared by both EHEX format generations.

A PixelGrid is parameterised by a PixelKind, which supplies the default fill
value, the value check, and whether construction clamps to the canvas limit.

Reads and writes outside the canvas are permissive:
  get(x, y) out of bounds returns the kind's default value
  set(x, y, v) out of bounds does nothing
Use set_checked() when an out-of-bounds write should be an error.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from ehex.core.palette import MAX_INDEX

T = TypeVar('T')

MAX_WIDTH = 150
MAX_HEIGHT = 25

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class PixelKind(Generic[T]):
    """Describes what one grid cell holds."""

    name: str
    default: T
    is_valid: Callable[[object], bool]
    clamp_on_create: bool = False  # apply MAX_WIDTH x MAX_HEIGHT at construction


def _is_rgba(value: object) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) == 4
        and all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value)
    )


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_INDEX


RGBA_KIND: PixelKind[RGBA] = PixelKind(name='rgba', default=(0, 0, 0, 255), is_valid=_is_rgba)
INDEX_KIND: PixelKind[int] = PixelKind(name='index', default=0, is_valid=_is_index, clamp_on_create=True)


def clamp_size(width: int, height: int) -> tuple[int, int]:
    return min(width, MAX_WIDTH), min(height, MAX_HEIGHT)


def _check_size(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f'canvas size must be at least 1x1, got {width}x{height}')


class PixelGrid(Generic[T]):
    """A width x height array of pixel values, stored row-major."""

    def __init__(self, kind: PixelKind[T], width: int, height: int):
        if kind.clamp_on_create:
            width, height = clamp_size(width, height)
        _check_size(width, height)
        self.kind = kind
        self.width = width
        self.height = height
        self._rows: list[list[T]] = [[kind.default] * width for _ in range(height)]

    @classmethod
    def from_rows(cls, kind: PixelKind[T], rows: list[list[T]]) -> PixelGrid[T]:
        """Build a grid from decoded rows without clamping.

        Every row must have the same length and every value must be valid
        for the kind.
        """
        if not rows or not rows[0]:
            raise ValueError('rows must describe at least a 1x1 canvas')
        width = len(rows[0])
        grid = cls.__new__(cls)
        grid.kind = kind
        grid.width = width
        grid.height = len(rows)
        grid._rows = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f'row {y} has {len(row)} pixels, expected {width}')
            for x, value in enumerate(row):
                if not kind.is_valid(value):
                    raise ValueError(f'invalid {kind.name} value at ({x}, {y}): {value!r}')
            grid._rows.append(list(row))
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> T:
        if self.in_bounds(x, y):
            return self._rows[y][x]
        return self.kind.default

    def set(self, x: int, y: int, value: T) -> None:
        """Store value at (x, y). Writes outside the canvas are dropped.

        The value itself is always checked: an invalid value raises
        ValueError even when (x, y) is off-canvas.
        """
        self._check_value(value)
        if self.in_bounds(x, y):
            self._rows[y][x] = value

    def set_checked(self, x: int, y: int, value: T) -> None:
        """Like set(), but raise IndexError for an off-canvas write."""
        if not self.in_bounds(x, y):
            raise IndexError(f'({x}, {y}) is outside the {self.width}x{self.height} canvas')
        self.set(x, y, value)

    def resize(self, width: int, height: int) -> PixelGrid[T]:
        """Return a new grid clamped to the canvas limit.

        Overlapping cells are copied, newly exposed cells get the default.
        """
        width, height = clamp_size(width, height)
        _check_size(width, height)
        new = PixelGrid(self.kind, width, height)
        for y in range(min(height, self.height)):
            for x in range(min(width, self.width)):
                new._rows[y][x] = self._rows[y][x]
        return new

    def rows(self) -> Iterator[list[T]]:
        """Yield copies of each row, top to bottom."""
        for row in self._rows:
            yield list(row)

    def copy(self) -> PixelGrid[T]:
        return PixelGrid.from_rows(self.kind, [list(r) for r in self._rows])

    def _check_value(self, value: object) -> None:
        if not self.kind.is_valid(value):
            raise ValueError(f'invalid {self.kind.name} value: {value!r}')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.kind.name == other.kind.name and self._rows == other._rows

    def __repr__(self) -> str:
        return f'PixelGrid({self.kind.name}, {self.width}x{self.height})'


def new_rgba_grid(width: int, height: int) -> PixelGrid[RGBA]:
    return PixelGrid(RGBA_KIND, width, height)


def new_index_grid(width: int, height: int) -> PixelGrid[int]:
    return PixelGrid(INDEX_KIND, width, height)
