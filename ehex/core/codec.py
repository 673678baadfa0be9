"""EHEX text codecs.

EHEX is a line-oriented text image format. Two generations exist:

v1 (legacy, RGBA):

    EHEX
    V1
    SIZE:<W>x<H>
    CHANNELS:4
    PIXELS:
    <H rows of W x 8 uppercase hex digits, RRGGBBAA per pixel>

v2 (current, palette index):

    EHEX2
    V2
    SIZE:<W>x<H>
    PIXELS:
    <H rows of W hex digits, one palette index 0-f per pixel>

Decoding reads the magic line first, then header lines by prefix (V, SIZE:,
CHANNELS:) in any order until the PIXELS: marker. The next H lines are the
body. Unknown header lines are skipped. Anything after the last body row is
ignored.

Body validation is strict:
  fewer than H rows, or a row shorter than W pixel groups -> TruncatedDataError
  a row longer than W pixel groups, or a non-hex digit   -> FormatError

V2Codec is the v2-only decoder used by the editor: it rejects the legacy
EHEX magic with UnsupportedVersionError before any pixel is read. The
module-level decode() picks the codec from the magic line and reads both.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ehex.core.errors import FormatError, TruncatedDataError, UnsupportedVersionError
from ehex.core.grid import INDEX_KIND, RGBA_KIND, PixelGrid, PixelKind

LEGACY_MAGIC = 'EHEX'
MAGIC = 'EHEX2'
PIXELS_MARKER = 'PIXELS:'
RGBA_CHANNELS = 4

_HEX_ROW = re.compile(r'[0-9A-Fa-f]*')
_SIZE = re.compile(r'SIZE:\s*([0-9]+)\s*x\s*([0-9]+)\s*')
_VERSION = re.compile(r'V\s*([0-9]+)\s*')
_CHANNELS = re.compile(r'CHANNELS:\s*([0-9]+)\s*')


@dataclass(frozen=True)
class Metadata:
    """Header fields of an EHEX document."""

    magic: str
    version: int
    width: int
    height: int
    channels: int | None = None  # v1 only


class Codec:
    """Shared encode/decode for one EHEX format generation.

    Subclasses set the class attributes and implement the per-pixel
    conversion.
    """

    magic: str = ''
    version: int = 0
    kind: PixelKind[Any]
    digits: int = 1  # hex digits per pixel group
    channels: int | None = None

    @property
    def name(self) -> str:
        return f'v{self.version}'

    def metadata_for(self, grid: PixelGrid[Any]) -> Metadata:
        return Metadata(
            magic=self.magic,
            version=self.version,
            width=grid.width,
            height=grid.height,
            channels=self.channels,
        )

    def encode(self, grid: PixelGrid[Any], metadata: Metadata | None = None) -> str:
        """Serialise grid. Dimensions always come from the grid itself."""
        if grid.kind.name != self.kind.name:
            raise TypeError(f'{self.name} codec cannot encode a {grid.kind.name} grid')
        meta = metadata or self.metadata_for(grid)
        if (meta.width, meta.height) != (grid.width, grid.height):
            raise ValueError(
                f'metadata size {meta.width}x{meta.height} does not match grid {grid.width}x{grid.height}'
            )
        lines = [self.magic, f'V{self.version}', f'SIZE:{grid.width}x{grid.height}']
        if self.channels is not None:
            lines.append(f'CHANNELS:{self.channels}')
        lines.append(PIXELS_MARKER)
        for row in grid.rows():
            lines.append(''.join(self.encode_pixel(value) for value in row))
        return '\n'.join(lines) + '\n'

    def decode(self, text: str) -> tuple[PixelGrid[Any], Metadata]:
        lines = text.splitlines()
        self._check_magic(lines[0] if lines else '')
        width, height, channels, body_start = self._read_header(lines)
        rows = self._read_body(lines, body_start, width, height)
        grid = PixelGrid.from_rows(self.kind, rows)
        meta = Metadata(magic=self.magic, version=self.version, width=width, height=height, channels=channels)
        return grid, meta

    def encode_pixel(self, value: Any) -> str:
        raise NotImplementedError

    def decode_pixel(self, group: str) -> Any:
        raise NotImplementedError

    def _check_magic(self, first_line: str) -> None:
        if first_line != self.magic:
            raise FormatError(f'Invalid EHEX file: expected magic {self.magic!r}, got {first_line[:20]!r}')

    def _read_header(self, lines: list[str]) -> tuple[int, int, int | None, int]:
        """Parse header lines. Returns (width, height, channels, index of first body line)."""
        version: int | None = None
        size: tuple[int, int] | None = None
        channels: int | None = None
        for i in range(1, len(lines)):
            line = lines[i]
            if line == PIXELS_MARKER:
                body_start = i + 1
                break
            if line.startswith('SIZE:'):
                size = _parse_size(line, i)
            elif line.startswith('CHANNELS:'):
                channels = self._parse_channels(line, i)
            elif line.startswith('V'):
                version = _parse_version(line, i)
                if version != self.version:
                    raise UnsupportedVersionError(f'Unsupported EHEX version: {version}')
        else:
            raise FormatError(f'missing {PIXELS_MARKER} marker')

        if version is None:
            raise FormatError('missing version line (V<n>)')
        if size is None:
            raise FormatError('missing SIZE:<W>x<H> line')
        if self.channels is not None and channels is None:
            channels = self.channels
        width, height = size
        return width, height, channels, body_start

    def _parse_channels(self, line: str, lineno: int) -> int:
        m = _CHANNELS.fullmatch(line)
        if not m:
            raise FormatError(f'line {lineno + 1}: malformed channel count {line!r}')
        channels = int(m.group(1))
        if self.channels is None:
            raise FormatError(f'line {lineno + 1}: CHANNELS is not part of {self.magic}')
        if channels != self.channels:
            raise FormatError(f'line {lineno + 1}: unsupported channel count {channels}, expected {self.channels}')
        return channels

    def _read_body(self, lines: list[str], start: int, width: int, height: int) -> list[list[Any]]:
        body = lines[start : start + height]
        if len(body) < height:
            raise TruncatedDataError(f'expected {height} pixel rows, found {len(body)}')
        expected = width * self.digits
        rows = []
        for y, line in enumerate(body):
            lineno = start + y + 1
            if len(line) < expected:
                raise TruncatedDataError(f'line {lineno}: row {y} has {len(line)} hex digits, expected {expected}')
            if len(line) > expected:
                raise FormatError(f'line {lineno}: row {y} has {len(line)} hex digits, expected {expected}')
            if not _HEX_ROW.fullmatch(line):
                raise FormatError(f'line {lineno}: row {y} contains non-hex characters')
            d = self.digits
            rows.append([self.decode_pixel(line[x * d : (x + 1) * d]) for x in range(width)])
        return rows


class V1Codec(Codec):
    """Legacy RGBA format: 8 uppercase hex digits per pixel."""

    magic = LEGACY_MAGIC
    version = 1
    kind = RGBA_KIND
    digits = 8
    channels = RGBA_CHANNELS

    def encode_pixel(self, value: tuple[int, int, int, int]) -> str:
        r, g, b, a = value
        return f'{r:02X}{g:02X}{b:02X}{a:02X}'

    def decode_pixel(self, group: str) -> tuple[int, int, int, int]:
        return (int(group[0:2], 16), int(group[2:4], 16), int(group[4:6], 16), int(group[6:8], 16))


class V2Codec(Codec):
    """Current palette format: one lowercase hex digit per pixel."""

    magic = MAGIC
    version = 2
    kind = INDEX_KIND
    digits = 1

    def encode_pixel(self, value: int) -> str:
        return format(value, 'x')

    def decode_pixel(self, group: str) -> int:
        return int(group, 16)

    def _check_magic(self, first_line: str) -> None:
        if first_line == LEGACY_MAGIC:
            raise UnsupportedVersionError('EHEX v1 files are not supported. Please convert to v2 format.')
        super()._check_magic(first_line)


V1 = V1Codec()
V2 = V2Codec()

CODECS: dict[str, Codec] = {codec.name: codec for codec in (V1, V2)}
_BY_MAGIC: dict[str, Codec] = {codec.magic: codec for codec in (V1, V2)}
_BY_KIND: dict[str, Codec] = {codec.kind.name: codec for codec in (V1, V2)}


def codec_for(grid: PixelGrid[Any]) -> Codec:
    """Return the codec that serialises this grid's pixel kind."""
    return _BY_KIND[grid.kind.name]


def encode(grid: PixelGrid[Any], metadata: Metadata | None = None) -> str:
    return codec_for(grid).encode(grid, metadata)


def decode(text: str) -> tuple[PixelGrid[Any], Metadata]:
    """Decode either format generation, chosen by the magic line."""
    lines = text.splitlines()
    first = lines[0] if lines else ''
    codec = _BY_MAGIC.get(first)
    if codec is None:
        raise FormatError(f'Invalid EHEX file: unrecognised magic {first[:20]!r}')
    return codec.decode(text)


def decode_v2(text: str) -> tuple[PixelGrid[int], Metadata]:
    """Decode with the v2-only decoder (legacy files are rejected)."""
    return V2.decode(text)


def _parse_size(line: str, lineno: int) -> tuple[int, int]:
    m = _SIZE.fullmatch(line)
    if not m:
        raise FormatError(f'line {lineno + 1}: malformed size {line!r}')
    width, height = int(m.group(1)), int(m.group(2))
    if width < 1 or height < 1:
        raise FormatError(f'line {lineno + 1}: canvas size must be at least 1x1, got {width}x{height}')
    return width, height


def _parse_version(line: str, lineno: int) -> int:
    m = _VERSION.fullmatch(line)
    if not m:
        raise FormatError(f'line {lineno + 1}: malformed version {line!r}')
    return int(m.group(1))
