"""Print the header fields and a value histogram.

Reports magic, version, size and (v1) channel count, followed by how many
cells hold each value. v2 values are listed as index and glyph, v1 values
as #RRGGBBAA. The histogram is sorted by count, most common first.

Example:
    uv run ehex-tool info art.ehex
    uv run ehex-tool info photo.ehex --legacy --json
"""

from ehex.core.image import EhexImage
from ehex.core.palette import glyph_for, rgba_to_hex
from ehex.core.types import Command, Report

command = Command(
    name='info',
    help='Print header fields and a histogram of cell values.',
)


def _label(image: EhexImage, value) -> str:
    if image.format == 'v1':
        return rgba_to_hex(value)
    return f'{value:x} {glyph_for(value)!r}'


@command.run
def run(image: EhexImage, report: Report, args) -> None:
    counts = image.histogram()
    ordered = sorted(counts.items(), key=lambda item: -item[1])
    report.add(
        'info',
        {
            'cells': image.width * image.height,
            'distinct': len(counts),
            'histogram': {_label(image, value): n for value, n in ordered},
        },
    )
