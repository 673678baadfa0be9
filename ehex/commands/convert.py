"""Convert a legacy v1 (RGBA) image to the current v2 palette format.

Each pixel maps to the palette index nearest its brightness:
    index = round((r + g + b) / 3 / 255 * 15)
Alpha is dropped. The result is clamped to 150x25; pixels outside that
are discarded.

Always reads v1 input, whatever EHEX_ALLOW_LEGACY says. Without --out the
result goes to <name>_v2.ehex next to the input.

Example:
    uv run ehex-tool convert photo.ehex
    uv run ehex-tool convert photo.ehex --out photo2.ehex
"""

from pathlib import Path

from ehex.core.image import EhexImage
from ehex.core.render import convert_to_v2
from ehex.core.types import Command, Report

command = Command(
    name='convert',
    help='Convert a v1 (RGBA) image to v2 palette indices by brightness.',
    legacy=True,
)


def _default_output(path: str) -> Path:
    p = Path(path)
    return p.with_name(f'{p.stem}_v2{p.suffix or ".ehex"}')


@command.run
def run(image: EhexImage, report: Report, args) -> None:
    source_format = image.format
    source_size = f'{image.width}x{image.height}'
    converted = convert_to_v2(image)
    saved = converted.save_to_path(args.out or _default_output(args.path))

    report.describe(converted, path=str(saved))
    report.add(
        'convert',
        {
            'source': f'{args.path} ({source_format}, {source_size})',
            'file': str(saved),
        },
    )
