"""Paint a square brush stroke and save the image in place.

The brush is a size x size square whose top-left corner is (--x, --y);
cells past the canvas edge are dropped. --brush is 1-3 (default
EHEX_BRUSH, or 1).

--value is a palette index for v2 (0-15, or a single hex digit 0-f) and a
colour for v1 (#RRGGBB or #RRGGBBAA). Without --value the editor defaults
apply: index 1 ('.') for v2, opaque white for v1.

Use --out to write somewhere other than the input file.

Example:
    uv run ehex-tool paint art.ehex --x 3 --y 2 --value f --brush 2
    uv run ehex-tool paint photo.ehex --legacy --x 0 --y 0 --value '#FF0000'
"""

from ehex.core.image import BRUSH_SIZES, EhexImage
from ehex.core.palette import hex_to_rgba, parse_index
from ehex.core.types import Command, Report

command = Command(
    name='paint',
    help='Paint a brush stroke at --x/--y with --value and save.',
)

DEFAULT_INDEX = 1
DEFAULT_COLOUR = (255, 255, 255, 255)


def parse_value(image: EhexImage, text: str | None):
    """Turn a --value string into a cell value for the image's format."""
    if image.format == 'v1':
        return DEFAULT_COLOUR if text is None else hex_to_rgba(text)
    return DEFAULT_INDEX if text is None else parse_index(text)


@command.run
def run(image: EhexImage, report: Report, args) -> None:
    if args.x is None or args.y is None:
        raise ValueError('paint needs --x and --y')
    brush = args.brush or args.config.brush
    if brush not in BRUSH_SIZES:
        raise ValueError(f'brush size must be one of {BRUSH_SIZES}, got {brush}')

    value = parse_value(image, args.value)
    painted = image.paint_brush(args.x, args.y, brush, value)
    saved = image.save_to_path(args.out)

    report.add(
        'paint',
        {
            'at': f'{args.x},{args.y}',
            'brush': f'{brush}x{brush}',
            'painted': painted,
            'file': str(saved),
        },
    )
