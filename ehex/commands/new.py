"""Create a blank canvas and save it.

Every cell gets the format's default value: palette index 0 (blank) for
v2, opaque black (#000000FF) for v1. Size and format come from --width,
--height and --format, falling back to EHEX_WIDTH, EHEX_HEIGHT and
EHEX_FORMAT (20x10, v2). Both formats are clamped to 150x25.

Without a path the file is named image_<unix-ms>.ehex.

Example:
    uv run ehex-tool new art.ehex --width 40 --height 12
    uv run ehex-tool new photo.ehex --format v1
"""

from ehex.core.image import EhexImage
from ehex.core.types import Command, Report

command = Command(
    name='new',
    help='Create a blank canvas (default 20x10, v2) and save it.',
    loads=False,
)


@command.run
def run(image: EhexImage | None, report: Report, args) -> None:
    config = args.config
    fmt = args.format or config.format
    width = config.width if args.width is None else args.width
    height = config.height if args.height is None else args.height

    image = EhexImage.create(width, height, fmt=fmt)
    saved = image.save_to_path(args.path)

    report.describe(image, path=str(saved))
    report.add('new', {'file': str(saved), 'requested': f'{width}x{height}'})
