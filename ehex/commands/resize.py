"""Resize the canvas and save the image in place.

The requested size is clamped to 150x25. Cells inside both the old and
the new canvas keep their values; newly exposed cells get the default
value. Cells cut off by shrinking are lost.

Example:
    uv run ehex-tool resize art.ehex --width 60 --height 20
"""

from ehex.core.image import EhexImage
from ehex.core.types import Command, Report

command = Command(
    name='resize',
    help='Resize the canvas (max 150x25) and save.',
)


@command.run
def run(image: EhexImage, report: Report, args) -> None:
    width = image.width if args.width is None else args.width
    height = image.height if args.height is None else args.height
    before = f'{image.width}x{image.height}'

    image.resize_canvas(width, height)
    saved = image.save_to_path(args.out)

    report.describe(image)
    report.add(
        'resize',
        {
            'from': before,
            'to': f'{image.width}x{image.height}',
            'clamped': (image.width, image.height) != (width, height),
            'file': str(saved),
        },
    )
