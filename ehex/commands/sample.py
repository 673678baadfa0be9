"""Write the 8x8 diagonal sample image.

Cell (x, y) holds palette index (x + y) % 16, so every glyph of the ramp
appears along the diagonals. Handy as a known-good v2 file.

Example:
    uv run ehex-tool sample sample.ehex
"""

from ehex.core.image import EhexImage
from ehex.core.types import Command, Report

command = Command(
    name='sample',
    help='Write the 8x8 diagonal sample image.',
    loads=False,
)

SAMPLE_SIZE = 8


def build_sample() -> EhexImage:
    image = EhexImage.create(SAMPLE_SIZE, SAMPLE_SIZE, fmt='v2')
    for y in range(SAMPLE_SIZE):
        for x in range(SAMPLE_SIZE):
            image.paint_cell(x, y, (x + y) % 16)
    return image


@command.run
def run(image: EhexImage | None, report: Report, args) -> None:
    image = build_sample()
    saved = image.save_to_path(args.path or 'sample.ehex')
    report.describe(image, path=str(saved))
    report.add('sample', {'file': str(saved)})
