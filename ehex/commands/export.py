"""Export the image as a PNG.

v1 images become RGBA PNGs with one pixel per cell. v2 images become
greyscale PNGs where palette index i is grey level i * 17 (0 = black,
15 = white). --scale N enlarges each cell to N x N pixels (nearest
neighbour, no smoothing).

Without --out the PNG is written next to the input as <name>.png.

Example:
    uv run ehex-tool export art.ehex --scale 8
    uv run ehex-tool export photo.ehex --legacy --out photo.png
"""

from pathlib import Path

from ehex.core.image import EhexImage
from ehex.core.render import to_pil
from ehex.core.types import Command, Report

command = Command(
    name='export',
    help='Export to PNG (v1 RGBA, v2 greyscale), optionally scaled.',
)


@command.run
def run(image: EhexImage, report: Report, args) -> None:
    scale = args.scale or 1
    if scale < 1:
        raise ValueError(f'scale must be at least 1, got {scale}')
    out = Path(args.out) if args.out else Path(args.path).with_suffix('.png')

    raster = to_pil(image, scale=scale)
    raster.save(out, format='PNG')

    report.add(
        'export',
        {
            'file': str(out),
            'mode': raster.mode,
            'width': raster.width,
            'height': raster.height,
        },
    )
