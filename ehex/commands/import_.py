"""Import a raster image (PNG, JPG, ...) as an EHEX image.

Both formats first shrink the picture to fit 150x25, keeping its aspect
ratio. --format v2 (default, or EHEX_FORMAT) then maps each pixel's
brightness to the nearest palette index. --format v1 keeps the RGBA values.

Without --out the result is written next to the input as <name>.ehex.

Example:
    uv run ehex-tool import sprite.png
    uv run ehex-tool import sprite.png --format v1 --out sprite_rgba.ehex
"""

from pathlib import Path

from PIL import Image

from ehex.core.image import EhexImage
from ehex.core.render import from_pil
from ehex.core.types import Command, Report

command = Command(
    name='import',
    help='Import a PNG/JPG as EHEX (v2 by brightness, or v1 RGBA).',
    loads=False,
)


@command.run
def run(image: EhexImage | None, report: Report, args) -> None:
    fmt = args.format or args.config.format
    with Image.open(args.path) as source:
        source_size = f'{source.width}x{source.height}'
        image = from_pil(source, fmt=fmt)

    out = Path(args.out) if args.out else Path(args.path).with_suffix('.ehex')
    saved = image.save_to_path(out)

    report.describe(image, path=str(saved))
    report.add('import', {'source': f'{args.path} ({source_size})', 'file': str(saved)})
