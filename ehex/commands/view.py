"""Render the image as glyphs on stdout.

v2 cells are drawn with the 16-glyph palette ramp, v1 cells with the
5-step brightness quantizer (' ', '.', '*', '#', '@').

--fit crops the output to the terminal (leaving room for the frame and the
status line) and pads short images with blanks. --x/--y marks the cursor
cell with 'X', as the editor does.

Example:
    uv run ehex-tool view art.ehex
    uv run ehex-tool view art.ehex --fit
    uv run ehex-tool view photo.ehex --legacy
"""

import shutil

from ehex.core.image import EhexImage
from ehex.core.render import render_cropped, render_rows
from ehex.core.types import Command, Report

command = Command(
    name='view',
    help='Render the image as terminal glyphs.',
)

# columns/rows kept free for the frame and status line
FRAME_WIDTH = 10
FRAME_HEIGHT = 5


def _viewport(image: EhexImage) -> tuple[int, int]:
    size = shutil.get_terminal_size()
    width = max(1, min(image.width, size.columns - FRAME_WIDTH))
    height = max(1, min(image.height, size.lines - FRAME_HEIGHT))
    return width, height


@command.run
def run(image: EhexImage, report: Report, args) -> None:
    cursor = None
    if args.x is not None and args.y is not None:
        cursor = (args.x, args.y)
    if getattr(args, 'fit', False):
        width, height = _viewport(image)
        rows = render_cropped(image, width, height, cursor=cursor)
    else:
        width, height = image.width, image.height
        rows = render_rows(image, cursor=cursor)

    border = '+' + '-' * width + '+'
    print(border)
    for row in rows:
        print(f'|{row}|')
    print(border)

    cropped = width < image.width or height < image.height
    display = f'{width}x{height}' + (' (cropped)' if cropped else '')
    print(f'Size: {image.width}x{image.height}  Format: EHEX {image.format}  Display: {display}')
    report.add('view', {'display': display, 'cropped': cropped})
