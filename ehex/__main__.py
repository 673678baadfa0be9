"""ehex-tool — View, paint and convert EHEX text pixel-art images.

Usage: uv run ehex-tool <command> <path> [options]

Commands are auto-discovered from ehex/commands/.
Each command module's docstring is its documentation.
Run `ehex-tool help <command>` for full module docs and
`ehex-tool format` for the EHEX file format reference.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, ehex-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import sys

from ehex import registry
from ehex.core import codec
from ehex.core.env import EditorConfig, load_env
from ehex.core.errors import EhexError
from ehex.core.image import BRUSH_SIZES, EhexImage
from ehex.core.report import format_json, format_text
from ehex.core.types import Report

# Commands that write their own stdout instead of a report
_SELF_PRINTING = {'view'}


def _short_doc(doc: str, fallback: str) -> str:
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  ehex-tool new art.ehex --width 40 --height 12\n'
        '  ehex-tool paint art.ehex --x 3 --y 2 --value f --brush 2\n'
        '  ehex-tool view art.ehex --fit\n'
        '  ehex-tool info art.ehex --json\n'
        '  ehex-tool resize art.ehex --width 60 --height 20\n'
        '  ehex-tool convert photo.ehex --out photo_v2.ehex\n'
        '  ehex-tool export art.ehex --scale 8\n'
        '  ehex-tool import sprite.png\n'
        '  ehex-tool help paint\n'
        '  ehex-tool format\n'
        '\n'
        'Config env vars (set in .env or environment):\n'
        '  EHEX_FORMAT=v2  EHEX_WIDTH=20  EHEX_HEIGHT=10  EHEX_BRUSH=1\n'
        '  EHEX_ALLOW_LEGACY=1   read v1 files in every command\n'
    )
    parser = argparse.ArgumentParser(
        prog='ehex-tool',
        description='View, paint and convert EHEX text pixel-art images.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(cmd.doc, cmd.help))
        p.add_argument('path', nargs='?', default=None, help='Image file to read or create')
        p.add_argument('-o', '--out', help='Output path (default depends on the command)')
        p.add_argument('-W', '--width', type=int, help='Canvas width (max 150)')
        p.add_argument('-H', '--height', type=int, help='Canvas height (max 25)')
        p.add_argument('-x', '--x', type=int, help='Cell column')
        p.add_argument('-y', '--y', type=int, help='Cell row')
        p.add_argument('-v', '--value', help='Cell value: palette index 0-15/0-f (v2) or #RRGGBB[AA] (v1)')
        p.add_argument('-b', '--brush', type=int, choices=BRUSH_SIZES, help='Brush size (default: EHEX_BRUSH or 1)')
        p.add_argument('-f', '--format', choices=sorted(codec.CODECS), help='Format for new/import (default: EHEX_FORMAT)')
        p.add_argument('-s', '--scale', type=int, help='Pixel scale for export (default 1)')
        p.add_argument('--fit', action='store_true', help='Crop view output to the terminal size')
        p.add_argument('-l', '--legacy', action='store_true', help='Accept v1 (EHEX) input files')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    # `help` subcommand — prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    # `format` subcommand — prints the EHEX format reference
    sub.add_parser('format', help='Print the EHEX file format reference')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(cmd.doc, cmd.help)}')
        print('\nRun: ehex-tool help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = commands[topic].doc
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _print_format() -> None:
    print((codec.__doc__ or '').strip())


def _run_command(args: argparse.Namespace) -> None:
    cmd = registry.get(args.command)
    args.config = EditorConfig.from_env()

    image: EhexImage | None = None
    if cmd.loads:
        if not args.path:
            raise ValueError(f'{cmd.name} needs an image path')
        legacy = cmd.legacy or args.legacy or args.config.allow_legacy
        image = EhexImage.open(args.path, legacy=legacy)

    report = Report(path=args.path or '')
    if image is not None:
        report.describe(image)

    cmd.execute(image, report, args)

    if cmd.name in _SELF_PRINTING:
        pass  # view prints its own output
    elif args.json:
        print(format_json(report))
    else:
        print(format_text(report))


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'ehex-tool: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    if args.command == 'format':
        _print_format()
        return

    try:
        _run_command(args)
    except (EhexError, OSError, ValueError) as exc:
        print(f'ehex-tool: error: {exc}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
