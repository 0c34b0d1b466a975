"""palette-lut: decode and materialize Palette Color Lookup Tables.

Usage: palette-lut [--env-file PATH] [-v] <command> [options]

Commands are auto-discovered from palette_lut/commands/.
Each command module's docstring is its documentation.
Run `palette-lut help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, palette-lut looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import os
import sys

from palette_lut import registry
from palette_lut.core.env import load_env, load_settings
from palette_lut.core.report import format_json, format_text
from palette_lut.core.types import Report

logger = logging.getLogger('palette_lut')


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'palette_lut.commands.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  palette-lut colormap VIRIDIS --bins 16\n'
        '  palette-lut colormap HOT --table --bits 16 --json\n'
        '  palette-lut expand -n 4 -w 8 0 1 10 1 3 20\n'
        '  palette-lut table palette.json\n'
        '  palette-lut help expand\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  PALETTE_LUT_COLORMAP  default colormap name (GRAY)\n'
        '  PALETTE_LUT_BINS      default number of colormap bins (256)\n'
        '  PALETTE_LUT_FORMAT    text or json (text)\n'
    )
    parser = argparse.ArgumentParser(
        prog='palette-lut',
        description='Decode and materialize Palette Color Lookup Tables.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug output to stderr')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        cmd.configure(p)

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: palette-lut help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(name)s: %(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    # Load .env before anything else, OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'palette-lut: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    path = getattr(args, 'path', None)
    if path not in (None, '-') and not os.path.isfile(path):
        print(f'Error: file not found: {path}', file=sys.stderr)
        sys.exit(1)

    report = Report()
    try:
        args.settings = load_settings()
        registry.get(args.command).execute(args, report)
    except ValueError as exc:
        logger.debug('command %s failed', args.command, exc_info=True)
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)

    if args.json or args.settings.output_format == 'json':
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
