"""thread-match — Map colours onto a thread palette by perceptual similarity.

Usage: thread-match <command> VALUES... [options]

Commands are auto-discovered from thread_matcher/commands/.
Each command module's docstring is its documentation.
Run `thread-match help <command>` for full module docs.

Palette:
  --palette PATH, else THREAD_MATCH_PALETTE, else the bundled generic set.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, thread-match looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys

from thread_matcher import registry
from thread_matcher.core.catalog import Palette, PaletteError, builtin_palette, load_palette
from thread_matcher.core.env import Settings, load_env, load_settings
from thread_matcher.core.report import MatchReport, format_json, format_text
from thread_matcher.core.types import DistanceMethod

# Commands that need at least one value
_VALUES_REQUIRED = {'match', 'batch', 'distance', 'image', 'lookup'}


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'thread_matcher.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid int value: {text!r}') from None
    if value < 1:
        raise argparse.ArgumentTypeError(f'must be at least 1, got {value}')
    return value


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  thread-match match FF5733 "#1a1a1a"\n'
        '  thread-match batch 000000 050505 FFFFFF --json\n'
        '  thread-match batch 000000 050505 --allow-duplicates\n'
        '  thread-match distance 646464 GEN-000 --method cie94\n'
        '  thread-match image photo.png --colors 12 --palette dmc.json\n'
        '  thread-match lookup gray\n'
        '  thread-match match FF5733 --max-distance=10\n'
        '  thread-match help batch\n'
        '\n'
        'Environment (set in .env or environment):\n'
        '  THREAD_MATCH_PALETTE  palette JSON path\n'
        '  THREAD_MATCH_METHOD   cielab | cie94 | rgb\n'
    )
    parser = argparse.ArgumentParser(
        prog='thread-match',
        description='Map colours onto a thread palette by perceptual similarity.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging on stderr')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('values', nargs='*', help='Hex colours, an image path, or search queries')
        p.add_argument('-p', '--palette', help='Palette JSON file (overrides THREAD_MATCH_PALETTE)')
        p.add_argument(
            '-m',
            '--method',
            choices=[m.value for m in DistanceMethod],
            default=None,
            help='Distance method (default: THREAD_MATCH_METHOD or cielab)',
        )
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument(
            '-u',
            '--allow-duplicates',
            action='store_true',
            help='batch/image: let several colours share one thread',
        )
        p.add_argument('-n', '--colors', type=_positive_int, default=8, metavar='N', help='image: number of colours')
        p.add_argument(
            '-f',
            '--fabric-count',
            type=_positive_int,
            default=14,
            metavar='N',
            help='image: fabric count for skein estimates',
        )
        p.add_argument(
            '-d',
            '--max-distance',
            type=float,
            default=None,
            metavar='N',
            help='Exit 1 if any matched distance exceeds N (CI gating)',
        )

    # `help` subcommand prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: thread-match help <command> for full docs.')
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


def _check_max_distance(report: MatchReport, threshold: float) -> bool:
    """Return True if any matched distance exceeds threshold."""
    failures = [row for row in report.rows if row.get('distance', 0.0) > threshold]
    if failures:
        print(f'\nFAIL: {len(failures)} match(es) exceeded distance threshold {threshold}:')
        for row in failures:
            print(f'  {row["input"]} → {row["id"]}: Δ={row["distance"]:.4f}')
        return True
    return False


def _resolve_palette(args: argparse.Namespace, settings: Settings) -> Palette:
    path = args.palette or settings.palette_path
    if path:
        return load_palette(path)
    return builtin_palette()


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'thread-match: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    if args.command in _VALUES_REQUIRED and not args.values:
        parser.error(f'{args.command}: at least one value is required')

    settings = load_settings()
    args.method = DistanceMethod(args.method) if args.method else settings.method

    try:
        palette = _resolve_palette(args, settings)
    except PaletteError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    report = MatchReport(palette_name=palette.name, method=args.method.value)

    cmd = registry.get(args.command)
    try:
        cmd.execute(palette, report, args)
    except OSError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # CI gate — must happen after output so report is visible even on failure
    if args.max_distance is not None and _check_max_distance(report, args.max_distance):
        sys.exit(1)


if __name__ == '__main__':
    main()
