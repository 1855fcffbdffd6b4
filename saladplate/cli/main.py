"""Main CLI entry point for saladplate."""

import argparse
import sys
from typing import Optional

from saladplate import BIN, __version__
from .commands import render_files


def create_parser(prog: str = BIN) -> argparse.ArgumentParser:
    """Create the argument parser for the saladplate CLI."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description='Replace ${{ VAR }}, $<< file >> and $(( command )) markers in text files',
    )

    parser.add_argument(
        'files',
        nargs='*',
        metavar='FILE',
        help="Files to template; use '-' for stdin"
    )
    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        metavar='FILE',
        help='Output file; overrides --directory and --suffix'
    )
    parser.add_argument(
        '-d', '--directory',
        type=str,
        metavar='DIR',
        help='Output directory'
    )
    parser.add_argument(
        '-s', '--suffix',
        type=str,
        help='Output suffix; only applies when using --directory'
    )
    parser.add_argument(
        '--config',
        type=str,
        metavar='PATH',
        help='Path to a YAML options file'
    )
    parser.add_argument(
        '--env',
        action='append',
        metavar='KEY=VALUE',
        help='Extra variables (can be specified multiple times)'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warning', 'error'],
        default='warning',
        help='Set log level'
    )

    return parser


def main(args: Optional[list] = None, prog: str = BIN) -> int:
    """Main entry point for the CLI."""
    parser = create_parser(prog)
    parsed_args = parser.parse_args(args)

    if parsed_args.version:
        print(f"{prog}: version {__version__}")
        return 0

    if not parsed_args.files:
        print(f"{prog}: no input files; use - for stdin", file=sys.stderr)
        parser.print_help()
        return 1

    return render_files(parsed_args)


def simplate() -> int:
    """Entry point for the ``simplate`` alias."""
    return main(prog='simplate')


if __name__ == '__main__':
    sys.exit(main())
