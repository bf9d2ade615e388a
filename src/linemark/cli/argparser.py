"""Command-line argument parsing for linemark."""

import argparse
from pathlib import Path

from linemark import __version__

ERROR_HANDLERS = ["strict", "replace", "ignore", "backslashreplace"]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with linemark's options.
    """
    description = """
    linemark: stream the lines of a text file.

    Lines are read one at a time through a bookmark-aware reader, so memory use stays
    constant regardless of file size. The file can be decoded with any encoding Python
    knows, and leading lines can be skipped without being printed.
    """

    epilog = """
    Examples:
      # Print a file
      linemark notes.txt

      # Read a legacy Cyrillic file
      linemark -E cp1251 lines.txt

      # Skip a two-line header and number the remaining lines
      linemark -s 2 -n data.csv

      # First ten lines, replacing undecodable bytes
      linemark -m 10 --errors replace dump.log

      # Write to a file and report how many lines were read
      linemark -o copy.txt --summary stderr notes.txt
    """

    parser = argparse.ArgumentParser(
        prog="linemark",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"linemark {__version__}", help="Show the version and exit"
    )
    parser.add_argument("file", type=Path, help="The text file to read.")
    parser.add_argument(
        "-E",
        "--encoding",
        default="utf-8",
        help="Text encoding of the file (default: utf-8).",
    )
    parser.add_argument(
        "--errors",
        choices=ERROR_HANDLERS,
        default="strict",
        help="How to handle bytes that cannot be decoded (default: strict).",
    )
    parser.add_argument(
        "-s",
        "--skip",
        type=int,
        default=0,
        metavar="N",
        help="Skip the first N lines of the file.",
    )
    parser.add_argument(
        "-m",
        "--max-lines",
        type=int,
        metavar="N",
        help="Stop after printing N lines.",
    )
    parser.add_argument(
        "-n",
        "--number",
        action="store_true",
        help="Prefix each line with its line number in the file.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print the number of lines read. Valid destinations: stderr, stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log reader activity to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse checks.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If a count is negative.
    """
    if args.skip < 0:
        raise ValueError("--skip must not be negative")
    if args.max_lines is not None and args.max_lines < 0:
        raise ValueError("--max-lines must not be negative")
