"""Command-line interface for linemark.

Streams the lines of a text file to stdout or to a file through a
:class:`~linemark.bookmarked_reader.BookmarkedReader`.

Exit Codes:
    0: Successful completion
    1: Runtime error (unreadable file, bad encoding, invalid arguments)
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Print lines 3 to 12 with their numbers
    $ linemark -s 2 -m 10 -n notes.txt
"""

import logging
import sys
from typing import Optional

from linemark.bookmarked_reader import BookmarkedReader
from linemark.cli.argparser import create_parser, validate_args
from linemark.cli.line_writer import LineWriter
from linemark.cli.signal_handler import setup_signal_handling, signal_handler


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when ``verbose`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def stream_lines(reader: BookmarkedReader, writer: LineWriter, skip: int = 0, max_lines: Optional[int] = None) -> int:
    """Copy lines from ``reader`` to ``writer``.

    Args:
        reader: Open reader positioned at the start of the file.
        writer: Destination for the lines.
        skip: Number of leading lines to skip.
        max_lines: Maximum number of lines to write, or None for no limit.

    Returns:
        The number of lines written.
    """
    skipped = reader.seek(skip)
    count = 0
    while (max_lines is None or count < max_lines) and reader.has_next():
        line = reader.read_next_line()
        writer.write_line(line, skipped + reader.current_line)
        count += 1
    return count


def main() -> None:
    """Main entry point for the linemark command-line interface."""
    setup_signal_handling()

    try:
        parser = create_parser()
        args = parser.parse_args()
        validate_args(args)
        configure_logging(args.verbose)

        with BookmarkedReader(args.file, encoding=args.encoding, errors=args.errors) as reader:
            output = args.output if args.output else sys.stdout.fileno()
            with LineWriter(output, number_lines=args.number) as writer:
                try:
                    count = stream_lines(reader, writer, args.skip, args.max_lines)

                    if args.summary == "stdout":
                        writer.write(f"Lines read: {count}\n")
                    elif args.summary == "stderr":
                        print(f"Lines read: {count}", file=sys.stderr)

                except BrokenPipeError:
                    pass  # LineWriter closes in the context manager

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
