"""Signal-aware line output for the linemark command line."""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from linemark.cli.signal_handler import signal_handler


class LineWriter:
    """Writes lines to a file descriptor or a file, stopping cleanly on SIGPIPE or SIGINT.

    Each line is written with a trailing newline and, when numbering is enabled, prefixed
    by its line number and a tab.

    Attributes:
        target: The file descriptor or path given at construction.
        fd: The file descriptor actually written to.
        number_lines: Whether line numbers are written.
    """

    def __init__(self, target: Union[int, str, Path], number_lines: bool = False) -> None:
        """Open the output.

        Args:
            target: A file descriptor, or a path that is opened (and truncated) for writing.
            number_lines: Prefix each line with its number.

        Raises:
            TypeError: If ``target`` is neither a file descriptor nor a path.
        """
        self.target = target
        self.number_lines = number_lines
        self._closed = False

        if isinstance(target, int):
            self.fd = target
            self._file_obj = None
        elif isinstance(target, (str, os.PathLike)):
            self._file_obj = Path(target).open("w", encoding="utf-8")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(target).__name__}")

    def write(self, data: str) -> None:
        """Write raw text.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received or the pipe is closed.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed LineWriter")

        if signal_handler.interrupted():
            raise BrokenPipeError()

        try:
            os.write(self.fd, data.encode("utf-8"))
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def write_line(self, line: str, number: Optional[int] = None) -> None:
        """Write one line followed by a newline.

        Args:
            line: Line text without terminator.
            number: Line number shown when numbering is enabled.
        """
        if self.number_lines and number is not None:
            self.write(f"{number}\t{line}\n")
        else:
            self.write(f"{line}\n")

    def close(self) -> None:
        """Close the file if this writer opened it; a broken pipe on close is ignored."""
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "LineWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block wins over a close failure
            if exc_type is None:
                raise
