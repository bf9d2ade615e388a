"""Line-at-a-time access to a text file with one line of lookahead."""

import logging
import types
from typing import Optional, TextIO, Type

from ..exceptions import OpenError
from ..types import PathType

logger = logging.getLogger(__name__)


class LineSource:
    """Sequential line supplier backed by an open text file.

    The source opens its file on construction and reads one line ahead so that the end of
    the stream can be reported without consuming data. Lines are returned without their
    terminator; ``\\n``, ``\\r\\n`` and ``\\r`` are all recognised through universal newline
    translation.

    Args:
        path: Path of the text file to open.
        encoding: Text encoding used to decode the file. Defaults to UTF-8.
        errors: Decode error handler passed to ``open()``. Defaults to ``"strict"``.

    Raises:
        OpenError: If the file cannot be opened, the encoding is unknown, or the first
            chunk of the file cannot be decoded.

    Example:
        >>> with LineSource('notes.txt') as source:  # doctest: +SKIP
        ...     while not source.at_end_of_stream():
        ...         print(source.read_line())
    """

    def __init__(self, path: PathType, encoding: str = "utf-8", errors: str = "strict") -> None:
        self._path = path
        self._lookahead: Optional[str] = None

        try:
            self._file: TextIO = open(path, "r", encoding=encoding, errors=errors)
        except (OSError, LookupError) as e:
            raise OpenError(path, str(e)) from e

        # Decode the first chunk now so a wrong encoding fails at open time
        try:
            self._peek()
        except (UnicodeError, LookupError) as e:
            self._file.close()
            raise OpenError(path, f"cannot decode as {encoding}: {e}") from e

        logger.debug("Opened %s with encoding %s", path, self._file.encoding)

    @property
    def path(self) -> PathType:
        """Path the source was opened from."""
        return self._path

    @property
    def encoding(self) -> str:
        """Name of the encoding used to decode the file."""
        return self._file.encoding

    @property
    def closed(self) -> bool:
        """True once ``close()`` has been called."""
        return self._file.closed

    def _peek(self) -> str:
        if self._file.closed:
            raise ValueError("I/O operation on closed line source")
        if self._lookahead is None:
            self._lookahead = self._file.readline()
        return self._lookahead

    def read_line(self) -> Optional[str]:
        """Read the next line.

        Returns:
            The next line without its terminator, or None at end of stream.

        Raises:
            ValueError: If the source has been closed.
            UnicodeDecodeError: If the line cannot be decoded under a strict error handler.
        """
        line = self._peek()
        if not line:
            return None
        self._lookahead = None
        if line.endswith("\n"):
            return line[:-1]
        return line

    def at_end_of_stream(self) -> bool:
        """Return True if no further line can be read."""
        return self._peek() == ""

    def skip(self, count: int) -> int:
        """Discard up to ``count`` lines.

        Args:
            count: Number of lines to skip. Non-positive values skip nothing.

        Returns:
            The number of lines actually skipped, which is smaller than ``count`` when the
            end of the stream is reached first.
        """
        skipped = 0
        while skipped < count and self.read_line() is not None:
            skipped += 1
        return skipped

    def close(self) -> None:
        """Close the underlying file. Calling it again has no effect."""
        if not self._file.closed:
            self._file.close()
            self._lookahead = None
            logger.debug("Closed %s", self._path)

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()
