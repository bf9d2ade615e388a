"""Bookmark-aware sequential reading of text files.

This module implements the reader that sits between a caller and a :class:`LineSource`.
A caller may mark its current position with :meth:`BookmarkedReader.save_bookmark`, keep
reading, and later return to the mark with :meth:`BookmarkedReader.restore_bookmark`. The
lines read in between are replayed from memory; neither the file nor its offset is touched.

Each read is routed by the bookmark state:

- ``NONE``: the line comes straight from the live source.
- ``WRITING``: the line comes from the source (after any pending buffered lines) and is
  also recorded into the buffer.
- ``READING``: the line is replayed from the buffer. Once the buffer drains the state
  returns to ``NONE`` and live reading resumes where it left off.

Only one bookmark exists at a time. Saving is rejected while a bookmark is recording or
replaying, and seeking is rejected whenever the state is not ``NONE``.
"""

import logging
import types
from typing import Iterator, Optional, Type

from .exceptions import EndOfStreamError, IllegalStateError
from .io.line_source import LineSource
from .line_buffer import BookmarkedLineBuffer
from .types import BookmarkState, PathType

logger = logging.getLogger(__name__)


class BookmarkedReader:
    """Reads a text file line by line with single-level bookmark support.

    The file is opened on construction and stays open until :meth:`close` is called or the
    reader is used as a context manager. Iterating over the reader yields the remaining
    lines through the same bookmark protocol as :meth:`read_next_line`.

    Args:
        path: Path of the text file to read.
        encoding: Text encoding of the file. Defaults to UTF-8.
        errors: Decode error handler passed to ``open()``. Defaults to ``"strict"``.

    Raises:
        OpenError: If the file cannot be opened or decoded with ``encoding``.

    Example:
        >>> with BookmarkedReader('grammar.txt') as reader:  # doctest: +SKIP
        ...     reader.save_bookmark()
        ...     header = reader.read_next_line()
        ...     if not header.startswith('#'):
        ...         reader.restore_bookmark()  # the next read returns the same line again
    """

    def __init__(self, path: PathType, encoding: str = "utf-8", errors: str = "strict") -> None:
        self._path = path
        self._requested_encoding = encoding
        self._errors = errors
        self._buffer = BookmarkedLineBuffer()
        self._source: Optional[LineSource] = None
        self._state = BookmarkState.NONE
        self._current_line = 0
        self._bookmarked_line: Optional[int] = None
        self._open()

    def _open(self) -> None:
        self._source = LineSource(self._path, self._requested_encoding, self._errors)
        self._buffer.clear()
        self._state = BookmarkState.NONE
        self._current_line = 0
        self._bookmarked_line = None

    def _require_source(self) -> LineSource:
        if self._source is None:
            raise IllegalStateError(f"Reader for {self._path} is closed")
        return self._source

    def _set_state(self, state: BookmarkState) -> None:
        if state is not self._state:
            logger.debug("Bookmark state %s -> %s at line %d", self._state.name, state.name, self._current_line)
            self._state = state

    def _is_eof(self) -> bool:
        source = self._require_source()
        if self._state is BookmarkState.WRITING:
            return source.at_end_of_stream() and not self._buffer.has_pending_lines()
        elif self._state is BookmarkState.READING:
            return source.at_end_of_stream() and self._buffer.is_empty()
        return source.at_end_of_stream()

    def _read_from_source(self) -> str:
        """Read the next line in file order.

        Lines demoted to the buffer's pending layers were already taken from the file, so
        they come first; only then is the live source consulted.
        """
        if self._buffer.has_pending_lines():
            return self._buffer.read_pending_line()
        return self._read_live()

    def _read_live(self) -> str:
        line = self._require_source().read_line()
        if line is None:
            raise EndOfStreamError(self._current_line)
        return line

    @property
    def path(self) -> PathType:
        """Path of the file being read."""
        return self._path

    @property
    def encoding(self) -> str:
        """Encoding used to decode the file."""
        if self._source is None:
            return self._requested_encoding
        return self._source.encoding

    @property
    def current_line(self) -> int:
        """Number of lines delivered so far, rewound by a successful restore."""
        return self._current_line

    @property
    def bookmarked_line(self) -> Optional[int]:
        """Value of ``current_line`` at the last save, or None if no bookmark was saved."""
        return self._bookmarked_line

    @property
    def bookmark_state(self) -> BookmarkState:
        return self._state

    @property
    def buffered_levels(self) -> int:
        return self._buffer.levels_count()

    @property
    def closed(self) -> bool:
        return self._source is None

    def has_next(self) -> bool:
        """Return True if another line can be read.

        Raises:
            IllegalStateError: If the reader is closed.
        """
        return not self._is_eof()

    def read_next_line(self) -> str:
        """Read the next line, live or replayed depending on the bookmark state.

        Returns:
            The line without its terminator.

        Raises:
            EndOfStreamError: If every line has already been read.
            IllegalStateError: If the reader is closed.
            UnicodeDecodeError: If the line cannot be decoded under a strict error handler.
        """
        if self._is_eof():
            raise EndOfStreamError(self._current_line)

        if self._state is BookmarkState.NONE:
            line = self._read_live()
        elif self._state is BookmarkState.WRITING:
            line = self._read_from_source()
            self._buffer.write_line(line)
        else:
            line = self._buffer.read_line()
            if self._buffer.is_empty():
                # Replay finished, the live source is back at the right position
                self._set_state(BookmarkState.NONE)

        self._current_line += 1
        return line

    def save_bookmark(self) -> bool:
        """Mark the current position so it can be returned to later.

        Returns:
            True if the bookmark was saved. False if a bookmark is already recording or
            being replayed; nothing changes in that case.

        Raises:
            IllegalStateError: If the reader is closed.
        """
        self._require_source()
        if self._state is not BookmarkState.NONE:
            logger.debug("Rejected bookmark at line %d: state is %s", self._current_line, self._state.name)
            return False

        self._buffer.start_writing()
        self._bookmarked_line = self._current_line
        self._set_state(BookmarkState.WRITING)
        logger.debug("Saved bookmark at line %d", self._current_line)
        return True

    def restore_bookmark(self) -> bool:
        """Return to the saved bookmark.

        Lines read since the bookmark was saved are replayed by the following reads.
        If nothing was read since the save there is nothing to replay and the bookmark is
        simply dropped.

        Returns:
            True if the bookmark was restored. False if no bookmark is recording.

        Raises:
            IllegalStateError: If the reader is closed.
        """
        self._require_source()
        if self._state is not BookmarkState.WRITING or self._bookmarked_line is None:
            logger.debug("Rejected restore at line %d: state is %s", self._current_line, self._state.name)
            return False

        if self._buffer.is_empty():
            self._set_state(BookmarkState.NONE)
        else:
            self._set_state(BookmarkState.READING)
            self._current_line = self._bookmarked_line
        logger.debug("Restored bookmark to line %d", self._current_line)
        return True

    def seek(self, count: int) -> int:
        """Skip forward ``count`` lines on the live source.

        ``current_line`` is not advanced, since skipped lines are never delivered.

        Args:
            count: Number of lines to skip.

        Returns:
            The number of lines skipped. Zero if ``count`` is not positive or a bookmark is
            recording or replaying.

        Raises:
            IllegalStateError: If the reader is closed.
        """
        source = self._require_source()
        if count < 1:
            return 0
        if self._state is not BookmarkState.NONE:
            logger.debug("Rejected seek of %d lines: state is %s", count, self._state.name)
            return 0
        skipped = source.skip(count)
        logger.debug("Skipped %d of %d requested lines", skipped, count)
        return skipped

    def reset_position(self) -> None:
        """Reopen the file from the beginning and forget all bookmark data.

        Raises:
            IllegalStateError: If the reader is closed.
            OpenError: If the file cannot be reopened; the reader is left closed.
        """
        self._require_source()
        self.close()
        self._open()
        logger.debug("Reset %s to the beginning", self._path)

    def close(self) -> None:
        """Release the file and clear buffered lines. Calling it again has no effect."""
        if self._source is None:
            return
        try:
            self._source.close()
        finally:
            self._source = None
            self._buffer.clear()
            self._state = BookmarkState.NONE

    def __enter__(self) -> "BookmarkedReader":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if not self.has_next():
            raise StopIteration
        return self.read_next_line()
