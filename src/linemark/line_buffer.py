"""Layered line storage backing bookmark replay."""

from collections import deque
from typing import Deque, List

from .exceptions import EmptyBufferError


class BookmarkedLineBuffer:
    """FIFO buffer of recorded lines with a stack of older, partly replayed layers.

    Lines written while a bookmark is recording go to the main layer and are later read
    back in the order they were written. If a new recording starts while the main layer
    still holds unread lines, that layer is pushed onto an auxiliary stack instead of
    being discarded. Its lines are then "pending": they are either drained through
    ``read_pending_line()`` or promoted back to the main layer once the main layer runs
    dry, so chronological order is kept across layer boundaries.

    Every layer on the auxiliary stack is non-empty; a layer is dropped as soon as its
    last line is taken.

    Example:
        >>> buffer = BookmarkedLineBuffer()
        >>> buffer.start_writing()
        >>> buffer.write_line("a")
        >>> buffer.write_line("b")
        >>> buffer.read_line()
        'a'
        >>> buffer.levels_count()
        1
    """

    def __init__(self) -> None:
        self._main: Deque[str] = deque()
        self._aux: List[Deque[str]] = []

    def clear(self) -> None:
        """Discard every layer."""
        self._main = deque()
        self._aux.clear()

    def start_writing(self) -> None:
        """Begin a new recording layer.

        Unread lines already in the main layer are demoted onto the auxiliary stack and a
        fresh main layer takes their place.
        """
        if self._main:
            self._aux.append(self._main)
            self._main = deque()

    def write_line(self, line: str) -> None:
        """Append a line to the tail of the main layer."""
        self._main.append(line)

    def read_pending_line(self) -> str:
        """Take the oldest line of the newest auxiliary layer.

        Returns:
            The line recorded before the current recording began.

        Raises:
            EmptyBufferError: If there are no pending lines.
        """
        if not self._aux:
            raise EmptyBufferError("No pending lines in bookmark buffer")
        top = self._aux[-1]
        line = top.popleft()
        if not top:
            self._aux.pop()
        return line

    def read_line(self) -> str:
        """Take the oldest line of the main layer.

        When this empties the main layer, the newest auxiliary layer becomes the main
        layer so later reads continue into older recorded data.

        Returns:
            The replayed line.

        Raises:
            EmptyBufferError: If the main layer is empty.
        """
        if not self._main:
            raise EmptyBufferError()
        line = self._main.popleft()
        if not self._main and self._aux:
            self._main = self._aux.pop()
        return line

    def has_pending_lines(self) -> bool:
        """Return True if any auxiliary layer still holds lines."""
        return bool(self._aux)

    def is_empty(self) -> bool:
        """Return True if the main layer holds no lines."""
        return not self._main

    def levels_count(self) -> int:
        """Number of non-empty layers, main layer included."""
        return (1 if self._main else 0) + len(self._aux)

    def __len__(self) -> int:
        return len(self._main) + sum(len(layer) for layer in self._aux)
