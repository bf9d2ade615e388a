"""Bookmark-aware sequential text file reading.

This package provides a line reader that can mark its position, keep reading, and
later rewind to the mark to re-read the same lines from memory, without reopening or
seeking the underlying file.
"""

from importlib.metadata import PackageNotFoundError, version

from .bookmarked_reader import BookmarkedReader
from .exceptions import EmptyBufferError, EndOfStreamError, IllegalStateError, OpenError
from .line_buffer import BookmarkedLineBuffer
from .types import BookmarkState

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("linemark")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "BookmarkState",
    "BookmarkedLineBuffer",
    "BookmarkedReader",
    "EmptyBufferError",
    "EndOfStreamError",
    "IllegalStateError",
    "OpenError",
    "__version__",
]
