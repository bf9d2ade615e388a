from typing import Optional

from .types import PathType


class OpenError(Exception):
    """
    Exception raised when a line source cannot be opened for reading.

    This covers missing or unreadable paths, unknown encodings, and content that cannot be
    decoded with the requested encoding when the first chunk of the file is read. It is fatal
    to construction; the reader does not retry.

    Attributes:
        path (str): Path that failed to open.
        reason (str): Short description of the underlying failure.

    Example:
        >>> error = OpenError("/no/such/file.txt", "No such file or directory")
        >>> str(error)
        'Cannot open /no/such/file.txt: No such file or directory'
    """

    def __init__(self, path: PathType, reason: str) -> None:
        """
        Initialize the exception with the failing path and reason.

        Args:
            path (PathType): Path that failed to open.
            reason (str): Short description of the underlying failure.
        """
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot open {self.path}: {reason}")


class EndOfStreamError(Exception):
    """
    Exception raised when a line is requested after the last available line.

    Callers are expected to check ``has_next()`` before reading; hitting this exception
    means the reader was misused rather than that a transient fault occurred.

    Attributes:
        line_number (Optional[int]): Number of lines delivered when the read was attempted.

    Example:
        >>> str(EndOfStreamError(4))
        'End of stream reached after 4 lines'
    """

    def __init__(self, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is None:
            message = "End of stream reached"
        else:
            message = f"End of stream reached after {line_number} lines"
        super().__init__(message)


class EmptyBufferError(Exception):
    """
    Exception raised when a line is taken from an empty bookmark buffer layer.

    A correctly sequenced reader never triggers this; seeing it indicates a bug in the
    bookmark state handling rather than a recoverable condition.

    Example:
        >>> str(EmptyBufferError())
        'Bookmark buffer is empty'
    """

    def __init__(self, message: str = "Bookmark buffer is empty") -> None:
        super().__init__(message)


class IllegalStateError(Exception):
    """
    Exception raised when an operation is invoked in a state that forbids it.

    The reader raises it for any read, seek, bookmark or reset request made after
    ``close()``.

    Example:
        >>> str(IllegalStateError("Reader is closed"))
        'Reader is closed'
    """

    pass
