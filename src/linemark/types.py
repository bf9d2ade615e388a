from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class BookmarkState(str, Enum):
    """State of the bookmark protocol that decides where each line comes from.

    Values:
        NONE: Lines are read straight from the live source
        WRITING: Lines are delivered and recorded into the bookmark buffer at the same time
        READING: Lines are replayed from the bookmark buffer
    """

    NONE = "none"
    WRITING = "writing"
    READING = "reading"
