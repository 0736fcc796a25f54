from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    INVALID_ARGUMENT = "invalid_argument"
    OUT_OF_RANGE = "out_of_range"


class ColoringError(Exception):
    """Base class for every error raised by gcp_search.

    The ``kind`` attribute tells callers which failure class they got without
    inspecting the message.
    """

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT


class InvalidArgumentError(ColoringError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class OutOfRangeError(ColoringError, IndexError):
    kind = ErrorKind.OUT_OF_RANGE


class GraphFormatError(InvalidArgumentError):
    """Malformed graph file content."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
