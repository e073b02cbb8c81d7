"""Error kind constants for runlink errors.

These constants prevent stringly-typed error kinds and let callers
branch on the category of a failure without matching exception types.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    # Bad input detected before any I/O
    CONFIGURATION = "CONFIGURATION"

    # Filesystem or process failures
    IO = "IO"

    # Paths or captured streams that are not valid text
    ENCODING = "ENCODING"
