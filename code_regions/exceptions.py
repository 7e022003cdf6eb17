"""Package-specific exception types."""

from __future__ import annotations


class ScanError(ValueError):
    """Base class for scanning-related errors.

    Structural marker problems are reported as `RegionError` records in a
    snapshot; this hierarchy covers documents that cannot be scanned at all.
    """


class LineTooLongError(ScanError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )


class TooManyMarkersError(ScanError):
    """Raised when a document contains more region markers than allowed.

    Args:
        limit: Maximum number of markers permitted.
    """

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Too many region markers (limit: {self.limit})")
