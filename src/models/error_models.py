"""
Error taxonomy for VividMark file operations.

Maps low-level OS failures onto a small set of stable categories so operators
get actionable logs while the editor receives a concise message.
"""

from __future__ import annotations

from enum import Enum


class FileErrorKind(str, Enum):
    """Stable categories for file operation failures."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    INVALID_INPUT = "invalid_input"
    INVALID_DATA = "invalid_data"
    WRITE_ZERO = "write_zero"
    UNEXPECTED_EOF = "unexpected_eof"
    OUT_OF_MEMORY = "out_of_memory"
    DIRECTORY_CREATION_FAILED = "directory_creation_failed"
    WRITE_VERIFICATION_FAILED = "write_verification_failed"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human-readable label used in diagnostics."""
        return _LABELS[self]


_LABELS: dict[FileErrorKind, str] = {
    FileErrorKind.NOT_FOUND: "File not found",
    FileErrorKind.PERMISSION_DENIED: "Permission denied",
    FileErrorKind.INVALID_INPUT: "Invalid input (malformed path or argument)",
    FileErrorKind.INVALID_DATA: "Invalid data (content is not valid UTF-8)",
    FileErrorKind.WRITE_ZERO: "Write returned zero bytes",
    FileErrorKind.UNEXPECTED_EOF: "Unexpected end of data",
    FileErrorKind.OUT_OF_MEMORY: "Out of memory",
    FileErrorKind.DIRECTORY_CREATION_FAILED: "Could not create parent directory",
    FileErrorKind.WRITE_VERIFICATION_FAILED: "Saved size does not match content",
    FileErrorKind.UNKNOWN: "Unknown error",
}


class FileAccessError(Exception):
    """Raised when a read or save cannot complete.

    ``message`` is the concise caller-facing text, e.g.
    ``"Failed to read file: [Errno 2] No such file or directory: 'notes.md'"``.
    The full classification has already been logged when this is raised.

    Attributes:
        message: Caller-facing error message
        kind: Classified failure category
        operation: Operation that failed (``read_file`` / ``save_file``)
        path: Path the operation was invoked with
    """

    def __init__(self, message: str, kind: FileErrorKind, operation: str, path: str) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.operation = operation
        self.path = path

    def __str__(self) -> str:
        return self.message


__all__ = [
    "FileAccessError",
    "FileErrorKind",
]
