"""
File value types exchanged between the editor and the file access service.

FileRecord and SaveOutcome cross the IPC boundary and are Pydantic models.
The metadata snapshot is diagnostic only and never leaves the backend.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


class FileRecord(BaseModel):
    """A document read from disk.

    Attributes:
        path: Path exactly as requested by the caller
        content: Decoded UTF-8 text, byte-for-byte (no newline translation)
        name: Final path segment, or the default document name
    """

    path: str
    content: str
    name: str


class SaveOutcome(BaseModel):
    """Result of a successful save.

    Failures are raised as FileAccessError, so ``success`` is always True and
    ``error`` always None. The shape is kept for the editor, which checks
    ``result.success`` before clearing its dirty flag.
    """

    success: bool = True
    error: str | None = None


@dataclass(frozen=True, slots=True)
class PermissionDescriptor:
    """Platform-neutral view of file permissions.

    POSIX platforms carry the permission bits (``mode``); elsewhere only the
    read-only flag is meaningful.
    """

    mode: int | None = None
    readonly: bool = False

    def __str__(self) -> str:
        if self.mode is not None:
            return f"{self.mode:o}"
        return f"readonly: {str(self.readonly).lower()}"


@dataclass(frozen=True, slots=True)
class FileMetadataSnapshot:
    """Point-in-time stat of a path, used only for logging."""

    size: int
    permissions: PermissionDescriptor | None
    modified: str | None
    is_file: bool

    def describe(self) -> str:
        """One-line summary for log messages."""
        perms = str(self.permissions) if self.permissions is not None else "unknown"
        modified = self.modified or "unknown"
        return f"size={self.size} bytes, permissions={perms}, modified={modified}, is_file={self.is_file}"


__all__ = [
    "FileMetadataSnapshot",
    "FileRecord",
    "PermissionDescriptor",
    "SaveOutcome",
]
