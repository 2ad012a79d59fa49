"""
File access service for the VividMark editor.

Reads documents into memory, writes them back to disk and answers whether a
path is an existing regular file. Every operation is synchronous, runs a
bounded number of syscalls with no retries, and logs timed diagnostics:

- read_file: canonical path, metadata before reading, throughput on success,
  classified error plus parent-directory state on failure
- save_file: parent directory creation, metadata of the file being replaced,
  write timing, post-write size verification
- file_exists: raw existence and regular-file flags at debug level

Failures are logged with full classification at error level, then raised as
FileAccessError carrying the concise ``"Failed to <verb> file: <error>"``
message the editor shows to the user.
"""

from __future__ import annotations

import errno
import os
import stat
import time

from core.constants import (
    DISK_SPACE_HINT,
    DOCUMENT_ENCODING,
    ERROR_CREATE_DIR_PREFIX,
    ERROR_READ_PREFIX,
    ERROR_SAVE_PREFIX,
    ERROR_VERIFY_PREFIX,
    LOG_PREVIEW_LENGTH,
    Settings,
)
from models.error_models import FileAccessError, FileErrorKind
from models.file_models import FileMetadataSnapshot, FileRecord, PermissionDescriptor, SaveOutcome
from utils.file_utils import (
    derive_display_name,
    describe_age,
    is_markdown_document,
    parent_directory,
    preview,
    resolve_for_diagnostics,
)
from utils.logger import logger

OP_READ = "read_file"
OP_SAVE = "save_file"
OP_EXISTS = "file_exists"
OP_CREATE_DIR = "create_dir"

_ERRNO_KINDS: dict[int, FileErrorKind] = {
    errno.ENOENT: FileErrorKind.NOT_FOUND,
    errno.EACCES: FileErrorKind.PERMISSION_DENIED,
    errno.EPERM: FileErrorKind.PERMISSION_DENIED,
    errno.EINVAL: FileErrorKind.INVALID_INPUT,
    errno.ENAMETOOLONG: FileErrorKind.INVALID_INPUT,
    errno.ENOMEM: FileErrorKind.OUT_OF_MEMORY,
}


class WriteZeroError(OSError):
    """The OS accepted a write call but stored no bytes."""


def classify_error(error: BaseException) -> FileErrorKind:
    """Map an exception raised by a file syscall onto a FileErrorKind."""
    # UnicodeError is a ValueError subclass, so it must be checked first
    if isinstance(error, UnicodeError):
        return FileErrorKind.INVALID_DATA
    if isinstance(error, WriteZeroError):
        return FileErrorKind.WRITE_ZERO
    if isinstance(error, EOFError):
        return FileErrorKind.UNEXPECTED_EOF
    if isinstance(error, MemoryError):
        return FileErrorKind.OUT_OF_MEMORY
    if isinstance(error, FileNotFoundError):
        return FileErrorKind.NOT_FOUND
    if isinstance(error, PermissionError):
        return FileErrorKind.PERMISSION_DENIED
    if isinstance(error, ValueError):
        # e.g. "embedded null byte" in the path
        return FileErrorKind.INVALID_INPUT
    if isinstance(error, OSError) and error.errno is not None:
        return _ERRNO_KINDS.get(error.errno, FileErrorKind.UNKNOWN)
    return FileErrorKind.UNKNOWN


def raw_error_kind(error: BaseException) -> str:
    """Exception type plus symbolic errno, e.g. ``FileNotFoundError/ENOENT``."""
    name = type(error).__name__
    code = getattr(error, "errno", None)
    if isinstance(code, int) and code in errno.errorcode:
        return f"{name}/{errno.errorcode[code]}"
    return name


def classify(operation: str, path: str, error: BaseException) -> str:
    """Build the full diagnostic message for a failed operation.

    Args:
        operation: Operation name (``read_file``, ``save_file``, ``create_dir``)
        path: Path the operation ran against
        error: Exception raised by the syscall

    Returns:
        Message embedding operation, path, category label, raw kind and description
    """
    kind = classify_error(error)
    return f"[{operation}] {kind.label}: {path} (kind={raw_error_kind(error)}, error={error})"


def permission_descriptor(st_mode: int, posix: bool | None = None) -> PermissionDescriptor:
    """Describe permissions from ``st_mode``: octal bits on POSIX, read-only flag elsewhere."""
    if posix is None:
        posix = os.name == "posix"
    if posix:
        return PermissionDescriptor(mode=stat.S_IMODE(st_mode))
    return PermissionDescriptor(readonly=not st_mode & stat.S_IWRITE)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


class FileAccessService:
    """Reads, saves and checks editor documents on the local filesystem.

    The service keeps no state between calls beyond its configuration. Callers
    serialize operations on the same path; concurrent writers race at the OS
    level and the last write wins.
    """

    def __init__(self, strict_write_verification: bool = False):
        self.strict_write_verification = strict_write_verification

    @classmethod
    def from_settings(cls, settings: Settings) -> FileAccessService:
        """Create a service configured from validated settings."""
        return cls(strict_write_verification=settings.strict_write_verification)

    # ------------------------------------------------------------------
    # Diagnostics helpers
    # ------------------------------------------------------------------

    def snapshot(self, path: str) -> FileMetadataSnapshot | None:
        """Stat ``path`` for logging. Returns None if the stat fails; never raises."""
        try:
            st = os.stat(path)
        except (OSError, ValueError):
            return None
        return FileMetadataSnapshot(
            size=st.st_size,
            permissions=permission_descriptor(st.st_mode),
            modified=describe_age(st.st_mtime),
            is_file=stat.S_ISREG(st.st_mode),
        )

    def _log_parent_state(self, operation: str, path: str) -> None:
        parent = parent_directory(path)
        if parent is None:
            return
        if parent.is_dir():
            logger.info(f"Parent directory exists: {parent}", operation=operation, path=path)
        else:
            logger.warning(f"Parent directory does not exist: {parent}", operation=operation, path=path)

    def _fail(self, operation: str, path: str, prefix: str, error: BaseException) -> FileAccessError:
        kind = classify_error(error)
        logger.error(classify(operation, path, error), operation=operation, path=path, kind=kind.value)
        return FileAccessError(f"{prefix}: {error}", kind, operation, path)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def read_file(self, path: str) -> FileRecord:
        """Read a UTF-8 document.

        Args:
            path: Path to read, used as given

        Returns:
            FileRecord with the exact decoded content and display name

        Raises:
            FileAccessError: If the file cannot be read or is not valid UTF-8
        """
        started = time.perf_counter()
        logger.info(f"Reading file: {path}", operation=OP_READ, path=path)

        canonical = resolve_for_diagnostics(path)
        if canonical is not None:
            logger.debug(f"Canonical path: {canonical}", operation=OP_READ, path=path)

        before = self.snapshot(path)
        if before is None:
            logger.warning(f"Metadata unavailable before read: {path}", operation=OP_READ, path=path)
        else:
            logger.debug(f"Metadata before read: {before.describe()}", operation=OP_READ, path=path)

        if not is_markdown_document(path):
            logger.debug(f"Opening non-markdown document: {path}", operation=OP_READ, path=path)

        try:
            with open(path, "rb") as handle:
                data = handle.read()
            content = data.decode(DOCUMENT_ENCODING)
        except (OSError, ValueError, EOFError, MemoryError) as e:
            error = self._fail(OP_READ, path, ERROR_READ_PREFIX, e)
            self._log_parent_state(OP_READ, path)
            raise error from e

        record = FileRecord(path=path, content=content, name=derive_display_name(path))
        logger.debug(f"Content preview: {preview(content, LOG_PREVIEW_LENGTH)}", operation=OP_READ, path=path)
        logger.log_operation(OP_READ, path, _elapsed_ms(started), len(data))
        return record

    def save_file(self, path: str, content: str) -> SaveOutcome:
        """Write ``content`` to ``path``, replacing any existing content.

        Missing parent directories are created first. The write is not atomic:
        a crash mid-write can leave a partially written file.

        Args:
            path: Destination path
            content: Text to write (any size, including empty)

        Returns:
            SaveOutcome with success=True

        Raises:
            FileAccessError: If the parent directory cannot be created, the
                write fails, or (in strict mode) the saved size does not match
        """
        started = time.perf_counter()
        logger.info(f"Saving file: {path} ({len(content):,} chars)", operation=OP_SAVE, path=path)

        parent = parent_directory(path)
        if parent is not None and not parent.is_dir():
            logger.info(f"Creating missing parent directory: {parent}", operation=OP_SAVE, path=path)
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except (OSError, ValueError) as e:
                logger.error(
                    classify(OP_CREATE_DIR, str(parent), e),
                    operation=OP_SAVE,
                    path=path,
                    kind=FileErrorKind.DIRECTORY_CREATION_FAILED.value,
                )
                raise FileAccessError(
                    f"{ERROR_CREATE_DIR_PREFIX}: {e}",
                    FileErrorKind.DIRECTORY_CREATION_FAILED,
                    OP_SAVE,
                    path,
                ) from e

        if os.path.exists(path):
            before = self.snapshot(path)
            if before is not None:
                logger.debug(f"Overwriting existing file: {before.describe()}", operation=OP_SAVE, path=path)
        else:
            logger.debug(f"Creating new file: {path}", operation=OP_SAVE, path=path)

        try:
            # Encode before opening so unencodable text never truncates the file
            data = content.encode(DOCUMENT_ENCODING)
            write_started = time.perf_counter()
            with open(path, "wb") as handle:
                written = handle.write(data)
            if data and not written:
                raise WriteZeroError(f"wrote 0 of {len(data)} bytes")
            write_ms = _elapsed_ms(write_started)
        except (OSError, ValueError, MemoryError) as e:
            error = self._fail(OP_SAVE, path, ERROR_SAVE_PREFIX, e)
            if error.kind is FileErrorKind.UNKNOWN:
                logger.warning(DISK_SPACE_HINT, operation=OP_SAVE, path=path)
            raise error from e

        self._verify_size(path, len(data))

        logger.log_operation(OP_SAVE, path, _elapsed_ms(started), len(data), detail=f"[write {write_ms:.2f}ms]")
        return SaveOutcome(success=True, error=None)

    def _verify_size(self, path: str, expected: int) -> None:
        after = self.snapshot(path)
        if after is None:
            logger.warning(f"Metadata unavailable after save: {path}", operation=OP_SAVE, path=path)
            return
        if after.size == expected:
            logger.debug(f"Size verified: {expected} bytes", operation=OP_SAVE, path=path)
            return

        detail = f"expected {expected} bytes, found {after.size} bytes on disk"
        if self.strict_write_verification:
            kind = FileErrorKind.WRITE_VERIFICATION_FAILED
            logger.error(f"[{OP_SAVE}] {kind.label}: {path} ({detail})", operation=OP_SAVE, path=path, kind=kind.value)
            raise FileAccessError(f"{ERROR_VERIFY_PREFIX}: {detail}", kind, OP_SAVE, path)
        logger.warning(f"Size mismatch after save: {path} ({detail})", operation=OP_SAVE, path=path)

    def file_exists(self, path: str) -> bool:
        """Check that ``path`` exists and is a regular file.

        Directories and other special paths return False. Never raises.
        """
        exists = os.path.exists(path)
        is_file = os.path.isfile(path)
        logger.debug(f"file_exists: {path} exists={exists} is_file={is_file}", operation=OP_EXISTS, path=path)
        return exists and is_file
