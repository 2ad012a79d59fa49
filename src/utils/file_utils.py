"""
Path and formatting helpers for VividMark file operations.
Pure functions with no logging; the file access service builds on them.
"""

from __future__ import annotations

import time

from pathlib import Path, PurePath

from core.constants import DEFAULT_DOCUMENT_NAME, MARKDOWN_EXTENSIONS


def derive_display_name(path: str) -> str:
    """Return the final path segment, or the default document name.

    A path with no extractable final segment (empty, a filesystem root, a
    trailing separator, or ending in ``.``/``..``) yields ``"Untitled.md"``.

    Args:
        path: Path as given by the caller

    Returns:
        Display name for the document
    """
    if not path or path.endswith(("/", "\\")):
        return DEFAULT_DOCUMENT_NAME
    name = PurePath(path).name
    if name in ("", ".", ".."):
        return DEFAULT_DOCUMENT_NAME
    return name


def resolve_for_diagnostics(path: str) -> str | None:
    """Canonical absolute form of ``path``, or None when it cannot be resolved.

    Resolution is strict: a path that does not exist returns None.
    """
    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, ValueError, RuntimeError):
        # RuntimeError: symlink loop on older interpreters
        return None


def parent_directory(path: str) -> Path | None:
    """Parent directory of ``path``, or None for a bare filesystem root."""
    target = Path(path)
    parent = target.parent
    if parent == target:
        return None
    return parent


def is_markdown_document(path: str) -> bool:
    """Check whether ``path`` has an extension the editor opens as markdown."""
    return PurePath(path).suffix.lower() in MARKDOWN_EXTENSIONS


def describe_age(mtime: float, now: float | None = None) -> str:
    """Describe how long ago a modification timestamp was.

    Args:
        mtime: Modification time (seconds since the epoch)
        now: Reference time, defaults to the current time

    Returns:
        Elapsed description such as ``"3.021s ago"``
    """
    if now is None:
        now = time.time()
    elapsed = now - mtime
    if elapsed < 0:
        return f"{-elapsed:.3f}s in the future"
    return f"{elapsed:.3f}s ago"


def format_throughput(size: int, elapsed_ms: float) -> str:
    """Format ``size`` bytes over ``elapsed_ms`` as a human-readable rate."""
    if elapsed_ms <= 0:
        return "n/a"
    rate = size / (elapsed_ms / 1000)
    for unit in ("B/s", "KB/s", "MB/s"):
        if rate < 1024:
            return f"{rate:.2f} {unit}"
        rate /= 1024
    return f"{rate:.2f} GB/s"


def preview(content: str, length: int) -> str:
    """Single-line preview of ``content`` truncated to ``length`` characters."""
    text = content[:length].replace("\n", "\\n").replace("\r", "\\r")
    if len(content) > length:
        text += "..."
    return text
