"""
Logging setup for the VividMark backend using Python's standard logging
with JSON formatting for structured logs.

Log destinations (attached by setup_logging() at bootstrap only):
- Console (stderr): Human-readable format for debugging
- logs/operations.jsonl: JSON format for file operation history
- logs/errors.jsonl: JSON format for error tracking

Importing this module attaches no handlers. Until the bootstrap configures a
sink, records simply propagate to whatever the host process has set up.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
import uuid

from pathlib import Path
from typing import Any

from pythonjsonlogger import json as jsonlogger

from core.constants import (
    INSTANCE_ID_LENGTH,
    LOG_BACKUP_COUNT_ERRORS,
    LOG_BACKUP_COUNT_OPERATIONS,
    LOG_MAX_SIZE,
    LOGGER_NAME,
)


class OperationFilter(logging.Filter):
    """Filter to allow INFO and above into the operations log"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.INFO


class ErrorFilter(logging.Filter):
    """Filter to only allow ERROR and CRITICAL logs"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(
    name: str = LOGGER_NAME,
    debug: bool | None = None,
    log_dir: Path | None = None,
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Attach console and rotating JSON file handlers to the backend logger.

    Args:
        name: Logger name
        debug: Enable debug logging on the console (overrides DEBUG env var)
        log_dir: Directory for the JSON log files
        log_to_file: Attach the JSON file handlers

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # Capture all, filter at handler level

    # Remove any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if debug is None:
        debug = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")

    # --- Console Handler (Human-readable) ---
    # stdout carries the binary protocol, so the console is stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)8s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(console_handler)

    if not log_to_file:
        return logger

    if log_dir is None:
        from core.constants import get_settings

        log_dir = get_settings().log_path
    log_dir.mkdir(parents=True, exist_ok=True)

    # --- Operation Log Handler (JSON) ---
    ops_handler = logging.handlers.RotatingFileHandler(
        log_dir / "operations.jsonl",
        maxBytes=LOG_MAX_SIZE,
        backupCount=LOG_BACKUP_COUNT_OPERATIONS,
        encoding="utf-8",
    )
    ops_handler.setLevel(logging.INFO)
    ops_handler.addFilter(OperationFilter())
    ops_handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(timestamp)s %(levelname)s %(message)s %(instance_id)s %(operation)s %(path)s %(ms)s %(bytes)s",
            timestamp=True,
        )
    )
    logger.addHandler(ops_handler)

    # --- Error Log Handler (JSON) ---
    error_handler = logging.handlers.RotatingFileHandler(
        log_dir / "errors.jsonl",
        maxBytes=LOG_MAX_SIZE,
        backupCount=LOG_BACKUP_COUNT_ERRORS,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.addFilter(ErrorFilter())
    error_handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(timestamp)s %(levelname)s %(name)s %(message)s %(operation)s %(path)s %(kind)s",
            timestamp=True,
        )
    )
    logger.addHandler(error_handler)

    return logger


class EditorLogger:
    """
    High-level logging interface for the VividMark backend.
    Wraps standard Python logging with convenience methods.

    Keyword arguments become structured fields on the record (``operation``,
    ``path``, ``kind``, ``ms``, ``bytes``) and land in the JSON sinks.
    """

    def __init__(self, name: str = LOGGER_NAME):
        self.logger = logging.getLogger(name)
        self.instance_id = str(uuid.uuid4())[:INSTANCE_ID_LENGTH]

    def debug(self, message: str, **kwargs: Any) -> None:
        """Debug level logging"""
        kwargs["instance_id"] = self.instance_id
        self.logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Info level logging"""
        kwargs["instance_id"] = self.instance_id
        self.logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Warning level logging"""
        kwargs["instance_id"] = self.instance_id
        self.logger.warning(message, extra=kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Error level logging with optional exception info"""
        kwargs["instance_id"] = self.instance_id
        self.logger.error(message, extra=kwargs, exc_info=exc_info)

    def log_operation(self, operation: str, path: str, elapsed_ms: float, size: int, detail: str = "") -> None:
        """
        Log a completed file operation with its timing and throughput.

        Args:
            operation: Operation name (e.g. ``read_file``)
            path: Path the operation ran against
            elapsed_ms: Wall-clock duration in milliseconds
            size: Bytes transferred
            detail: Optional extra text appended to the message
        """
        from utils.file_utils import format_throughput

        msg = f"{operation} completed: {path} ({size:,} bytes in {elapsed_ms:.2f}ms, {format_throughput(size, elapsed_ms)})"
        if detail:
            msg = f"{msg} {detail}"
        self.info(msg, operation=operation, path=path, ms=round(elapsed_ms, 3), bytes=size)


# Global logger instance
logger = EditorLogger()
