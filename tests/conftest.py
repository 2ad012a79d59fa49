"""Shared test fixtures for the VividMark backend test suite.

This module provides common fixtures used across all test modules,
including temporary workspaces and a preconfigured service.
"""

from __future__ import annotations

import logging
import tempfile

from collections.abc import Generator
from pathlib import Path

import pytest

from app.state import AppState
from core.constants import LOGGER_NAME, Settings, get_settings
from services.file_access_service import FileAccessService

# ============================================================================
# Test Isolation: Settings Cache
# ============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the cached Settings so environment overrides take effect per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def isolate_backend_logger() -> Generator[None, None, None]:
    """Detach any handlers a test attached to the backend logger."""
    backend_logger = logging.getLogger(LOGGER_NAME)
    original_handlers = list(backend_logger.handlers)
    original_level = backend_logger.level
    yield
    for handler in list(backend_logger.handlers):
        if handler not in original_handlers:
            backend_logger.removeHandler(handler)
            handler.close()
    backend_logger.setLevel(original_level)


# ============================================================================
# File System Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_file(temp_dir: Path) -> Generator[Path, None, None]:
    """Provide a markdown document with known content."""
    file_path = temp_dir / "notes.md"
    file_path.write_bytes(b"# Notes\n\nTest content\n")
    yield file_path


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def service() -> FileAccessService:
    """File access service with default (lenient) verification."""
    return FileAccessService()


@pytest.fixture
def strict_service() -> FileAccessService:
    """File access service that fails saves on size mismatch."""
    return FileAccessService(strict_write_verification=True)


@pytest.fixture
def test_settings(temp_dir: Path) -> Settings:
    """Settings writing logs into the temporary directory."""
    return Settings(debug=True, log_dir=str(temp_dir / "logs"), log_to_file=False)


@pytest.fixture
def app_state(service: FileAccessService, test_settings: Settings) -> AppState:
    """Application state wired to a real service."""
    return AppState(service=service, settings=test_settings)
