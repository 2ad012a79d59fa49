"""Tests for AppState container."""

from __future__ import annotations

from app.state import AppState
from core.constants import Settings
from services.file_access_service import FileAccessService


def test_defaults() -> None:
    """New state has no negotiated protocol and no handled commands."""
    app_state = AppState(service=FileAccessService())

    assert app_state.negotiated_version is None
    assert app_state.commands_handled == 0
    assert isinstance(app_state.settings, Settings)


def test_independent_instances() -> None:
    """Each container gets its own settings and counters."""
    first = AppState(service=FileAccessService())
    second = AppState(service=FileAccessService())

    first.commands_handled += 3

    assert second.commands_handled == 0
    assert first.settings is not second.settings
