"""Tests for command dispatch in app.runtime."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from app.runtime import COMMAND_HANDLERS, handle_command
from app.state import AppState
from models.error_models import FileAccessError, FileErrorKind


def _command(command: str, request_id: str = "req_1", **args: object) -> dict[str, object]:
    return {"type": "command", "command": command, "args": args, "request_id": request_id}


def test_handlers_registered() -> None:
    """Every editor command has a handler."""
    assert set(COMMAND_HANDLERS) == {"read_file", "save_file", "file_exists"}


class TestHandleCommand:
    """Tests for handle_command."""

    @pytest.mark.asyncio
    async def test_read_file(self, app_state: AppState, temp_file: Path) -> None:
        """read_file replies with the document record."""
        response = await handle_command(app_state, _command("read_file", path=str(temp_file)))

        assert response.ok is True
        assert response.request_id == "req_1"
        assert response.data == {"path": str(temp_file), "content": "# Notes\n\nTest content\n", "name": "notes.md"}
        assert app_state.commands_handled == 1

    @pytest.mark.asyncio
    async def test_save_file(self, app_state: AppState, temp_dir: Path) -> None:
        """save_file writes the document and replies with the outcome."""
        target = temp_dir / "drafts" / "new.md"

        response = await handle_command(app_state, _command("save_file", path=str(target), content="hello"))

        assert response.ok is True
        assert response.data == {"success": True, "error": None}
        assert target.read_bytes() == b"hello"

    @pytest.mark.asyncio
    async def test_file_exists_false(self, app_state: AppState, temp_dir: Path) -> None:
        """file_exists replies with a plain boolean."""
        response = await handle_command(app_state, _command("file_exists", path=str(temp_dir / "missing.md")))

        assert response.ok is True
        assert response.data is False

    @pytest.mark.asyncio
    async def test_failure_carries_kind_code(self, app_state: AppState, temp_dir: Path) -> None:
        """Service failures become error replies coded by category."""
        missing = temp_dir / "missing.md"

        response = await handle_command(app_state, _command("read_file", path=str(missing)))

        assert response.ok is False
        assert response.code == "not_found"
        assert response.error is not None
        assert response.error.startswith("Failed to read file:")

    @pytest.mark.asyncio
    async def test_unknown_command(self, app_state: AppState) -> None:
        """Unknown commands are rejected without touching the service."""
        response = await handle_command(app_state, _command("delete_file", path="/a.md"))

        assert response.ok is False
        assert response.code == "unknown_command"
        assert app_state.commands_handled == 0

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, app_state: AppState) -> None:
        """Missing arguments are reported as invalid_arguments."""
        response = await handle_command(app_state, _command("save_file", path="/a.md"))

        assert response.ok is False
        assert response.code == "invalid_arguments"

    @pytest.mark.asyncio
    async def test_malformed_request(self, app_state: AppState) -> None:
        """A message without a command name is rejected."""
        response = await handle_command(app_state, {"type": "command", "request_id": "r9"})

        assert response.ok is False
        assert response.code == "invalid_request"
        assert response.request_id == "r9"

    @pytest.mark.asyncio
    async def test_uses_state_service(self, app_state: AppState) -> None:
        """Commands run against the service held in AppState."""
        mock_service = MagicMock()
        mock_service.file_exists.side_effect = FileAccessError(
            "Failed to read file: nope", FileErrorKind.PERMISSION_DENIED, "file_exists", "/a.md"
        )
        app_state.service = mock_service

        response = await handle_command(app_state, _command("file_exists", path="/a.md"))

        mock_service.file_exists.assert_called_once_with("/a.md")
        assert response.code == "permission_denied"
        assert response.error == "Failed to read file: nope"
