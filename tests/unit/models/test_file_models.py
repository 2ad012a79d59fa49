"""Tests for file, error and IPC models."""

from __future__ import annotations

import pytest

from pydantic import ValidationError

from models.error_models import FileAccessError, FileErrorKind
from models.file_models import FileMetadataSnapshot, FileRecord, PermissionDescriptor, SaveOutcome
from models.ipc_models import CommandRequest, CommandResponse, ReadFileArgs, SaveFileArgs


class TestFileRecord:
    """Tests for FileRecord model."""

    def test_serializes_for_editor(self) -> None:
        """The editor receives path, content and name."""
        record = FileRecord(path="/a/notes.md", content="# Hi", name="notes.md")

        assert record.model_dump() == {"path": "/a/notes.md", "content": "# Hi", "name": "notes.md"}


class TestSaveOutcome:
    """Tests for SaveOutcome model."""

    def test_defaults_to_success(self) -> None:
        """The only constructed shape is success without error."""
        assert SaveOutcome().model_dump() == {"success": True, "error": None}


class TestPermissionDescriptor:
    """Tests for PermissionDescriptor display rule."""

    def test_octal_mode(self) -> None:
        """Mode bits display as octal."""
        assert str(PermissionDescriptor(mode=0o755)) == "755"

    def test_readonly_flag(self) -> None:
        """Without mode bits the read-only flag is shown."""
        assert str(PermissionDescriptor(readonly=True)) == "readonly: true"
        assert str(PermissionDescriptor()) == "readonly: false"


class TestFileMetadataSnapshot:
    """Tests for FileMetadataSnapshot.describe."""

    def test_describe_full(self) -> None:
        """All fields appear in the summary."""
        snap = FileMetadataSnapshot(
            size=42, permissions=PermissionDescriptor(mode=0o644), modified="1.000s ago", is_file=True
        )

        assert snap.describe() == "size=42 bytes, permissions=644, modified=1.000s ago, is_file=True"

    def test_describe_unknown_fields(self) -> None:
        """Missing optional fields are shown as unknown."""
        snap = FileMetadataSnapshot(size=0, permissions=None, modified=None, is_file=False)

        assert "permissions=unknown" in snap.describe()
        assert "modified=unknown" in snap.describe()


class TestFileErrorKind:
    """Tests for the error taxonomy."""

    def test_every_kind_has_label(self) -> None:
        """Each category carries a human-readable label."""
        for kind in FileErrorKind:
            assert kind.label

    def test_values_are_stable_codes(self) -> None:
        """Kinds serialize as their string codes."""
        assert FileErrorKind.NOT_FOUND.value == "not_found"
        assert FileErrorKind("directory_creation_failed") is FileErrorKind.DIRECTORY_CREATION_FAILED

    def test_file_access_error_str(self) -> None:
        """The exception text is the caller-facing message."""
        error = FileAccessError("Failed to read file: boom", FileErrorKind.UNKNOWN, "read_file", "/a.md")

        assert str(error) == "Failed to read file: boom"
        assert error.kind is FileErrorKind.UNKNOWN


class TestIPCModels:
    """Tests for command envelopes and argument models."""

    def test_command_request_defaults(self) -> None:
        """Args and request id are optional."""
        request = CommandRequest.model_validate({"type": "command", "command": "file_exists"})

        assert request.args == {}
        assert request.request_id is None

    def test_save_args_require_content(self) -> None:
        """save_file needs both path and content."""
        with pytest.raises(ValidationError):
            SaveFileArgs.model_validate({"path": "/a.md"})

    def test_read_args_reject_non_string_path(self) -> None:
        """Paths must be strings."""
        with pytest.raises(ValidationError):
            ReadFileArgs.model_validate({"path": 123})

    def test_command_response_type(self) -> None:
        """Responses are tagged as command_response."""
        response = CommandResponse(command="read_file", ok=False, error="x", code="not_found")

        assert response.model_dump(exclude_none=True) == {
            "type": "command_response",
            "command": "read_file",
            "ok": False,
            "error": "x",
            "code": "not_found",
        }
