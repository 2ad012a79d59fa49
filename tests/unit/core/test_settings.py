"""Tests for constants and settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from pydantic import ValidationError

from core.constants import MARKDOWN_EXTENSIONS, PROJECT_ROOT, Settings, get_settings


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults are lenient verification with file logging."""
        for name in ("DEBUG", "LOG_DIR", "LOG_TO_FILE", "STRICT_WRITE_VERIFICATION"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.debug is False
        assert settings.log_to_file is True
        assert settings.strict_write_verification is False
        assert settings.log_path == PROJECT_ROOT / "logs"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables are read case-insensitively."""
        monkeypatch.setenv("STRICT_WRITE_VERIFICATION", "true")
        monkeypatch.setenv("debug", "1")

        settings = Settings(_env_file=None)

        assert settings.strict_write_verification is True
        assert settings.debug is True

    def test_absolute_log_dir(self, temp_dir: Path) -> None:
        """Absolute log directories are used as-is."""
        settings = Settings(_env_file=None, log_dir=str(temp_dir))

        assert settings.log_path == temp_dir

    def test_empty_log_dir_rejected(self) -> None:
        """An empty log directory fails validation."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_dir="  ")

    def test_get_settings_cached(self) -> None:
        """get_settings returns a single cached instance."""
        assert get_settings() is get_settings()


def test_markdown_extensions() -> None:
    """The editor's document extensions are recognised."""
    assert MARKDOWN_EXTENSIONS == {".md", ".markdown", ".txt"}
