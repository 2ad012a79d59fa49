"""
IPC message models for the VividMark backend.
Provides validation for messages sent between the editor and Python backend.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from core.constants import MSG_TYPE_COMMAND_RESPONSE, MSG_TYPE_ERROR


class ReadFileArgs(BaseModel):
    """Arguments for the read_file command."""

    model_config = ConfigDict(extra="ignore")

    path: str


class SaveFileArgs(BaseModel):
    """Arguments for the save_file command."""

    model_config = ConfigDict(extra="ignore")

    path: str
    content: str


class FileExistsArgs(BaseModel):
    """Arguments for the file_exists command."""

    model_config = ConfigDict(extra="ignore")

    path: str


class CommandRequest(BaseModel):
    """A command invocation from the editor."""

    command: str
    args: dict[str, Any] = Field(default_factory=dict)
    request_id: str | None = None


class CommandResponse(BaseModel):
    """Reply to a CommandRequest.

    ``ok`` discriminates the two shapes: on success ``data`` holds the command
    result, on failure ``error`` holds the caller-facing message and ``code``
    the classified failure kind.
    """

    type: Literal["command_response"] = MSG_TYPE_COMMAND_RESPONSE
    command: str
    request_id: str | None = None
    ok: bool
    data: Any | None = None
    error: str | None = None
    code: str | None = None


class ErrorNotification(BaseModel):
    """Protocol-level error not tied to a command."""

    type: Literal["error"] = MSG_TYPE_ERROR
    message: str
    code: str | None = None
    details: dict[str, Any] | None = None


__all__ = [
    "CommandRequest",
    "CommandResponse",
    "ErrorNotification",
    "FileExistsArgs",
    "ReadFileArgs",
    "SaveFileArgs",
]
