"""
IPC (Inter-Process Communication) utilities for the VividMark backend.
Manages communication between the editor front-end and the Python backend.

This module centralizes all outgoing IPC messages. Every message goes through
binary_io.write_message() so framing stays consistent.
"""

from __future__ import annotations

from typing import Any

from core.constants import (
    MSG_TYPE_ERROR,
    MSG_TYPE_PROTOCOL_NEGOTIATION_RESPONSE,
    PROTOCOL_VERSION,
    SERVER_VERSION,
)
from models.ipc_models import CommandResponse, ErrorNotification
from utils.binary_io import BinaryIOError, write_message
from utils.logger import logger


class IPCManager:
    """Manages IPC communication with clean abstraction.

    All methods are static; the output stream is stdout, owned by the
    protocol (see :mod:`utils.binary_io`).
    """

    @staticmethod
    def send(message: dict[str, Any]) -> None:
        """Send a message dictionary to the editor."""
        write_message(message)

    @staticmethod
    def send_error(message: str, code: str | None = None, details: dict[str, Any] | None = None) -> None:
        """Send a protocol-level error message with validation.

        Args:
            message: Error message text
            code: Optional error code
            details: Optional error details dictionary
        """
        error_msg = ErrorNotification(type=MSG_TYPE_ERROR, message=message, code=code, details=details)
        write_message(error_msg.model_dump(exclude_none=True))

    @staticmethod
    def send_command_response(response: CommandResponse) -> None:
        """Send the reply to a command.

        If the response cannot be serialized, an error reply for the same
        request is sent instead so the editor's pending call still settles.
        """
        try:
            write_message(response.model_dump(exclude_none=True))
        except BinaryIOError as e:
            logger.error(f"Failed to serialize response for {response.command}: {e}", exc_info=True)
            fallback = CommandResponse(
                command=response.command,
                request_id=response.request_id,
                ok=False,
                error=f"Serialization failed: {e}",
            )
            write_message(fallback.model_dump(exclude_none=True))

    @staticmethod
    def send_negotiation_response(supported_versions: list[int]) -> bool:
        """Answer a protocol negotiation request.

        Args:
            supported_versions: Versions the editor can speak

        Returns:
            True if a common version was selected
        """
        if PROTOCOL_VERSION in supported_versions:
            write_message(
                {
                    "type": MSG_TYPE_PROTOCOL_NEGOTIATION_RESPONSE,
                    "selected_version": PROTOCOL_VERSION,
                    "server_version": SERVER_VERSION,
                }
            )
            return True

        IPCManager.send_error(
            f"No compatible protocol version. Server supports V{PROTOCOL_VERSION}, "
            f"client supports {supported_versions}",
            code="protocol_mismatch",
        )
        return False
