"""Command dispatch for the VividMark backend.

This module maps editor commands (``read_file``, ``save_file``,
``file_exists``) onto the file access service and shapes the replies. All
functions receive AppState as an explicit parameter to avoid hidden global state.
"""

from __future__ import annotations

import asyncio

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from app.state import AppState
from core.constants import COMMAND_FILE_EXISTS, COMMAND_READ_FILE, COMMAND_SAVE_FILE
from models.error_models import FileAccessError
from models.ipc_models import CommandRequest, CommandResponse, FileExistsArgs, ReadFileArgs, SaveFileArgs
from services.file_access_service import FileAccessService
from utils.logger import logger

CommandHandler = Callable[[FileAccessService, dict[str, Any]], Any]


def run_read_file(service: FileAccessService, args: dict[str, Any]) -> dict[str, Any]:
    params = ReadFileArgs.model_validate(args)
    return service.read_file(params.path).model_dump()


def run_save_file(service: FileAccessService, args: dict[str, Any]) -> dict[str, Any]:
    params = SaveFileArgs.model_validate(args)
    return service.save_file(params.path, params.content).model_dump()


def run_file_exists(service: FileAccessService, args: dict[str, Any]) -> bool:
    params = FileExistsArgs.model_validate(args)
    return service.file_exists(params.path)


COMMAND_HANDLERS: dict[str, CommandHandler] = {
    COMMAND_READ_FILE: run_read_file,
    COMMAND_SAVE_FILE: run_save_file,
    COMMAND_FILE_EXISTS: run_file_exists,
}


async def handle_command(app_state: AppState, message: dict[str, Any]) -> CommandResponse:
    """Execute one editor command and build its reply.

    The service call runs in a worker thread so the event loop keeps reading
    stdin, but commands are awaited one at a time, which keeps operations on
    the same path serialized.

    Args:
        app_state: Application state container
        message: Decoded command message

    Returns:
        CommandResponse with ``ok=True`` and the result, or ``ok=False`` with
        the caller-facing error message and code
    """
    try:
        request = CommandRequest.model_validate(message)
    except ValidationError as e:
        logger.warning(f"Malformed command message: {e.error_count()} validation error(s)")
        return CommandResponse(
            command=str(message.get("command", "")),
            request_id=message.get("request_id") if isinstance(message.get("request_id"), str) else None,
            ok=False,
            error=f"Malformed command: {e}",
            code="invalid_request",
        )

    handler = COMMAND_HANDLERS.get(request.command)
    if handler is None:
        logger.warning(f"Unknown command: {request.command}")
        return CommandResponse(
            command=request.command,
            request_id=request.request_id,
            ok=False,
            error=f"Unknown command: {request.command}",
            code="unknown_command",
        )

    app_state.commands_handled += 1
    try:
        data = await asyncio.to_thread(handler, app_state.service, request.args)
    except ValidationError as e:
        logger.warning(f"Invalid arguments for {request.command}: {e.error_count()} validation error(s)")
        return CommandResponse(
            command=request.command,
            request_id=request.request_id,
            ok=False,
            error=f"Invalid arguments for {request.command}: {e}",
            code="invalid_arguments",
        )
    except FileAccessError as e:
        # Already logged with full classification by the service
        return CommandResponse(
            command=request.command,
            request_id=request.request_id,
            ok=False,
            error=e.message,
            code=e.kind.value,
        )

    return CommandResponse(command=request.command, request_id=request.request_id, ok=True, data=data)
