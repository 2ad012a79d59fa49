"""
VividMark backend - local file persistence for the desktop markdown editor.

Main entry point - orchestrates application lifecycle through bootstrap and runtime modules.
"""

from __future__ import annotations

import asyncio
import uuid

from contextlib import suppress
from typing import Any

from app.bootstrap import initialize_application
from app.runtime import handle_command
from app.state import AppState
from core.constants import MSG_TYPE_COMMAND, MSG_TYPE_PROTOCOL_NEGOTIATION, PROTOCOL_VERSION
from models.ipc_models import CommandResponse
from utils.binary_io import BinaryIOError, read_message
from utils.ipc import IPCManager
from utils.logger import logger


def handle_protocol_negotiation(app_state: AppState, message: dict[str, Any]) -> None:
    """Handle protocol version negotiation.

    Args:
        app_state: Application state container
        message: Protocol negotiation request with supported_versions
    """
    supported_versions = message.get("supported_versions", [])
    client_version = message.get("client_version", "unknown")

    logger.info(f"Protocol negotiation: client={client_version}, supported_versions={supported_versions}")

    if IPCManager.send_negotiation_response(supported_versions):
        app_state.negotiated_version = PROTOCOL_VERSION
        logger.info(f"Protocol negotiation successful: V{PROTOCOL_VERSION} selected")
    else:
        logger.error(f"Protocol negotiation failed: incompatible versions {supported_versions}")


async def dispatch_message(app_state: AppState, message: dict[str, Any]) -> None:
    """Route one decoded message to its handler and send the reply."""
    message_type = message.get("type")
    logger.debug(f"Received message type: {message_type}")

    if message_type == MSG_TYPE_PROTOCOL_NEGOTIATION:
        handle_protocol_negotiation(app_state, message)
        return

    if message_type == MSG_TYPE_COMMAND:
        request_id = message.get("request_id") or f"cmd_{uuid.uuid4().hex[:8]}"
        message = {**message, "request_id": request_id}
        command = str(message.get("command", ""))
        try:
            response = await handle_command(app_state, message)
        except Exception as e:
            logger.error(f"Error handling command {command}: {e}", exc_info=True)
            response = CommandResponse(
                command=command,
                request_id=request_id,
                ok=False,
                error="An unexpected error occurred.",
                code="internal_error",
            )
        IPCManager.send_command_response(response)
        return

    logger.warning(f"Unknown message type: {message_type}")
    IPCManager.send_error(f"Unknown message type: {message_type}", code="unknown_message_type")


async def main() -> None:
    """Main entry point - pure orchestration of application lifecycle.

    Phases:
    1. Bootstrap: Load settings, attach log sinks, create the file access service
    2. Main Loop: Read framed messages from stdin and answer each one in order
    3. Shutdown: On end of input or keyboard interrupt
    """
    app_state = initialize_application()
    loop = asyncio.get_running_loop()

    while True:
        try:
            # Blocking stdin read off the event loop
            message = await loop.run_in_executor(None, read_message)
            await dispatch_message(app_state, message)
        except EOFError:
            logger.info("End of input stream, shutting down")
            break
        except BinaryIOError as e:
            logger.error(f"Binary I/O error: {e}")
            with suppress(Exception):
                IPCManager.send_error(str(e), code="protocol_error")
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")
            break
        except Exception as e:
            logger.error(f"Unexpected error in main loop: {e}", exc_info=True)
            with suppress(Exception):
                IPCManager.send_error("An unexpected error occurred.")

    logger.info(f"VividMark backend shutdown complete ({app_state.commands_handled} commands handled)")


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
