"""Application initialization and configuration for the VividMark backend.

This module handles all bootstrap operations required before entering the main
event loop: environment loading, settings validation, log sink setup and
service creation.
"""

from __future__ import annotations

import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from app.state import AppState
from core.constants import PROJECT_ROOT, get_settings
from services.file_access_service import FileAccessService
from utils.logger import logger, setup_logging


def initialize_application() -> AppState:
    """Initialize the backend and return populated state.

    1. Load environment variables from the project .env file
    2. Validate settings (fail fast on bad configuration)
    3. Attach the console and JSON log sinks
    4. Create the file access service

    Returns:
        AppState: Fully initialized application state ready for main loop

    Raises:
        SystemExit: If configuration validation fails (prints helpful error message)
    """
    load_dotenv(PROJECT_ROOT / ".env")

    try:
        settings = get_settings()
    except ValidationError as e:
        # Use stderr for error messages (stdout is reserved for binary protocol)
        sys.stderr.write(f"Error: Configuration validation failed: {e}\n")
        sys.stderr.write("Please check your .env file. Supported variables:\n")
        sys.stderr.write("DEBUG, LOG_DIR, LOG_TO_FILE, STRICT_WRITE_VERIFICATION\n")
        sys.exit(1)

    setup_logging(debug=settings.debug, log_dir=settings.log_path, log_to_file=settings.log_to_file)
    logger.info(
        f"Settings loaded (debug={settings.debug}, log_to_file={settings.log_to_file}, "
        f"strict_write_verification={settings.strict_write_verification})"
    )

    service = FileAccessService.from_settings(settings)
    logger.info("File access service initialized")

    return AppState(service=service, settings=settings)
