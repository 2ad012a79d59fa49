"""
Core Layer - Constants and Configuration
========================================

Provides the configuration values shared by every VividMark backend module.

Modules:
    constants: Document defaults, error prefixes, logging and IPC protocol
        constants, and Pydantic settings validation

Configuration (constants.py):
    Centralized configuration using Pydantic Settings for validation:
    - Console verbosity (DEBUG)
    - JSON log sink directory and toggle (LOG_DIR, LOG_TO_FILE)
    - Save integrity policy (STRICT_WRITE_VERIFICATION)

See Also:
    :mod:`services.file_access_service`: File operations driven by these settings
    :mod:`utils.logger`: Logging setup reading the log configuration
"""
