"""
Utils Module - Infrastructure Utilities and Support Functions
==============================================================

Provides infrastructure utilities for logging, path handling and IPC
communication with the editor front-end.

Modules:
    logger: Structured JSON logging with rotation
    file_utils: Display names, canonical paths, timing and throughput formatting
    binary_io: Length-prefixed MessagePack framing over stdin/stdout
    ipc: Outgoing message helpers (command responses, errors, negotiation)

Key Components:

Logging (logger.py):
    Structured JSON logging with multiple handlers, attached at bootstrap:
    - Console handler: Human-readable format to stderr
    - Operations handler: JSON Lines format to logs/operations.jsonl
    - Error handler: JSON Lines format to logs/errors.jsonl

    Features:
    - Per-process instance ID injection
    - Log rotation (10MB files, 5 operation logs, 3 error logs)
    - Operation, path, timing and byte counts as structured fields

IPC Communication (binary_io.py, ipc.py):
    - 7-byte header: version(2) + flags(1) + length(4)
    - Automatic zlib compression for messages >1KB
    - Pydantic-validated command responses and error notifications

Example:
    Logging with structured fields::

        from utils.logger import logger

        logger.info("Document saved", operation="save_file", path="/notes/a.md", bytes=120)

See Also:
    :mod:`core.constants`: Configuration values for logging and the protocol
    :mod:`services.file_access_service`: Main consumer of these utilities
"""
