"""
Models Module - Data Models and Type Definitions
=================================================

Provides Pydantic models and value types for the file access service and the
IPC boundary. All models use Pydantic v2 for validation and serialization.

Modules:
    file_models: FileRecord, SaveOutcome and diagnostic metadata snapshots
    error_models: FileErrorKind taxonomy and the FileAccessError exception
    ipc_models: Command request/response envelopes and argument models

Key Components:

File Models (file_models.py):
    - FileRecord: path, decoded content and display name of a read document
    - SaveOutcome: success marker returned by save_file
    - PermissionDescriptor: octal mode or read-only flag with one display rule
    - FileMetadataSnapshot: size, permissions, age and type of a path (logging only)

Error Models (error_models.py):
    - FileErrorKind: not-found, permission-denied, invalid-input, invalid-data,
      write-zero, unexpected-eof, out-of-memory, directory-creation, unknown
    - FileAccessError: carries the concise caller-facing message plus kind

IPC Models (ipc_models.py):
    - CommandRequest / CommandResponse envelopes
    - ReadFileArgs, SaveFileArgs, FileExistsArgs argument validation

Example:
    Reading a document::

        from models.error_models import FileAccessError
        from services.file_access_service import FileAccessService

        service = FileAccessService()
        try:
            record = service.read_file("/notes/todo.md")
        except FileAccessError as e:
            print(e.message, e.kind.label)

See Also:
    :mod:`services.file_access_service`: Produces these models
    :mod:`app.runtime`: Converts them to IPC responses
"""
