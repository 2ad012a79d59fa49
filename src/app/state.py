"""Application state management for the VividMark backend.

This module provides the central AppState container that serves as the single
source of truth for application-wide state. State is passed explicitly to
functions rather than using module-level globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.constants import Settings
from services.file_access_service import FileAccessService


@dataclass
class AppState:
    """Application state container - single source of truth for app-wide state.

    Attributes:
        service: File access service handling every editor command
        settings: Validated settings loaded at bootstrap
        negotiated_version: Protocol version agreed with the editor (None until negotiated)
        commands_handled: Number of commands processed since startup
    """

    service: FileAccessService
    settings: Settings = field(default_factory=Settings)
    negotiated_version: int | None = None
    commands_handled: int = 0
