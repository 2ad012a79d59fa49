"""Service layer for the VividMark backend.

Modules:
    file_access_service: Read, save and existence checks for editor documents
"""
