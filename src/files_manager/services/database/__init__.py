"""
Files Manager Database Layer

Document-store services for file metadata and user records. Each service
turns driver failures into `BackendUnavailableError`.
"""

from .metadata_store import FileMetadataStore
from .user_service import UserService

__all__ = [
    'FileMetadataStore',
    'UserService',
]
