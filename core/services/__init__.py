# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .storage_service import StorageService
from .upload_service import UploadService, build_storage_key

__all__ = [
    "UserService",
    "StorageService",
    "UploadService",
    "build_storage_key",
]
