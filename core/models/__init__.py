# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains the user table and Pydantic schemas:
# - user.py: User table, create/response schemas, upload result
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import (
    DATE_CREATED_FORMAT,
    ProfileImageUploadResponse,
    User,
    UserCreate,
    UserList,
    UserResponse,
)

__all__ = [
    "DATE_CREATED_FORMAT",
    "ProfileImageUploadResponse",
    "User",
    "UserCreate",
    "UserList",
    "UserResponse",
]
