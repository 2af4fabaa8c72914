# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class UploadAPIException(Exception):
    """
    Base exception for the upload API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "UPLOAD_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# User Exceptions
# =============================================================================

class UserNotFoundError(UploadAPIException):
    """Raised when no user matches a lookup."""

    def __init__(self, value: str, field: str = "id"):
        super().__init__(
            message=f"User not found: {field}={value}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the user exists (GET /api/v1/users)",
            details={"field": field, "value": value}
        )


class InvalidFieldError(UploadAPIException):
    """Raised when a lookup names a column the users table doesn't have."""

    def __init__(self, field: str, allowed: list[str]):
        super().__init__(
            message=f"Unknown user field: {field}",
            code="INVALID_FIELD",
            status_code=400,
            suggestion=f"Look users up by one of: {', '.join(allowed)}",
            details={"field": field, "allowed_fields": allowed}
        )


class PersistenceError(UploadAPIException):
    """Raised when the database is unreachable or rejects a write."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Database error during {operation}: {error}",
            code="PERSISTENCE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "error": error}
        )


class UpdateConflictError(UploadAPIException):
    """Raised when a user row changed between read and write."""

    def __init__(self, user_id: str, expected_version: int):
        super().__init__(
            message=f"User {user_id} was modified concurrently",
            code="UPDATE_CONFLICT",
            status_code=409,
            suggestion="Reload the user and retry the request",
            details={"user_id": user_id, "expected_version": expected_version}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(UploadAPIException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class InvalidFilenameError(UploadAPIException):
    """Raised when an upload carries no usable file name."""

    def __init__(self, filename: str | None):
        super().__init__(
            message=f"Invalid file name: {filename!r}",
            code="INVALID_FILENAME",
            status_code=400,
            suggestion="Send the image as multipart form data with a file name",
            details={"filename": filename}
        )


class FileTooLargeError(UploadAPIException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class FileReadError(UploadAPIException):
    """Raised when the uploaded file stream cannot be read completely."""

    def __init__(self, filename: str, error: str):
        super().__init__(
            message=f"Failed to read file: {error}",
            code="FILE_READ_ERROR",
            status_code=400,
            suggestion="Check that the upload completed and the file is not empty",
            details={"filename": filename, "error": error}
        )


class StorageUploadError(UploadAPIException):
    """Raised when file upload to storage fails."""

    def __init__(self, key: str, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"key": key, "error": error}
        )


# =============================================================================
# Startup Exceptions
# =============================================================================

class DatabaseInitError(UploadAPIException):
    """Raised when the database can't be reached or bootstrapped at startup."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Database initialization failed: {error}",
            code="DATABASE_INIT_FAILED",
            status_code=503,
            suggestion="Check DB_ADDR, DB_PORT, DB_USER, DB_PASSWORD and DB_NAME in your .env file",
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def upload_api_exception_handler(
    request: Request,
    exc: UploadAPIException
) -> JSONResponse:
    """
    Convert UploadAPIException to JSON response.

    Returns structured error with:
    - success: always false
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
