"""
Custom Exception Classes for Content Admin

This module defines custom exceptions for consistent error responses
across the application. Every exception carries an HTTP status code and a
machine-readable ``ErrorCode`` that the exception handlers put in the
response body.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in error responses."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    AUTH_FAILED = "AUTH_FAILED"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_CONTENT_NOT_FOUND = "RESOURCE_CONTENT_NOT_FOUND"
    RESOURCE_VERSION_NOT_FOUND = "RESOURCE_VERSION_NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class CMSError(Exception):
    """Base exception class for all content admin exceptions"""

    default_error_code = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.default_error_code
        super().__init__(self.message)


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(CMSError):
    """Raised when authentication fails"""

    default_error_code = ErrorCode.AUTH_FAILED

    def __init__(self, message: str = "Authentication required. Please log in.", details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, details=details or {})


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials are invalid"""

    default_error_code = ErrorCode.AUTH_INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message=message)


class TokenExpiredError(AuthenticationError):
    default_error_code = ErrorCode.AUTH_TOKEN_EXPIRED

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message=message)


class InvalidTokenError(AuthenticationError):
    default_error_code = ErrorCode.AUTH_TOKEN_INVALID

    def __init__(self, message: str = "Invalid or malformed token"):
        super().__init__(message=message)


class AuthorizationError(CMSError):
    """Raised when the caller lacks permission for an action"""

    default_error_code = ErrorCode.AUTH_PERMISSION_DENIED

    def __init__(
        self, message: str = "Insufficient permissions for this action.", required_role: str | None = None
    ):
        details = {"required_role": required_role} if required_role else {}
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN, details=details)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(CMSError):
    """Base class for resource not found errors"""

    default_error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None, message: str | None = None):
        if message is None:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ContentNotFoundError(ResourceNotFoundError):
    """Raised when a content node is missing or soft-deleted"""

    default_error_code = ErrorCode.RESOURCE_CONTENT_NOT_FOUND

    def __init__(self, content_id: Any | None = None, message: str | None = None):
        super().__init__(resource_type="Content", resource_id=content_id, message=message)


class VersionNotFoundError(ResourceNotFoundError):
    default_error_code = ErrorCode.RESOURCE_VERSION_NOT_FOUND

    def __init__(self, version_id: Any | None = None):
        super().__init__(resource_type="Version", resource_id=version_id)


# ============================================================================
# Validation & Conflict Exceptions
# ============================================================================


class ValidationError(CMSError):
    """Raised when input validation fails"""

    default_error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class ConflictError(CMSError):
    """Raised when a unique key would be duplicated"""

    default_error_code = ErrorCode.VALIDATION_DUPLICATE_RESOURCE

    def __init__(self, message: str, resource_type: str | None = None, field: str | None = None, value: Any = None):
        details: dict[str, Any] = {}
        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field
            details["value"] = value
        super().__init__(message=message, status_code=status.HTTP_409_CONFLICT, details=details)


# ============================================================================
# Store Exceptions
# ============================================================================


class TransientStoreError(CMSError):
    """Raised when a statement keeps failing with transient errors after all retries"""

    default_error_code = ErrorCode.STORE_UNAVAILABLE

    def __init__(self, message: str = "The database is temporarily unavailable.", attempts: int | None = None):
        details = {"attempts": attempts} if attempts is not None else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
