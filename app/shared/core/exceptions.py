# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the menu service uses to explain
# what went wrong in a clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization into the response envelope.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# All domain services, authentication dependencies, app-level exception handlers

from typing import Any, Dict, Optional

from fastapi import status


class MenuAPIException(Exception):
    """
    Base exception class for the Menu Management API.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the error envelope."""
        return {
            "success": False,
            "statusCode": self.status_code,
            "message": self.message,
            "error": self.details or None,
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(MenuAPIException):
    """
    Exception raised for authentication failures.
    Used when the bearer credential is missing or malformed, or a password is wrong.
    """

    def __init__(
        self,
        message: str = "Unauthorized, no token provided",
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "UNAUTHORIZED"
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code=error_code
        )


class TokenExpiredError(AuthenticationError):
    """Raised when a credential is past its validity window."""

    def __init__(self, message: str = "Unauthorized, token expired"):
        super().__init__(message=message, error_code="TOKEN_EXPIRED")


class InvalidTokenError(AuthenticationError):
    """Raised when a credential's signature or claims do not check out."""

    def __init__(self, message: str = "Unauthorized, invalid token", reason: Optional[str] = None):
        details = {"reason": reason} if reason else None
        super().__init__(message=message, details=details, error_code="TOKEN_INVALID")


class AuthorizationError(MenuAPIException):
    """
    Exception raised for authorization failures.
    Used when the caller is neither the owner of a resource nor an admin.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        required_permission: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if required_permission:
            details["required_permission"] = required_permission

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="FORBIDDEN"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(MenuAPIException):
    """
    Exception raised for data validation failures.
    Used for malformed ids, missing required fields and invalid enum values.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="BAD_REQUEST"
        )


class NotFoundError(MenuAPIException):
    """
    Exception raised when requested resource is not found.
    Used for missing entities and dangling foreign keys.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateResourceError(MenuAPIException):
    """
    Exception raised when attempting to create duplicate resources.
    Used for unique constraint violations on names, slugs, usernames and emails.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field
        if value:
            details["value"] = value

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="CONFLICT"
        )


# =============================================================================
# DATABASE & INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(MenuAPIException):
    """
    Exception raised for database operation failures.
    Used for connection issues and failed transactions.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )
