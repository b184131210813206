"""
Taskie Backend - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for every error kind the API reports.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return the `{"success": false, ...}` error envelope with the right
       HTTP status code.
Who:   Raised by services and the auth gate; caught by global handlers.

Exception Hierarchy:
    TaskieError (base)
    ├── ValidationError        → 400 Bad Request
    ├── ConflictError          → 400 Bad Request (duplicate unique key)
    ├── UnauthenticatedError   → 401 Unauthorized
    ├── ForbiddenError         → 403 Forbidden
    ├── NotFoundError          → 404 Not Found
    ├── FileStorageError       → 500 Internal Server Error
    └── DatabaseError          → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TaskieError(Exception):
    """
    Base exception for all Taskie application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only partially returned)
        status_code: HTTP status the global handler responds with
        error_code: Machine-readable code placed in the error envelope
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TaskieError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, malformed values, wrong file type or size,
             or a state change the entity does not allow.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(TaskieError):
    """
    Raised when a write would duplicate a unique key.

    When:    Registering an email/phone that is taken, favoriting a task twice.
    HTTP:    400 Bad Request (the API reports duplicates as client errors)
    """

    status_code = 400
    error_code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthenticatedError(TaskieError):
    """
    Raised when a request carries no usable bearer credential.

    When:    Token absent, malformed, expired, badly signed, or its subject
             no longer exists. Also wrong login credentials.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "unauthenticated"

    def __init__(
        self,
        message: str = "Not authorized, token failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(TaskieError):
    """
    Raised when an authenticated user lacks the role or ownership required.

    HTTP:    403 Forbidden
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "Not authorized to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TaskieError):
    """
    Raised when a referenced entity does not exist.

    SQLAlchemy returns None for missing rows; services convert that None into
    NotFoundError so the global handler can answer 404.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(TaskieError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, directory not writable, I/O error.
    HTTP:    500 Internal Server Error
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TaskieError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. Details (statement,
    constraint name) are logged server-side only.
    HTTP:    500 Internal Server Error
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
