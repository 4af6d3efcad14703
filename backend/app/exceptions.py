"""
Notes API — Custom Exception Hierarchy
========================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return responses with the matching HTTP status code.
Who:   Raised by services, the authenticator, and route helpers.

Exception Hierarchy:
    NotesApiError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── AuthenticationError   → 401 Unauthorized {"error": "token invalid"}
    ├── NotFoundError         → 404 Not Found (empty body)
    └── DatabaseError         → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotesApiError(Exception):
    """
    Base exception for all Notes API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesApiError):
    """
    Raised when client input fails validation outside of the request schemas.

    When:    A path parameter is not a well-formed note id.
    HTTP:    400 Bad Request

    Request-body schema failures are left to FastAPI (422).

    Example response:
        {
            "error": "validation_error",
            "message": "malformatted id",
            "details": {"field": "id"}
        }
    """

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


class AuthenticationError(NotesApiError):
    """
    Raised when a bearer token is absent, malformed, or fails verification.

    When:    POST /api/notes without a usable `Authorization: Bearer <token>`,
             with a token signed by another secret, an expired token, a
             payload without a user id, or a user id that matches no user.
    HTTP:    401 Unauthorized, body {"error": "token invalid"}

    The message is fixed; the reason is kept in `context` for the logs.
    """

    def __init__(
        self,
        reason: str = "token invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message="token invalid", context=ctx)
        self.reason = reason


class NotFoundError(NotesApiError):
    """
    Raised when a requested resource does not exist.

    When:    GET or PUT /api/notes/{id} with an id that matches no note.
    HTTP:    404 Not Found, empty body
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotesApiError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (operation, note id, driver error type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
