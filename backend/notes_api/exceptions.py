"""
Notes API - Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the three ways a request can fail.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right status code.
Who:   Raised by NoteService and the note id dependency; caught by handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError  → 400 Bad Request (client can fix)
    ├── NotFoundError    → 404 Not Found
    └── StoreError       → 500 Internal Server Error

None of these are retried. A request that raises one of them produces
exactly one error response.
"""

from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (field names, ids, error types)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when client input fails validation.

    When:    Empty or whitespace-only title/content, non-string fields,
             an id that is not a positive integer, an update with no fields.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "title is required",
            "details": {"field": "title"}
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


class NotFoundError(NotesAPIError):
    """
    Raised when an operation targets an id that is not in the store.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(NotesAPIError):
    """
    Raised when the persistence layer fails.

    What:    Connection failure, constraint violation, locked database, I/O error.
    HTTP:    500 Internal Server Error

    The response carries the underlying store message; the failing request
    simply ends there (no retry, no recovery).
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
