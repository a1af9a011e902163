"""
Student API - Exception Hierarchy
=================================

What:  Application-specific exceptions, one per failure class the API reports.
How:   Services and handlers raise these; the handlers registered in main.py
       turn each into a `{"error": message}` JSON body with the matching status.

Exception Hierarchy:
    StudentAPIError (base)
    ├── ValidationError           → 400 Bad Request (malformed id or body)
    ├── NotFoundError             → 404 Not Found (single-record lookup only)
    ├── DatabaseError             → 500 Internal Server Error (raw driver text)
    └── DatabaseConnectionError   → startup failure, terminates the process
"""

from typing import Any, Dict, Optional


class StudentAPIError(Exception):
    """
    Base exception for all Student API errors.

    Attributes:
        message:  Text returned to the client in the `error` field
        context:  Extra debug info, logged but never returned
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StudentAPIError):
    """
    Raised when client input cannot be parsed.

    When:    Non-integer path id, malformed JSON, missing or mistyped body fields.
    HTTP:    400 Bad Request
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


class NotFoundError(StudentAPIError):
    """
    Raised when a single-record lookup matches no row.

    Only the Get-by-id operation raises this; update and delete of a missing
    id are successful no-ops.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Student",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(StudentAPIError):
    """
    Raised when a statement fails while executing.

    What:    Connectivity loss, constraint violation (duplicate id), syntax, etc.
    HTTP:    500 Internal Server Error

    The message is the underlying driver error text, unmapped. Clients see
    exactly what the database reported.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(StudentAPIError):
    """
    Raised by the gateway when the startup connection or ping fails.

    There is no retry and no degraded mode: the lifespan lets this propagate,
    uvicorn reports the failed startup, and the process exits.
    """

    def __init__(
        self,
        message: str = "Could not connect to the database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
