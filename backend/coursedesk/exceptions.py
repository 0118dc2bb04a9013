"""
CourseDesk Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the Database object; caught by global handlers.

Exception Hierarchy:
    CourseDeskError (base)
    ├── ConflictError             → 400 Bad Request (unique field already taken)
    ├── NotFoundError             → 404 Not Found
    ├── DatabaseUnavailableError  → 500 Internal Server Error (connection failed)
    └── DatabaseError             → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class CourseDeskError(Exception):
    """
    Base exception for all CourseDesk application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConflictError(CourseDeskError):
    """
    Raised when a write violates a unique constraint.

    When:    POST/PUT with a Course name or Student email that another record has.
    HTTP:    400 Bad Request, with error code "conflict" so clients can tell it
             apart from a malformed body.
    """

    def __init__(
        self,
        resource: str = "resource",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"A {resource} with the same unique value already exists"
        if field:
            message = f"A {resource} with {field} '{value}' already exists"
        ctx = context or {}
        ctx["resource"] = resource
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CourseDeskError):
    """
    Raised when a requested record does not exist.

    When:    GET/PUT /api/{courses,students}/{id} with an unknown or malformed id.
    HTTP:    404 Not Found
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


class DatabaseUnavailableError(CourseDeskError):
    """
    Raised when the database connection could not be established.

    When:    The one-time connection attempt failed. The failure is memoized:
             every later request gets this error until the process restarts.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Database connection failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CourseDeskError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        The original exception type is kept in context and logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
