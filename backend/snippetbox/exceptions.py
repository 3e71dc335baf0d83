"""
Snippetbox — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) map them to
       HTTP responses; form-level errors are handled inside the routes.

Exception Hierarchy:
    SnippetboxError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── DuplicateEmailError      → form error on signup
    ├── InvalidCredentialsError  → form error on login
    ├── AuthenticationRequired   → 303 redirect to the login page
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class SnippetboxError(Exception):
    """
    Base exception for all Snippetbox application errors.

    Attributes:
        message:  Error description
        context:  Additional debug info (logged, never rendered to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SnippetboxError):
    """Raised when client input fails validation outside of a form."""

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


class NotFoundError(SnippetboxError):
    """
    Raised when a requested record does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts
    that into this exception so routes can stay free of None checks.
    """

    def __init__(
        self,
        resource: str = "record",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"No matching {resource} found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DuplicateEmailError(SnippetboxError):
    """Raised when signing up with an email address that is already registered."""

    def __init__(self, email: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Email address is already in use", context=context)
        self.email = email


class InvalidCredentialsError(SnippetboxError):
    """Raised when the email is unknown or the password does not match."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Email or password is incorrect", context=context)


class AuthenticationRequired(SnippetboxError):
    """Raised by protected routes when the session has no authenticated user."""

    def __init__(self, next_path: str = "/", context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Authentication required", context=context)
        self.next_path = next_path


class DatabaseError(SnippetboxError):
    """
    Raised when database operations fail unexpectedly.

    The rendered response is always generic; the query context is logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
