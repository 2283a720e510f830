"""
Service Errors

Every error raised by the business layer carries a human-readable message,
a stable error code and the HTTP status it maps to at the API boundary.
"""

from fastapi import HTTPException


class RosterError(Exception):
    """Base exception for roster service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class ValidationError(RosterError):
    """Raised when required input is missing or cannot be parsed."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        self.missing_fields = missing_fields or []
        super().__init__(message=message, error_code="VALIDATION_ERROR", status_code=400)


class AuthenticationError(RosterError):
    """Raised when a username/password pair does not match an account."""

    def __init__(self):
        super().__init__(
            message="Invalid username or password",
            error_code="INVALID_CREDENTIALS",
            status_code=400,
        )


class AuthError(RosterError):
    """Raised when a session token is missing, malformed, invalid or expired."""

    MESSAGES = {
        "missing": ("TOKEN_MISSING", "Access denied. No token provided.", 401),
        "malformed": ("TOKEN_MALFORMED", "Access denied. Invalid token format.", 401),
        "invalid": ("TOKEN_INVALID", "Invalid or expired token.", 400),
    }

    def __init__(self, kind: str):
        if kind not in self.MESSAGES:
            raise ValueError(f"Unknown auth error kind: {kind}")
        self.kind = kind
        error_code, message, status_code = self.MESSAGES[kind]
        super().__init__(message=message, error_code=error_code, status_code=status_code)


class NotFoundError(RosterError):
    """Raised when no entity matches the requested id or filter."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message=message, error_code="NOT_FOUND", status_code=404)


class PersistenceError(RosterError):
    """Raised when the database is unreachable or a write fails."""

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message=message, error_code="PERSISTENCE_ERROR", status_code=500)


def to_http_exception(e: RosterError) -> HTTPException:
    """Convert a service error to an HTTPException with a structured detail."""
    headers = None
    if e.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
        headers=headers,
    )
