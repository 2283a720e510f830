"""Authentication module."""

from roster.modules.auth.router import router
from roster.modules.auth.schemas import LoginRequest, LoginResponse

__all__ = ["router", "LoginRequest", "LoginResponse"]
