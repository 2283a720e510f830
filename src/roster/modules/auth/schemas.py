"""Authentication schemas."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """
    Login credentials read from the request body.

    Both fields are optional here so that absent credentials are reported
    as a 400 validation error by the service.
    """

    username: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    """Login response schema."""

    token: str
