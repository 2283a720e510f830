"""Authentication router."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.database import get_db
from roster.core.exceptions import RosterError, ValidationError, to_http_exception
from roster.core.rate_limit import limit_login_attempts
from roster.core.security import TokenConfig, get_token_config
from roster.modules.auth import service
from roster.modules.auth.schemas import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _as_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


async def read_login_request(request: Request) -> LoginRequest:
    """
    Read credentials from a JSON or form body.

    Non-string values are treated as absent so the service reports them.

    Raises:
        HTTPException 400: If the body cannot be parsed or is not an object
    """
    content_type = request.headers.get("content-type", "")

    try:
        if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
            data: Any = dict(await request.form())
        else:
            body = await request.body()
            data = await request.json() if body else {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
    except RosterError as e:
        raise to_http_exception(e) from e
    except ValueError as e:
        raise to_http_exception(ValidationError("Request body could not be parsed")) from e

    return LoginRequest(
        username=_as_text(data.get("username")),
        password=_as_text(data.get("password")),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(limit_login_attempts)],
)
async def login(
    credentials: LoginRequest = Depends(read_login_request),
    db: AsyncSession = Depends(get_db),
    config: TokenConfig = Depends(get_token_config),
) -> LoginResponse:
    """
    Authenticate an operator and return a session token.

    Raises:
        HTTPException 400: Missing or invalid credentials
        HTTPException 429: Too many login attempts
    """
    try:
        token = await service.authenticate(
            db,
            config,
            username=credentials.username,
            password=credentials.password,
        )
    except RosterError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error during login: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "Internal Server Error",
            },
        ) from e

    return LoginResponse(token=token)
