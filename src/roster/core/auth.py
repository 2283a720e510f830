"""
Session Gate

Validates the bearer token presented on every protected endpoint before any
business logic runs. Any authenticated account may perform any operation;
there is no role check.
"""

import logging

from fastapi import Depends, Header

from roster.core.exceptions import AuthError, to_http_exception
from roster.core.security import TokenConfig, decode_token, get_token_config

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def authorize(config: TokenConfig, authorization: str | None) -> str:
    """
    Validate an Authorization header value and return the account id.

    Args:
        config: Token signing configuration
        authorization: Raw header value, expected as "Bearer <token>"

    Returns:
        The account id bound into the token

    Raises:
        AuthError("missing"): No header was presented
        AuthError("malformed"): Header is not a two-part "Bearer <token>" value
        AuthError("invalid"): Signature, claims or expiry check failed
    """
    if not authorization:
        raise AuthError("missing")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise AuthError("malformed")

    payload = decode_token(config, parts[1])
    if payload is None:
        raise AuthError("invalid")

    account_id = payload.get("sub")
    if not account_id or payload.get("type", "access") != "access":
        raise AuthError("invalid")

    return account_id


async def get_current_account_id(
    authorization: str | None = Header(default=None),
    config: TokenConfig = Depends(get_token_config),
) -> str:
    """
    FastAPI dependency that guards protected endpoints.

    Usage:
        router = APIRouter(dependencies=[Depends(get_current_account_id)])
    """
    try:
        account_id = authorize(config, authorization)
    except AuthError as e:
        logger.warning(f"Rejected request token ({e.kind})")
        raise to_http_exception(e) from e

    logger.debug(f"Authenticated account: {account_id}")
    return account_id


__all__ = [
    "authorize",
    "get_current_account_id",
]
