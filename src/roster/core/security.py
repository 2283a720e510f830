"""
Security Utilities

Password hashing (bcrypt) and signed session tokens (JWT via python-jose).

The signing material lives in a TokenConfig built once at startup and passed
explicitly to the functions that issue or verify tokens.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
from jose import JWTError, jwt

from roster.core.config import settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class TokenConfig:
    """Signing material for session tokens."""

    secret_key: str
    algorithm: str = "HS256"
    expires_minutes: int = 60

    @property
    def expires_delta(self) -> timedelta:
        return timedelta(minutes=self.expires_minutes)


@lru_cache
def get_token_config() -> TokenConfig:
    """
    Build the process-wide token configuration from settings.

    Used as a FastAPI dependency so tests can override it.
    """
    return TokenConfig(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    hashed = bcrypt.hashpw(password.encode()[:_BCRYPT_MAX_BYTES], bcrypt.gensalt())
    return hashed.decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            password.encode()[:_BCRYPT_MAX_BYTES],
            password_hash.encode(),
        )
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_access_token(
    config: TokenConfig,
    subject: str,
    now: datetime | None = None,
) -> str:
    """
    Issue a signed access token for the given subject.

    Args:
        config: Token signing configuration
        subject: Account id to bind into the token
        now: Issue instant (defaults to the current UTC time)

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(UTC)
    claims = {
        "sub": subject,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + config.expires_delta,
    }
    return jwt.encode(claims, config.secret_key, algorithm=config.algorithm)


def decode_token(config: TokenConfig, token: str) -> dict[str, Any] | None:
    """
    Verify a token's signature and expiry and return its claims.

    Returns:
        The decoded claims, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None
