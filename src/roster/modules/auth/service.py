"""
Credential Verifier

Checks a username/password pair against the stored account and issues a
session token. Unknown usernames and wrong passwords produce the same error.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.exceptions import AuthenticationError, ValidationError
from roster.core.security import TokenConfig, create_access_token, verify_password
from roster.modules.accounts.repository import AccountRepository

logger = logging.getLogger(__name__)


async def authenticate(
    db: AsyncSession,
    config: TokenConfig,
    username: str | None,
    password: str | None,
) -> str:
    """
    Authenticate an operator and return a signed session token.

    Args:
        db: Database session
        config: Token signing configuration
        username: Login name (exact match)
        password: Plain password

    Returns:
        Session token valid for config.expires_minutes

    Raises:
        ValidationError: If username or password is absent
        AuthenticationError: If no account matches or the password is wrong
    """
    if not username or not password:
        raise ValidationError("Username and password are required")

    account = await AccountRepository.get_by_username(db, username)

    if account is None:
        logger.warning(f"Login attempt for unknown username: {username}")
        raise AuthenticationError()

    if not verify_password(password, account.password_hash):
        logger.warning(f"Invalid password for username: {username}")
        raise AuthenticationError()

    logger.info(f"Account logged in: {account.username}")
    return create_access_token(config, subject=str(account.id))
