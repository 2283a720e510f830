"""
Account Repository

Database operations for operator accounts.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.modules.accounts.models import Account

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repository for account database operations."""

    @staticmethod
    async def create(db: AsyncSession, *, username: str, password_hash: str) -> Account:
        """
        Create a new account record.

        Args:
            db: Database session
            username: Unique login name
            password_hash: bcrypt hash of the password

        Returns:
            Created Account instance
        """
        account = Account(username=username, password_hash=password_hash)

        db.add(account)
        await db.commit()
        await db.refresh(account)

        logger.info(f"Created account: {account.id} - {account.username}")
        return account

    @staticmethod
    async def get_by_id(db: AsyncSession, account_id: str) -> Account | None:
        """Get an account by ID."""
        return await db.get(Account, account_id)

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> Account | None:
        """Get an account by exact username."""
        result = await db.execute(select(Account).where(Account.username == username))
        return result.scalar_one_or_none()
