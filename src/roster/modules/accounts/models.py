"""
Account Models

Operator accounts. Accounts are created out-of-band (see scripts/create_account.py)
and are read-only for the API.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from roster.modules.shared import BaseModel


class Account(BaseModel):
    """Operator credential pair."""

    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, username={self.username})>"
