"""
Accounts module - operator credentials used to obtain session tokens.
"""

from roster.modules.accounts.models import Account
from roster.modules.accounts.repository import AccountRepository

__all__ = ["Account", "AccountRepository"]
