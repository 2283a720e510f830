"""
Create Operator Account

Accounts cannot be created through the API. Run this script to add an
operator who can then log in with POST /login.

Usage:
    python scripts/create_account.py <username> <password>
"""

import argparse
import asyncio
import sys

from roster.core.database import async_session_maker, close_db, init_db
from roster.core.security import hash_password
from roster.modules.accounts.repository import AccountRepository


async def create_account(username: str, password: str) -> int:
    """Create the account if the username is free."""
    await init_db()

    try:
        async with async_session_maker() as db:
            existing = await AccountRepository.get_by_username(db, username)

            if existing:
                print(f"Account already exists: {username}")
                print(f"  ID: {existing.id}")
                return 1

            account = await AccountRepository.create(
                db,
                username=username,
                password_hash=hash_password(password),
            )

            print("Account created successfully!")
            print(f"  Username: {account.username}")
            print(f"  ID: {account.id}")
    finally:
        await close_db()

    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an operator account")
    parser.add_argument("username")
    parser.add_argument("password")
    args = parser.parse_args()

    if not args.username or not args.password:
        parser.error("username and password must not be empty")

    return asyncio.run(create_account(args.username, args.password))


if __name__ == "__main__":
    sys.exit(main())
