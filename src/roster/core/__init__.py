"""
Core module - Configuration, database, security, and utilities.
"""

from roster.core.config import get_settings, settings
from roster.core.database import Base, close_db, get_db, init_db
from roster.core.redis import close_redis, get_redis, init_redis
from roster.core.security import (
    TokenConfig,
    create_access_token,
    decode_token,
    get_token_config,
    hash_password,
    verify_password,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    # Redis
    "get_redis",
    "init_redis",
    "close_redis",
    # Security
    "TokenConfig",
    "get_token_config",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
]
