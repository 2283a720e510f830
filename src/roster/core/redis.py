"""
Redis Configuration

Optional async Redis client, used for login throttling when configured.
"""

from redis.asyncio import Redis, from_url

from roster.core.config import settings

# Redis client instance
redis_client: Redis | None = None


async def init_redis() -> Redis | None:
    """
    Initialize Redis connection.

    Call this on application startup. Does nothing when no redis_url is set.
    """
    global redis_client
    if not settings.redis_url:
        return None

    redis_client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    # Test connection
    await redis_client.ping()
    return redis_client


def get_redis() -> Redis | None:
    """Return the Redis client, or None when Redis is not in use."""
    return redis_client


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
