"""
Redis Connection Management Module

Provides Redis client lifecycle management for the KV store backend.
Only used when KV_STORE_TYPE is set to "redis".
"""

import logging
import warnings
from typing import Optional
from urllib.parse import urlparse

from redis.asyncio import Redis

from kv_gateway.common.errors import StoreError
from kv_gateway.config import get_settings

logger = logging.getLogger(__name__)

# Global Redis client instance (owns the connection pool)
_redis_client: Optional[Redis] = None


def _check_redis_security(redis_url: str) -> None:
    """
    Check Redis connection security.

    Warns if Redis URL has no password and is not a localhost connection.
    """
    parsed = urlparse(redis_url)

    has_password = bool(parsed.password)
    is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")

    if not has_password and not is_localhost:
        warnings.warn(
            "SECURITY WARNING: Redis connection has no password and is not connecting to localhost. "
            "Please set a password in REDIS_URL using the format: redis://:password@host:port/db",
            UserWarning,
            stacklevel=3,
        )
        logger.warning(
            "Redis connection without password to non-localhost host detected. "
            "Consider adding password authentication for production."
        )


def _redact(redis_url: str) -> str:
    """Hide the password part of a Redis URL for logging"""
    parsed = urlparse(redis_url)
    if not parsed.password:
        return redis_url
    return redis_url.replace(f":{parsed.password}@", ":***@", 1)


async def init_redis() -> None:
    """
    Initialize Redis Connection

    Creates a pooled async Redis client from the configured REDIS_URL.
    Should be called during application startup when KV_STORE_TYPE is "redis".
    """
    global _redis_client

    if _redis_client is not None:
        logger.warning("Redis client already initialized")
        return

    settings = get_settings()

    _check_redis_security(settings.REDIS_URL)

    client = Redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
    )

    # Verify connectivity; only publish the client once it answers
    try:
        await client.ping()
    except BaseException:
        await client.aclose()
        raise
    _redis_client = client
    logger.info("Redis connection established: %s", _redact(settings.REDIS_URL))


async def close_redis() -> None:
    """
    Close Redis Connection

    Gracefully closes the Redis client and its pool.
    Should be called during application shutdown.
    """
    global _redis_client

    if _redis_client is None:
        return

    await _redis_client.aclose()
    _redis_client = None
    logger.info("Redis connection closed")


def get_redis() -> Redis:
    """
    Get Redis Client Instance

    Returns:
        Redis: The async Redis client

    Raises:
        StoreError: If Redis has not been initialized
    """
    if _redis_client is None:
        raise StoreError(
            message="Redis client not initialized",
            code="store_unavailable",
        )
    return _redis_client
