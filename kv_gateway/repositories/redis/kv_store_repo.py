"""
Key-Value Store Repository Redis Implementation

Provides concrete Redis operation implementation for KV Store.
Uses Redis native TTL for automatic key expiration.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from kv_gateway.common.errors import StoreError
from kv_gateway.repositories.kv_store_repo import KVStoreRepository

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str, key: Optional[str] = None) -> Iterator[None]:
    """
    Translate redis-py failures into StoreError

    Replies that cannot be decoded as UTF-8 (values written as raw bytes by
    other clients) are reported as `store_bad_reply`.
    """
    try:
        yield
    except (RedisError, UnicodeDecodeError) as exc:
        logger.error("Redis %s failed (key=%r): %s", operation, key, exc)
        details = {"operation": operation, "reason": str(exc)}
        if key is not None:
            details["key"] = key
        raise StoreError(
            message=f"Redis {operation} failed",
            code="store_bad_reply" if isinstance(exc, UnicodeDecodeError) else "store_error",
            details=details,
        ) from exc


class RedisKVStoreRepository(KVStoreRepository):
    """
    Key-Value Store Repository Redis Implementation

    Values are stored as plain strings and expire through Redis native TTL.
    The client must be created with `decode_responses=True`.
    """

    def __init__(self, client: Redis):
        """
        Initialize Repository

        Args:
            client: Async Redis client instance (pooled, shared across requests)
        """
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        """Get value by key, returns None if not found or expired"""
        with _store_errors("GET", key):
            return await self.client.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Set a key-value pair, replacing value and TTL"""
        with _store_errors("SET", key):
            await self.client.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> int:
        """Delete a key, returning the number of keys removed"""
        with _store_errors("DEL", key):
            return int(await self.client.delete(key))

    async def scan(self, cursor: int, match: str, count: int) -> tuple[int, list[str]]:
        """Read one SCAN page"""
        with _store_errors("SCAN"):
            next_cursor, keys = await self.client.scan(
                cursor=cursor, match=match, count=count
            )
        return int(next_cursor), list(keys)

    async def ping(self) -> bool:
        """Send PING"""
        with _store_errors("PING"):
            return bool(await self.client.ping())
