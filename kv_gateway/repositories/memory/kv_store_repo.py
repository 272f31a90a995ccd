"""
Key-Value Store Repository In-Memory Implementation

Keeps entries in process with per-entry expiry.
Suitable for development and testing. Data is lost on restart.
"""

import asyncio
import fnmatch
import time
from dataclasses import dataclass
from typing import Callable, Optional

from kv_gateway.repositories.kv_store_repo import KVStoreRepository


@dataclass
class MemoryEntry:
    """A stored value with its expiration instant (clock seconds)"""

    value: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class MemoryKVStoreRepository(KVStoreRepository):
    """
    In-Memory KV Store Repository

    `scan` walks the sorted live keys by offset: the cursor is the offset of
    the next page and 0 marks the end. Like Redis SCAN, keys written or
    removed between pages may be missed or reported twice.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        """
        Initialize Repository

        Args:
            clock: Monotonic time source in seconds (defaults to time.monotonic)
        """
        self._data: dict[str, MemoryEntry] = {}
        self._lock = asyncio.Lock()
        self._clock = clock or time.monotonic

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, v in self._data.items() if v.is_expired(now)]
        for k in expired:
            del self._data[k]

    async def get(self, key: str) -> Optional[str]:
        """Get value by key, returns None if not found or expired"""
        async with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._data[key]
                return None
            return entry.value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Set a key-value pair, replacing value and expiry"""
        async with self._lock:
            self._data[key] = MemoryEntry(
                value=value, expires_at=self._clock() + ttl_seconds
            )

    async def delete(self, key: str) -> int:
        """Delete a key, returning the number of keys removed"""
        async with self._lock:
            entry = self._data.pop(key, None)
            if entry is None or entry.is_expired(self._clock()):
                return 0
            return 1

    async def scan(self, cursor: int, match: str, count: int) -> tuple[int, list[str]]:
        """Read one page of live keys matching `match`"""
        async with self._lock:
            self._purge_expired(self._clock())
            keys = sorted(k for k in self._data if fnmatch.fnmatchcase(k, match))

        page = keys[cursor:cursor + count]
        next_cursor = cursor + count
        if next_cursor >= len(keys):
            next_cursor = 0
        return next_cursor, page

    async def ping(self) -> bool:
        return True

    async def clear(self) -> None:
        """Clear all data. Useful for testing."""
        async with self._lock:
            self._data.clear()
