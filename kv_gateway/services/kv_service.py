"""
Key-Value Access Service Module

Mediates all interaction with the key-value store: applies the uniform TTL
policy, bounds every round trip with a timeout and provides the cursor-driven
full enumeration.
"""

import asyncio
import logging
from typing import AsyncIterator, Awaitable, Optional, TypeVar

from kv_gateway.common.errors import NotFoundError, StoreError, ValidationError
from kv_gateway.common.time import expires_in, utc_now
from kv_gateway.config import Settings, get_settings
from kv_gateway.domain.kv_store import FetchAllResult, KeyValue, KeyValueRecord
from kv_gateway.repositories.kv_store_repo import KVStoreRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KVService:
    """
    Key-Value Access Service

    Stateless façade over a KVStoreRepository. Holds no data between calls,
    so one instance may serve any number of concurrent requests.
    No operation is retried: the first failed round trip ends the call.
    """

    def __init__(self, repo: KVStoreRepository, settings: Optional[Settings] = None):
        """
        Initialize Service

        Args:
            repo: KV store repository
            settings: Configuration (defaults to the application settings)
        """
        settings = settings or get_settings()
        self.repo = repo
        self.ttl_seconds = settings.KV_TTL_SECONDS
        self.scan_page_size = settings.KV_SCAN_PAGE_SIZE
        self.scan_pattern = settings.KV_SCAN_PATTERN
        self.fetch_concurrency = max(1, settings.KV_FETCH_CONCURRENCY)
        self.operation_timeout = settings.KV_OPERATION_TIMEOUT_SECONDS
        self.fetch_all_timeout = settings.KV_FETCH_ALL_TIMEOUT_SECONDS

    # ============ Timeouts ============

    def _deadline(self, timeout: Optional[float]) -> Optional[float]:
        """Absolute event-loop time after which enumeration must stop"""
        if not timeout or timeout <= 0:
            return None
        return asyncio.get_running_loop().time() + timeout

    def _budget(
        self, deadline: Optional[float], operation: str, key: Optional[str] = None
    ) -> Optional[float]:
        """
        Time allowed for the next round trip

        The smaller of the per-operation timeout and what is left before the
        deadline. Raises StoreError when the deadline has already passed.
        """
        budget = self.operation_timeout if self.operation_timeout > 0 else None
        if deadline is None:
            return budget

        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise self._timeout_error(operation, key)
        return remaining if budget is None else min(budget, remaining)

    def _timeout_error(self, operation: str, key: Optional[str]) -> StoreError:
        details = {"operation": operation}
        if key is not None:
            details["key"] = key
        return StoreError(
            message=f"Key-value store {operation} timed out",
            code="store_timeout",
            details=details,
        )

    async def _bounded(
        self,
        call: Awaitable[T],
        timeout: Optional[float],
        operation: str,
        key: Optional[str] = None,
    ) -> T:
        """Await a store call, converting a timeout into StoreError"""
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Store %s timed out after %.3fs (key=%r)", operation, timeout, key)
            raise self._timeout_error(operation, key) from exc

    @staticmethod
    def _require_key(key: Optional[str]) -> str:
        if not key:
            raise ValidationError(message="Key is required", code="missing_key")
        return key

    # ============ Operations ============

    async def upsert(self, key: str, value: str) -> KeyValueRecord:
        """
        Write a key-value pair with the configured TTL

        Overwrites any previous value and resets its expiry.

        Raises:
            ValidationError: Empty key
            StoreError: The write failed
        """
        key = self._require_key(key)
        now = utc_now()
        await self._bounded(
            self.repo.set(key, value, self.ttl_seconds),
            self._budget(None, "SET", key),
            "SET",
            key,
        )
        logger.debug("Stored key %r (ttl=%ss)", key, self.ttl_seconds)
        return KeyValueRecord(
            key=key, value=value, expires_at=expires_in(self.ttl_seconds, now)
        )

    async def fetch(self, key: str) -> str:
        """
        Read the current value of a key

        Does not extend the key's expiry.

        Raises:
            ValidationError: Empty key
            NotFoundError: Key absent or expired
            StoreError: The read failed
        """
        key = self._require_key(key)
        value = await self._bounded(
            self.repo.get(key), self._budget(None, "GET", key), "GET", key
        )
        if value is None:
            raise NotFoundError(message="Key not found", details={"key": key})
        return value

    async def remove(self, key: str) -> None:
        """
        Delete a key

        The deletion count reported by the store decides whether the key existed.

        Raises:
            ValidationError: Empty key
            NotFoundError: Nothing was deleted
            StoreError: The delete failed
        """
        key = self._require_key(key)
        deleted = await self._bounded(
            self.repo.delete(key), self._budget(None, "DEL", key), "DEL", key
        )
        if deleted == 0:
            raise NotFoundError(message="Key not found", details={"key": key})
        logger.debug("Deleted key %r", key)

    async def iter_key_pages(self, timeout: Optional[float] = None) -> AsyncIterator[list[str]]:
        """
        Enumerate the keyspace one scan page at a time

        Starts at cursor 0 and follows the returned cursor until the store
        hands back 0. Callers may stop iterating early or cancel the task.

        Args:
            timeout: Budget in seconds for the whole enumeration (None or 0 for no limit)

        Raises:
            StoreError: A page request failed or the budget ran out
        """
        async for page in self._scan_pages(self._deadline(timeout)):
            yield page

    async def _scan_pages(self, deadline: Optional[float]) -> AsyncIterator[list[str]]:
        cursor = 0
        while True:
            budget = self._budget(deadline, "SCAN")
            cursor, keys = await self._bounded(
                self.repo.scan(cursor, self.scan_pattern, self.scan_page_size),
                budget,
                "SCAN",
            )
            yield keys
            if cursor == 0:
                return

    async def fetch_all(self, timeout: Optional[float] = None) -> FetchAllResult:
        """
        Read every key and its value

        Two phases: the scan phase collects all keys and fails as a whole on
        any page error; the fetch phase then reads each key and omits those
        that have vanished or cannot be read. The result is a best-effort
        view, not a point-in-time snapshot.

        Args:
            timeout: Overall budget in seconds (defaults to KV_FETCH_ALL_TIMEOUT_SECONDS)

        Returns:
            FetchAllResult: Pairs in scan order plus the keys that were skipped

        Raises:
            StoreError: A scan page failed or the budget ran out during the scan
        """
        if timeout is None:
            timeout = self.fetch_all_timeout
        deadline = self._deadline(timeout)

        keys: list[str] = []
        async for page in self._scan_pages(deadline):
            keys.extend(page)

        semaphore = asyncio.Semaphore(self.fetch_concurrency)

        async def read(key: str):
            async with semaphore:
                try:
                    budget = self._budget(deadline, "GET", key)
                    return await self._bounded(self.repo.get(key), budget, "GET", key)
                except StoreError as exc:
                    return exc

        values = await asyncio.gather(*(read(key) for key in keys))

        items: list[KeyValue] = []
        missing: list[str] = []
        failed: list[str] = []
        for key, value in zip(keys, values):
            if isinstance(value, StoreError):
                failed.append(key)
            elif value is None:
                missing.append(key)
            else:
                items.append(KeyValue(key=key, value=value))

        result = FetchAllResult(items=items, missing=missing, failed=failed)
        if not result.complete:
            logger.warning(
                "Enumeration skipped %d key(s): %d vanished, %d unreadable",
                len(missing) + len(failed),
                len(missing),
                len(failed),
            )
        logger.info("Enumerated %d key(s), returned %d", len(keys), len(items))
        return result

    async def ping(self) -> bool:
        """Check that the store answers within the operation timeout"""
        return await self._bounded(self.repo.ping(), self._budget(None, "PING"), "PING")
