"""
Key-Value Store Repository Interface

Defines the data access interface for the KV store.
All implementations raise StoreError for any failure of the underlying store.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KVStoreRepository(ABC):
    """Key-Value Store Repository Interface"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value by key

        Returns None if key doesn't exist or is expired.

        Args:
            key: The key to look up

        Returns:
            The stored value if present, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """
        Set a key-value pair with expiry

        Unconditionally overwrites any previous value and resets its expiry.

        Args:
            key: The key to set
            value: The value to store
            ttl_seconds: Time to live in seconds
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> int:
        """
        Delete a key

        Args:
            key: The key to delete

        Returns:
            Number of keys removed (0 if the key didn't exist)
        """
        pass

    @abstractmethod
    async def scan(self, cursor: int, match: str, count: int) -> tuple[int, list[str]]:
        """
        Read one page of an incremental key scan

        Cursor 0 starts an enumeration; a returned cursor of 0 ends it.

        Args:
            cursor: Cursor returned by the previous page (0 to start)
            match: Glob pattern keys must match
            count: Page size hint

        Returns:
            tuple[int, list[str]]: (Next cursor, Keys in this page)
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the store answers"""
        pass
