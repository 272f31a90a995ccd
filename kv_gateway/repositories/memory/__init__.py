"""
In-Memory Repository Implementation Module Initialization
"""

from kv_gateway.repositories.memory.kv_store_repo import MemoryKVStoreRepository

__all__ = [
    "MemoryKVStoreRepository",
]
