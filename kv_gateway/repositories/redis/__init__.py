"""
Redis Repository Implementation Module Initialization
"""

from kv_gateway.repositories.redis.kv_store_repo import RedisKVStoreRepository

__all__ = [
    "RedisKVStoreRepository",
]
