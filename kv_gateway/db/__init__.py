"""
Store Connection Module Initialization
"""

from kv_gateway.db.redis import close_redis, get_redis, init_redis

__all__ = [
    "close_redis",
    "get_redis",
    "init_redis",
]
