"""
Data Access Layer Module Initialization
"""

from kv_gateway.repositories.kv_store_repo import KVStoreRepository

__all__ = [
    "KVStoreRepository",
]
