"""
API Dependency Injection Module

Provides the dependencies required by FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends

from kv_gateway.config import get_settings
from kv_gateway.db.redis import get_redis
from kv_gateway.repositories.kv_store_repo import KVStoreRepository
from kv_gateway.repositories.memory import MemoryKVStoreRepository
from kv_gateway.repositories.redis import RedisKVStoreRepository
from kv_gateway.services import KVService


# ============ Global Singletons ============

# Process-wide memory store, so data survives across requests
_memory_repo = MemoryKVStoreRepository()


# ============ Repository Dependencies ============

def get_kv_repo() -> KVStoreRepository:
    """Get the KV store Repository for the configured backend"""
    settings = get_settings()
    if settings.KV_STORE_TYPE == "memory":
        return _memory_repo
    return RedisKVStoreRepository(get_redis())


KVRepo = Annotated[KVStoreRepository, Depends(get_kv_repo)]


# ============ Service Dependencies ============

def get_kv_service(repo: KVRepo) -> KVService:
    """Get the KV access service"""
    return KVService(repo)


# Dependency type aliases
KVServiceDep = Annotated[KVService, Depends(get_kv_service)]
