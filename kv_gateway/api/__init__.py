"""
API Router Module Initialization
"""

from kv_gateway.api.deps import get_kv_repo, get_kv_service
from kv_gateway.api.kv import router as kv_router

__all__ = [
    "get_kv_repo",
    "get_kv_service",
    "kv_router",
]
