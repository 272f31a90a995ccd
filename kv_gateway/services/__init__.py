"""
Service Layer Module Initialization
"""

from kv_gateway.services.kv_service import KVService

__all__ = [
    "KVService",
]
