"""
Domain Model Module Initialization
"""

from kv_gateway.domain.kv_store import (
    FetchAllResult,
    KeyRef,
    KeyStoredResponse,
    KeyValue,
    KeyValueRecord,
    MessageResponse,
)

__all__ = [
    "FetchAllResult",
    "KeyRef",
    "KeyStoredResponse",
    "KeyValue",
    "KeyValueRecord",
    "MessageResponse",
]
