"""
Key-Value API

Thin HTTP adapters over the KV access service.
Errors propagate to the application exception handlers.
"""

from typing import Optional

from fastapi import APIRouter, Query, Response

from kv_gateway.api.deps import KVServiceDep
from kv_gateway.common.errors import ValidationError
from kv_gateway.domain.kv_store import (
    KeyRef,
    KeyStoredResponse,
    KeyValue,
    MessageResponse,
)

router = APIRouter(tags=["Key-Value"])


@router.api_route("/set", methods=["POST", "PUT"], response_model=KeyStoredResponse)
async def upsert_key(data: KeyValue, service: KVServiceDep):
    """
    Set or update a key

    The key expires one TTL period after the last write.
    """
    record = await service.upsert(data.key, data.value)
    return KeyStoredResponse(
        message="Key stored/updated successfully",
        key=record.key,
        expires_at=record.expires_at,
    )


@router.get("/get", response_model=KeyValue)
async def get_key(
    service: KVServiceDep,
    key: Optional[str] = Query(None, description="Key to read"),
):
    """Get the value of a key"""
    if not key:
        raise ValidationError(message="Key parameter is required", code="missing_key")
    value = await service.fetch(key)
    return KeyValue(key=key, value=value)


@router.get("/get-all", response_model=list[KeyValue])
async def get_all_keys(service: KVServiceDep, response: Response):
    """
    Get every key and its value

    Keys that vanish or cannot be read while values are fetched are left out;
    `X-KV-Complete: false` signals that this happened.
    """
    result = await service.fetch_all()
    response.headers["X-KV-Complete"] = "true" if result.complete else "false"
    return result.items


@router.api_route("/delete", methods=["POST", "DELETE"], response_model=MessageResponse)
async def delete_key(data: KeyRef, service: KVServiceDep):
    """Delete a key"""
    await service.remove(data.key)
    return MessageResponse(message="Key deleted successfully")
