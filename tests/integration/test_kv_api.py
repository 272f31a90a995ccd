from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from kv_gateway.api.deps import get_kv_repo
from kv_gateway.common.errors import StoreError
from kv_gateway.config import get_settings
from kv_gateway.main import app
from kv_gateway.repositories.redis import RedisKVStoreRepository


@pytest.mark.asyncio
async def test_set_get_overwrite_delete_scenario(client):
    resp = await client.post("/set", json={"key": "a", "value": "1"})
    assert resp.status_code == 200, resp.text
    payload = resp.json()
    assert payload["message"] == "Key stored/updated successfully"
    assert payload["key"] == "a"
    assert payload["expires_at"]

    resp = await client.get("/get", params={"key": "a"})
    assert resp.status_code == 200
    assert resp.json() == {"key": "a", "value": "1"}

    resp = await client.put("/set", json={"key": "a", "value": "2"})
    assert resp.status_code == 200
    assert (await client.get("/get", params={"key": "a"})).json()["value"] == "2"

    resp = await client.post("/delete", json={"key": "a"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Key deleted successfully"}

    resp = await client.get("/get", params={"key": "a"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "key_not_found"

    resp = await client.request("DELETE", "/delete", json={"key": "a"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_get_all(client):
    resp = await client.get("/get-all")
    assert resp.status_code == 200
    assert resp.json() == []

    for i in range(12):
        await client.post("/set", json={"key": f"k{i}", "value": str(i)})

    resp = await client.get("/get-all")
    assert resp.status_code == 200
    assert resp.headers["X-KV-Complete"] == "true"
    assert {item["key"]: item["value"] for item in resp.json()} == {
        f"k{i}": str(i) for i in range(12)
    }


@pytest.mark.asyncio
async def test_get_requires_key(client):
    resp = await client.get("/get")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "missing_key"

    resp = await client.get("/get", params={"key": ""})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_set_rejects_invalid_body(client):
    resp = await client.post(
        "/set", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "validation_error"

    resp = await client.post("/set", json={"value": "orphan"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_set_rejects_empty_key(client):
    resp = await client.post("/set", json={"key": "", "value": "v"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "missing_key"


@pytest.mark.asyncio
async def test_store_failure_maps_to_500(mock_repo, mock_client):
    mock_repo.get.side_effect = StoreError("Redis GET failed", details={"reason": "Connection refused"})
    mock_repo.scan.side_effect = StoreError("Redis SCAN failed")

    get_resp = await mock_client.get("/get", params={"key": "a"})
    all_resp = await mock_client.get("/get-all")

    assert get_resp.status_code == 500
    assert get_resp.json()["error"]["type"] == "store_error"
    assert "details" not in get_resp.json()["error"]
    assert all_resp.status_code == 500


@pytest.mark.asyncio
async def test_get_all_flags_partial_result(mock_repo, mock_client):
    mock_repo.scan.return_value = (0, ["a", "gone"])
    mock_repo.get.side_effect = lambda key: None if key == "gone" else "1"

    resp = await mock_client.get("/get-all")

    assert resp.status_code == 200
    assert resp.json() == [{"key": "a", "value": "1"}]
    assert resp.headers["X-KV-Complete"] == "false"


@pytest.mark.asyncio
async def test_undecodable_value_is_a_store_error():
    """A binary value written by another client must not escape the error envelope"""
    redis_client = AsyncMock()
    redis_client.scan.return_value = (0, ["good", "bin"])

    async def get(key):
        if key == "bin":
            return b"\xff\xfe".decode("utf-8")
        return "1"

    redis_client.get.side_effect = get
    repo = RedisKVStoreRepository(redis_client)
    app.dependency_overrides[get_kv_repo] = lambda: repo
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            get_resp = await ac.get("/get", params={"key": "bin"})
            all_resp = await ac.get("/get-all")
    finally:
        app.dependency_overrides = {}

    assert get_resp.status_code == 500
    assert get_resp.json()["error"]["code"] == "store_bad_reply"
    assert all_resp.status_code == 200
    assert all_resp.json() == [{"key": "good", "value": "1"}]
    assert all_resp.headers["X-KV-Complete"] == "false"


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "store": "ok"}


@pytest.mark.asyncio
async def test_health_uses_injected_repository(mock_repo, mock_client):
    mock_repo.ping.side_effect = StoreError("Redis PING failed")

    resp = await mock_client.get("/health")

    assert resp.status_code == 503
    assert resp.json() == {"status": "unhealthy", "store": "store_error"}
    mock_repo.ping.assert_awaited_once()


@pytest.mark.asyncio
async def test_health_without_redis_client(monkeypatch):
    monkeypatch.setenv("KV_STORE_TYPE", "redis")
    get_settings.cache_clear()
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            resp = await ac.get("/health")
    finally:
        get_settings.cache_clear()

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "store_unavailable"
