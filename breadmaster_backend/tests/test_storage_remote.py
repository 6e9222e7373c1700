# breadmaster_backend/tests/test_storage_remote.py
from __future__ import annotations

import logging

import httpx
import pytest

from breadmaster_backend.app.main import app
from breadmaster_backend.app.services.storage import (
    RemoteStorageError, RemoteStorageProvider, StorageConfig,
)

pytestmark = pytest.mark.anyio

BASE = "http://testserver/api/storage"

def _provider(prefix="app_", api_key=None, transport=None):
    config = StorageConfig(backend="remote", prefix=prefix, remote_url=BASE, api_key=api_key)
    return RemoteStorageProvider(config, transport=transport or httpx.ASGITransport(app=app))

async def test_round_trip_against_item_host():
    p = _provider()
    assert await p.get_item("recipes", default=[]) == []
    await p.set_item("recipes", [{"id": "r1"}])
    assert await p.get_item("recipes") == [{"id": "r1"}]
    await p.remove_item("recipes")
    assert await p.get_item("recipes", default="none") == "none"

async def test_keys_are_prefixed_on_the_wire():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.headers.get("authorization")))
        return httpx.Response(200, json={"value": 1})

    p = _provider(prefix="breadApp_", api_key="s3cret", transport=httpx.MockTransport(handler))
    assert await p.get_item("recipes") == 1
    assert seen == [("GET", "/api/storage/items/breadApp_recipes", "Bearer s3cret")]

async def test_clear_prefix_and_clear_all():
    a, b = _provider("a_"), _provider("b_")
    await a.set_item("k", 1)
    await b.set_item("k", 2)
    await a.clear()
    assert await a.get_item("k") is None
    assert await b.get_item("k") == 2
    await a.clear(clear_all=True)
    assert await b.get_item("k") is None

# Purpose:
# Server errors: reads fall back to the default, writes raise.
async def test_server_error_raises_on_write_and_defaults_on_read(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "boom"})

    p = _provider(transport=httpx.MockTransport(handler))
    with pytest.raises(RemoteStorageError) as exc:
        await p.set_item("k", 1)
    assert exc.value.status_code == 500
    with pytest.raises(RemoteStorageError):
        await p.remove_item("k")
    with pytest.raises(RemoteStorageError):
        await p.clear()

    with caplog.at_level(logging.ERROR):
        assert await p.get_item("k", default="d") == "d"
    assert "Error fetching item" in caplog.text

async def test_unreachable_host_raises_storage_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    p = _provider(transport=httpx.MockTransport(handler))
    with pytest.raises(RemoteStorageError):
        await p.set_item("k", 1)
    assert await p.get_item("k", default=[]) == []

async def test_item_host_requires_bearer_key_when_configured(monkeypatch):
    monkeypatch.setenv("BREAD_ITEMS_API_KEY", "s3cret")
    with pytest.raises(RemoteStorageError) as exc:
        await _provider().set_item("k", 1)
    assert exc.value.status_code == 401

    ok = _provider(api_key="s3cret")
    await ok.set_item("k", 1)
    assert await ok.get_item("k") == 1
    assert await _provider().get_item("k", default="denied") == "denied"
