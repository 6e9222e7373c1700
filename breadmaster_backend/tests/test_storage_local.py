# breadmaster_backend/tests/test_storage_local.py
from __future__ import annotations

import json
import logging

import pytest

from breadmaster_backend.app.services.storage import (
    FileMedium, KeyValueMedium, LocalStorageProvider, MemoryMedium, StorageBackend,
    StorageConfig, local_medium, session_medium,
)

pytestmark = pytest.mark.anyio

def _provider(prefix="app_", medium=None, backend="local"):
    return LocalStorageProvider(StorageConfig(backend=backend, prefix=prefix), medium=medium)

async def test_round_trip_and_default():
    p = _provider(medium=MemoryMedium())
    assert await p.get_item("missing", default=[]) == []
    await p.set_item("recipes", [{"id": "r1", "hydration": 72}])
    assert await p.get_item("recipes") == [{"id": "r1", "hydration": 72}]
    await p.remove_item("recipes")
    assert await p.get_item("recipes") is None

async def test_falsy_values_are_returned_not_replaced_by_default():
    p = _provider(medium=MemoryMedium())
    for value in (0, False, "", []):
        await p.set_item("k", value)
        assert await p.get_item("k", default="fallback") == value

async def test_values_are_stored_as_prefixed_json():
    medium = MemoryMedium()
    p = _provider(prefix="breadApp_", medium=medium)
    await p.set_item("bakeSessions", {"a": 1})
    assert medium.keys() == ["breadApp_bakeSessions"]
    assert json.loads(medium.get_item("breadApp_bakeSessions")) == {"a": 1}

async def test_medium_contract_is_abstract():
    with pytest.raises(TypeError):
        KeyValueMedium()

    class Partial(KeyValueMedium):
        def get_item(self, key):
            return None

    with pytest.raises(TypeError):
        Partial()

# Purpose:
# clear(False) only touches this provider's prefix; clear(True) wipes the medium.
async def test_prefix_isolation_on_shared_medium():
    medium = MemoryMedium()
    a, b = _provider("app_", medium), _provider("other_", medium)
    await a.set_item("k", 1)
    await b.set_item("k", 2)
    medium.set_item("unrelated", "x")

    await a.clear()
    assert await a.get_item("k") is None
    assert await b.get_item("k") == 2
    assert medium.get_item("unrelated") == "x"

    await a.clear(clear_all=True)
    assert len(medium) == 0

async def test_unparseable_value_returns_default_and_logs(caplog):
    medium = MemoryMedium()
    medium.set_item("app_broken", "{not json")
    with caplog.at_level(logging.ERROR):
        assert await _provider(medium=medium).get_item("broken", default="d") == "d"
    assert "Error parsing item" in caplog.text

# Purpose:
# A full medium is logged and swallowed; the previous value stays readable.
async def test_quota_exceeded_is_logged_not_raised(tmp_path, caplog):
    medium = FileMedium(tmp_path / "ls.json", quota_bytes=64)
    p = _provider(medium=medium)
    await p.set_item("small", "ok")
    with caplog.at_level(logging.ERROR):
        await p.set_item("big", "x" * 500)
    assert "Error setting item" in caplog.text
    assert await p.get_item("big", default=None) is None
    assert await p.get_item("small") == "ok"

async def test_unserializable_value_is_logged_not_raised(caplog):
    p = _provider(medium=MemoryMedium())
    with caplog.at_level(logging.ERROR):
        await p.set_item("bad", {"s": {1, 2}})
    assert "Error setting item" in caplog.text

async def test_local_medium_survives_a_new_provider(tmp_data_tree):
    await _provider().set_item("recipes", ["r1"])
    assert await _provider().get_item("recipes") == ["r1"]
    assert (tmp_data_tree / "storage" / "local_storage.json").exists()
    assert local_medium() is local_medium()

async def test_session_backend_uses_in_process_medium(tmp_data_tree):
    p = _provider(backend="session")
    assert p.kind is StorageBackend.SESSION
    await p.set_item("k", "v")
    assert session_medium().get_item("app_k") == '"v"'
    assert not (tmp_data_tree / "storage" / "local_storage.json").exists()
