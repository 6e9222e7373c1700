# breadmaster_backend/tests/test_storage_items_api.py
from __future__ import annotations
from fastapi.testclient import TestClient

def test_item_round_trip(client: TestClient):
    assert client.get("/api/storage/items/breadApp_recipes").status_code == 404
    assert client.put("/api/storage/items/breadApp_recipes", json={"value": [1, 2]}).json() == {"ok": True}
    assert client.get("/api/storage/items/breadApp_recipes").json() == {"key": "breadApp_recipes", "value": [1, 2]}
    assert client.delete("/api/storage/items/breadApp_recipes").status_code == 204
    assert client.get("/api/storage/items/breadApp_recipes").status_code == 404

def test_put_requires_value(client: TestClient):
    assert client.put("/api/storage/items/k", json={"nope": 1}).status_code == 422

def test_bulk_delete_by_prefix(client: TestClient):
    for key in ("a_1", "a_2", "b_1"):
        client.put(f"/api/storage/items/{key}", json={"value": key})
    assert client.delete("/api/storage/items", params={"prefix": "a_"}).json() == {"ok": True, "removed": 2}
    assert client.get("/api/storage/items/b_1").status_code == 200
    assert client.delete("/api/storage/items").json()["removed"] == 1

def test_bearer_key_required_when_configured(client: TestClient, monkeypatch):
    monkeypatch.setenv("BREAD_ITEMS_API_KEY", "s3cret")
    assert client.get("/api/storage/items/k").status_code == 401
    r = client.get("/api/storage/items/k", headers={"Authorization": "Bearer s3cret"})
    assert r.status_code == 404
