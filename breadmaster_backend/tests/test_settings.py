# breadmaster_backend/tests/test_settings.py
from __future__ import annotations
from fastapi.testclient import TestClient

def test_get_storage_settings_defaults(client: TestClient):
    assert client.get("/api/settings/storage").json() == {
        "backend": "local", "prefix": "breadApp_", "remoteUrl": None,
        "apiKey": None, "hasApiKey": False,
    }

# Purpose:
# Switching backend rehydrates the stores from the new medium; switching
# back shows the earlier data again.
def test_switching_backend_rehydrates_stores(client: TestClient, sourdough_payload):
    client.post("/api/recipes", json=sourdough_payload)
    assert len(client.get("/api/recipes").json()) == 1

    r = client.put("/api/settings/storage", json={"backend": "sqlite"})
    assert r.json()["backend"] == "sqlite"
    assert client.get("/api/recipes").json() == []
    client.post("/api/recipes", json=dict(sourdough_payload, name="On SQLite"))

    client.put("/api/settings/storage", json={"backend": "local"})
    assert [x["name"] for x in client.get("/api/recipes").json()] == ["Country Loaf"]

    client.put("/api/settings/storage", json={"backend": "sqlite"})
    assert [x["name"] for x in client.get("/api/recipes").json()] == ["On SQLite"]

def test_api_key_is_masked_and_echo_keeps_it(client: TestClient):
    r = client.put("/api/settings/storage", json={"remoteUrl": "http://x/api/storage", "apiKey": "abcdef123"})
    assert r.json()["apiKey"] == "****f123"

    # the settings page sends back what it was shown
    r = client.put("/api/settings/storage", json={"apiKey": "****f123", "prefix": "b_"})
    assert r.json()["hasApiKey"] is True and r.json()["apiKey"] == "****f123"
    assert r.json()["prefix"] == "b_"

    r = client.put("/api/settings/storage", json={"apiKey": None})
    assert r.json()["hasApiKey"] is False

def test_factory_reset_wipes_everything(client: TestClient, sourdough_payload):
    rid = client.post("/api/recipes", json=sourdough_payload).json()["id"]
    client.post("/api/bakes", json={"recipeId": rid})
    assert client.post("/api/settings/reset").json() == {"ok": True}
    assert client.get("/api/recipes").json() == []
    assert client.get("/api/bakes").json() == []

def test_write_failure_on_remote_backend_is_502(client: TestClient, sourdough_payload):
    client.put("/api/settings/storage", json={"backend": "remote", "remoteUrl": "http://127.0.0.1:9/api/storage"})
    r = client.post("/api/recipes", json=sourdough_payload)
    assert r.status_code == 502
