# breadmaster_backend/tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from breadmaster_backend.app.main import app
from breadmaster_backend.app.services.data_stores import reset_registry
from breadmaster_backend.app.services.storage import session_medium

_STORAGE_ENV = (
    "BREAD_STORAGE_BACKEND",
    "BREAD_STORAGE_PREFIX",
    "BREAD_REMOTE_URL",
    "BREAD_API_KEY",
    "BREAD_ITEMS_API_KEY",
    "BREAD_LOCAL_QUOTA_BYTES",
)

# --- Data tree override: every test gets its own DATA_DIR and a fresh registry ---
@pytest.fixture(autouse=True)
def tmp_data_tree(tmp_path, monkeypatch):
    data = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(data))
    for name in _STORAGE_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_registry()
    session_medium().clear()
    yield data
    reset_registry()

# --- async tests run on asyncio only ---
@pytest.fixture
def anyio_backend():
    return "asyncio"

@pytest.fixture
def client():
    return TestClient(app)

# --- Small recipe payloads reused across API tests ---
@pytest.fixture
def sourdough_payload():
    return {
        "name": "Country Loaf",
        "doughWeight": 1000,
        "hydration": 70,
        "saltPercentage": 2,
        "yeastType": "Sourdough",
        "breadType": "Boule",
        "flourTypes": [{"name": "Bread Flour", "percentage": 100}],
        "stages": [
            {"name": "Mix", "order": 0, "included": True},
            {"name": "Bulk Ferment", "order": 1, "included": True},
            {"name": "Bake", "order": 2, "included": True},
        ],
    }
