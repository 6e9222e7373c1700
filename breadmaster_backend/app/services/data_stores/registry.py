# breadmaster_backend/app/services/data_stores/registry.py
from __future__ import annotations

from threading import RLock
from typing import Any, Dict

from breadmaster_backend.app.services.storage import StorageService, create_storage
from .bake_sessions import BakeSessionStore
from .recipes import RecipeStore

# Purpose:
# Process-wide wiring: one StorageService (configured from env on first use)
# shared by the recipe and bake-session stores. Used as FastAPI dependencies.

_LOCK = RLock()
_STATE: Dict[str, Any] = {}

def get_storage_service() -> StorageService:
    with _LOCK:
        svc = _STATE.get("storage")
        if svc is None:
            svc = _STATE["storage"] = create_storage()
        return svc

def _store(name: str, factory):
    with _LOCK:
        store = _STATE.get(name)
        if store is None:
            store = _STATE[name] = factory(get_storage_service())
        return store

async def get_recipe_store() -> RecipeStore:
    store: RecipeStore = _store("recipes", RecipeStore)
    if not store.loaded:
        await store.load()
    return store

async def get_bake_session_store() -> BakeSessionStore:
    store: BakeSessionStore = _store("bake_sessions", BakeSessionStore)
    if not store.loaded:
        await store.load()
    return store

async def rehydrate_stores() -> None:
    """Reload both collections from whatever backend is now active."""
    await _store("recipes", RecipeStore).load()
    await _store("bake_sessions", BakeSessionStore).load()

def reset_registry() -> None:
    """Forget the service and stores; the next call rebuilds them from env."""
    with _LOCK:
        _STATE.clear()
