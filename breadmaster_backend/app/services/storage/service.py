# breadmaster_backend/app/services/storage/service.py
from __future__ import annotations

import logging
from dataclasses import replace
from threading import RLock
from typing import Any, Dict, Mapping, Optional

from breadmaster_backend.app.config import storage_settings
from breadmaster_backend.app.utils.logs import get_logger
from .base import StorageBackend, StorageConfig, StorageProvider
from .local import LocalStorageProvider
from .remote import RemoteStorageProvider
from .sqlite import SQLiteStorageProvider

log = get_logger("storage")


def create_provider(config: StorageConfig, logger: Optional[logging.Logger] = None) -> StorageProvider:
    """Backend for `config.backend`; unknown kinds fall back to local storage."""
    try:
        kind = StorageBackend(config.backend)
    except ValueError:
        (logger or log).warning("Unknown storage backend: %s, falling back to local", config.backend)
        return LocalStorageProvider(replace(config, backend=StorageBackend.LOCAL.value), logger=logger)

    if kind in (StorageBackend.LOCAL, StorageBackend.SESSION):
        return LocalStorageProvider(config, logger=logger)
    if kind is StorageBackend.SQLITE:
        return SQLiteStorageProvider(config, logger=logger)
    return RemoteStorageProvider(config, logger=logger)


class StorageService:
    """
    Owns the storage configuration and the one live backend built from it.
    Domain stores only ever talk to this object, so the backend can be
    swapped at runtime without them noticing.
    """

    def __init__(self, config: Optional[StorageConfig] = None, logger: Optional[logging.Logger] = None, **overrides: Any):
        self._logger = logger
        self._lock = RLock()
        self._config = replace(config or StorageConfig(), **overrides)
        self._provider = create_provider(self._config, logger)

    @property
    def provider(self) -> StorageProvider:
        return self._provider

    def get_config(self) -> StorageConfig:
        return replace(self._config)

    def update_config(self, changes: Optional[Mapping[str, Any]] = None, **kw: Any) -> StorageConfig:
        """
        Merge `changes` into the config and rebuild the backend. Operations
        already running on the old backend finish there; new calls go to
        the new one. Only the keys given are touched.
        """
        changes = {**(changes or {}), **kw}
        with self._lock:
            config = replace(self._config, **changes)
            provider = create_provider(config, self._logger)
            # both swapped together: no caller sees a new config with an old backend
            self._config, self._provider = config, provider
        return replace(config)

    async def get_item(self, key: str, default: Any = None) -> Any:
        return await self._provider.get_item(key, default)

    async def set_item(self, key: str, value: Any) -> None:
        await self._provider.set_item(key, value)

    async def remove_item(self, key: str) -> None:
        await self._provider.remove_item(key)

    async def clear(self, clear_all: bool = False) -> None:
        await self._provider.clear(clear_all)


def config_from_env() -> StorageConfig:
    s = storage_settings()
    return StorageConfig(
        backend=s["backend"] or StorageBackend.LOCAL.value,
        prefix=s["prefix"] if s["prefix"] is not None else "breadApp_",
        remote_url=s["remote_url"],
        api_key=s["api_key"],
    )

def create_storage(config: Optional[StorageConfig] = None, **overrides: Any) -> StorageService:
    """Independent service, e.g. for a second tenant or a test."""
    return StorageService(config or config_from_env(), **overrides)


def masked_config(config: StorageConfig) -> Dict[str, Any]:
    """Config as shown to the settings page; the API key never leaves the server."""
    doc = {
        "backend": config.backend,
        "prefix": config.prefix,
        "remoteUrl": config.remote_url,
        "apiKey": None,
        "hasApiKey": bool(config.api_key),
    }
    if config.api_key:
        doc["apiKey"] = "****" + config.api_key[-4:] if len(config.api_key) > 4 else "****"
    return doc
