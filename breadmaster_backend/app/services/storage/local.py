# breadmaster_backend/app/services/storage/local.py
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional

from breadmaster_backend.app.config import local_quota_bytes, resolve_data_file
from breadmaster_backend.app.utils.json_files import atomic_write, read_json
from .base import QuotaExceededError, StorageBackend, StorageConfig, StorageError, StorageProvider

# Purpose:
# Synchronous string key-value media (the browser's localStorage and
# sessionStorage, in process form) and the async provider that wraps them.
# A medium is shared by everything in the process; providers only own a prefix.


class KeyValueMedium(ABC):
    """Synchronous str -> str store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...

    @abstractmethod
    def keys(self) -> List[str]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def __len__(self) -> int:
        return len(self.keys())


class MemoryMedium(KeyValueMedium):
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = RLock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class FileMedium(KeyValueMedium):
    """
    One JSON object on disk holding every key. Writes are atomic and
    refused (QuotaExceededError) once the file would outgrow `quota_bytes`.
    """

    def __init__(self, path: Path, quota_bytes: Optional[int] = None):
        self.path = path
        self.quota_bytes = quota_bytes
        self._lock = RLock()

    def _load(self) -> Dict[str, str]:
        raw = read_json(self.path, default={})
        return raw if isinstance(raw, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        text = json.dumps(data, ensure_ascii=False)
        if self.quota_bytes is not None and len(text.encode("utf-8")) > self.quota_bytes:
            raise QuotaExceededError(
                f"local storage quota exceeded ({self.quota_bytes} bytes) at {self.path}"
            )
        atomic_write(self.path, text)

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = str(value)
            self._save(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._save(data)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._load())

    def clear(self) -> None:
        with self._lock:
            self._save({})


# ---- process-wide media ------------------------------------------------------

_MEDIA_LOCK = RLock()
_FILE_MEDIA: Dict[Path, FileMedium] = {}
_SESSION_MEDIUM = MemoryMedium()

def local_medium() -> FileMedium:
    """The persistent medium for the current DATA_DIR."""
    path = resolve_data_file("storage", "local_storage.json")
    with _MEDIA_LOCK:
        medium = _FILE_MEDIA.get(path)
        if medium is None:
            medium = _FILE_MEDIA[path] = FileMedium(path, quota_bytes=local_quota_bytes())
        return medium

def session_medium() -> MemoryMedium:
    return _SESSION_MEDIUM


# ---- provider ----------------------------------------------------------------

class LocalStorageProvider(StorageProvider):
    """
    Prefixed, JSON-encoded items on a synchronous medium. Write failures
    (quota, unserializable values, disk errors) are logged, never raised:
    the medium can legitimately fill up and the app keeps working in memory.
    """

    def __init__(
        self,
        config: StorageConfig,
        medium: Optional[KeyValueMedium] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(config, logger)
        self.kind = StorageBackend.SESSION if config.backend == StorageBackend.SESSION.value else StorageBackend.LOCAL
        self._medium = medium

    @property
    def medium(self) -> KeyValueMedium:
        if self._medium is not None:
            return self._medium
        return session_medium() if self.kind is StorageBackend.SESSION else local_medium()

    async def get_item(self, key: str, default: Any = None) -> Any:
        try:
            raw = self.medium.get_item(self._key(key))
        except OSError as e:
            self.log.error("Error reading %s from %s storage: %s", key, self.kind.value, e)
            return default
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            self.log.error("Error parsing item with key %s: %s", key, e)
            return default

    async def set_item(self, key: str, value: Any) -> None:
        try:
            self.medium.set_item(self._key(key), json.dumps(value, ensure_ascii=False))
        except (TypeError, ValueError, OSError, StorageError) as e:
            self.log.error("Error setting item with key %s: %s", key, e)

    async def remove_item(self, key: str) -> None:
        try:
            self.medium.remove_item(self._key(key))
        except (OSError, StorageError) as e:
            self.log.error("Error removing item with key %s: %s", key, e)

    async def clear(self, clear_all: bool = False) -> None:
        try:
            medium = self.medium
            if clear_all:
                medium.clear()
                return
            for k in medium.keys():
                if k.startswith(self.prefix):
                    medium.remove_item(k)
        except (OSError, StorageError) as e:
            self.log.error("Error clearing %s storage: %s", self.kind.value, e)
