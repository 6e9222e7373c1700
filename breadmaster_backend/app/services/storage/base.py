# breadmaster_backend/app/services/storage/base.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from breadmaster_backend.app.utils.logs import get_logger


class StorageBackend(str, Enum):
    LOCAL = "local"        # JSON file medium, survives restarts
    SESSION = "session"    # in-process medium, gone when the process ends
    SQLITE = "sqlite"      # embedded transactional database
    REMOTE = "remote"      # HTTP item store


@dataclass
class StorageConfig:
    # str rather than StorageBackend: unknown kinds must reach the factory,
    # which falls back to LOCAL with a warning.
    backend: str = StorageBackend.LOCAL.value
    prefix: str = "breadApp_"
    remote_url: Optional[str] = None
    api_key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---- errors ----------------------------------------------------------------

class StorageError(Exception):
    """A write/delete/clear the backend could not carry out."""

class QuotaExceededError(StorageError):
    pass

class RemoteStorageError(StorageError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# ---- contract ---------------------------------------------------------------

class StorageProvider(ABC):
    """
    Uniform async key-value contract every backend implements.

    get_item never raises: a missing key, an unreadable value or a failing
    medium all yield `default`. set_item / remove_item / clear may raise
    StorageError, except on the local backend which logs and carries on.
    """

    kind: StorageBackend

    def __init__(self, config: StorageConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.prefix = config.prefix or ""
        self.log = logger or get_logger("storage")

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @abstractmethod
    async def get_item(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    async def set_item(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        ...

    @abstractmethod
    async def clear(self, clear_all: bool = False) -> None:
        """
        clear_all=True wipes the whole underlying medium (factory reset).
        Otherwise only keys under this provider's prefix are removed.
        """
        ...
