"""
Storage surface: one async key-value contract, four backends.

    from breadmaster_backend.app.services.storage import (
        StorageService, StorageConfig, StorageBackend, create_storage,
        StorageError, QuotaExceededError, RemoteStorageError,
    )
"""

from __future__ import annotations

from .base import (  # noqa: F401
    QuotaExceededError,
    RemoteStorageError,
    StorageBackend,
    StorageConfig,
    StorageError,
    StorageProvider,
)
from .local import (  # noqa: F401
    FileMedium,
    KeyValueMedium,
    LocalStorageProvider,
    MemoryMedium,
    local_medium,
    session_medium,
)
from .sqlite import SQLiteStorageProvider  # noqa: F401
from .remote import RemoteStorageProvider  # noqa: F401
from .service import (  # noqa: F401
    StorageService,
    config_from_env,
    create_provider,
    create_storage,
    masked_config,
)

__all__ = [
    # base
    "StorageBackend", "StorageConfig", "StorageProvider",
    "StorageError", "QuotaExceededError", "RemoteStorageError",
    # backends
    "KeyValueMedium", "MemoryMedium", "FileMedium", "local_medium", "session_medium",
    "LocalStorageProvider", "SQLiteStorageProvider", "RemoteStorageProvider",
    # service
    "StorageService", "create_provider", "create_storage", "config_from_env", "masked_config",
]
