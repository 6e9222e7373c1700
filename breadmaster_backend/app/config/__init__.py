# breadmaster_backend/app/config/__init__.py
from __future__ import annotations

# Re-export config surface expected by callers across the app.

# Storage and misc settings live in manifest.py
from .manifest import (
    DEBUG_MODE,
    DEFAULT_STORAGE_BACKEND,
    DEFAULT_STORAGE_PREFIX,
    storage_settings,
    local_quota_bytes,
    items_api_key,
    log_level,
)

# Path helpers live in paths.py
from .paths import (
    get_data_dir,
    resolve_data_file,
)

__all__ = [
    # manifest
    "DEBUG_MODE",
    "DEFAULT_STORAGE_BACKEND",
    "DEFAULT_STORAGE_PREFIX",
    "storage_settings",
    "local_quota_bytes",
    "items_api_key",
    "log_level",
    # paths
    "get_data_dir",
    "resolve_data_file",
]
