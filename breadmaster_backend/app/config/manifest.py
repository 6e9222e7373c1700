# breadmaster_backend/app/config/manifest.py
from __future__ import annotations

import os
from typing import Dict, Optional

# ---- Storage settings and debug mode ----
# Read lazily so a process can be re-pointed (tests, per-tenant launches)
# before the storage service is built.

DEFAULT_STORAGE_BACKEND: str = "local"
DEFAULT_STORAGE_PREFIX: str = "breadApp_"
DEFAULT_LOCAL_QUOTA_BYTES: int = 5 * 1024 * 1024   # same order as a browser's localStorage

DEBUG_MODE: bool = os.getenv("DEBUG", "0") not in ("", "0", "false", "False")

def _env(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None

def storage_settings() -> Dict[str, Optional[str]]:
    """Initial storage configuration, as the settings page would see it."""
    return {
        "backend": _env("BREAD_STORAGE_BACKEND") or DEFAULT_STORAGE_BACKEND,
        "prefix": os.getenv("BREAD_STORAGE_PREFIX", DEFAULT_STORAGE_PREFIX),
        "remote_url": _env("BREAD_REMOTE_URL"),
        "api_key": _env("BREAD_API_KEY"),
    }

def local_quota_bytes() -> int:
    raw = _env("BREAD_LOCAL_QUOTA_BYTES")
    try:
        return int(raw) if raw else DEFAULT_LOCAL_QUOTA_BYTES
    except ValueError:
        return DEFAULT_LOCAL_QUOTA_BYTES

def items_api_key() -> Optional[str]:
    return _env("BREAD_ITEMS_API_KEY")

def log_level() -> str:
    return (os.getenv("LOG_LEVEL") or ("DEBUG" if DEBUG_MODE else "INFO")).upper()


__all__ = [
    "DEBUG_MODE",
    "DEFAULT_STORAGE_BACKEND", "DEFAULT_STORAGE_PREFIX", "DEFAULT_LOCAL_QUOTA_BYTES",
    "storage_settings", "local_quota_bytes", "items_api_key", "log_level",
]
