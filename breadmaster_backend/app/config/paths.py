# breadmaster_backend/app/config/paths.py
from __future__ import annotations

"""
Central path resolution for Breadmaster.

Env overrides:
    DATA_DIR

Defaults:
    ./data  (relative to the working directory)

DATA_DIR is read on every call rather than frozen at import, so tests and
tenants can point the app at a different tree without reloading modules.
"""

import os
from pathlib import Path

def _clean_env(value: str | None) -> str | None:
    if value is None:
        return None
    v = value.strip().strip('"').strip("'")
    return v or None

# ── Getters
def get_data_dir() -> Path:
    raw = _clean_env(os.getenv("DATA_DIR"))
    return Path(raw or "./data").expanduser().resolve()

# ── Resolvers
def resolve_data_file(*parts: str) -> Path:
    """Return absolute path under DATA_DIR for nested parts and ensure parent exists."""
    p = get_data_dir().joinpath(*parts)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p

__all__ = [
    "get_data_dir", "resolve_data_file",
]
