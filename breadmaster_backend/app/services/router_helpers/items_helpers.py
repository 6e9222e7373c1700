# breadmaster_backend/app/services/router_helpers/items_helpers.py
from __future__ import annotations
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Optional, Tuple

from breadmaster_backend.app.config import resolve_data_file
from breadmaster_backend.app.utils.json_files import read_json, write_json

# Server-side file behind /api/storage/items: {key: value}, values kept as JSON.
_IO_LOCK = RLock()

def _items_file() -> Path:
    return resolve_data_file("remote", "items.json")

def _load() -> Dict[str, Any]:
    raw = read_json(_items_file(), default={})
    return raw if isinstance(raw, dict) else {}

def read_item(key: str) -> Tuple[bool, Any]:
    with _IO_LOCK:
        data = _load()
    return (key in data), data.get(key)

def write_item(key: str, value: Any) -> None:
    with _IO_LOCK:
        data = _load()
        data[key] = value
        write_json(_items_file(), data)

def delete_item(key: str) -> None:
    with _IO_LOCK:
        data = _load()
        if key in data:
            del data[key]
            write_json(_items_file(), data)

def clear_items(prefix: Optional[str] = None) -> int:
    with _IO_LOCK:
        data = _load()
        if prefix is None:
            removed = len(data)
            data = {}
        else:
            keep = {k: v for k, v in data.items() if not k.startswith(prefix)}
            removed = len(data) - len(keep)
            data = keep
        write_json(_items_file(), data)
        return removed
