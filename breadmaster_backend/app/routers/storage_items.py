# breadmaster_backend/app/routers/storage_items.py
from __future__ import annotations
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status

from breadmaster_backend.app.config import items_api_key
from breadmaster_backend.app.services.router_helpers import items_helpers as items

# What it does:
# Plain HTTP item store, the server side of the remote storage backend.
# With BREAD_ITEMS_API_KEY set, every call needs `Authorization: Bearer <key>`.
def require_items_key(authorization: Optional[str] = Header(default=None)) -> None:
    expected = items_api_key()
    if expected and authorization != f"Bearer {expected}":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid or missing API key")

router = APIRouter(prefix="/storage", tags=["storage"], dependencies=[Depends(require_items_key)])

@router.get("/items/{key:path}")
def get_item(key: str) -> Dict[str, Any]:
    found, value = items.read_item(key)
    if not found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"no item {key}")
    return {"key": key, "value": value}

@router.put("/items/{key:path}")
def put_item(key: str, body: Dict[str, Any]) -> Dict[str, Any]:
    if "value" not in body:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="body must be {\"value\": ...}")
    items.write_item(key, body["value"])
    return {"ok": True}

@router.delete("/items/{key:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(key: str) -> Response:
    items.delete_item(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# What it does:
# Bulk delete: keys under `prefix`, or every key when no prefix is given.
@router.delete("/items")
def clear_items(prefix: Optional[str] = None) -> Dict[str, Any]:
    return {"ok": True, "removed": items.clear_items(prefix)}
