# breadmaster_backend/app/routers/settings.py
from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, Depends

from breadmaster_backend.app.schemas import StorageConfigIn
from breadmaster_backend.app.services.data_stores import get_storage_service, rehydrate_stores
from breadmaster_backend.app.services.router_helpers.errors import store_errors
from breadmaster_backend.app.services.storage import StorageService, masked_config
from breadmaster_backend.app.utils.logs import get_logger

router = APIRouter(prefix="/settings", tags=["settings"])
log = get_logger("api")

@router.get("/storage")
def get_storage_settings(svc: StorageService = Depends(get_storage_service)) -> Dict[str, Any]:
    return masked_config(svc.get_config())

# What it does:
# Partial config change; swaps the live backend and reloads recipes and
# bakes from it. A masked key echoed back from GET leaves the key alone.
@router.put("/storage")
async def put_storage_settings(body: StorageConfigIn, svc: StorageService = Depends(get_storage_service)) -> Dict[str, Any]:
    changes = body.model_dump(exclude_unset=True)
    if (changes.get("api_key") or "").startswith("****"):
        changes.pop("api_key")
    config = svc.update_config(changes)
    log.info("Storage switched to %s (prefix %r)", config.backend, config.prefix)
    await rehydrate_stores()
    return masked_config(config)

# What it does:
# Factory reset: wipes the whole active medium, not just this app's prefix.
@router.post("/reset")
async def factory_reset(svc: StorageService = Depends(get_storage_service)) -> Dict[str, Any]:
    with store_errors("reset storage"):
        await svc.clear(clear_all=True)
    await rehydrate_stores()
    return {"ok": True}
