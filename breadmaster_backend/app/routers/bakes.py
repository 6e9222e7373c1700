# breadmaster_backend/app/routers/bakes.py
from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Body, Depends, Query

from breadmaster_backend.app.schemas import BakeCompletion, BakeStart, StageProgressUpdate
from breadmaster_backend.app.services.data_stores import (
    BakeSessionStore, RecipeStore, bake_with_recipe, get_bake_session_store, get_recipe_store,
)
from breadmaster_backend.app.services.router_helpers.errors import store_errors

router = APIRouter(prefix="/bakes", tags=["bakes"])

# What it does:
# Start a bake from a saved recipe; stage progress comes from its included stages.
@router.post("")
async def start_bake(
    body: BakeStart,
    recipes: RecipeStore = Depends(get_recipe_store),
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> Dict[str, Any]:
    with store_errors("start bake"):
        recipe = recipes.require(body.recipe_id)
        session = await bakes.start(recipe)
    return session.to_doc()

# What it does:
# List bakes, optionally for one recipe and/or by status (active | completed).
@router.get("")
def list_bakes(
    recipe_id: Optional[str] = Query(default=None, alias="recipeId"),
    status: Optional[Literal["active", "completed"]] = None,
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> List[Dict[str, Any]]:
    active = None if status is None else status == "active"
    return [s.to_doc() for s in bakes.list(recipe_id=recipe_id, active=active)]

# What it does:
# One bake with its recipe; a deleted recipe comes back as null + orphaned.
@router.get("/{bake_id}")
def get_bake(
    bake_id: str,
    recipes: RecipeStore = Depends(get_recipe_store),
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> Dict[str, Any]:
    with store_errors("get bake"):
        bake = bakes.require(bake_id)
    found = bake_with_recipe(bake.id, bakes.list(), recipes.list())
    recipe = found[1] if found else None
    return {
        "bake": bake.to_doc(),
        "recipe": recipe.to_doc() if recipe else None,
        "orphaned": recipe is None,
    }

@router.patch("/{bake_id}/stages/{progress_id}")
async def update_stage(
    bake_id: str,
    progress_id: str,
    body: StageProgressUpdate,
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> Dict[str, Any]:
    with store_errors("update stage"):
        session = await bakes.update_stage_progress(bake_id, progress_id, body)
    return session.to_doc()

# What it does:
# Close a stage (idempotent) and start the next one.
@router.post("/{bake_id}/stages/{progress_id}/complete")
async def complete_stage(
    bake_id: str,
    progress_id: str,
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> Dict[str, Any]:
    with store_errors("complete stage"):
        session = await bakes.mark_stage_complete(bake_id, progress_id)
    return session.to_doc()

# What it does:
# Finish a bake, recording ratings / notes / photos.
@router.post("/{bake_id}/complete")
async def complete_bake(
    bake_id: str,
    body: Optional[BakeCompletion] = Body(default=None),
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> Dict[str, Any]:
    with store_errors("complete bake"):
        session = await bakes.complete(bake_id, body)
    return session.to_doc()

@router.delete("/{bake_id}")
async def delete_bake(bake_id: str, bakes: BakeSessionStore = Depends(get_bake_session_store)) -> Dict[str, Any]:
    with store_errors("delete bake"):
        await bakes.delete(bake_id)
    return {"ok": True}
