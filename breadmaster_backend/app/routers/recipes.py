# breadmaster_backend/app/routers/recipes.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from breadmaster_backend.app.schemas import RecipeCreate, RecipeDraft, RecipeUpdate
from breadmaster_backend.app.services.data_stores import RecipeStore, get_recipe_store
from breadmaster_backend.app.services.router_helpers.errors import store_errors
from breadmaster_backend.app.services.router_helpers.recipe_helpers import calculation_doc, ensure_feasible

router = APIRouter(prefix="/recipes", tags=["recipes"])

# What it does:
# List recipes; `q` narrows by name, bread type or flour name.
@router.get("")
def list_recipes(q: Optional[str] = None, store: RecipeStore = Depends(get_recipe_store)) -> List[Dict[str, Any]]:
    return [r.to_doc() for r in store.search(q or "")]

# What it does:
# Distinct bread types across saved recipes (filter dropdown).
@router.get("/bread-types")
def bread_types(store: RecipeStore = Depends(get_recipe_store)) -> List[str]:
    return store.bread_types()

# What it does:
# Live calculation for an unsaved draft; incomplete drafts give an empty result.
@router.post("/calculate")
def calculate(draft: RecipeDraft) -> Dict[str, Any]:
    return calculation_doc(draft)

@router.post("")
async def create_recipe(body: RecipeCreate, store: RecipeStore = Depends(get_recipe_store)) -> Dict[str, Any]:
    with store_errors("create recipe"):
        recipe = await store.create(body, check=ensure_feasible)
    return recipe.to_doc()

@router.get("/{recipe_id}")
def get_recipe(recipe_id: str, store: RecipeStore = Depends(get_recipe_store)) -> Dict[str, Any]:
    with store_errors("get recipe"):
        return store.require(recipe_id).to_doc()

# What it does:
# Partial update; only the fields sent change.
@router.put("/{recipe_id}")
async def update_recipe(recipe_id: str, body: RecipeUpdate, store: RecipeStore = Depends(get_recipe_store)) -> Dict[str, Any]:
    with store_errors("update recipe"):
        recipe = await store.update(recipe_id, body, check=ensure_feasible)
    return recipe.to_doc()

@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str, store: RecipeStore = Depends(get_recipe_store)) -> Dict[str, Any]:
    with store_errors("delete recipe"):
        await store.delete(recipe_id)
    return {"ok": True}

@router.post("/{recipe_id}/duplicate")
async def duplicate_recipe(recipe_id: str, store: RecipeStore = Depends(get_recipe_store)) -> Dict[str, Any]:
    with store_errors("duplicate recipe"):
        recipe = await store.duplicate(recipe_id)
    return recipe.to_doc()

# What it does:
# Gram weights for a saved recipe.
@router.get("/{recipe_id}/ingredients")
def recipe_ingredients(recipe_id: str, store: RecipeStore = Depends(get_recipe_store)) -> Dict[str, Any]:
    with store_errors("calculate recipe"):
        recipe = store.require(recipe_id)
    return calculation_doc(recipe)
