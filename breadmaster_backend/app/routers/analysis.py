# breadmaster_backend/app/routers/analysis.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from breadmaster_backend.app.schemas import BakeFilters
from breadmaster_backend.app.services.data_stores import (
    BakeSessionStore, RecipeStore, bake_statistics, filter_bakes,
    get_bake_session_store, get_recipe_store,
)

router = APIRouter(prefix="/analysis", tags=["analysis"])

@router.get("/stats")
def stats(
    recipes: RecipeStore = Depends(get_recipe_store),
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> Dict[str, Any]:
    return bake_statistics(bakes.list(), recipes.list()).to_doc()

# What it does:
# Bakes matching the filter panel. Bakes of deleted recipes never match.
@router.get("/bakes")
def filtered_bakes(
    bread_type: Optional[str] = Query(default=None, alias="breadType"),
    min_hydration: float = Query(default=0, alias="minHydration"),
    max_hydration: float = Query(default=100, alias="maxHydration"),
    flour_type: Optional[str] = Query(default=None, alias="flourType"),
    min_crumb_rating: int = Query(default=0, alias="minCrumbRating"),
    min_crust_rating: int = Query(default=0, alias="minCrustRating"),
    min_flavor_rating: int = Query(default=0, alias="minFlavorRating"),
    recipes: RecipeStore = Depends(get_recipe_store),
    bakes: BakeSessionStore = Depends(get_bake_session_store),
) -> List[Dict[str, Any]]:
    filters = BakeFilters(
        bread_type=bread_type,
        min_hydration=min_hydration,
        max_hydration=max_hydration,
        flour_type=flour_type,
        min_crumb_rating=min_crumb_rating,
        min_crust_rating=min_crust_rating,
        min_flavor_rating=min_flavor_rating,
    )
    names = {r.id: r.name for r in recipes.list()}
    return [
        {"bake": b.to_doc(), "recipeName": names[b.recipe_id]}
        for b in filter_bakes(bakes.list(), recipes.list(), filters)
    ]
