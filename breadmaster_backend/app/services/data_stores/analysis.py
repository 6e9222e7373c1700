# breadmaster_backend/app/services/data_stores/analysis.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from breadmaster_backend.app.schemas import (
    BakeFilters, BakeSession, BakeStatistics, Recipe, TopRecipe,
)

# Purpose:
# Read-only views over completed bakes for the analysis page.
# A bake whose recipe was deleted is orphaned: it still counts as a bake,
# but anything that needs the recipe skips it instead of failing.

UNKNOWN_RECIPE = "Unknown Recipe"


def _index(recipes: Iterable[Recipe]) -> Dict[str, Recipe]:
    return {r.id: r for r in recipes}

def bake_with_recipe(
    bake_id: Optional[str],
    sessions: Iterable[BakeSession],
    recipes: Iterable[Recipe],
) -> Optional[Tuple[BakeSession, Recipe]]:
    """(bake, recipe) for a selected bake, or None if either is missing."""
    if not bake_id:
        return None
    bake = next((s for s in sessions if s.id == bake_id), None)
    if bake is None:
        return None
    recipe = _index(recipes).get(bake.recipe_id)
    if recipe is None:
        return None
    return bake, recipe

def bake_statistics(sessions: Iterable[BakeSession], recipes: Iterable[Recipe]) -> BakeStatistics:
    completed = [s for s in sessions if s.is_completed]
    if not completed:
        return BakeStatistics()

    by_id = _index(recipes)
    average_rating = sum(b.ratings.average for b in completed) / len(completed)

    counts: Dict[str, int] = {}
    for b in completed:
        counts[b.recipe_id] = counts.get(b.recipe_id, 0) + 1
    top: Optional[TopRecipe] = None
    for rid, n in counts.items():           # first recipe wins ties
        if top is None or n > top.count:
            r = by_id.get(rid)
            top = TopRecipe(id=rid, name=r.name if r else UNKNOWN_RECIPE, count=n)

    hydrations = [by_id[b.recipe_id].hydration for b in completed if b.recipe_id in by_id]
    average_hydration = sum(hydrations) / len(hydrations) if hydrations else 0

    return BakeStatistics(
        total_bakes=len(completed),
        average_rating=average_rating,
        top_recipe=top,
        average_hydration=average_hydration,
    )

def filter_bakes(
    sessions: Iterable[BakeSession],
    recipes: Iterable[Recipe],
    filters: Optional[BakeFilters] = None,
) -> List[BakeSession]:
    f = filters or BakeFilters()
    by_id = _index(recipes)
    out: List[BakeSession] = []
    for bake in sessions:
        recipe = by_id.get(bake.recipe_id)
        if recipe is None:
            continue
        if f.bread_type and recipe.bread_type != f.bread_type:
            continue
        if not (f.min_hydration <= recipe.hydration <= f.max_hydration):
            continue
        if f.flour_type and not any(fl.name == f.flour_type and fl.percentage > 0 for fl in recipe.flour_types):
            continue
        r = bake.ratings
        if r.crumb < f.min_crumb_rating or r.crust < f.min_crust_rating or r.flavor < f.min_flavor_rating:
            continue
        out.append(bake)
    return out
