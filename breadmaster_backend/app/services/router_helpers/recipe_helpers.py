# breadmaster_backend/app/services/router_helpers/recipe_helpers.py
from __future__ import annotations

from typing import Any, Dict, Union

from fastapi import HTTPException, status

from breadmaster_backend.app.schemas import Recipe, RecipeDraft
from breadmaster_backend.app.services.baking import calculate_ingredients, validate_flour_percentages

# What it does:
# Refuse to save a recipe whose pre-ferment needs more flour or water than
# the dough has. Passed to RecipeStore.create/update as the `check` hook.
def ensure_feasible(recipe: Recipe) -> None:
    result = calculate_ingredients(recipe)
    if result.errors.has_errors:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": "pre-ferment needs more flour or water than the dough contains",
                "errors": result.to_doc()["errors"],
            },
        )


# What it does:
# Calculator output for the editor, plus whether the flour shares add up to 100
# (the editor warns but still calculates when they don't).
def calculation_doc(recipe: Union[Recipe, RecipeDraft]) -> Dict[str, Any]:
    doc = calculate_ingredients(recipe).to_doc()
    doc["flourPercentagesValid"] = validate_flour_percentages(recipe.flour_types or [])
    return doc
