# breadmaster_backend/app/services/baking/calculator.py
from __future__ import annotations
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from breadmaster_backend.app.schemas import (
    CalculationErrors, CalculationResult, FlourType, Ingredient,
    PreFermentDetails, PreFermentSizing, RecipeDraft,
)
from .preferments import get_pre_ferment_details

# Purpose:
# Turn a recipe's baker's percentages into gram weights for the main dough.
#   flour is 100%, water/salt/leavening are % of flour,
#   flour weight is solved from the fixed total dough weight,
#   a pre-ferment is carved out of the host flour, water and yeast,
#   rounded weights always sum to exactly doughWeight.
# Ingredient order is part of the contract: flours (largest share first),
# water, salt, yeast/starter. The last entry absorbs the rounding remainder.

DEFAULT_HOST_FLOUR = "Bread Flour"

# Leavening as % of flour. Sourdough's 20 is starter mass, not commercial yeast.
YEAST_PERCENTAGES: Dict[str, float] = {
    "Sourdough": 20,
    "Instant": 1,
    "Fresh": 2,
}

RecipeLike = Union[RecipeDraft, Mapping[str, Any]]


def get_yeast_percentage(yeast_type: Optional[str]) -> float:
    key = getattr(yeast_type, "value", yeast_type)
    return YEAST_PERCENTAGES.get(key or "", 0)

def yeast_ingredient_name(yeast_type: Optional[str]) -> str:
    key = getattr(yeast_type, "value", yeast_type)
    return "Sourdough Starter" if key == "Sourdough" else f"{key} Yeast"

def round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))

def validate_flour_percentages(flours: List[FlourType]) -> bool:
    active = [f for f in flours or [] if f.percentage > 0]
    if not active:
        return False
    return abs(sum(f.percentage for f in active) - 100) < 0.1

def _as_draft(recipe: RecipeLike) -> RecipeDraft:
    if isinstance(recipe, RecipeDraft):
        return recipe
    if hasattr(recipe, "model_dump"):
        return RecipeDraft.model_validate(recipe.model_dump(mode="json"))
    return RecipeDraft.model_validate(dict(recipe))

def normalize_flours(flours: List[FlourType]) -> List[FlourType]:
    """
    Active flours (percentage > 0), scaled so their shares sum to 100 when they
    don't already, sorted largest share first (ties keep input order).
    """
    active = [f for f in flours if f.percentage > 0]
    total = sum(f.percentage for f in active)
    if active and total != 100:
        active = [f.model_copy(update={"percentage": f.percentage / total * 100}) for f in active]
    return sorted(active, key=lambda f: -f.percentage)


# Purpose:
# Size a pre-ferment template to the batch. The template's water:flour and
# yeast:flour ratios are kept; only the scale changes.
def scale_pre_ferment(template: PreFermentDetails, flour_weight: float) -> Tuple[float, float, float]:
    """Returns (flour, water, yeast) grams for a pre-ferment holding `flour_weight` of flour."""
    factor = flour_weight / template.flour_grams
    return flour_weight, template.water_grams * factor, template.yeast_grams * factor

def _pre_ferment_template(recipe: RecipeDraft) -> Optional[PreFermentDetails]:
    pf = recipe.pre_ferment
    if not pf or not pf.flour_grams or pf.percentage <= 0:
        return None
    style = get_pre_ferment_details(pf.flour)
    return PreFermentDetails(
        flour_grams=pf.flour_grams,
        water_grams=pf.water_grams if pf.water_grams is not None else style.water_grams,
        yeast_grams=pf.yeast_grams if pf.yeast_grams is not None else style.yeast_grams,
        percentage=pf.percentage,
    )

def _host_flour_index(flours: List[FlourType], host_name: Optional[str]) -> int:
    """Index of the flour the pre-ferment is drawn from, matched by name; -1 if none."""
    wanted = host_name or DEFAULT_HOST_FLOUR
    for i, f in enumerate(flours):
        if f.name == wanted:
            return i
    return -1


def calculate_ingredients(recipe: RecipeLike) -> CalculationResult:
    """
    Baker's-percentage calculation for a (possibly partial) recipe.

    Missing dough weight (or one that is not positive), hydration, salt or
    flours is "not enough data yet": an empty result with no error flags.
    Infeasible pre-ferments are reported through errors.negative_flour /
    errors.negative_water, never raised.
    """
    r = _as_draft(recipe)
    if r.dough_weight is None or r.dough_weight <= 0:
        return CalculationResult()
    if not r.hydration or not r.salt_percentage or not r.flour_types:
        return CalculationResult()

    flours = normalize_flours(r.flour_types)
    if not flours:
        return CalculationResult()

    dough_weight = r.dough_weight
    hydration = r.hydration
    salt_pct = r.salt_percentage
    yeast_pct = get_yeast_percentage(r.yeast_type)

    total_pct = 100 + hydration + salt_pct + yeast_pct
    total_flour = dough_weight * 100 / total_pct

    # ---- pre-ferment carve-out ----
    pf_flour = pf_water = pf_yeast = 0.0
    template = _pre_ferment_template(r)
    if template is not None:
        pf_flour, pf_water, pf_yeast = scale_pre_ferment(template, total_flour * template.percentage / 100)

    # ---- exact (unrounded) weights, in contract order ----
    exact: List[Tuple[str, float, float]] = []   # (name, grams, percentage)
    host = _host_flour_index(flours, r.pre_ferment.host_flour if r.pre_ferment else None)
    for i, f in enumerate(flours):
        grams = total_flour * f.percentage / 100
        if i == host and pf_flour > 0:
            grams -= pf_flour
        exact.append((f.name, grams, f.percentage))
    n_flours = len(exact)

    exact.append(("Water", total_flour * hydration / 100 - pf_water, hydration))
    exact.append(("Salt", total_flour * salt_pct / 100, salt_pct))

    if yeast_pct > 0:
        yeast = total_flour * yeast_pct / 100
        if r.yeast_type != "Sourdough":
            yeast = max(0.0, yeast - pf_yeast)
        exact.append((yeast_ingredient_name(r.yeast_type), yeast, yeast_pct))

    # ---- round, last item takes the remainder ----
    total_exact = sum(g for _, g, _ in exact)
    scaling = dough_weight / total_exact if total_exact else 1.0

    ingredients: List[Ingredient] = []
    running = 0
    for name, grams, pct in exact[:-1]:
        w = round_half_away(grams * scaling)
        ingredients.append(Ingredient(name=name, weight=w, percentage=pct))
        running += w
    last_name, _, last_pct = exact[-1]
    ingredients.append(Ingredient(name=last_name, weight=round_half_away(dough_weight) - running, percentage=last_pct))

    # ---- feasibility: judged on the rounded weights only ----
    negative_flour = any(i.weight < 0 for i in ingredients[:n_flours])
    negative_water = ingredients[n_flours].weight < 0

    return CalculationResult(
        ingredients=ingredients,
        errors=CalculationErrors(negative_flour=negative_flour, negative_water=negative_water),
    )


# Purpose:
# Editor helper: given the batch and a pre-ferment percentage, suggest the
# grams to put into the pre-ferment block (flour and water whole grams,
# yeast to one decimal).
def size_pre_ferment(recipe: RecipeLike) -> Optional[PreFermentSizing]:
    r = _as_draft(recipe)
    pf = r.pre_ferment
    if r.dough_weight is None or r.dough_weight <= 0:
        return None
    if not (pf and pf.percentage and r.flour_types):
        return None

    total_pct = 100 + (r.hydration or 70) + (r.salt_percentage or 2) + get_yeast_percentage(r.yeast_type)
    total_flour = r.dough_weight * 100 / total_pct
    pf_flour = total_flour * pf.percentage / 100

    details = get_pre_ferment_details(pf.flour)
    hydration_ratio = details.water_grams / details.flour_grams
    yeast = 0.0
    if details.yeast_grams > 0:
        yeast = round_half_away(pf_flour * (details.yeast_grams / details.flour_grams) * 10) / 10

    return PreFermentSizing(
        flour_grams=round_half_away(pf_flour),
        water_grams=round_half_away(pf_flour * hydration_ratio),
        yeast_grams=yeast,
    )
