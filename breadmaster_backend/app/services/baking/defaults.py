# breadmaster_backend/app/services/baking/defaults.py
from __future__ import annotations
from typing import List

from breadmaster_backend.app.schemas import BakingStage, FlourType

# Starter values for a new recipe / a bake of a recipe without stages.
# Ids are regenerated on every call so two recipes never share nested ids.

_DEFAULT_FLOURS = [
    ("Bread Flour", 80),
    ("Whole Wheat Flour", 20),
    ("Rye Flour", 0),
    ("All-Purpose Flour", 0),
]

_DEFAULT_STAGES = [
    ("Autolyse", "Mix flour and water, rest to hydrate flour"),
    ("Mix", "Add remaining ingredients and mix until combined"),
    ("Bulk Ferment", "Let dough rise at room temperature"),
    ("Shape", "Divide and shape dough"),
    ("Proof", "Final rise before baking"),
    ("Bake", "Bake until golden brown"),
]

def default_flour_types() -> List[FlourType]:
    return [FlourType(name=n, percentage=p) for n, p in _DEFAULT_FLOURS]

def default_stages() -> List[BakingStage]:
    return [
        BakingStage(name=n, order=i, included=True, description=d)
        for i, (n, d) in enumerate(_DEFAULT_STAGES)
    ]
