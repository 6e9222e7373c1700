# breadmaster_backend/app/routers/preferments.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter

from breadmaster_backend.app.schemas import RecipeDraft
from breadmaster_backend.app.services.baking import (
    get_pre_ferment_details, get_pre_ferment_types, size_pre_ferment,
)

router = APIRouter(prefix="/preferments", tags=["preferments"])

@router.get("/types")
def pre_ferment_types() -> List[str]:
    return get_pre_ferment_types()

# What it does:
# Suggested pre-ferment grams for a draft (null until the draft has a
# dough weight, flours and a pre-ferment percentage).
@router.post("/size")
def pre_ferment_size(draft: RecipeDraft) -> Optional[Dict[str, Any]]:
    sizing = size_pre_ferment(draft)
    return sizing.to_doc() if sizing else None

# What it does:
# Reference template for a style; unknown styles get the default template.
@router.get("/{name}")
def pre_ferment_details(name: str) -> Dict[str, Any]:
    return get_pre_ferment_details(name).to_doc()
