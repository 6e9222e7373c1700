# breadmaster_backend/app/services/baking/preferments.py
from __future__ import annotations
from typing import Dict, List, Optional

from breadmaster_backend.app.schemas import PreFermentDetails

# Purpose:
# Canonical pre-ferment styles as ratio templates per 100 g of flour.
# A recipe only stores the chosen style name; the template is scaled into
# the batch by the calculator.

# Display order for the style picker
PRE_FERMENT_TYPES: List[str] = [
    "Sourdough",
    "Poolish",
    "Biga",
    "Pâte fermentée",
    "Levain",
]

PRE_FERMENT_TABLE: Dict[str, Dict[str, float]] = {
    "Sourdough":      {"flour_grams": 100, "water_grams": 100, "yeast_grams": 0,   "percentage": 20},
    "Poolish":        {"flour_grams": 100, "water_grams": 100, "yeast_grams": 0.5, "percentage": 20},
    "Biga":           {"flour_grams": 100, "water_grams": 60,  "yeast_grams": 0.5, "percentage": 20},
    "Pâte fermentée": {"flour_grams": 100, "water_grams": 70,  "yeast_grams": 1,   "percentage": 20},
    "Levain":         {"flour_grams": 100, "water_grams": 100, "yeast_grams": 0,   "percentage": 20},
}

# Returned for unknown or empty style names
DEFAULT_PRE_FERMENT: Dict[str, float] = {"flour_grams": 100, "water_grams": 100, "yeast_grams": 0, "percentage": 20}


def get_pre_ferment_types() -> List[str]:
    return list(PRE_FERMENT_TYPES)

def get_pre_ferment_details(name: Optional[str]) -> PreFermentDetails:
    """Template for a style name. Never raises; unknown names get the default."""
    row = PRE_FERMENT_TABLE.get((name or "").strip(), DEFAULT_PRE_FERMENT)
    return PreFermentDetails(**row)
