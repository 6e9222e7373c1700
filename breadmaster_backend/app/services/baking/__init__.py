"""
Baking math surface.

    from breadmaster_backend.app.services.baking import (
        calculate_ingredients, size_pre_ferment, get_yeast_percentage,
        get_pre_ferment_details, get_pre_ferment_types,
        default_flour_types, default_stages,
    )
"""

from __future__ import annotations

from .calculator import (  # noqa: F401
    calculate_ingredients,
    get_yeast_percentage,
    normalize_flours,
    round_half_away,
    scale_pre_ferment,
    size_pre_ferment,
    validate_flour_percentages,
)
from .preferments import (  # noqa: F401
    PRE_FERMENT_TYPES,
    get_pre_ferment_details,
    get_pre_ferment_types,
)
from .defaults import default_flour_types, default_stages  # noqa: F401

__all__ = [
    # calculator
    "calculate_ingredients", "get_yeast_percentage", "normalize_flours",
    "round_half_away", "scale_pre_ferment", "size_pre_ferment",
    "validate_flour_percentages",
    # preferments
    "PRE_FERMENT_TYPES", "get_pre_ferment_details", "get_pre_ferment_types",
    # defaults
    "default_flour_types", "default_stages",
]
