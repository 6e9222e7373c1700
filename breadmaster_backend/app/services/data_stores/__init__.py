"""
Unified export surface for the persistence-backed stores.

Import from here in routers, e.g.:
    from breadmaster_backend.app.services.data_stores import (
        # Stores
        RecipeStore, BakeSessionStore, RECIPES_KEY, BAKE_SESSIONS_KEY,
        # Wiring
        get_storage_service, get_recipe_store, get_bake_session_store,
        # Analysis
        bake_statistics, filter_bakes, bake_with_recipe,
    )
"""

from __future__ import annotations

# ---- Recipes store ----
from .recipes import RECIPES_KEY, RecipeStore  # noqa: F401

# ---- Bake sessions store ----
from .bake_sessions import BAKE_SESSIONS_KEY, BakeSessionStore  # noqa: F401

# ---- Analysis views ----
from .analysis import (  # noqa: F401
    UNKNOWN_RECIPE,
    bake_statistics,
    bake_with_recipe,
    filter_bakes,
)

# ---- Process wiring ----
from .registry import (  # noqa: F401
    get_bake_session_store,
    get_recipe_store,
    get_storage_service,
    rehydrate_stores,
    reset_registry,
)

__all__ = [
    # recipes
    "RECIPES_KEY", "RecipeStore",
    # bake sessions
    "BAKE_SESSIONS_KEY", "BakeSessionStore",
    # analysis
    "UNKNOWN_RECIPE", "bake_statistics", "bake_with_recipe", "filter_bakes",
    # registry
    "get_storage_service", "get_recipe_store", "get_bake_session_store",
    "rehydrate_stores", "reset_registry",
]
