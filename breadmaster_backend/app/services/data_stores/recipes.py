# breadmaster_backend/app/services/data_stores/recipes.py
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from breadmaster_backend.app.schemas import Recipe, RecipeDraft, new_id, utc_now
from breadmaster_backend.app.services.baking import default_flour_types
from breadmaster_backend.app.services.storage import StorageService
from breadmaster_backend.app.utils.logs import get_logger

RECIPES_KEY = "recipes"

log = get_logger("stores")

# Called with the finished recipe before it is written; raise to refuse the save.
RecipeCheck = Optional[Callable[[Recipe], None]]


def _coerce_list(raw: Any, model, label: str) -> List[Any]:
    """Rehydrate a stored array; a non-list is empty, bad records are dropped."""
    if not isinstance(raw, list):
        if raw is not None:
            log.error("Ignoring malformed %s collection (%s)", label, type(raw).__name__)
        return []
    out = []
    for item in raw:
        try:
            out.append(model.model_validate(item))
        except ValidationError as e:
            log.error("Skipping unreadable %s record: %s", label, e.errors()[:1])
    return out

def _draft_fields(data: Mapping[str, Any] | RecipeDraft) -> Dict[str, Any]:
    draft = data if isinstance(data, RecipeDraft) else RecipeDraft.model_validate(dict(data))
    return draft.model_dump(exclude_unset=True)


class RecipeStore:
    """
    All recipes, held in memory and written back whole under `recipes`
    after every change.
    """

    def __init__(self, storage: StorageService):
        self.storage = storage
        self._recipes: List[Recipe] = []
        self.loaded = False

    async def load(self) -> List[Recipe]:
        raw = await self.storage.get_item(RECIPES_KEY, [])
        self._recipes = _coerce_list(raw, Recipe, "recipe")
        self.loaded = True
        return self.list()

    async def _commit(self, recipes: List[Recipe]) -> None:
        self._recipes = recipes
        await self.storage.set_item(RECIPES_KEY, [r.to_doc() for r in recipes])

    # ---- reads ----

    def list(self) -> List[Recipe]:
        return list(self._recipes)

    def get(self, recipe_id: str) -> Optional[Recipe]:
        for r in self._recipes:
            if r.id == recipe_id:
                return r
        return None

    def require(self, recipe_id: str) -> Recipe:
        r = self.get(recipe_id)
        if r is None:
            raise KeyError(f"recipe not found: {recipe_id}")
        return r

    def search(self, term: str = "") -> List[Recipe]:
        t = (term or "").strip().lower()
        if not t:
            return self.list()
        return [
            r for r in self._recipes
            if t in r.name.lower()
            or t in (r.bread_type or "").lower()
            or any(t in f.name.lower() for f in r.flour_types)
        ]

    def bread_types(self) -> List[str]:
        seen: List[str] = []
        for r in self._recipes:
            if r.bread_type and r.bread_type not in seen:
                seen.append(r.bread_type)
        return seen

    # ---- mutations ----

    async def create(self, data: Mapping[str, Any] | RecipeDraft, check: RecipeCheck = None) -> Recipe:
        fields = _draft_fields(data)
        now = utc_now()
        recipe = Recipe(
            id=new_id(),
            created=now,
            updated=now,
            name=fields.get("name") or "New Recipe",
            dough_weight=fields.get("dough_weight") or 1000,
            number_of_loaves=fields.get("number_of_loaves") or 1,
            hydration=fields.get("hydration") or 70,
            flour_types=fields["flour_types"] if fields.get("flour_types") is not None else default_flour_types(),
            yeast_type=fields.get("yeast_type") or "Instant",
            salt_percentage=fields.get("salt_percentage") or 2,
            stages=fields.get("stages") or [],
            bread_type=fields.get("bread_type") or "Boule",
            pre_ferment=fields.get("pre_ferment"),
        )
        if check is not None:
            check(recipe)
        await self._commit(self._recipes + [recipe])
        return recipe

    async def update(
        self,
        recipe_id: str,
        data: Mapping[str, Any] | RecipeDraft,
        check: RecipeCheck = None,
    ) -> Recipe:
        current = self.require(recipe_id)
        fields = _draft_fields(data)
        merged = Recipe.model_validate({**current.model_dump(), **fields, "id": current.id, "updated": utc_now()})
        if check is not None:
            check(merged)
        await self._commit([merged if r.id == recipe_id else r for r in self._recipes])
        return merged

    async def delete(self, recipe_id: str) -> None:
        self.require(recipe_id)
        await self._commit([r for r in self._recipes if r.id != recipe_id])

    async def duplicate(self, recipe_id: str) -> Recipe:
        src = self.require(recipe_id)
        now = utc_now()
        copy = src.model_copy(deep=True, update={
            "id": new_id(),
            "name": f"{src.name} (Copy)",
            "created": now,
            "updated": now,
        })
        copy.stages = [s.model_copy(update={"id": new_id()}) for s in copy.stages]
        copy.flour_types = [f.model_copy(update={"id": new_id()}) for f in copy.flour_types]
        await self._commit(self._recipes + [copy])
        return copy
