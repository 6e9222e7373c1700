# schemas.py  (recipes, pre-ferments, bake sessions, calculator output)

from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Dict, Any
from uuid import uuid4
from pydantic import BaseModel, Field, conint, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def new_id() -> str:
    return str(uuid4())


# Persisted and wire documents use camelCase keys (doughWeight, flourTypes, ...);
# Python code uses snake_case. Both spellings are accepted on input.
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_doc(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys and ISO-8601 datetimes."""
        return self.model_dump(mode="json", by_alias=True)


# ===================== Enums =====================

class YeastType(str, Enum):
    SOURDOUGH = "Sourdough"      # starter, counted as 20% of flour
    INSTANT = "Instant"
    FRESH = "Fresh"


# ===================== Recipe parts =====================

class FlourType(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str
    percentage: float = 0       # share of total flour; need not sum to 100

class BakingStage(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str
    order: int = 0
    included: Optional[bool] = True    # None is treated as included (older records)
    description: Optional[str] = None

class PreFerment(CamelModel):
    flour: str = ""                     # pre-ferment style name, e.g. "Poolish"
    flour_grams: Optional[float] = None
    water_grams: Optional[float] = None
    yeast_grams: Optional[float] = None
    percentage: float = 0               # % of total flour that is pre-fermented
    host_flour: Optional[str] = None    # flour the pre-ferment is drawn from

class PreFermentDetails(CamelModel):
    flour_grams: float
    water_grams: float
    yeast_grams: float
    percentage: float


# ===================== Recipe =====================

class RecipeDraft(CamelModel):
    """
    Partial recipe as the editor holds it while the user is still typing.
    Every field is optional; the calculator decides what is enough.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    dough_weight: Optional[float] = None
    number_of_loaves: Optional[int] = None
    hydration: Optional[float] = None
    salt_percentage: Optional[float] = None
    yeast_type: Optional[str] = None
    bread_type: Optional[str] = None
    flour_types: Optional[List[FlourType]] = None
    stages: Optional[List[BakingStage]] = None
    pre_ferment: Optional[PreFerment] = None

class RecipeCreate(RecipeDraft):
    pass

class RecipeUpdate(RecipeDraft):
    pass

class Recipe(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str = "New Recipe"
    dough_weight: float = 1000
    number_of_loaves: int = 1
    hydration: float = 70
    flour_types: List[FlourType] = Field(default_factory=list)
    yeast_type: YeastType = YeastType.INSTANT
    salt_percentage: float = 2
    bread_type: Optional[str] = None
    stages: List[BakingStage] = Field(default_factory=list)
    pre_ferment: Optional[PreFerment] = None
    created: datetime = Field(default_factory=utc_now)
    updated: datetime = Field(default_factory=utc_now)


# ===================== Calculator output =====================

class Ingredient(CamelModel):
    name: str
    weight: int                # grams, rounded
    unit: str = "g"
    percentage: Optional[float] = None

class CalculationErrors(CamelModel):
    # None means "not evaluated" (not enough data); dumped without those keys
    negative_flour: Optional[bool] = None
    negative_water: Optional[bool] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.negative_flour or self.negative_water)

class CalculationResult(CamelModel):
    ingredients: List[Ingredient] = Field(default_factory=list)
    errors: CalculationErrors = Field(default_factory=CalculationErrors)

    def to_doc(self) -> Dict[str, Any]:
        return {
            "ingredients": [i.to_doc() for i in self.ingredients],
            "errors": self.errors.model_dump(by_alias=True, exclude_none=True),
        }

class PreFermentSizing(CamelModel):
    flour_grams: int
    water_grams: int
    yeast_grams: float


# ===================== Bake sessions =====================

class StageProgress(CamelModel):
    id: str = Field(default_factory=new_id)
    stage_id: str
    stage_name: str                       # snapshot at bake start
    order: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: Optional[float] = None      # minutes
    elapsed_seconds: int = 0
    last_updated: Optional[datetime] = None
    notes: str = ""
    completed: bool = False

class StageProgressUpdate(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    start_time: Optional[datetime] = None
    elapsed_seconds: Optional[int] = None
    notes: Optional[str] = None
    completed: Optional[bool] = None

class BakeRatings(CamelModel):
    crumb: conint(ge=0, le=5) = 0
    crust: conint(ge=0, le=5) = 0
    flavor: conint(ge=0, le=5) = 0

    @property
    def average(self) -> float:
        return (self.crumb + self.crust + self.flavor) / 3

class BakeNotes(CamelModel):
    went_well: str = ""
    try_next: str = ""

class BakeSession(CamelModel):
    id: str = Field(default_factory=new_id)
    recipe_id: str                        # weak reference; recipe may be gone
    start_time: datetime = Field(default_factory=utc_now)
    end_time: Optional[datetime] = None
    stage_progress: List[StageProgress] = Field(default_factory=list)
    ratings: BakeRatings = Field(default_factory=BakeRatings)
    notes: BakeNotes = Field(default_factory=BakeNotes)
    photos: List[str] = Field(default_factory=list)
    created: datetime = Field(default_factory=utc_now)
    updated: datetime = Field(default_factory=utc_now)

    @property
    def is_completed(self) -> bool:
        return self.end_time is not None

class BakeStart(CamelModel):
    recipe_id: str

class BakeCompletion(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    ratings: Optional[BakeRatings] = None
    notes: Optional[BakeNotes] = None
    photos: Optional[List[str]] = None


# ===================== Analysis =====================

class TopRecipe(CamelModel):
    id: str
    name: str
    count: int

class BakeStatistics(CamelModel):
    total_bakes: int = 0
    average_rating: float = 0
    top_recipe: Optional[TopRecipe] = None
    average_hydration: float = 0

class BakeFilters(CamelModel):
    bread_type: Optional[str] = None
    min_hydration: float = 0
    max_hydration: float = 100
    flour_type: Optional[str] = None
    min_crumb_rating: int = 0
    min_crust_rating: int = 0
    min_flavor_rating: int = 0


# ===================== Settings =====================

class StorageConfigIn(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    backend: Optional[str] = None
    prefix: Optional[str] = None
    remote_url: Optional[str] = None
    api_key: Optional[str] = None
