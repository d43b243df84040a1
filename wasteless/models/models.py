"""Data models and schemas for the recipe recommendation engine.

Defines Pydantic models for the inventory/recipe records the engine reads, the
per-request derived records, and the ranked output.
All models use Pydantic v2 for strict validation.
"""

from datetime import date
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


MealType = Literal["breakfast", "lunch", "dinner", "dessert", "any"]
IngredientStatus = Literal["available", "consumed", "expired", "wasted"]
MatchType = Literal["exact", "synonym", "partial", "common", "none"]

MEAL_TYPES: tuple[str, ...] = ("breakfast", "lunch", "dinner", "dessert", "any")


def _coerce_id(value: object) -> object:
    """Store ids as strings whatever the upstream store used (ObjectId, int)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(int(value)) if float(value).is_integer() else str(value)
    return value


class InventoryIngredient(BaseModel):
    """An item from the user's inventory.

    Owned by the inventory subsystem; the engine only reads it. Either
    ``days_until_expiry`` or ``expiry_date`` may carry the expiry, and neither
    means the item has no tracked expiry (dry goods).
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Annotated[str, Field(min_length=1, description="Inventory item id")]
    name: Annotated[str, Field(min_length=1, max_length=200, description="Free-text ingredient name")]
    quantity: Annotated[float, Field(ge=0, description="Amount on hand, in ``unit``")] = 1.0
    unit: Annotated[str, Field(description="Unit of ``quantity`` (kg, g, l, ml, cup, tbsp, tsp, unit...)")] = "unit"
    days_until_expiry: Annotated[
        Optional[int], Field(description="Days until the item expires; negative means already expired")
    ] = None
    expiry_date: Annotated[
        Optional[date], Field(description="Expiry date, used when days_until_expiry is not set")
    ] = None
    about_to_expire: Annotated[bool, Field(description="Flag maintained by the inventory subsystem")] = False
    status: Annotated[IngredientStatus, Field(description="Lifecycle status")] = "available"

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: object) -> object:
        return _coerce_id(value)

    def days_remaining(self, as_of: Optional[date] = None) -> Optional[int]:
        """Days until expiry, or None when no expiry is tracked."""
        if self.days_until_expiry is not None:
            return self.days_until_expiry
        if self.expiry_date is not None:
            base = as_of or date.today()
            return (self.expiry_date - base).days
        return None


class Recipe(BaseModel):
    """A recipe from the recipe store.

    Ingredients are recipe-author free text and may repeat.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Annotated[str, Field(min_length=1, description="Recipe id")]
    title: Annotated[str, Field(min_length=1, max_length=200, description="Recipe name or title (1-200 chars)")]
    ingredients: Annotated[List[str], Field(default_factory=list, description="Ordered ingredient lines")]
    instructions: Annotated[List[str], Field(default_factory=list, description="Ordered cooking steps")]
    meal_type: Annotated[MealType, Field(description="Meal the recipe is meant for")] = "any"
    image: Annotated[Optional[str], Field(max_length=500, description="URL to recipe image")] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: object) -> object:
        return _coerce_id(value)


class RecommendationOptions(BaseModel):
    """Caller preferences for a recommendation request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    meal_type: Annotated[MealType, Field(description="Preferred meal type; 'any' disables filtering")] = "any"
    prioritize_expiring: Annotated[
        bool, Field(description="Weight soon-to-expire items more heavily")
    ] = True
    selected_ingredient_names: Annotated[
        Optional[List[str]],
        Field(description="Restrict the inventory to these names and boost them"),
    ] = None

    @field_validator("selected_ingredient_names", mode="before")
    @classmethod
    def parse_selected(cls, names: Optional[str | list[str]]) -> Optional[list[str]]:
        """Accept a comma-separated string or list; empty input means no selection."""
        if not names:
            return None
        if isinstance(names, str):
            names = names.split(",")
        cleaned = [name.strip() for name in names if isinstance(name, str) and name.strip()]
        return cleaned or None


class WeightedIngredient(BaseModel):
    """Inventory ingredient annotated with its selection weight for one request."""

    id: str
    name: str
    weight: Annotated[float, Field(gt=0)]
    days_until_expiry: Annotated[int, Field(ge=-1)]
    quantity: Annotated[float, Field(ge=0)] = 1.0
    unit: str = "unit"

    @field_validator("days_until_expiry", mode="before")
    @classmethod
    def clamp_expired(cls, days: int) -> int:
        """Anything already past its date is recorded as -1."""
        if isinstance(days, (int, float)) and days < -1:
            return -1
        return days


class IngredientMatch(BaseModel):
    """Graded answer to "is this inventory name that recipe ingredient?"."""

    matched_name: Optional[str] = None
    quality: Annotated[float, Field(ge=0.0, le=1.0)] = 0.0
    match_type: MatchType = "none"
    confidence: Annotated[float, Field(ge=0.0, le=1.0)] = 0.0

    @model_validator(mode="after")
    def validate_name_quality(self) -> "IngredientMatch":
        """A match names a candidate exactly when its quality is positive."""
        if (self.matched_name is None) != (self.quality == 0):
            raise ValueError("matched_name must be set if and only if quality > 0")
        return self

    @classmethod
    def no_match(cls) -> "IngredientMatch":
        return cls(matched_name=None, quality=0.0, match_type="none", confidence=0.0)


class RecipeScoreResult(BaseModel):
    """One ranked recommendation.

    ``used_ingredients`` holds inventory names and ``used_ingredient_ids`` their
    ids, so the accept-recipe workflow can mark exactly those items consumed.
    """

    id: str
    title: str
    score: Annotated[int, Field(ge=0, le=100)]
    meal_type: MealType = "any"
    used_ingredients: List[str] = Field(default_factory=list)
    used_ingredient_ids: List[str] = Field(default_factory=list)
    missed_ingredients: List[str] = Field(default_factory=list)
    match_count: Annotated[int, Field(ge=0)] = 0
    total_ingredients: Annotated[int, Field(ge=0)] = 0
    expiring_ingredient_count: Annotated[int, Field(ge=0)] = 0
    coverage: Annotated[float, Field(ge=0.0, le=1.0)] = 0.0
    instructions: List[str] = Field(default_factory=list)
    image: Optional[str] = None


class InventoryLookup(BaseModel):
    """The inventory item that stands for a recipe ingredient, and how well it matches."""

    ingredient: InventoryIngredient
    match: IngredientMatch
