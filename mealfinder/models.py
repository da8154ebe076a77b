"""
Meal and view models for the Meal Finder system.

This module defines the canonical record schema used throughout the browser.
The catalog connector maps raw TheMealDB payloads into MealRecord; the query
orchestrator only ever handles MealRecord objects, and the presentation layer
only ever reads PageView.

Raw TheMealDB field names and their normalized counterparts:
- idMeal -> id
- strMeal -> name
- strMealThumb -> thumbnail_url
- strCategory -> category (missing from filter.php responses; backfilled by the connector)
- strArea -> area
- strInstructions, strTags, strYoutube, strSource, strIngredientN/strMeasureN -> detail fields
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# TheMealDB exposes ingredients as strIngredient1..strIngredient20
MAX_INGREDIENT_SLOTS = 20


def _clean(value: Any) -> Optional[str]:
    """Return a stripped string, or None for null/blank API values."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class SortOrder(str, Enum):
    """Client-side ordering applied to the full result set."""
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    NONE = "none"


class LoadStatus(str, Enum):
    """Outcome of the most recent data load, as shown to the user."""
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class Ingredient(BaseModel):
    """One ingredient line of a recipe."""
    name: str = Field(..., description="Ingredient name (e.g., 'penne rigate')")
    measure: Optional[str] = Field(None, description="Free-text measure (e.g., '1 pound')")

    model_config = ConfigDict(frozen=True)


class MealRecord(BaseModel):
    """
    Normalized description of one recipe.

    Only id, name and thumbnail_url are guaranteed by every endpoint. The
    category-filter endpoint returns nothing else, so the connector backfills
    category there; area and the detail fields are present only for records
    coming from search or lookup.
    """
    id: str = Field(..., min_length=1, description="Catalog identifier (idMeal)")
    name: str = Field(..., description="Recipe name (strMeal)")
    thumbnail_url: str = Field("", description="URL to the recipe image (strMealThumb)")
    category: Optional[str] = Field(None, description="Category name (strCategory)")
    area: Optional[str] = Field(None, description="Cuisine/area (strArea)")

    # Detail fields (search.php and lookup.php only)
    instructions: Optional[str] = Field(None, description="Preparation instructions")
    tags: List[str] = Field(default_factory=list, description="Comma-separated strTags split into a list")
    youtube_url: Optional[str] = Field(None, description="Video link (strYoutube)")
    source_url: Optional[str] = Field(None, description="Original recipe link (strSource)")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ingredient lines in recipe order")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_api(cls, raw: Dict[str, Any], category: Optional[str] = None) -> "MealRecord":
        """
        Build a MealRecord from a raw TheMealDB meal object.

        Args:
            raw: One element of the API's "meals" array
            category: Category to use when the payload does not carry one
                      (filter.php responses)

        Returns:
            Normalized MealRecord

        Raises:
            ValueError: If the payload has no idMeal (pydantic ValidationError is a ValueError)
        """
        ingredients: List[Ingredient] = []
        for slot in range(1, MAX_INGREDIENT_SLOTS + 1):
            name = _clean(raw.get(f"strIngredient{slot}"))
            if not name:
                continue
            ingredients.append(Ingredient(name=name, measure=_clean(raw.get(f"strMeasure{slot}"))))

        tags_raw = _clean(raw.get("strTags")) or ""
        tags = [tag.strip() for tag in tags_raw.split(",") if tag.strip()]

        return cls(
            id=_clean(raw.get("idMeal")) or "",
            name=_clean(raw.get("strMeal")) or "",
            thumbnail_url=_clean(raw.get("strMealThumb")) or "",
            category=_clean(raw.get("strCategory")) or category,
            area=_clean(raw.get("strArea")),
            instructions=_clean(raw.get("strInstructions")),
            tags=tags,
            youtube_url=_clean(raw.get("strYoutube")),
            source_url=_clean(raw.get("strSource")),
            ingredients=ingredients,
        )


class Suggestion(BaseModel):
    """Entry of the transient suggestion dropdown."""
    id: str
    name: str

    model_config = ConfigDict(frozen=True)


class PaginationInfo(BaseModel):
    """Pagination metadata for the current page view."""
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=1)
    has_prev: bool
    has_next: bool


class ResultSummary(BaseModel):
    """Result count and active-filter summary for the results header."""
    count: int = Field(..., ge=0)
    active_filters: List[str] = Field(default_factory=list)

    @property
    def count_label(self) -> str:
        """Human readable count, e.g. '1 result' or '12 results'."""
        return f"{self.count} result{'' if self.count == 1 else 's'}"

    @property
    def filters_label(self) -> str:
        """Active filters joined for display, e.g. 'search: "pie" • category: Dessert'."""
        return " • ".join(self.active_filters)


class PageView(BaseModel):
    """
    Read-only snapshot of everything the presentation layer renders.

    Recomputed from QueryState on every call to QueryOrchestrator.current_view();
    never stored.
    """
    meals: List[MealRecord] = Field(default_factory=list, description="Records on the current page")
    pagination: Optional[PaginationInfo] = Field(None, description="None when the last load failed")
    summary: ResultSummary
    status: LoadStatus
    is_loading: bool = False
    suggestions: List[Suggestion] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
