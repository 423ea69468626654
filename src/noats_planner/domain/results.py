"""Sanitized result models returned to API clients."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

NEUTRAL_CONFIDENCE = 0.5

ConversionStatus = Literal["success", "partial", "error"]
_STATUSES: frozenset[str] = frozenset({"success", "partial", "error"})


class AnnotatedRecommendation(BaseModel):
    """Recommended catalog product with authoritative catalog metadata."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    reason: str = ""
    name: str
    price: float | None = None
    dietary: list[str] = Field(default_factory=list)
    net_carbs: float | None = Field(default=None, alias="netCarbs")
    protein: float | None = None
    fiber: float | None = None


class PlanResult(BaseModel):
    """Breakfast plan text plus verified product recommendations."""

    plan_markdown: str = ""
    recommended_products: list[AnnotatedRecommendation] = Field(default_factory=list)
    transform_url: str | None = None


class BaseProductRef(BaseModel):
    """Catalog product a recipe is built on."""

    id: str
    name: str


class Recipe(BaseModel):
    """A recipe built around one or more catalog products."""

    title: str = ""
    description: str = ""
    base_products: list[BaseProductRef] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    macros: dict[str, float] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    servings: int | None = None


class RecipesResult(BaseModel):
    """Recipes response payload."""

    recipes: list[Recipe] = Field(default_factory=list)
    transform_url: str | None = None


class ConversionResult(BaseModel):
    """Recipe conversion with every field populated.

    Validators run in ``before`` mode so that any JSON value the model sends
    is coerced to the field's shape instead of failing validation.
    """

    status: ConversionStatus = "partial"
    original_recipe: dict[str, object] = Field(default_factory=dict)
    converted_recipe: dict[str, object] = Field(default_factory=dict)
    nutritional_comparison: dict[str, object] = Field(default_factory=dict)
    confidence_score: float = Field(default=NEUTRAL_CONFIDENCE, ge=0.0, le=1.0)
    warnings: list[str] = Field(default_factory=list)
    suggested_variations: list[str] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: object) -> str:
        if isinstance(value, str) and value.strip().lower() in _STATUSES:
            return value.strip().lower()
        return "partial"

    @field_validator(
        "original_recipe", "converted_recipe", "nutritional_comparison", mode="before"
    )
    @classmethod
    def object_or_empty(cls, value: object) -> dict[str, object]:
        return value if isinstance(value, dict) else {}

    @field_validator("confidence_score", mode="before")
    @classmethod
    def clamp_confidence(cls, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return NEUTRAL_CONFIDENCE
        return min(1.0, max(0.0, float(value)))

    @field_validator("warnings", "suggested_variations", mode="before")
    @classmethod
    def string_list(cls, value: object) -> list[str]:
        if not isinstance(value, list):
            return []
        return [
            item.strip() for item in value if isinstance(item, str) and item.strip()
        ]
