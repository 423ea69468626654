"""Pydantic models for API request bodies."""

import json

from pydantic import BaseModel, Field, field_validator

from noats_planner.domain.requests import (
    ConversionInput,
    CustomerProfile,
    RecipePreferences,
    UploadedFile,
)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _list_or_empty(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return value


class NutritionPlanRequest(BaseModel):
    """Nutrition quiz answers."""

    email: str | None = None
    goal: str | None = None
    restrictions: list[str] = Field(default_factory=list)
    health_conditions: list[str] = Field(default_factory=list)
    activity_level: str | None = None
    timing: list[str] = Field(default_factory=list)
    flavors: list[str] = Field(default_factory=list)
    prep_time: str | None = None
    priority: str | None = None

    @field_validator(
        "email", "goal", "activity_level", "prep_time", "priority", mode="before"
    )
    @classmethod
    def normalize_scalars(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator(
        "restrictions", "health_conditions", "timing", "flavors", mode="before"
    )
    @classmethod
    def normalize_lists(cls, value: object) -> object:
        return _list_or_empty(value)

    def to_profile(self) -> CustomerProfile:
        """Convert to the domain profile."""
        return CustomerProfile(
            email=self.email.strip() if self.email else None,
            goal=self.goal,
            restrictions=list(self.restrictions),
            health_conditions=list(self.health_conditions),
            activity_level=self.activity_level,
            timing=list(self.timing),
            flavors=list(self.flavors),
            prep_time=self.prep_time,
            priority=self.priority,
        )


class RecipeRequest(BaseModel):
    """Preferences for recipe generation."""

    goal: str | None = None
    dietary: list[str] = Field(default_factory=list)
    flavors: list[str] = Field(default_factory=list)
    prep_time: str | None = None
    style: str | None = None
    base_product_ids: list[str] = Field(default_factory=list)
    servings: int = Field(default=1, ge=1)

    @field_validator("goal", "prep_time", "style", mode="before")
    @classmethod
    def normalize_scalars(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("dietary", "flavors", "base_product_ids", mode="before")
    @classmethod
    def normalize_lists(cls, value: object) -> object:
        return _list_or_empty(value)

    @field_validator("servings", mode="before")
    @classmethod
    def default_servings(cls, value: object) -> object:
        return 1 if value is None else value

    def to_preferences(self) -> RecipePreferences:
        """Convert to domain preferences."""
        return RecipePreferences(
            goal=self.goal,
            dietary=list(self.dietary),
            flavors=list(self.flavors),
            prep_time=self.prep_time,
            style=self.style,
            base_product_ids=list(self.base_product_ids),
            servings=self.servings,
        )


class UploadedFilePayload(BaseModel):
    """Inline file upload, base64-encoded or as a data URL."""

    data: str
    mime_type: str | None = None
    filename: str | None = None


class RecipeConvertRequest(BaseModel):
    """Recipe conversion inputs; at least one source is required."""

    recipe_text: str | None = None
    recipe_url: str | None = None
    files: list[UploadedFilePayload] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    user_preferences: str | dict[str, object] | None = None

    @field_validator("recipe_text", "recipe_url", mode="before")
    @classmethod
    def normalize_scalars(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("files", "dietary_restrictions", mode="before")
    @classmethod
    def normalize_lists(cls, value: object) -> object:
        return _list_or_empty(value)

    def to_input(self) -> ConversionInput:
        """Convert to the domain conversion input."""
        preferences = self.user_preferences
        if isinstance(preferences, dict):
            preferences = json.dumps(preferences, sort_keys=True)
        return ConversionInput(
            recipe_text=self.recipe_text,
            recipe_url=self.recipe_url,
            files=[
                UploadedFile(
                    data=upload.data,
                    mime_type=upload.mime_type,
                    filename=upload.filename,
                )
                for upload in self.files
            ],
            dietary_restrictions=list(self.dietary_restrictions),
            user_preferences=preferences or None,
        )
