"""Per-request domain inputs built from validated API payloads."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CustomerProfile:
    """Shopper answers from the nutrition quiz."""

    email: str | None = None
    goal: str | None = None
    restrictions: list[str] = field(default_factory=list)
    health_conditions: list[str] = field(default_factory=list)
    activity_level: str | None = None
    timing: list[str] = field(default_factory=list)
    flavors: list[str] = field(default_factory=list)
    prep_time: str | None = None
    priority: str | None = None

    def to_prompt_dict(self) -> dict[str, object]:
        """Return the profile fields in a fixed order for prompt embedding."""
        return {
            "email": self.email,
            "goal": self.goal,
            "restrictions": list(self.restrictions),
            "health_conditions": list(self.health_conditions),
            "activity_level": self.activity_level,
            "timing": list(self.timing),
            "flavors": list(self.flavors),
            "prep_time": self.prep_time,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class RecipePreferences:
    """Preferences for generating recipes built on catalog products."""

    goal: str | None = None
    dietary: list[str] = field(default_factory=list)
    flavors: list[str] = field(default_factory=list)
    prep_time: str | None = None
    style: str | None = None
    base_product_ids: list[str] = field(default_factory=list)
    servings: int = 1

    def to_prompt_dict(self) -> dict[str, object]:
        """Return the preferences in a fixed order for prompt embedding."""
        return {
            "goal": self.goal,
            "dietary": list(self.dietary),
            "flavors": list(self.flavors),
            "prep_time": self.prep_time,
            "style": self.style,
            "base_product_ids": list(self.base_product_ids),
            "servings": self.servings,
        }


@dataclass(frozen=True)
class UploadedFile:
    """A file submitted inline as base64 or a data URL."""

    data: str
    mime_type: str | None = None
    filename: str | None = None


@dataclass(frozen=True)
class ConversionInput:
    """Everything the shopper supplied for a recipe conversion."""

    recipe_text: str | None = None
    recipe_url: str | None = None
    files: list[UploadedFile] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    user_preferences: str | None = None
