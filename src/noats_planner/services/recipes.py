"""Recipe generation on top of catalog products."""

from dataclasses import dataclass

from noats_planner.domain.catalog import CatalogIndex
from noats_planner.domain.requests import RecipePreferences
from noats_planner.domain.results import RecipesResult
from noats_planner.services.generation import GenerationService
from noats_planner.services.prompts import build_recipe_prompts
from noats_planner.services.sanitizer import sanitize_recipe_response


@dataclass
class RecipeService:
    """Generate 1-3 recipes bound to catalog products."""

    catalog: CatalogIndex
    generation: GenerationService
    transform_url: str | None = None

    async def create_recipes(self, preferences: RecipePreferences) -> RecipesResult:
        """Generate and sanitize recipes for the given preferences."""
        prompts = build_recipe_prompts(
            preferences,
            self.catalog.summarize("recipe"),
            self.allowed_base_ids(preferences.base_product_ids),
        )
        raw_text = await self.generation.generate(prompts, json_mode=True)
        recipes = [
            recipe
            if recipe.servings is not None
            else recipe.model_copy(update={"servings": preferences.servings})
            for recipe in sanitize_recipe_response(raw_text, self.catalog)
        ]
        return RecipesResult(recipes=recipes, transform_url=self.transform_url)

    def allowed_base_ids(self, requested: list[str]) -> list[str]:
        """Requested ids that exist in the catalog, or every catalog id."""
        valid_ids = self.catalog.valid_ids()
        allowed: list[str] = []
        for product_id in (value.strip() for value in requested):
            if product_id in valid_ids and product_id not in allowed:
                allowed.append(product_id)
        return allowed or [product.id for product in self.catalog.products]
