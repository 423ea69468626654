"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from noats_planner.adapters.mailerlite_client import HttpxMailerLiteClient
from noats_planner.adapters.openai_generation_client import OpenAIGenerationClient
from noats_planner.adapters.recipe_page_client import HttpxRecipePageClient
from noats_planner.adapters.shopify_client import HttpxShopifyClient
from noats_planner.config import Settings
from noats_planner.domain.catalog import CatalogIndex, load_catalog
from noats_planner.services.conversion import ConversionService
from noats_planner.services.generation import GenerationService
from noats_planner.services.plans import PlanService
from noats_planner.services.recipes import RecipeService
from noats_planner.services.sync import PlanSyncService
from noats_planner.services.tasks import DetachedTaskRunner


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: CatalogIndex
    tasks: DetachedTaskRunner
    generation_service: GenerationService
    plan_service: PlanService
    recipe_service: RecipeService
    conversion_service: ConversionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog = load_catalog(resolved_settings.catalog_path)
    tasks = DetachedTaskRunner()

    openai_client = OpenAIGenerationClient.create(
        resolved_settings.openai_api_key, store=resolved_settings.openai_store
    )
    generation_service = GenerationService(
        client=openai_client,
        text_model=resolved_settings.openai_text_model,
        vision_model=resolved_settings.openai_vision_model,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )

    shopify_client = None
    if resolved_settings.shopify_enabled:
        shopify_client = HttpxShopifyClient.create(
            store=resolved_settings.shopify_store or "",
            access_token=resolved_settings.shopify_admin_api_access_token or "",
            api_version=resolved_settings.shopify_api_version,
        )
    mailerlite_client = None
    if resolved_settings.mailerlite_enabled:
        mailerlite_client = HttpxMailerLiteClient.create(
            api_key=resolved_settings.mailerlite_api_key or "",
            group_id=resolved_settings.mailerlite_group_id or "",
        )
    page_client = HttpxRecipePageClient.create()

    plan_service = PlanService(
        catalog=catalog,
        generation=generation_service,
        sync=PlanSyncService(
            tasks=tasks,
            crm_client=shopify_client,
            email_client=mailerlite_client,
        ),
        transform_url=resolved_settings.transform_url,
    )
    recipe_service = RecipeService(
        catalog=catalog,
        generation=generation_service,
        transform_url=resolved_settings.transform_url,
    )
    conversion_service = ConversionService(
        generation=generation_service,
        page_client=page_client,
        max_images=resolved_settings.max_recipe_images,
    )

    async def close_resources() -> None:
        await tasks.drain()
        await openai_client.close()
        await page_client.close()
        if shopify_client is not None:
            await shopify_client.close()
        if mailerlite_client is not None:
            await mailerlite_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        tasks=tasks,
        generation_service=generation_service,
        plan_service=plan_service,
        recipe_service=recipe_service,
        conversion_service=conversion_service,
        close_resources=close_resources,
    )
