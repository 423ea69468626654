"""Shared test fixtures."""

import asyncio
import json
from dataclasses import dataclass, field

import pytest

from noats_planner.adapters.recipe_page_client import RecipePageClient
from noats_planner.config import Settings
from noats_planner.containers import AppContainer
from noats_planner.domain.catalog import CatalogIndex, load_catalog
from noats_planner.services.conversion import ConversionService
from noats_planner.services.generation import GenerationClient, GenerationService
from noats_planner.services.plans import PlanService
from noats_planner.services.recipes import RecipeService
from noats_planner.services.sync import CrmClient, EmailClient, PlanSyncService
from noats_planner.services.tasks import DetachedTaskRunner


def plan_reply(
    ids: list[str], plan_markdown: str = "## Your Daily N'Oats plan"
) -> str:
    """Build a model reply recommending the given ids."""
    return json.dumps(
        {
            "plan_markdown": plan_markdown,
            "recommended_products": [
                {"id": product_id, "reason": f"Good fit: {product_id}"}
                for product_id in ids
            ],
        }
    )


@dataclass
class FakeGenerationClient(GenerationClient):
    """Fake generation client returning queued replies."""

    replies: list[str | None] = field(default_factory=list)
    extracted_text: str | None = "Banana pancakes\n2 cups flour\n2 bananas"
    error: Exception | None = None
    delay_seconds: float = 0.0
    calls: list[dict[str, object]] = field(default_factory=list)
    extract_calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        json_mode: bool,
    ) -> str | None:
        self.calls.append(
            {
                "model": model,
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "json_mode": json_mode,
            }
        )
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else None

    async def extract_text(
        self,
        *,
        model: str,
        prompt: str,
        image_data_urls: list[str],
    ) -> str | None:
        self.extract_calls.append(
            {"model": model, "prompt": prompt, "image_data_urls": image_data_urls}
        )
        return self.extracted_text


@dataclass
class FakeShopifyClient(CrmClient):
    """In-memory Shopify client that records calls."""

    customers: dict[str, dict[str, object]] = field(default_factory=dict)
    plan_records: list[list[dict[str, str]]] = field(default_factory=list)
    attached: list[tuple[object, str, str]] = field(default_factory=list)
    record_id: str | None = "gid://shopify/Metaobject/1"
    error: Exception | None = None

    async def find_customer(self, email: str) -> dict[str, object] | None:
        if self.error is not None:
            raise self.error
        return self.customers.get(email)

    async def create_customer(self, email: str, tags: str) -> dict[str, object] | None:
        customer: dict[str, object] = {
            "id": len(self.customers) + 1,
            "email": email,
            "tags": tags,
        }
        self.customers[email] = customer
        return customer

    async def create_plan_record(self, fields: list[dict[str, str]]) -> str | None:
        self.plan_records.append(fields)
        return self.record_id

    async def attach_plan(
        self, customer_id: object, tags: str, plan_record_id: str
    ) -> None:
        self.attached.append((customer_id, tags, plan_record_id))


@dataclass
class FakeMailerLiteClient(EmailClient):
    """In-memory MailerLite client that records upserts."""

    upserts: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    error: Exception | None = None

    async def upsert_subscriber(self, email: str, fields: dict[str, str]) -> None:
        if self.error is not None:
            raise self.error
        self.upserts.append((email, fields))


@dataclass
class FakeRecipePageClient(RecipePageClient):
    """Recipe page client serving canned pages."""

    pages: dict[str, str] = field(default_factory=dict)
    fetched: list[str] = field(default_factory=list)

    async def fetch_text(self, url: str) -> str:
        self.fetched.append(url)
        if url not in self.pages:
            raise RuntimeError(f"404 for {url}")
        return self.pages[url]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        openai_timeout_seconds=1.0,
        transform_url="https://shop.test/transform",
    )


@pytest.fixture
def catalog() -> CatalogIndex:
    return load_catalog()


@pytest.fixture
def generation_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def shopify_client() -> FakeShopifyClient:
    return FakeShopifyClient()


@pytest.fixture
def mailerlite_client() -> FakeMailerLiteClient:
    return FakeMailerLiteClient()


@pytest.fixture
def page_client() -> FakeRecipePageClient:
    return FakeRecipePageClient(
        pages={"https://recipes.test/pancakes": "Pancakes\n1 cup flour\n1 egg"}
    )


@pytest.fixture
def failures() -> list[tuple[str, BaseException]]:
    return []


@pytest.fixture
def tasks(failures: list[tuple[str, BaseException]]) -> DetachedTaskRunner:
    return DetachedTaskRunner(
        failure_sink=lambda name, exc: failures.append((name, exc))
    )


@pytest.fixture
def generation_service(
    settings: Settings, generation_client: FakeGenerationClient
) -> GenerationService:
    return GenerationService(
        client=generation_client,
        text_model=settings.openai_text_model,
        vision_model=settings.openai_vision_model,
        timeout_seconds=settings.openai_timeout_seconds,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    catalog: CatalogIndex,
    tasks: DetachedTaskRunner,
    generation_service: GenerationService,
    shopify_client: FakeShopifyClient,
    mailerlite_client: FakeMailerLiteClient,
    page_client: FakeRecipePageClient,
) -> AppContainer:
    plan_service = PlanService(
        catalog=catalog,
        generation=generation_service,
        sync=PlanSyncService(
            tasks=tasks,
            crm_client=shopify_client,
            email_client=mailerlite_client,
        ),
        transform_url=settings.transform_url,
    )
    recipe_service = RecipeService(
        catalog=catalog,
        generation=generation_service,
        transform_url=settings.transform_url,
    )
    conversion_service = ConversionService(
        generation=generation_service,
        page_client=page_client,
        max_images=settings.max_recipe_images,
    )

    async def close_resources() -> None:
        await tasks.drain()

    return AppContainer(
        settings=settings,
        catalog=catalog,
        tasks=tasks,
        generation_service=generation_service,
        plan_service=plan_service,
        recipe_service=recipe_service,
        conversion_service=conversion_service,
        close_resources=close_resources,
    )
