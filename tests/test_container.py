"""Tests for container wiring."""

import asyncio
import json

from noats_planner.adapters.mailerlite_client import HttpxMailerLiteClient
from noats_planner.adapters.shopify_client import HttpxShopifyClient
from noats_planner.config import Settings
from noats_planner.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.plan_service.transform_url == "https://shop.test/transform"
    assert container.generation_service.timeout_seconds == 1.0
    assert len(container.catalog.products) == 9
    asyncio.run(container.close_resources())


def test_unconfigured_integrations_are_skipped() -> None:
    settings = Settings(
        openai_api_key="openai-key",
        shopify_store=None,
        shopify_admin_api_access_token=None,
        mailerlite_api_key=None,
        mailerlite_group_id=None,
    )

    container = build_container(settings)

    assert container.plan_service.sync.crm_client is None
    assert container.plan_service.sync.email_client is None
    asyncio.run(container.close_resources())


def test_configured_integrations_are_wired() -> None:
    settings = Settings(
        openai_api_key="openai-key",
        shopify_store="noats",
        shopify_admin_api_access_token="token",
        mailerlite_api_key="ml-key",
        mailerlite_group_id="group-1",
    )

    container = build_container(settings)

    crm_client = container.plan_service.sync.crm_client
    assert isinstance(crm_client, HttpxShopifyClient)
    assert crm_client.base_url == "https://noats.myshopify.com/admin/api/2024-10"
    assert isinstance(container.plan_service.sync.email_client, HttpxMailerLiteClient)
    asyncio.run(container.close_resources())


def test_catalog_path_overrides_builtin_products(tmp_path) -> None:
    catalog_file = tmp_path / "catalog.json"
    catalog_file.write_text(
        json.dumps(
            [
                {
                    "id": "test-cup",
                    "name": "Test Cup",
                    "price": 5,
                    "netCarbs": 3,
                    "protein": 10,
                    "fiber": 8,
                    "dietary": ["vegan"],
                }
            ]
        )
    )
    settings = Settings(openai_api_key="openai-key", catalog_path=str(catalog_file))

    container = build_container(settings)

    assert container.catalog.valid_ids() == frozenset({"test-cup"})
    asyncio.run(container.close_resources())
