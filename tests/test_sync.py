"""Tests for outbound sync and detached tasks."""

import asyncio
import json

from noats_planner.domain.results import AnnotatedRecommendation, PlanResult
from noats_planner.services.sync import (
    QUIZ_TAG,
    PlanSyncService,
    add_tag,
    format_products_summary,
    truncate_text,
)
from noats_planner.services.tasks import DetachedTaskRunner
from tests.conftest import FakeMailerLiteClient, FakeShopifyClient


def _plan(plan_markdown: str = "Your plan") -> PlanResult:
    return PlanResult(
        plan_markdown=plan_markdown,
        recommended_products=[
            AnnotatedRecommendation(
                id="naked-noats",
                reason="Plain & simple",
                name="Naked N'Oats",
                price=12.99,
                dietary=["keto"],
                net_carbs=4,
                protein=14,
                fiber=10,
            )
        ],
    )


def _run_and_drain(service: PlanSyncService, email: str | None, plan: PlanResult) -> None:
    async def scenario() -> None:
        service.schedule(email, plan)
        await service.tasks.drain()

    asyncio.run(scenario())


def test_truncate_text_boundary() -> None:
    text = "x" * 950

    truncated = truncate_text(text, limit=900)

    assert len(truncated) == 900
    assert truncated == "x" * 897 + "..."


def test_truncate_text_leaves_short_text() -> None:
    assert truncate_text("x" * 900) == "x" * 900
    assert truncate_text("") == ""


def test_products_summary_is_escaped_html() -> None:
    summary = format_products_summary(_plan().recommended_products)

    assert summary == "<p><strong>Naked N&#x27;Oats</strong><br>Plain &amp; simple</p>"


def test_add_tag_skips_existing_tag() -> None:
    assert add_tag("", QUIZ_TAG) == QUIZ_TAG
    assert add_tag("VIP", QUIZ_TAG) == f"VIP,{QUIZ_TAG}"
    assert add_tag(f"VIP, {QUIZ_TAG}", QUIZ_TAG) == f"VIP,{QUIZ_TAG}"


def test_schedule_without_email_does_nothing(
    tasks: DetachedTaskRunner,
    shopify_client: FakeShopifyClient,
    mailerlite_client: FakeMailerLiteClient,
) -> None:
    service = PlanSyncService(
        tasks=tasks, crm_client=shopify_client, email_client=mailerlite_client
    )

    _run_and_drain(service, None, _plan())

    assert shopify_client.customers == {}
    assert mailerlite_client.upserts == []


def test_schedule_skips_unconfigured_integrations(tasks: DetachedTaskRunner) -> None:
    service = PlanSyncService(tasks=tasks)

    _run_and_drain(service, "shopper@example.com", _plan())

    assert tasks.pending == 0


def test_crm_sync_creates_customer_and_attaches_plan(
    tasks: DetachedTaskRunner, shopify_client: FakeShopifyClient
) -> None:
    service = PlanSyncService(tasks=tasks, crm_client=shopify_client)

    _run_and_drain(service, "shopper@example.com", _plan())

    customer = shopify_client.customers["shopper@example.com"]
    assert customer["tags"] == QUIZ_TAG
    fields = {field["key"]: field["value"] for field in shopify_client.plan_records[0]}
    assert fields["plan_text"] == "Your plan"
    assert json.loads(fields["products"])[0]["netCarbs"] == 4
    assert shopify_client.attached == [
        (customer["id"], QUIZ_TAG, "gid://shopify/Metaobject/1")
    ]


def test_crm_sync_appends_tag_to_existing_customer(
    tasks: DetachedTaskRunner, shopify_client: FakeShopifyClient
) -> None:
    shopify_client.customers["vip@example.com"] = {"id": 42, "tags": "VIP"}
    service = PlanSyncService(tasks=tasks, crm_client=shopify_client)

    _run_and_drain(service, "vip@example.com", _plan())

    assert shopify_client.attached[0][:2] == (42, f"VIP,{QUIZ_TAG}")


def test_crm_sync_stops_without_metaobject(
    tasks: DetachedTaskRunner, shopify_client: FakeShopifyClient
) -> None:
    shopify_client.record_id = None
    service = PlanSyncService(tasks=tasks, crm_client=shopify_client)

    _run_and_drain(service, "shopper@example.com", _plan())

    assert shopify_client.attached == []


def test_email_sync_truncates_fields(
    tasks: DetachedTaskRunner, mailerlite_client: FakeMailerLiteClient
) -> None:
    service = PlanSyncService(tasks=tasks, email_client=mailerlite_client)

    _run_and_drain(service, "shopper@example.com", _plan("p" * 950))

    email, fields = mailerlite_client.upserts[0]
    assert email == "shopper@example.com"
    assert fields["ai_plan"] == "p" * 897 + "..."
    assert fields["ai_products"].startswith("<p><strong>Naked N")


def test_sync_failures_go_to_failure_sink(
    tasks: DetachedTaskRunner,
    failures: list[tuple[str, BaseException]],
    shopify_client: FakeShopifyClient,
    mailerlite_client: FakeMailerLiteClient,
) -> None:
    shopify_client.error = RuntimeError("shopify down")
    service = PlanSyncService(
        tasks=tasks, crm_client=shopify_client, email_client=mailerlite_client
    )

    _run_and_drain(service, "shopper@example.com", _plan())

    assert [name for name, _ in failures] == ["shopify-sync"]
    assert str(failures[0][1]) == "shopify down"
    assert len(mailerlite_client.upserts) == 1


def test_spawn_returns_before_work_finishes() -> None:
    events: list[str] = []
    runner = DetachedTaskRunner()

    async def slow() -> None:
        await asyncio.sleep(0.01)
        events.append("work")

    async def scenario() -> None:
        runner.spawn("slow", slow())
        events.append("returned")
        assert runner.pending == 1
        await runner.drain()

    asyncio.run(scenario())

    assert events == ["returned", "work"]
    assert runner.pending == 0
