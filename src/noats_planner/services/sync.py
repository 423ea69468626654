"""Best-effort forwarding of plans to Shopify and MailerLite."""

import html
import json
import logging
from dataclasses import dataclass
from typing import Protocol

from noats_planner.domain.results import AnnotatedRecommendation, PlanResult
from noats_planner.services.tasks import DetachedTaskRunner

_logger = logging.getLogger(__name__)

QUIZ_TAG = "AI_Nutrition_Quiz"
EMAIL_FIELD_LIMIT = 900
_ELLIPSIS = "..."


class CrmClient(Protocol):
    """Interface for the CRM customer and metaobject calls."""

    async def find_customer(self, email: str) -> dict[str, object] | None:
        """Return the first customer matching the email, if any."""

    async def create_customer(self, email: str, tags: str) -> dict[str, object] | None:
        """Create a customer and return it."""

    async def create_plan_record(self, fields: list[dict[str, str]]) -> str | None:
        """Create an ai_plan metaobject and return its id."""

    async def attach_plan(
        self, customer_id: object, tags: str, plan_record_id: str
    ) -> None:
        """Tag the customer and point its ai.plan metafield at the record."""


class EmailClient(Protocol):
    """Interface for the email platform subscriber upsert."""

    async def upsert_subscriber(self, email: str, fields: dict[str, str]) -> None:
        """Create or update a subscriber with custom fields."""


@dataclass
class PlanSyncService:
    """Schedule CRM and email sync for a computed plan.

    Either client may be ``None`` when its credentials are not configured.
    """

    tasks: DetachedTaskRunner
    crm_client: CrmClient | None = None
    email_client: EmailClient | None = None

    def schedule(self, email: str | None, plan: PlanResult) -> None:
        """Start sync work in the background; never raises for sync failures."""
        if not email:
            return
        if self.crm_client is None:
            _logger.info("Shopify credentials missing, skipping CRM sync")
        else:
            self.tasks.spawn("shopify-sync", self.sync_crm(email, plan))
        if self.email_client is None:
            _logger.info("MailerLite credentials missing, skipping email sync")
        else:
            self.tasks.spawn("mailerlite-sync", self.sync_email(email, plan))

    async def sync_crm(self, email: str, plan: PlanResult) -> None:
        """Find or create the customer, store the plan, and link it."""
        if self.crm_client is None:
            return
        customer = await self.crm_client.find_customer(email)
        if customer is None:
            customer = await self.crm_client.create_customer(email, tags=QUIZ_TAG)
        if not customer or customer.get("id") is None:
            _logger.warning("Could not create or find Shopify customer")
            return

        products = [
            item.model_dump(by_alias=True) for item in plan.recommended_products
        ]
        record_id = await self.crm_client.create_plan_record(
            [
                {"key": "plan_text", "value": plan.plan_markdown},
                {"key": "products", "value": json.dumps(products)},
            ]
        )
        if not record_id:
            _logger.warning("Failed to create ai_plan metaobject")
            return

        tags = add_tag(str(customer.get("tags") or ""), QUIZ_TAG)
        await self.crm_client.attach_plan(customer["id"], tags, record_id)
        _logger.info("Synced AI plan to Shopify")

    async def sync_email(self, email: str, plan: PlanResult) -> None:
        """Upsert the subscriber with truncated plan and product fields."""
        if self.email_client is None:
            return
        await self.email_client.upsert_subscriber(
            email,
            {
                "ai_plan": truncate_text(plan.plan_markdown),
                "ai_products": truncate_text(
                    format_products_summary(plan.recommended_products)
                ),
            },
        )
        _logger.info("Synced AI plan to MailerLite")


def add_tag(existing: str, tag: str) -> str:
    """Append ``tag`` to a comma-separated tag string unless already present."""
    tags = [item.strip() for item in existing.split(",") if item.strip()]
    if tag not in tags:
        tags.append(tag)
    return ",".join(tags)


def truncate_text(text: str, limit: int = EMAIL_FIELD_LIMIT) -> str:
    """Cut text to ``limit`` characters, ending with an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def format_products_summary(recommendations: list[AnnotatedRecommendation]) -> str:
    """Flatten recommendations into the email template's HTML snippet."""
    return "\n".join(
        f"<p><strong>{html.escape(item.name or item.id)}</strong>"
        f"<br>{html.escape(item.reason)}</p>"
        for item in recommendations
    )
