"""Personalized breakfast plan generation."""

import logging
from dataclasses import dataclass

from noats_planner.domain.catalog import CatalogIndex
from noats_planner.domain.requests import CustomerProfile
from noats_planner.domain.results import PlanResult
from noats_planner.services.generation import GenerationService
from noats_planner.services.prompts import build_plan_prompts
from noats_planner.services.sanitizer import sanitize_plan_response
from noats_planner.services.sync import PlanSyncService

_logger = logging.getLogger(__name__)


@dataclass
class PlanService:
    """Build a plan from a profile and hand it to outbound sync."""

    catalog: CatalogIndex
    generation: GenerationService
    sync: PlanSyncService
    transform_url: str | None = None

    async def create_plan(self, profile: CustomerProfile) -> PlanResult:
        """Generate, sanitize, and schedule sync for a plan."""
        prompts = build_plan_prompts(profile, self.catalog.summarize("full"))
        raw_text = await self.generation.generate(prompts, json_mode=True)
        plan = sanitize_plan_response(raw_text, self.catalog)
        if not plan.recommended_products:
            _logger.warning("Plan has no recommendations after catalog filtering")
        plan = plan.model_copy(update={"transform_url": self.transform_url})
        self.sync.schedule(profile.email, plan)
        return plan
