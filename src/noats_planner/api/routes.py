"""Plan, recipe, and recipe conversion endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from noats_planner.api.request_models import (  # noqa: TC001
    NutritionPlanRequest,
    RecipeConvertRequest,
    RecipeRequest,
)
from noats_planner.domain.errors import PlannerError

if TYPE_CHECKING:
    from noats_planner.containers import AppContainer

router = APIRouter(prefix="/api", tags=["planner"])

_logger = logging.getLogger(__name__)


@router.post("/nutrition-plan")
async def nutrition_plan(
    payload: NutritionPlanRequest, request: Request
) -> JSONResponse:
    """Create a breakfast plan with verified product recommendations."""
    container: AppContainer = request.app.state.container
    try:
        plan = await container.plan_service.create_plan(payload.to_profile())
        return JSONResponse(plan.model_dump(by_alias=True))
    except PlannerError as exc:
        return _error_response(exc, route="nutrition-plan")
    except Exception:
        _logger.exception("Unexpected error in nutrition-plan")
        return _error_response(PlannerError(), route="nutrition-plan")


@router.post("/recipes")
async def recipes(payload: RecipeRequest, request: Request) -> JSONResponse:
    """Create recipes built on catalog products."""
    container: AppContainer = request.app.state.container
    try:
        result = await container.recipe_service.create_recipes(
            payload.to_preferences()
        )
        return JSONResponse(result.model_dump(by_alias=True))
    except PlannerError as exc:
        return _error_response(exc, route="recipes")
    except Exception:
        _logger.exception("Unexpected error in recipes")
        return _error_response(PlannerError(), route="recipes")


@router.post("/recipe-convert")
async def recipe_convert(
    payload: RecipeConvertRequest, request: Request
) -> JSONResponse:
    """Convert a shopper's recipe into a lower-carb version."""
    container: AppContainer = request.app.state.container
    try:
        result = await container.conversion_service.convert(payload.to_input())
        return JSONResponse(result.model_dump(by_alias=True))
    except PlannerError as exc:
        return _error_response(exc, route="recipe-convert")
    except Exception:
        _logger.exception("Unexpected error in recipe-convert")
        return _error_response(PlannerError(), route="recipe-convert")


def _error_response(exc: PlannerError, *, route: str) -> JSONResponse:
    """Map a planner error to the uniform error body."""
    if exc.status_code >= 500:
        _logger.warning("%s failed: %s", route, type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())
