"""Validate model replies and keep only real catalog products."""

import json
import logging
import math

from noats_planner.domain.catalog import CatalogIndex
from noats_planner.domain.errors import UpstreamFormatError
from noats_planner.domain.results import (
    AnnotatedRecommendation,
    BaseProductRef,
    ConversionResult,
    PlanResult,
    Recipe,
)

_logger = logging.getLogger(__name__)

_MACRO_KEYS = ("netCarbs", "protein", "fiber", "calories")


def sanitize_plan_response(raw_text: str, catalog: CatalogIndex) -> PlanResult:
    """Parse a plan reply and annotate recommendations from the catalog.

    Recommendations whose id is not in the catalog are dropped, and a repeated
    id keeps only its first occurrence. Prices and macros always come from the
    catalog, never from the model.
    """
    parsed = _parse_object(raw_text)
    plan_markdown = _string(parsed.get("plan_markdown"), strip=False)
    candidates = _list(parsed.get("recommended_products"))

    recommendations: list[AnnotatedRecommendation] = []
    seen: set[str] = set()
    for product_id, item in _catalog_items(candidates, catalog):
        if product_id in seen:
            continue
        seen.add(product_id)
        product = catalog.get(product_id)
        if product is None:
            continue
        recommendations.append(
            AnnotatedRecommendation(
                id=product.id,
                reason=_string(item.get("reason")),
                name=product.name,
                price=product.price,
                dietary=list(product.dietary),
                net_carbs=product.net_carbs,
                protein=product.protein,
                fiber=product.fiber,
            )
        )
    return PlanResult(plan_markdown=plan_markdown, recommended_products=recommendations)


def sanitize_recipe_response(raw_text: str, catalog: CatalogIndex) -> list[Recipe]:
    """Parse a recipes reply, keeping only catalog base products per recipe.

    A recipe left with no verified base product is still returned.
    """
    parsed = _parse_object(raw_text)
    recipes: list[Recipe] = []
    for raw_recipe in _list(parsed.get("recipes")):
        if not isinstance(raw_recipe, dict):
            continue
        base_products: list[BaseProductRef] = []
        for product_id in _verified_ids(raw_recipe.get("base_product_ids"), catalog):
            product = catalog.get(product_id)
            if product is not None:
                base_products.append(BaseProductRef(id=product.id, name=product.name))
        recipes.append(
            Recipe(
                title=_string(raw_recipe.get("title")),
                description=_string(raw_recipe.get("description")),
                base_products=base_products,
                ingredients=_string_list(raw_recipe.get("ingredients")),
                steps=_string_list(raw_recipe.get("steps")),
                macros=_macros(raw_recipe.get("macros")),
                tags=_string_list(raw_recipe.get("tags")),
                servings=_positive_int(raw_recipe.get("servings")),
            )
        )
    return recipes


def sanitize_conversion_response(raw_text: str) -> ConversionResult:
    """Parse a conversion reply into a fully populated result."""
    parsed = _parse_object(raw_text)
    known = {key: parsed[key] for key in ConversionResult.model_fields if key in parsed}
    return ConversionResult.model_validate(known)


def _parse_object(raw_text: str) -> dict[str, object]:
    try:
        parsed = json.loads(
            raw_text, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except (TypeError, ValueError) as exc:
        _logger.error("Failed to parse JSON from model: %r", raw_text)
        raise UpstreamFormatError from exc
    if not isinstance(parsed, dict):
        _logger.error("Model returned JSON that is not an object: %r", raw_text)
        raise UpstreamFormatError
    return parsed


def _reject_constant(name: str) -> object:
    raise ValueError(f"Non-finite number in model JSON: {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Non-finite number in model JSON: {literal}")
    return value


def _catalog_items(
    candidates: list[object], catalog: CatalogIndex
) -> list[tuple[str, dict[str, object]]]:
    """Return (trimmed id, item) pairs for items naming a catalog product."""
    valid_ids = catalog.valid_ids()
    items = []
    for item in candidates:
        if not isinstance(item, dict):
            continue
        raw_id = item.get("id")
        if not isinstance(raw_id, str):
            continue
        product_id = raw_id.strip()
        if product_id in valid_ids:
            items.append((product_id, item))
    return items


def _verified_ids(value: object, catalog: CatalogIndex) -> list[str]:
    valid_ids = catalog.valid_ids()
    verified: list[str] = []
    for raw_id in _list(value):
        if not isinstance(raw_id, str):
            continue
        product_id = raw_id.strip()
        if product_id in valid_ids and product_id not in verified:
            verified.append(product_id)
    return verified


def _string(value: object, *, strip: bool = True) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip() if strip else value


def _list(value: object) -> list[object]:
    return value if isinstance(value, list) else []


def _string_list(value: object) -> list[str]:
    return [
        item.strip() for item in _list(value) if isinstance(item, str) and item.strip()
    ]


def _macros(value: object) -> dict[str, float]:
    if not isinstance(value, dict):
        return {}
    macros: dict[str, float] = {}
    for key in _MACRO_KEYS:
        amount = value.get(key)
        if isinstance(amount, int | float) and not isinstance(amount, bool):
            macros[key] = float(amount)
    return macros


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and value > 0:
        return value
    if isinstance(value, float) and value.is_integer() and value > 0:
        return int(value)
    return None
