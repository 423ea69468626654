"""Product catalog models and the read-only catalog index."""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from noats_planner.catalog_data import PRODUCT_RECORDS

CatalogView = Literal["full", "recipe"]


@dataclass(frozen=True)
class Product:
    """A sellable Daily N'Oats product."""

    id: str
    name: str
    price: float
    net_carbs: float
    protein: float
    fiber: float
    flavor: str | None = None
    dietary: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "Product":
        """Build a product from a storefront catalog record."""
        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            price=float(record["price"]),
            net_carbs=float(record["netCarbs"]),
            protein=float(record["protein"]),
            fiber=float(record["fiber"]),
            flavor=str(record["flavor"]) if record.get("flavor") else None,
            dietary=tuple(str(tag) for tag in record.get("dietary") or ()),
            allergens=tuple(str(tag) for tag in record.get("allergens") or ()),
        )


class CatalogIndex:
    """Immutable index over the product catalog, in catalog order."""

    def __init__(self, products: Iterable[Product]) -> None:
        self._products = tuple(products)
        self._by_id: dict[str, Product] = {}
        for product in self._products:
            if product.id in self._by_id:
                raise ValueError(f"Duplicate product id in catalog: {product.id}")
            self._by_id[product.id] = product
        self._valid_ids = frozenset(self._by_id)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, object]]) -> "CatalogIndex":
        """Build an index from plain catalog records."""
        return cls(Product.from_record(record) for record in records)

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    def valid_ids(self) -> frozenset[str]:
        """Return the set of recommendable product ids."""
        return self._valid_ids

    def get(self, product_id: str) -> Product | None:
        """Return a product by id, if present."""
        return self._by_id.get(product_id)

    def summarize(self, view: CatalogView = "full") -> str:
        """Render the catalog as prompt text for the given view."""
        if view == "full":
            blocks = [_full_block(product) for product in self._products]
        elif view == "recipe":
            blocks = [_recipe_block(product) for product in self._products]
        else:
            raise ValueError(f"Unknown catalog view: {view}")
        return "\n\n".join(blocks)


def load_catalog(path: str | None = None) -> CatalogIndex:
    """Load the built-in catalog or a JSON catalog file."""
    if path is None:
        return CatalogIndex.from_records(PRODUCT_RECORDS)
    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"Catalog file must contain a JSON array: {path}")
    return CatalogIndex.from_records(records)


def _full_block(product: Product) -> str:
    return "\n".join(
        [
            f"- id: {product.id}",
            f"  name: {product.name}",
            f"  price: ${product.price:.2f}",
            f"  {_macros_line(product)}",
            f"  flavor: {product.flavor or 'unspecified'}",
            f"  dietary: {_tags(product.dietary)}",
            f"  allergens: {_tags(product.allergens)}",
        ]
    )


def _recipe_block(product: Product) -> str:
    return "\n".join(
        [
            f"- id: {product.id}",
            f"  name: {product.name}",
            f"  {_macros_line(product)}",
            f"  flavor: {product.flavor or 'unspecified'}",
            f"  dietary: {_tags(product.dietary)}",
        ]
    )


def _macros_line(product: Product) -> str:
    return (
        f"netCarbs: {product.net_carbs:g}g, "
        f"protein: {product.protein:g}g, "
        f"fiber: {product.fiber:g}g"
    )


def _tags(values: tuple[str, ...]) -> str:
    return ", ".join(values) or "none"
