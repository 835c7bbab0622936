"""In-memory catalog over a list of products.

Filtering, sorting and pagination happen in Python on every query. Good
enough for the packaged sample dataset and for tests.
"""

import json
import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import replace
from importlib.resources import files
from pathlib import Path
from typing import Any

import anyio
import anyio.lowlevel

from storefront.catalog import DEFAULT_SORT, Pagination, ProductPage, ProductQuery
from storefront.errors import CatalogError
from storefront.store.product import Product

logger = logging.getLogger("storefront.catalog")

_SORT_KEYS = {
    "price_asc": (lambda p: p.lprice, False),
    "price_desc": (lambda p: p.lprice, True),
    "name_asc": (lambda p: p.title.casefold(), False),
    "name_desc": (lambda p: p.title.casefold(), True),
}


def _parse_products(raw: Any, source: str) -> tuple[Product, ...]:
    if not isinstance(raw, list):
        msg = f"Catalog data in {source} must be a JSON list of products."
        raise CatalogError(msg)
    try:
        return tuple(Product.from_dict(item) for item in raw)
    except (TypeError, ValueError) as exc:
        msg = f"Invalid product record in {source}: {exc}"
        raise CatalogError(msg) from exc


class InMemoryCatalog:
    """``Catalog`` implementation backed by a tuple of products.

    Usage::

        catalog = InMemoryCatalog.from_json("items.json")
        page = await catalog.query_products(ProductQuery(search="shirt"))
    """

    __slots__ = ("_products",)

    def __init__(self, products: Iterable[Product]) -> None:
        self._products = tuple(products)

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryCatalog":
        """Load products from a JSON file (a list of camelCase records)."""
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Cannot load catalog from {path}: {exc}"
            raise CatalogError(msg) from exc
        return cls(_parse_products(raw, str(path)))

    @classmethod
    async def open(cls, path: str | Path) -> "InMemoryCatalog":
        """Async variant of ``from_json`` that reads the file off the event loop."""
        try:
            text = await anyio.Path(path).read_text(encoding="utf-8")
            raw = json.loads(text)
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Cannot load catalog from {path}: {exc}"
            raise CatalogError(msg) from exc
        return cls(_parse_products(raw, str(path)))

    @classmethod
    def sample(cls) -> "InMemoryCatalog":
        """The small dataset shipped with the package."""
        raw = json.loads(files("storefront.catalog").joinpath("data/products.json").read_text(encoding="utf-8"))
        return cls(_parse_products(raw, "sample dataset"))

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    def _filter(self, query: ProductQuery) -> list[Product]:
        items = list(self._products)
        if query.search:
            term = query.search.casefold()
            items = [p for p in items if term in p.title.casefold() or term in p.brand.casefold()]
        if query.category1:
            items = [p for p in items if p.category1 == query.category1]
        if query.category2:
            items = [p for p in items if p.category2 == query.category2]

        key, reverse = _SORT_KEYS.get(query.sort, _SORT_KEYS[DEFAULT_SORT])
        items.sort(key=key, reverse=reverse)
        return items

    async def query_products(self, query: ProductQuery) -> ProductPage:
        await anyio.lowlevel.checkpoint()
        filtered = self._filter(query)
        total = len(filtered)
        start = (query.page - 1) * query.limit
        end = start + query.limit
        logger.debug("query_products %s -> %d of %d", query, len(filtered[start:end]), total)
        return ProductPage(
            items=tuple(filtered[start:end]),
            pagination=Pagination(
                page=query.page,
                limit=query.limit,
                total=total,
                total_pages=math.ceil(total / query.limit),
                has_next=end < total,
                has_prev=query.page > 1,
            ),
        )

    async def query_categories(self) -> Mapping[str, Any]:
        """Nested ``category1 -> category2 -> {}`` mapping in first-seen order."""
        await anyio.lowlevel.checkpoint()
        categories: dict[str, dict[str, Any]] = {}
        for product in self._products:
            second = categories.setdefault(product.category1, {})
            if product.category2:
                second.setdefault(product.category2, {})
        return categories

    async def query_product_by_id(self, product_id: str) -> Product | None:
        await anyio.lowlevel.checkpoint()
        for product in self._products:
            if product.product_id == product_id:
                return _with_details(product)
        return None

    async def query_related_products(self, product_id: str, limit: int = 20) -> tuple[Product, ...]:
        """Products sharing ``category1`` with *product_id*, excluding itself."""
        await anyio.lowlevel.checkpoint()
        product = next((p for p in self._products if p.product_id == product_id), None)
        if product is None:
            return ()
        related = [p for p in self._products if p.product_id != product_id and p.category1 == product.category1]
        return tuple(related[:limit])


def _with_details(product: Product) -> Product:
    stem, dot, ext = product.image.rpartition(".")
    images = (product.image, f"{stem}_2.{ext}", f"{stem}_3.{ext}") if dot else (product.image,)
    return replace(
        product,
        description=(
            f"Detailed description of {product.title}. "
            f"A well-made product from {product.brand or product.mall_name} with high customer satisfaction."
        ),
        rating=4,
        review_count=500,
        stock=50,
        images=images,
    )
