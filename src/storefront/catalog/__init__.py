"""Catalog — the data-query collaborator behind the renderer and controller.

A catalog is any object matching the ``Catalog`` protocol. The core only
awaits these four queries; it does not care whether they read memory,
a file, or the network.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from storefront.store.product import Product

SORT_OPTIONS = ("price_asc", "price_desc", "name_asc", "name_desc")
DEFAULT_SORT = "price_asc"


def _positive_int(value: str | None, default: int) -> int:
    try:
        number = int(value) if value else default
    except ValueError:
        return default
    return number if number >= 1 else default


@dataclass(frozen=True, slots=True)
class ProductQuery:
    """Listing parameters: pagination, search, category filter, sort."""

    page: int = 1
    limit: int = 20
    search: str = ""
    category1: str = ""
    category2: str = ""
    sort: str = DEFAULT_SORT

    @classmethod
    def from_query(cls, query: Mapping[str, str], *, default_limit: int = 20) -> "ProductQuery":
        """Build from URL query parameters. Malformed numbers fall back to defaults."""
        return cls(
            page=_positive_int(query.get("page"), 1),
            limit=_positive_int(query.get("limit"), default_limit),
            search=query.get("search", ""),
            category1=query.get("category1", ""),
            category2=query.get("category2", ""),
            sort=query.get("sort") or DEFAULT_SORT,
        )


@dataclass(frozen=True, slots=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True, slots=True)
class ProductPage:
    items: tuple[Product, ...]
    pagination: Pagination


@runtime_checkable
class Catalog(Protocol):
    """Protocol for product data sources."""

    async def query_products(self, query: ProductQuery) -> ProductPage: ...

    async def query_categories(self) -> Mapping[str, Any]: ...

    async def query_product_by_id(self, product_id: str) -> Product | None: ...

    async def query_related_products(self, product_id: str, limit: int = 20) -> tuple[Product, ...]: ...


__all__ = [
    "DEFAULT_SORT",
    "SORT_OPTIONS",
    "Catalog",
    "Pagination",
    "ProductPage",
    "ProductQuery",
]
