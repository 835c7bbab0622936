"""Product domain: catalog items, listing state, and its reducer."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from storefront.store.core import Action

# Wire name -> attribute name. The wire form is the camelCase JSON used by
# the dataset and the hydration payload.
_WIRE_FIELDS: dict[str, str] = {
    "productId": "product_id",
    "title": "title",
    "image": "image",
    "lprice": "lprice",
    "hprice": "hprice",
    "mallName": "mall_name",
    "brand": "brand",
    "maker": "maker",
    "category1": "category1",
    "category2": "category2",
    "category3": "category3",
    "category4": "category4",
    "productType": "product_type",
    "link": "link",
    "description": "description",
    "rating": "rating",
    "reviewCount": "review_count",
    "stock": "stock",
    "images": "images",
}
_INT_FIELDS = frozenset({"lprice", "hprice", "rating", "review_count", "stock"})

# Error messages recorded with SET_ERROR.
PRODUCT_NOT_FOUND = "Product not found."
QUERY_FAILED = "Failed to load products."


def _to_int(value: Any) -> int:
    if value in (None, ""):
        return 0
    return int(value)


@dataclass(frozen=True, slots=True)
class Product:
    """A catalog item.

    The detail fields (``description`` onwards) are only filled in by
    single-product lookups.
    """

    product_id: str
    title: str
    image: str = ""
    lprice: int = 0
    hprice: int = 0
    mall_name: str = ""
    brand: str = ""
    maker: str = ""
    category1: str = ""
    category2: str = ""
    category3: str = ""
    category4: str = ""
    product_type: str = ""
    link: str = ""
    description: str = ""
    rating: int = 0
    review_count: int = 0
    stock: int = 0
    images: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        """Build a Product from its camelCase wire form. Unknown keys are ignored."""
        kwargs: dict[str, Any] = {}
        for wire_name, attr in _WIRE_FIELDS.items():
            if wire_name not in data:
                continue
            value = data[wire_name]
            if attr in _INT_FIELDS:
                value = _to_int(value)
            elif attr == "images":
                value = tuple(value or ())
            elif attr == "product_id":
                value = str(value)
            kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire form (JSON-serializable)."""
        data: dict[str, Any] = {}
        for wire_name, attr in _WIRE_FIELDS.items():
            value = getattr(self, attr)
            data[wire_name] = list(value) if attr == "images" else value
        return data


_EMPTY_CATEGORIES: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ProductState:
    products: tuple[Product, ...] = ()
    total_count: int = 0
    categories: Mapping[str, Any] = field(default=_EMPTY_CATEGORIES)
    current_product: Product | None = None
    related_products: tuple[Product, ...] = ()
    loading: bool = False
    error: str | None = None


class ProductAction(StrEnum):
    SETUP = "product/setup"
    SET_PRODUCTS = "product/set_products"
    ADD_PRODUCTS = "product/add_products"
    SET_CATEGORIES = "product/set_categories"
    SET_CURRENT_PRODUCT = "product/set_current_product"
    SET_RELATED_PRODUCTS = "product/set_related_products"
    SET_LOADING = "product/set_loading"
    SET_ERROR = "product/set_error"


def _setup(state: ProductState, payload: Mapping[str, Any]) -> ProductState:
    # Shallow merge: only fields named in the payload change.
    changes = {name: value for name, value in payload.items() if name in ProductState.__dataclass_fields__}
    for name in ("products", "related_products"):
        if name in changes:
            changes[name] = tuple(changes[name])
    return replace(state, **changes)


def _set_products(state: ProductState, payload: Mapping[str, Any]) -> ProductState:
    return replace(
        state,
        products=tuple(payload["products"]),
        total_count=payload["total_count"],
        loading=False,
        error=None,
    )


def _add_products(state: ProductState, payload: Mapping[str, Any]) -> ProductState:
    return replace(
        state,
        products=state.products + tuple(payload["products"]),
        total_count=payload.get("total_count", state.total_count),
        loading=False,
    )


def _set_categories(state: ProductState, payload: Mapping[str, Any]) -> ProductState:
    return replace(state, categories=payload)


def _set_current_product(state: ProductState, payload: Product) -> ProductState:
    return replace(state, current_product=payload, loading=False, error=None)


def _set_related_products(state: ProductState, payload: Any) -> ProductState:
    return replace(state, related_products=tuple(payload))


def _set_loading(state: ProductState, payload: bool) -> ProductState:
    return replace(state, loading=bool(payload))


def _set_error(state: ProductState, payload: str) -> ProductState:
    # An error replaces whatever product was showing; stale data never
    # coexists with an error message.
    return replace(
        state,
        error=payload,
        current_product=None,
        related_products=(),
        loading=False,
    )


_HANDLERS: dict[str, Callable[[ProductState, Any], ProductState]] = {
    ProductAction.SETUP: _setup,
    ProductAction.SET_PRODUCTS: _set_products,
    ProductAction.ADD_PRODUCTS: _add_products,
    ProductAction.SET_CATEGORIES: _set_categories,
    ProductAction.SET_CURRENT_PRODUCT: _set_current_product,
    ProductAction.SET_RELATED_PRODUCTS: _set_related_products,
    ProductAction.SET_LOADING: _set_loading,
    ProductAction.SET_ERROR: _set_error,
}


def reduce_product(state: ProductState, action: Action) -> ProductState:
    """Product reducer. Unknown kinds return *state* unchanged."""
    handler = _HANDLERS.get(action.kind)
    if handler is None:
        return state
    return handler(state, action.payload)
