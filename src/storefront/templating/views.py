"""Page views: store snapshots in, markup out.

The server renderer and the client app call the same functions, so a
hydrated client produces the markup the server sent.
"""

import html
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kida import Environment

from storefront.catalog import DEFAULT_SORT, ProductQuery
from storefront.config import StorefrontConfig
from storefront.routing.route import PageId, RouteMatch
from storefront.store.product import ProductState
from storefront.store.stores import StoreSet
from storefront.templating.integration import format_price

PAGE_TEMPLATES: dict[PageId, str] = {
    PageId.HOME: "home.html",
    PageId.PRODUCT_DETAIL: "product_detail.html",
    PageId.NOT_FOUND: "not_found.html",
}

SORT_LABELS = (
    ("price_asc", "Price: low to high"),
    ("price_desc", "Price: high to low"),
    ("name_asc", "Name: A to Z"),
    ("name_desc", "Name: Z to A"),
)
LIMIT_CHOICES = ("10", "20", "50", "100")


@dataclass(frozen=True, slots=True)
class Option:
    value: str
    label: str
    selected: bool = False


def _layout_context(stores: StoreSet, config: StorefrontConfig) -> dict[str, Any]:
    cart = stores.cart.get_state()
    ui = stores.ui.get_state()
    count = len(cart.items)
    return {
        "site_name": config.site_name,
        "base_path": config.base_path,
        "cart": cart,
        "cart_count": count,
        "cart_count_label": "99+" if count > 99 else str(count),
        "cart_modal_open": ui.cart_modal_open,
        "toast": ui.toast,
        "global_loading": ui.global_loading,
    }


def _home_context(state: ProductState, query: Mapping[str, str], config: StorefrontConfig) -> dict[str, Any]:
    category1 = query.get("category1", "")
    category2 = query.get("category2", "")
    sort = query.get("sort") or DEFAULT_SORT
    limit = query.get("limit") or str(config.page_size)
    second_level = state.categories.get(category1, {}) if category1 else {}
    listing = ProductQuery.from_query(query, default_limit=config.page_size)
    shown = (listing.page - 1) * listing.limit + len(state.products)
    return {
        "products": state.products,
        "total_count": state.total_count,
        "has_more": shown < state.total_count,
        "loading": state.loading,
        "error": state.error,
        "search": query.get("search", ""),
        "category1": category1,
        "category2": category2,
        "categories1": [Option(name, name, name == category1) for name in state.categories],
        "categories2": [Option(name, name, name == category2) for name in second_level],
        "sort_options": [Option(value, label, value == sort) for value, label in SORT_LABELS],
        "limit_options": [Option(value, value, value == limit) for value in LIMIT_CHOICES],
    }


def _detail_context(state: ProductState) -> dict[str, Any]:
    product = state.current_product
    return {
        "product": product,
        "related_products": state.related_products[:20],
        "loading": state.loading,
        "error": state.error,
        "stars": [i < product.rating for i in range(5)] if product else [],
    }


def render_page(env: Environment, match: RouteMatch, stores: StoreSet, config: StorefrontConfig) -> str:
    """Render the page for *match* from the current store snapshots."""
    context = _layout_context(stores, config)
    state = stores.product.get_state()
    if match.page_id is PageId.HOME:
        context.update(_home_context(state, match.query, config))
    elif match.page_id is PageId.PRODUCT_DETAIL:
        context.update(_detail_context(state))

    template = env.get_template(PAGE_TEMPLATES[match.page_id])
    return template.render(context)


def render_head(match: RouteMatch, state: ProductState, config: StorefrontConfig) -> str:
    """Title and description tags for *match*. All text is HTML-escaped."""
    site = config.site_name
    if match.page_id is PageId.HOME:
        return (
            f"<title>{html.escape(site)} - Products</title>\n"
            f'<meta name="description" content="Browse the {html.escape(site)} catalog">'
        )
    if match.page_id is PageId.PRODUCT_DETAIL:
        product = state.current_product
        if product is None:
            return f"<title>Product not found - {html.escape(site)}</title>"
        description = f"{product.brand} - {format_price(product.lprice)}"
        return (
            f"<title>{html.escape(product.title)} - {html.escape(site)}</title>\n"
            f'<meta name="description" content="{html.escape(description)}">'
        )
    return f"<title>Page not found - {html.escape(site)}</title>"
