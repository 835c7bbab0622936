"""Tests for storefront.templating — environment setup and page views."""

from pathlib import Path
from types import MappingProxyType

from storefront.config import StorefrontConfig
from storefront.routing.route import PageId, RouteMatch
from storefront.store.core import Action
from storefront.store.product import Product, ProductAction, ProductState
from storefront.store.stores import create_store_set
from storefront.templating.integration import create_environment, format_price
from storefront.templating.views import render_head, render_page

_EMPTY = MappingProxyType({})


def _match(page_id: PageId, **query: str) -> RouteMatch:
    return RouteMatch(page_id=page_id, params=_EMPTY, query=MappingProxyType(query))


class TestFormatPrice:
    def test_thousands(self) -> None:
        assert format_price(12900) == "12,900"
        assert format_price(329000) == "329,000"

    def test_small(self) -> None:
        assert format_price(0) == "0"


class TestEnvironment:
    def test_template_dir_overrides_packaged(self, tmp_path: Path) -> None:
        (tmp_path / "not_found.html").write_text("custom {{ site_name }}")
        env = create_environment(StorefrontConfig(template_dir=tmp_path))

        markup = render_page(env, _match(PageId.NOT_FOUND), create_store_set(), StorefrontConfig(site_name="Shop"))

        assert markup == "custom Shop"

    def test_packaged_templates_still_found(self, tmp_path: Path) -> None:
        env = create_environment(StorefrontConfig(template_dir=tmp_path))
        markup = render_page(env, _match(PageId.NOT_FOUND), create_store_set(), StorefrontConfig())
        assert "Page not found" in markup


class TestHomeView:
    def test_empty_listing(self) -> None:
        markup = render_page(create_environment(), _match(PageId.HOME), create_store_set(), StorefrontConfig())
        assert "product-list-empty" in markup

    def test_loading(self) -> None:
        stores = create_store_set()
        stores.product.dispatch(Action(ProductAction.SET_LOADING, True))
        markup = render_page(create_environment(), _match(PageId.HOME), stores, StorefrontConfig())
        assert "product-list-loading" in markup

    def test_selected_filters(self) -> None:
        stores = create_store_set()
        stores.product.dispatch(
            Action(ProductAction.SET_CATEGORIES, {"Fashion": {"Tops": {}, "Bottoms": {}}, "Kitchen": {}})
        )
        match = _match(PageId.HOME, category1="Fashion", sort="name_desc", search="shirt")

        markup = render_page(create_environment(), match, stores, StorefrontConfig())

        assert 'class="category1-filter-btn selected" data-category1="Fashion"' in markup
        assert 'data-category2="Bottoms"' in markup
        assert '<option value="name_desc" selected>' in markup
        assert 'value="shirt"' in markup

    def test_more_pages_after_starting_page(self) -> None:
        stores = create_store_set()
        items = [Product(product_id=str(i), title=f"P{i}") for i in range(5)]
        stores.product.dispatch(Action(ProductAction.SETUP, {"products": items, "total_count": 12}))

        env = create_environment()
        second = render_page(env, _match(PageId.HOME, page="2", limit="5"), stores, StorefrontConfig())
        third = render_page(env, _match(PageId.HOME, page="3", limit="5"), stores, StorefrontConfig())

        assert "Scroll to load more" in second
        assert "All products loaded" in third

    def test_cart_count_caps_at_99(self) -> None:
        stores = create_store_set()
        for i in range(100):
            stores.cart.dispatch(
                Action("cart/add_item", {"product": Product(product_id=str(i), title=f"P{i}"), "quantity": 1})
            )
        markup = render_page(create_environment(), _match(PageId.HOME), stores, StorefrontConfig())
        assert '<span class="cart-count">99+</span>' in markup


class TestHead:
    def test_home(self) -> None:
        head = render_head(_match(PageId.HOME), ProductState(), StorefrontConfig())
        assert head.startswith("<title>Storefront - Products</title>")

    def test_detail(self) -> None:
        state = ProductState(current_product=Product(product_id="1", title="Pan", brand="Tefal", lprice=33900))
        head = render_head(_match(PageId.PRODUCT_DETAIL), state, StorefrontConfig())
        assert "<title>Pan - Storefront</title>" in head
        assert '<meta name="description" content="Tefal - 33,900">' in head

    def test_not_found(self) -> None:
        head = render_head(_match(PageId.NOT_FOUND), ProductState(), StorefrontConfig())
        assert head == "<title>Page not found - Storefront</title>"
