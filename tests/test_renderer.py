"""Tests for storefront.server.renderer and storefront.server.document."""

import asyncio
import json
from pathlib import Path

import pytest

from storefront.catalog.memory import InMemoryCatalog
from storefront.config import StorefrontConfig
from storefront.hydration import HandoffSlot
from storefront.routing.route import PageId
from storefront.server.document import compose_document, load_shell
from storefront.server.renderer import ServerRenderer
from storefront.store.product import PRODUCT_NOT_FOUND, QUERY_FAILED, Product


class BrokenCatalog(InMemoryCatalog):
    """Catalog whose listing query always fails."""

    __slots__ = ()

    async def query_products(self, query):
        msg = "database is down"
        raise RuntimeError(msg)


class TestServerRenderer:
    async def test_home(self, catalog: InMemoryCatalog) -> None:
        result = await ServerRenderer(catalog).render("/")

        assert result.match.page_id is PageId.HOME
        assert "product-card" in result.markup
        assert "Cotton Crew Neck T-Shirt" in result.markup
        assert "12,900" in result.markup
        assert 'href="/product/85067212996/"' in result.markup
        assert "<title>Storefront - Products</title>" in result.head

        data = result.initial_data
        assert data["totalCount"] == 12
        assert len(data["products"]) == 12
        assert data["products"][0]["productId"] == "85067212996"
        assert list(data["categories"]) == ["Fashion", "Kitchen", "Digital", "Living"]

    async def test_home_query_filters(self, catalog: InMemoryCatalog) -> None:
        result = await ServerRenderer(catalog).render("/?category1=Digital&sort=price_desc&limit=2")

        data = result.initial_data
        assert data["totalCount"] == 4
        assert [p["productId"] for p in data["products"]] == ["88327519027", "82765104451"]
        assert "load-more" in result.markup

    async def test_home_page_size_from_config(self, catalog: InMemoryCatalog) -> None:
        renderer = ServerRenderer(catalog, config=StorefrontConfig(page_size=5))
        result = await renderer.render("/")
        assert len(result.initial_data["products"]) == 5

    async def test_product_detail(self, catalog: InMemoryCatalog) -> None:
        result = await ServerRenderer(catalog).render("/product/85067212996/?ref=home")

        assert result.match.page_id is PageId.PRODUCT_DETAIL
        assert "product-detail-title" in result.markup
        assert "Cotton Crew Neck T-Shirt" in result.markup
        assert "related-products" in result.markup
        assert "<title>Cotton Crew Neck T-Shirt - Storefront</title>" in result.head
        assert 'content="Basic House - 12,900"' in result.head

        data = result.initial_data
        assert data["currentProduct"]["productId"] == "85067212996"
        assert data["currentProduct"]["rating"] == 4
        assert {p["productId"] for p in data["relatedProducts"]} == {
            "82094468339",
            "86940857379",
            "83205868295",
        }

    async def test_missing_product(self, catalog: InMemoryCatalog) -> None:
        result = await ServerRenderer(catalog).render("/product/999/")

        assert result.match.page_id is PageId.PRODUCT_DETAIL
        assert result.initial_data == {}
        assert "product-detail-error" in result.markup
        assert PRODUCT_NOT_FOUND in result.markup
        assert "<title>Product not found - Storefront</title>" in result.head

    async def test_not_found(self, catalog: InMemoryCatalog) -> None:
        result = await ServerRenderer(catalog).render("/unknown")

        assert result.match.page_id is PageId.NOT_FOUND
        assert result.initial_data == {}
        assert "Page not found" in result.markup
        assert "404" in result.markup

    async def test_catalog_failure_renders_error(self, caplog: pytest.LogCaptureFixture) -> None:
        broken = BrokenCatalog(InMemoryCatalog.sample().products)

        result = await ServerRenderer(broken).render("/")

        assert result.initial_data == {}
        assert "product-list-error" in result.markup
        assert QUERY_FAILED in result.markup
        assert "Catalog query failed" in caplog.text

    async def test_titles_are_escaped(self) -> None:
        catalog = InMemoryCatalog([Product(product_id="1", title="<b>Bold</b> & Co")])
        result = await ServerRenderer(catalog).render("/product/1/")

        assert "<b>" not in result.head
        assert "&lt;b&gt;Bold&lt;/b&gt; &amp; Co" in result.head
        assert "<b>Bold</b>" not in result.markup

    async def test_custom_site_name(self, catalog: InMemoryCatalog) -> None:
        renderer = ServerRenderer(catalog, config=StorefrontConfig(site_name="Shop"))
        result = await renderer.render("/")
        assert "<title>Shop - Products</title>" in result.head


class TestIsolation:
    async def test_interleaved_renders_match_independent_renders(self, catalog: InMemoryCatalog) -> None:
        renderer = ServerRenderer(catalog)
        urls = ["/", "/product/85067212996/", "/product/999/", "/unknown", "/?category1=Kitchen"]

        expected = [await renderer.render(url) for url in urls]
        concurrent = await asyncio.gather(*(renderer.render(url) for url in urls * 3))

        for index, result in enumerate(concurrent):
            reference = expected[index % len(urls)]
            assert result.markup == reference.markup
            assert result.head == reference.head
            assert result.initial_data == reference.initial_data

    async def test_initial_data_is_json_serializable(self, catalog: InMemoryCatalog) -> None:
        renderer = ServerRenderer(catalog)
        for url in ("/", "/product/85067212996/"):
            result = await renderer.render(url)
            assert json.loads(json.dumps(result.initial_data)) == result.initial_data


class TestDocument:
    async def test_compose(self, catalog: InMemoryCatalog) -> None:
        result = await ServerRenderer(catalog).render("/product/85067212996/")
        document = compose_document(load_shell(), result)

        assert "<!--app-head-->" not in document
        assert "<!--app-html-->" not in document
        assert '<div id="root">' in document
        assert "<title>Cotton Crew Neck T-Shirt - Storefront</title>" in document
        assert document.index("window.__INITIAL_DATA__") < document.index("</head>")

        slot = HandoffSlot.from_document(document)
        assert slot.take() == result.initial_data

    async def test_empty_payload_still_embedded(self, catalog: InMemoryCatalog) -> None:
        result = await ServerRenderer(catalog).render("/unknown")
        document = compose_document(load_shell(), result)
        assert "<script>window.__INITIAL_DATA__ = {};</script></head>" in document

    def test_custom_shell(self, tmp_path: Path) -> None:
        shell = tmp_path / "shell.html"
        shell.write_text("<html><head><!--app-head--></head><body><!--app-html--></body></html>")
        assert load_shell(StorefrontConfig(document_template=shell)).startswith("<html><head>")
