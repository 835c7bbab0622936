"""Server renderer — one fresh store set per request.

``render(url)`` resolves the route, prefetches the page's data from the
catalog, renders markup from the resulting store snapshots, and returns
the minimal snapshot the client needs to hydrate.

Isolation: no store outlives a ``render()`` call, so interleaved
requests never observe each other's state.
"""

import logging
from dataclasses import dataclass
from typing import Any

from kida import Environment

from storefront.catalog import Catalog, ProductQuery
from storefront.config import StorefrontConfig
from storefront.routing.route import PageId, RouteMatch
from storefront.routing.router import RouterTable, default_router
from storefront.store.core import Action
from storefront.store.product import PRODUCT_NOT_FOUND, QUERY_FAILED, ProductAction
from storefront.store.stores import StoreSet, create_store_set
from storefront.templating.integration import create_environment
from storefront.templating.views import render_head, render_page

logger = logging.getLogger("storefront.server")


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Output of one server render.

    ``initial_data`` is JSON-serializable and empty when the page has
    nothing to hydrate.
    """

    markup: str
    head: str
    initial_data: dict[str, Any]
    match: RouteMatch


class ServerRenderer:
    """Renders pages for a catalog.

    The router, kida environment and config are shared read-only across
    requests. Stores are not: each ``render()`` builds its own.
    """

    __slots__ = ("catalog", "config", "env", "router")

    def __init__(
        self,
        catalog: Catalog,
        *,
        router: RouterTable | None = None,
        env: Environment | None = None,
        config: StorefrontConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or StorefrontConfig()
        self.router = router or default_router()
        self.env = env or create_environment(self.config)

    async def render(self, url: str) -> RenderResult:
        stores = create_store_set(server=True)
        match = self.router.resolve(url)
        logger.debug("Rendering %r as %s", url, match.page_id)

        try:
            initial_data = await self._prefetch(match, stores)
        except Exception:
            logger.exception("Catalog query failed while rendering %r", url)
            stores.product.dispatch(Action(ProductAction.SET_ERROR, QUERY_FAILED))
            initial_data = {}

        markup = render_page(self.env, match, stores, self.config)
        head = render_head(match, stores.product.get_state(), self.config)
        return RenderResult(markup=markup, head=head, initial_data=initial_data, match=match)

    async def _prefetch(self, match: RouteMatch, stores: StoreSet) -> dict[str, Any]:
        """Load the page's data into *stores* and return the hydration payload."""
        if match.page_id is PageId.HOME:
            query = ProductQuery.from_query(match.query, default_limit=self.config.page_size)
            page = await self.catalog.query_products(query)
            categories = await self.catalog.query_categories()
            stores.product.dispatch(
                Action(
                    ProductAction.SETUP,
                    {
                        "products": page.items,
                        "total_count": page.pagination.total,
                        "categories": categories,
                        "loading": False,
                        "error": None,
                    },
                )
            )
            return {
                "products": [p.to_dict() for p in page.items],
                "totalCount": page.pagination.total,
                "categories": categories,
            }

        if match.page_id is PageId.PRODUCT_DETAIL:
            product_id = match.params["id"]
            product = await self.catalog.query_product_by_id(product_id)
            if product is None:
                stores.product.dispatch(Action(ProductAction.SET_ERROR, PRODUCT_NOT_FOUND))
                return {}
            related = await self.catalog.query_related_products(product_id, self.config.related_limit)
            stores.product.dispatch(Action(ProductAction.SET_CURRENT_PRODUCT, product))
            stores.product.dispatch(Action(ProductAction.SET_RELATED_PRODUCTS, related))
            return {
                "currentProduct": product.to_dict(),
                "relatedProducts": [p.to_dict() for p in related],
            }

        return {}
