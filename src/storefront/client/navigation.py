"""Client navigation controller.

Turns link activation and back/forward into in-page transitions:
resolve the URL through the shared router table, load the page's data
into the stores, and let store subscribers re-render.

State machine::

    idle --navigate()--> navigating --data dispatched / error--> idle

A navigation superseded by a newer one drops its results on arrival.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from enum import StrEnum

from storefront.catalog import Catalog, ProductQuery
from storefront.client.history import HistoryEvent, MemoryHistory
from storefront.config import StorefrontConfig
from storefront.routing.query import strip_base
from storefront.routing.route import PageId, RouteMatch
from storefront.routing.router import RouterTable, default_router
from storefront.store.core import Action
from storefront.store.product import PRODUCT_NOT_FOUND, QUERY_FAILED, ProductAction
from storefront.store.stores import StoreSet

logger = logging.getLogger("storefront.client")

RouteListener = Callable[[], None]


class NavigationStatus(StrEnum):
    IDLE = "idle"
    NAVIGATING = "navigating"


class NavigationController:
    """Drives in-page navigation for one client store set."""

    __slots__ = (
        "_route_listeners",
        "_token",
        "_unlisten",
        "catalog",
        "config",
        "current",
        "history",
        "router",
        "status",
        "stores",
    )

    def __init__(
        self,
        stores: StoreSet,
        catalog: Catalog,
        history: MemoryHistory,
        *,
        router: RouterTable | None = None,
        config: StorefrontConfig | None = None,
    ) -> None:
        self.stores = stores
        self.catalog = catalog
        self.history = history
        self.router = router or default_router()
        self.config = config or StorefrontConfig()
        self.status = NavigationStatus.IDLE
        self.current: RouteMatch | None = None
        self._token = 0
        self._route_listeners: list[RouteListener] = []
        self._unlisten: list[Callable[[], None]] = []

    @property
    def started(self) -> bool:
        return bool(self._unlisten)

    def start(self) -> None:
        """Listen for link activation and back/forward. Idempotent."""
        if self.started:
            return
        self._unlisten = [
            self.history.listen(HistoryEvent.LINK, self._on_link),
            self.history.listen(HistoryEvent.POP, self._on_pop),
        ]

    def stop(self) -> None:
        for unlisten in self._unlisten:
            unlisten()
        self._unlisten = []

    def subscribe_route(self, listener: RouteListener) -> Callable[[], None]:
        """Call *listener* whenever ``current`` changes."""
        self._route_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._route_listeners:
                self._route_listeners.remove(listener)

        return unsubscribe

    def adopt(self, url: str) -> RouteMatch:
        """Make *url* current without loading data (the page is already hydrated)."""
        match = self.router.resolve(strip_base(url, self.config.base_path))
        self._set_current(match)
        return match

    async def navigate(self, url: str, *, push: bool = True) -> RouteMatch:
        """Navigate to *url*. Always ends idle, even if the data load fails."""
        self._token += 1
        token = self._token
        self.status = NavigationStatus.NAVIGATING
        if push:
            self.history.push(url)

        match = self.router.resolve(strip_base(url, self.config.base_path))
        logger.debug("Navigating to %r (%s)", url, match.page_id)
        try:
            if match.page_id is not PageId.NOT_FOUND:
                self.stores.product.dispatch(Action(ProductAction.SET_LOADING, True))
            elif self.stores.product.get_state().loading:
                self.stores.product.dispatch(Action(ProductAction.SET_LOADING, False))
            self._set_current(match)
            await self._load(match, token)
        finally:
            if token == self._token:
                self.status = NavigationStatus.IDLE
        return match

    async def load_more(self) -> bool:
        """Append the next listing page. Returns ``True`` if products were added."""
        match = self.current
        if match is None or match.page_id is not PageId.HOME or self.status is NavigationStatus.NAVIGATING:
            return False
        state = self.stores.product.get_state()
        query = ProductQuery.from_query(match.query, default_limit=self.config.page_size)
        # The listing starts at query.page, not at page 1.
        if (query.page - 1) * query.limit + len(state.products) >= state.total_count:
            return False

        query = replace(query, page=query.page + len(state.products) // query.limit)
        token = self._token
        try:
            page = await self.catalog.query_products(query)
        except Exception:
            logger.exception("Loading page %d failed", query.page)
            if token == self._token:
                self.stores.product.dispatch(Action(ProductAction.SET_ERROR, QUERY_FAILED))
            return False

        if token != self._token:
            return False
        self.stores.product.dispatch(
            Action(ProductAction.ADD_PRODUCTS, {"products": page.items, "total_count": page.pagination.total})
        )
        return bool(page.items)

    async def _on_link(self, href: str) -> None:
        await self.navigate(href)

    async def _on_pop(self, url: str) -> None:
        await self.navigate(url, push=False)

    def _set_current(self, match: RouteMatch) -> None:
        self.current = match
        for listener in tuple(self._route_listeners):
            listener()

    async def _load(self, match: RouteMatch, token: int) -> None:
        def stale() -> bool:
            return token != self._token

        product = self.stores.product
        try:
            if match.page_id is PageId.HOME:
                query = ProductQuery.from_query(match.query, default_limit=self.config.page_size)
                page = await self.catalog.query_products(query)
                categories = await self.catalog.query_categories()
                if stale():
                    return
                product.dispatch(
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

            elif match.page_id is PageId.PRODUCT_DETAIL:
                product_id = match.params["id"]
                found = await self.catalog.query_product_by_id(product_id)
                if stale():
                    return
                if found is None:
                    product.dispatch(Action(ProductAction.SET_ERROR, PRODUCT_NOT_FOUND))
                    return
                related = await self.catalog.query_related_products(product_id, self.config.related_limit)
                if stale():
                    return
                product.dispatch(Action(ProductAction.SET_CURRENT_PRODUCT, found))
                product.dispatch(Action(ProductAction.SET_RELATED_PRODUCTS, related))

        except Exception:
            logger.exception("Data load failed for %s", match.page_id)
            if not stale():
                product.dispatch(Action(ProductAction.SET_ERROR, QUERY_FAILED))
