"""Client app — the long-lived side of the storefront.

Boot order matters: the stores are built once, hydrated from the server
handoff, and only then is the navigation controller started, so the
first client render matches the server markup.
"""

import logging
from collections.abc import Callable

from kida import Environment

from storefront.catalog import Catalog
from storefront.client.history import MemoryHistory
from storefront.client.navigation import NavigationController
from storefront.config import StorefrontConfig
from storefront.hydration import HandoffSlot, hydrate
from storefront.routing.router import RouterTable, default_router
from storefront.store.cart import CartAction
from storefront.store.core import Action
from storefront.store.stores import StoreSet, create_store_set
from storefront.store.ui import ToastKind, UIAction
from storefront.templating.integration import create_environment
from storefront.templating.views import render_head, render_page

logger = logging.getLogger("storefront.client")

View = Callable[[str], None]


class ClientApp:
    """One page's worth of client runtime.

    Usage::

        app = ClientApp(catalog, MemoryHistory(url), HandoffSlot.from_document(html))
        await app.boot()
        await app.history.click("/product/42/")
        app.markup  # re-rendered detail page
    """

    __slots__ = (
        "_booted",
        "_unsubscribers",
        "_view",
        "config",
        "controller",
        "env",
        "head",
        "history",
        "markup",
        "render_count",
        "router",
        "slot",
        "stores",
    )

    def __init__(
        self,
        catalog: Catalog,
        history: MemoryHistory,
        slot: HandoffSlot,
        *,
        view: View | None = None,
        config: StorefrontConfig | None = None,
        router: RouterTable | None = None,
        env: Environment | None = None,
    ) -> None:
        self.config = config or StorefrontConfig()
        self.router = router or default_router()
        self.env = env or create_environment(self.config)
        self.history = history
        self.slot = slot
        self.stores: StoreSet = create_store_set()
        self.controller = NavigationController(
            self.stores, catalog, history, router=self.router, config=self.config
        )
        self.markup = ""
        self.head = ""
        self.render_count = 0
        self._view = view
        self._booted = False
        self._unsubscribers: list[Callable[[], None]] = []

    async def boot(self) -> None:
        """Hydrate, wire up rendering, start navigation. Runs once."""
        if self._booted:
            return
        self._booted = True

        hydrated = hydrate(self.slot, self.stores)

        for store in self.stores:
            self._unsubscribers.append(store.subscribe(self.render))
        self._unsubscribers.append(self.controller.subscribe_route(self.render))
        self.controller.start()

        if hydrated:
            self.controller.adopt(self.history.location)
        else:
            await self.controller.navigate(self.history.location, push=False)
        logger.debug("Client booted at %r (hydrated=%s)", self.history.location, hydrated)

    def shutdown(self) -> None:
        self.controller.stop()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def render(self) -> None:
        """Re-render the current page from store snapshots."""
        match = self.controller.current
        if match is None:
            return
        self.markup = render_page(self.env, match, self.stores, self.config)
        self.head = render_head(match, self.stores.product.get_state(), self.config)
        self.render_count += 1
        if self._view is not None:
            self._view(self.markup)

    # -- Cart interactions --

    def add_to_cart(self, product_id: str, quantity: int = 1) -> bool:
        """Add a product visible on the current page to the cart."""
        state = self.stores.product.get_state()
        candidates = (*state.products, *state.related_products)
        if state.current_product is not None:
            candidates = (state.current_product, *candidates)
        product = next((p for p in candidates if p.product_id == product_id), None)
        if product is None:
            return False
        self.stores.cart.dispatch(Action(CartAction.ADD_ITEM, {"product": product, "quantity": quantity}))
        self.stores.ui.dispatch(
            Action(UIAction.SHOW_TOAST, {"message": "Added to cart.", "kind": ToastKind.SUCCESS})
        )
        return True

    def open_cart(self) -> None:
        self.stores.ui.dispatch(Action(UIAction.OPEN_CART_MODAL))

    def close_cart(self) -> None:
        self.stores.ui.dispatch(Action(UIAction.CLOSE_CART_MODAL))
