"""StoreSet — the product, cart and UI stores of one environment.

The three stores sit side by side; they are never merged into a single
tree. The server builds a fresh set per request, the client builds one
for the lifetime of the page. Both pass the set explicitly.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from storefront.store.cart import CartState, reduce_cart
from storefront.store.core import Store, create_store
from storefront.store.product import ProductState, reduce_product
from storefront.store.ui import UIState, reduce_ui


@dataclass(frozen=True, slots=True)
class StoreSet:
    product: Store[ProductState]
    cart: Store[CartState]
    ui: Store[UIState]

    def __iter__(self) -> Iterator[Store[Any]]:
        return iter((self.product, self.cart, self.ui))

    def snapshot(self) -> tuple[ProductState, CartState, UIState]:
        """Current state of every store, in declaration order."""
        return (self.product.get_state(), self.cart.get_state(), self.ui.get_state())


def create_store_set(*, server: bool = False) -> StoreSet:
    """Build a store set at default initial state."""
    return StoreSet(
        product=create_store(ProductState(), reduce_product, server=server),
        cart=create_store(CartState(), reduce_cart, server=server),
        ui=create_store(UIState(), reduce_ui, server=server),
    )
