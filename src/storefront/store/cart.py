"""Cart domain: line items keyed by product id."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from storefront.store.core import Action
from storefront.store.product import Product


@dataclass(frozen=True, slots=True)
class CartItem:
    product_id: str
    title: str
    image: str = ""
    lprice: int = 0
    quantity: int = 1
    selected: bool = False

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartItem":
        return cls(
            product_id=product.product_id,
            title=product.title,
            image=product.image,
            lprice=product.lprice,
            quantity=quantity,
        )


@dataclass(frozen=True, slots=True)
class CartState:
    items: tuple[CartItem, ...] = ()
    selected_all: bool = False

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> int:
        return sum(item.lprice * item.quantity for item in self.items)

    @property
    def selected_price(self) -> int:
        return sum(item.lprice * item.quantity for item in self.items if item.selected)


class CartAction(StrEnum):
    SETUP = "cart/setup"
    ADD_ITEM = "cart/add_item"
    REMOVE_ITEM = "cart/remove_item"
    UPDATE_QUANTITY = "cart/update_quantity"
    TOGGLE_SELECT = "cart/toggle_select"
    SELECT_ALL = "cart/select_all"
    DESELECT_ALL = "cart/deselect_all"
    REMOVE_SELECTED = "cart/remove_selected"
    CLEAR = "cart/clear"


def _all_selected(items: tuple[CartItem, ...]) -> bool:
    return bool(items) and all(item.selected for item in items)


def _setup(state: CartState, payload: Mapping[str, Any]) -> CartState:
    # Collapse duplicate ids so a restored cart keeps product ids unique.
    merged: dict[str, CartItem] = {}
    for item in payload.get("items", ()):
        existing = merged.get(item.product_id)
        merged[item.product_id] = (
            item if existing is None else replace(existing, quantity=existing.quantity + item.quantity)
        )
    items = tuple(merged.values())
    return CartState(items=items, selected_all=payload.get("selected_all", _all_selected(items)))


def _add_item(state: CartState, payload: Mapping[str, Any]) -> CartState:
    product: Product = payload["product"]
    quantity = max(1, int(payload.get("quantity", 1)))
    for index, item in enumerate(state.items):
        if item.product_id == product.product_id:
            updated = replace(item, quantity=item.quantity + quantity)
            items = state.items[:index] + (updated,) + state.items[index + 1 :]
            return replace(state, items=items)
    items = (*state.items, CartItem.from_product(product, quantity))
    return replace(state, items=items, selected_all=False)


def _remove_item(state: CartState, payload: str) -> CartState:
    items = tuple(item for item in state.items if item.product_id != payload)
    return replace(state, items=items, selected_all=_all_selected(items))


def _update_quantity(state: CartState, payload: Mapping[str, Any]) -> CartState:
    quantity = max(1, int(payload["quantity"]))
    items = tuple(
        replace(item, quantity=quantity) if item.product_id == payload["product_id"] else item for item in state.items
    )
    return replace(state, items=items)


def _toggle_select(state: CartState, payload: str) -> CartState:
    items = tuple(
        replace(item, selected=not item.selected) if item.product_id == payload else item for item in state.items
    )
    return replace(state, items=items, selected_all=_all_selected(items))


def _select_all(state: CartState, payload: Any) -> CartState:
    items = tuple(replace(item, selected=True) for item in state.items)
    return replace(state, items=items, selected_all=bool(items))


def _deselect_all(state: CartState, payload: Any) -> CartState:
    items = tuple(replace(item, selected=False) for item in state.items)
    return replace(state, items=items, selected_all=False)


def _remove_selected(state: CartState, payload: Any) -> CartState:
    items = tuple(item for item in state.items if not item.selected)
    return replace(state, items=items, selected_all=False)


def _clear(state: CartState, payload: Any) -> CartState:
    return CartState()


_HANDLERS: dict[str, Callable[[CartState, Any], CartState]] = {
    CartAction.SETUP: _setup,
    CartAction.ADD_ITEM: _add_item,
    CartAction.REMOVE_ITEM: _remove_item,
    CartAction.UPDATE_QUANTITY: _update_quantity,
    CartAction.TOGGLE_SELECT: _toggle_select,
    CartAction.SELECT_ALL: _select_all,
    CartAction.DESELECT_ALL: _deselect_all,
    CartAction.REMOVE_SELECTED: _remove_selected,
    CartAction.CLEAR: _clear,
}


def reduce_cart(state: CartState, action: Action) -> CartState:
    """Cart reducer. Unknown kinds return *state* unchanged."""
    handler = _HANDLERS.get(action.kind)
    if handler is None:
        return state
    return handler(state, action.payload)
