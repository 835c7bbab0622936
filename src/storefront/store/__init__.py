"""Reducer stores: the generic engine plus the product, cart and UI domains."""

from storefront.store.cart import CartAction, CartItem, CartState, reduce_cart
from storefront.store.core import Action, ServerStore, Store, create_store
from storefront.store.product import Product, ProductAction, ProductState, reduce_product
from storefront.store.stores import StoreSet, create_store_set
from storefront.store.ui import Toast, ToastKind, UIAction, UIState, reduce_ui

__all__ = [
    "Action",
    "CartAction",
    "CartItem",
    "CartState",
    "Product",
    "ProductAction",
    "ProductState",
    "ServerStore",
    "Store",
    "StoreSet",
    "Toast",
    "ToastKind",
    "UIAction",
    "UIState",
    "create_store",
    "create_store_set",
    "reduce_cart",
    "reduce_product",
    "reduce_ui",
]
