"""Storefront — shared routing, store and hydration core for a server-rendered catalog.

The same router table and reducer stores run on the server (one fresh
store set per request) and on the client (one long-lived store set),
bridged by a one-shot hydration handoff.

Basic usage::

    from storefront import ServerRenderer
    from storefront.catalog.memory import InMemoryCatalog

    renderer = ServerRenderer(InMemoryCatalog.sample())
    result = await renderer.render("/product/85067212996/")
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "CatalogError",
    "ClientApp",
    "ConfigurationError",
    "HandoffSlot",
    "PageId",
    "RouterTable",
    "ServerRenderer",
    "StoreError",
    "StorefrontApp",
    "StorefrontConfig",
    "StorefrontError",
    "create_store",
    "create_store_set",
    "default_router",
    "hydrate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import storefront`` from pulling in kida until it is needed.
    """
    if name == "StorefrontConfig":
        from storefront.config import StorefrontConfig

        return StorefrontConfig

    if name in ("RouterTable", "default_router"):
        from storefront.routing import router as _router

        return getattr(_router, name)

    if name == "PageId":
        from storefront.routing.route import PageId

        return PageId

    if name in ("create_store", "create_store_set"):
        from storefront import store as _store

        return getattr(_store, name)

    if name in ("HandoffSlot", "hydrate"):
        from storefront import hydration as _hydration

        return getattr(_hydration, name)

    if name == "ServerRenderer":
        from storefront.server.renderer import ServerRenderer

        return ServerRenderer

    if name == "StorefrontApp":
        from storefront.server.asgi import StorefrontApp

        return StorefrontApp

    if name == "ClientApp":
        from storefront.client.app import ClientApp

        return ClientApp

    if name in ("StorefrontError", "ConfigurationError", "StoreError", "CatalogError"):
        from storefront import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
