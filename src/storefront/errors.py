"""Storefront exception hierarchy.

Shared across the router, stores, renderer, and client runtime so every
module raises and catches the same types.
"""


class StorefrontError(Exception):
    """Base for all storefront-specific errors."""


class ConfigurationError(StorefrontError):
    """Raised when configuration is invalid.

    Malformed route patterns and registrations after the router is frozen
    land here. Always raised at startup, never while serving a request.
    """


class StoreError(StorefrontError):
    """Raised when a store is used in a way that breaks its contract.

    The only case today is a reducer dispatching while a dispatch is
    already in progress on the same store.
    """


class CatalogError(StorefrontError):
    """A data query failed.

    Raised by catalog implementations. The renderer and the navigation
    controller convert it into an error state on the product store.
    """
