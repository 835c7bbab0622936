"""Ordered route table.

The same table resolves URLs during server rendering and during client
navigation, so both environments reach the same page for the same URL.
"""

import logging
from types import MappingProxyType

from storefront.errors import ConfigurationError
from storefront.routing.pattern import compile_pattern
from storefront.routing.query import parse_query, split_url
from storefront.routing.route import PageId, RouteEntry, RouteMatch

logger = logging.getLogger("storefront.routing")

_EMPTY: MappingProxyType[str, str] = MappingProxyType({})


class RouterTable:
    """Route table with first-match-wins resolution.

    Usage::

        router = RouterTable()
        router.add_route("/", PageId.HOME)
        router.add_route("/product/:id/", PageId.PRODUCT_DETAIL)
        router.freeze()
        match = router.resolve("/product/42/?ref=home")
    """

    __slots__ = ("_entries", "_frozen")

    def __init__(self) -> None:
        self._entries: list[RouteEntry] = []
        self._frozen = False

    def add_route(self, pattern: str, page_id: PageId) -> RouteEntry:
        """Append a route. Registration order is match priority.

        Raises ``ConfigurationError`` if the pattern is malformed or the
        table is already frozen.
        """
        if self._frozen:
            msg = f"Cannot add route {pattern!r} after the router is frozen."
            raise ConfigurationError(msg)

        entry = RouteEntry(pattern=pattern, matcher=compile_pattern(pattern), page_id=PageId(page_id))
        self._entries.append(entry)
        return entry

    def freeze(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[RouteEntry, ...]:
        """Registered entries in priority order."""
        return tuple(self._entries)

    def resolve(self, url: str) -> RouteMatch:
        """Resolve *url* to a ``RouteMatch``.

        Never raises for an unmatched path: a miss resolves to
        ``PageId.NOT_FOUND`` with empty params and the parsed query.
        """
        path, query_string = split_url(url)
        query = parse_query(query_string)

        for entry in self._entries:
            values = entry.matcher.match(path)
            if values is None:
                continue
            params = MappingProxyType(dict(zip(entry.param_names, values, strict=True)))
            logger.debug("Resolved %r to %s via %r", url, entry.page_id, entry.pattern)
            return RouteMatch(page_id=entry.page_id, params=params, query=query, pattern=entry.pattern)

        logger.debug("No route matches %r", url)
        return RouteMatch(page_id=PageId.NOT_FOUND, params=_EMPTY, query=query)


def default_router() -> RouterTable:
    """Build and freeze the storefront's route table.

    ``/404`` is an explicit not-found route. Any other miss falls back to
    the not-found page implicitly.
    """
    router = RouterTable()
    router.add_route("/", PageId.HOME)
    router.add_route("/product/:id/", PageId.PRODUCT_DETAIL)
    router.add_route("/404", PageId.NOT_FOUND)
    router.freeze()
    return router
