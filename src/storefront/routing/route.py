"""PageId, RouteEntry and RouteMatch."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from storefront.routing.pattern import Matcher


class PageId(StrEnum):
    """Logical pages a URL can resolve to."""

    HOME = "home"
    PRODUCT_DETAIL = "product_detail"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A registered route. Immutable once added to a router."""

    pattern: str
    matcher: Matcher
    page_id: PageId

    @property
    def param_names(self) -> tuple[str, ...]:
        return self.matcher.param_names


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of resolving a URL.

    ``params`` and ``query`` are read-only mappings. ``pattern`` is the
    matched route pattern, or ``None`` when nothing matched.
    """

    page_id: PageId
    params: Mapping[str, str]
    query: Mapping[str, str]
    pattern: str | None = None
