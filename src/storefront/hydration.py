"""Hydration — one-shot handoff of server state into the client stores.

The server embeds the payload in the document as::

    <script>window.__INITIAL_DATA__ = {...};</script>

On the client a ``HandoffSlot`` holds that payload until ``hydrate()``
takes it. Taking consumes the slot, so hydration runs at most once no
matter how many times it is invoked.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from storefront.store.core import Action
from storefront.store.product import Product, ProductAction
from storefront.store.stores import StoreSet

logger = logging.getLogger("storefront.client")

INITIAL_DATA_GLOBAL = "__INITIAL_DATA__"

_SCRIPT_RE = re.compile(
    r"<script>window\." + INITIAL_DATA_GLOBAL + r" = (?P<data>.*?);</script>",
    re.DOTALL,
)

# Characters that could end the script element or confuse an HTML parser.
# They only ever occur inside JSON strings, where \uXXXX escapes are valid.
_SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class HandoffSlot:
    """Single-producer, single-consumer slot for the hydration payload.

    ``take()`` returns the payload the first time and ``None`` afterwards.
    """

    __slots__ = ("_consumed", "_payload")

    def __init__(self, payload: Mapping[str, Any] | None = None) -> None:
        self._payload = payload
        self._consumed = False

    @classmethod
    def from_document(cls, html: str) -> "HandoffSlot":
        """Read the embedded payload from a server-rendered document.

        A document without the handoff script yields an empty slot.
        """
        m = _SCRIPT_RE.search(html)
        if m is None:
            return cls()
        return cls(json.loads(m.group("data")))

    @property
    def consumed(self) -> bool:
        return self._consumed

    def take(self) -> Mapping[str, Any] | None:
        """Return the payload once, then clear the slot."""
        payload = self._payload
        self._payload = None
        self._consumed = True
        return payload

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else ("empty" if self._payload is None else "loaded")
        return f"<HandoffSlot {state}>"


def initial_data_script(payload: Mapping[str, Any]) -> str:
    """Serialize *payload* into the handoff ``<script>`` element."""
    data = json.dumps(payload, separators=(",", ":"))
    for char, escape in _SCRIPT_ESCAPES.items():
        data = data.replace(char, escape)
    return f"<script>window.{INITIAL_DATA_GLOBAL} = {data};</script>"


def hydrate(slot: HandoffSlot, stores: StoreSet) -> bool:
    """Dispatch the slot's payload into *stores*, consuming the slot.

    Returns ``True`` if any state was applied. An absent or empty payload
    is a no-op, as is every call after the first.
    """
    data = slot.take()
    if not data:
        logger.debug("Nothing to hydrate")
        return False

    applied = False

    if data.get("products") is not None:
        stores.product.dispatch(
            Action(
                ProductAction.SETUP,
                {
                    "products": [Product.from_dict(p) for p in data["products"]],
                    "total_count": data.get("totalCount", 0),
                    "categories": data.get("categories") or {},
                    "loading": False,
                    "error": None,
                },
            )
        )
        applied = True

    if data.get("currentProduct"):
        stores.product.dispatch(
            Action(
                ProductAction.SETUP,
                {
                    "current_product": Product.from_dict(data["currentProduct"]),
                    "related_products": [Product.from_dict(p) for p in data.get("relatedProducts") or ()],
                    "loading": False,
                    "error": None,
                },
            )
        )
        applied = True

    logger.debug("Hydrated client stores (applied=%s)", applied)
    return applied
