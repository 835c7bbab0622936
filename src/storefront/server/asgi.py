"""ASGI application serving server-rendered storefront documents.

Every GET is handed to the ``ServerRenderer``; the result is spliced
into the HTML shell together with the hydration script::

    from storefront.catalog.memory import InMemoryCatalog
    from storefront.server.asgi import StorefrontApp

    app = StorefrontApp(InMemoryCatalog.sample())

Serve ``app`` with any ASGI server.
"""

import logging
from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

from storefront.catalog import Catalog
from storefront.config import StorefrontConfig
from storefront.routing.query import strip_base
from storefront.server.document import compose_document, load_shell
from storefront.server.renderer import ServerRenderer

logger = logging.getLogger("storefront.server")

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]

_ALLOWED_METHODS = frozenset({"GET", "HEAD"})


async def _send_text(send: Send, status: int, body: str, content_type: str, *, head: bool = False) -> None:
    payload = body.encode("utf-8")
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": [
                (b"content-type", content_type.encode("latin-1")),
                (b"content-length", str(len(payload)).encode("latin-1")),
            ],
        }
    )
    await send({"type": "http.response.body", "body": b"" if head else payload})


class StorefrontApp:
    """ASGI 3.0 application for the storefront."""

    __slots__ = ("_shell", "config", "renderer")

    def __init__(
        self,
        catalog: Catalog,
        *,
        config: StorefrontConfig | None = None,
        renderer: ServerRenderer | None = None,
    ) -> None:
        self.config = config or StorefrontConfig()
        self.renderer = renderer or ServerRenderer(catalog, config=self.config)
        # Development mode re-reads the shell on every request.
        self._shell: str | None = None if self.config.debug else load_shell(self.config)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        method = scope["method"]
        if method not in _ALLOWED_METHODS:
            await _send_text(send, 405, "Method Not Allowed", "text/plain; charset=utf-8")
            return

        path = strip_base(scope["path"], self.config.base_path)
        query_string = scope.get("query_string", b"").decode("latin-1")
        url = f"{path}?{query_string}" if query_string else path

        try:
            shell = self._shell if self._shell is not None else load_shell(self.config)
            result = await self.renderer.render(url)
            document = compose_document(shell, result)
        except Exception:
            logger.exception("Unhandled error rendering %r", url)
            await _send_text(send, 500, "Internal Server Error", "text/plain; charset=utf-8")
            return

        await _send_text(send, 200, document, "text/html; charset=utf-8", head=method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.info("Storefront ready (base path %s)", self.config.base_path)
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
