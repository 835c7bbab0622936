"""Async test client for the storefront ASGI app.

Sends requests through the ASGI interface directly — no HTTP involved.
"""

from dataclasses import dataclass
from typing import Any

from storefront.server.asgi import StorefrontApp


@dataclass(frozen=True, slots=True)
class TestResponse:
    __test__ = False  # Tell pytest this is not a test class

    status: int
    headers: tuple[tuple[str, str], ...]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    @property
    def content_type(self) -> str:
        return self.header("content-type") or ""

    def header(self, name: str) -> str | None:
        name = name.lower()
        for key, value in self.headers:
            if key == name:
                return value
        return None


class TestClient:
    """Async test client for storefront applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("app",)

    def __init__(self, app: StorefrontApp) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        await self._lifespan("startup")
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._lifespan("shutdown")

    async def _lifespan(self, phase: str) -> None:
        # One lifespan cycle per phase; the app returns after shutdown.
        messages = [{"type": f"lifespan.{phase}"}]

        async def receive() -> dict[str, Any]:
            if messages:
                return messages.pop(0)
            return {"type": "lifespan.shutdown"}

        async def send(message: dict[str, Any]) -> None:
            if message["type"] == "lifespan.startup.failed":
                raise RuntimeError(message.get("message", "lifespan startup failed"))

        await self.app({"type": "lifespan", "asgi": {"version": "3.0"}}, receive, send)

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> TestResponse:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> TestResponse:
        """Send an arbitrary request and collect the response."""
        path_part, _, query_string = path.partition("?")
        raw_headers = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method,
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        status = 500
        response_headers: list[tuple[str, str]] = []
        body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                response_headers.extend(
                    (k.decode("latin-1"), v.decode("latin-1")) for k, v in message.get("headers", [])
                )
            elif message["type"] == "http.response.body":
                body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)
        return TestResponse(status=status, headers=tuple(response_headers), body=b"".join(body_parts))
