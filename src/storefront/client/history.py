"""In-memory model of the browser history.

Stands in for ``window.history`` and ``popstate`` so the client runtime
can run (and be tested) outside a browser. Link activation and
back/forward each fire their own event kind; listeners are async and are
awaited in registration order.
"""

from collections.abc import Awaitable, Callable
from enum import StrEnum

HistoryListener = Callable[[str], Awaitable[None]]


class HistoryEvent(StrEnum):
    LINK = "link"  # in-app link activation (``a[data-link]`` click)
    POP = "pop"  # back / forward


class MemoryHistory:
    """A stack of URLs with a cursor, plus link and pop listeners."""

    __slots__ = ("_entries", "_index", "_listeners")

    def __init__(self, initial_url: str = "/") -> None:
        self._entries: list[str] = [initial_url]
        self._index = 0
        self._listeners: dict[HistoryEvent, list[HistoryListener]] = {kind: [] for kind in HistoryEvent}

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def push(self, url: str) -> None:
        """Add *url* after the current entry, discarding forward entries."""
        del self._entries[self._index + 1 :]
        self._entries.append(url)
        self._index += 1

    def replace(self, url: str) -> None:
        self._entries[self._index] = url

    def listen(self, kind: HistoryEvent, listener: HistoryListener) -> Callable[[], None]:
        listeners = self._listeners[HistoryEvent(kind)]
        listeners.append(listener)

        def unlisten() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unlisten

    async def click(self, href: str) -> None:
        """Activate an in-app link.

        Without link listeners this behaves like a plain page load and
        only records the new entry.
        """
        listeners = tuple(self._listeners[HistoryEvent.LINK])
        if not listeners:
            self.push(href)
            return
        for listener in listeners:
            await listener(href)

    async def back(self) -> bool:
        """Step back one entry. Returns ``False`` at the start of history."""
        if self._index == 0:
            return False
        self._index -= 1
        await self._emit_pop()
        return True

    async def forward(self) -> bool:
        """Step forward one entry. Returns ``False`` at the end of history."""
        if self._index == len(self._entries) - 1:
            return False
        self._index += 1
        await self._emit_pop()
        return True

    async def _emit_pop(self) -> None:
        url = self.location
        for listener in tuple(self._listeners[HistoryEvent.POP]):
            await listener(url)
