"""Store — immutable state snapshot plus a pure reducer.

``Store`` is the client variant: subscribers are notified synchronously
after every dispatch. ``ServerStore`` is the per-request variant with
subscription disabled, since nothing re-renders during a request.

Usage::

    store = create_store(ProductState(), reduce_product)
    unsubscribe = store.subscribe(lambda: print(store.get_state()))
    store.dispatch(Action(ProductAction.SET_LOADING, True))
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from storefront.errors import StoreError

S = TypeVar("S")

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Action:
    """A state transition request.

    ``kind`` is drawn from a store's action enumeration. Kinds a reducer
    does not know leave its state untouched.
    """

    kind: str
    payload: Any = None


Reducer = Callable[[S, Action], S]


def _noop() -> None:
    return None


class Store(Generic[S]):
    """Reducer container with synchronous change notification."""

    __slots__ = ("_dispatching", "_listeners", "_reducer", "_state")

    def __init__(self, initial: S, reducer: Reducer[S]) -> None:
        self._state = initial
        self._reducer = reducer
        self._listeners: list[Listener] = []
        self._dispatching = False

    def get_state(self) -> S:
        """Return the current snapshot."""
        return self._state

    def dispatch(self, action: Action) -> Action:
        """Reduce *action* into a new snapshot, then notify subscribers.

        Subscribers registered at the time of the call are invoked in
        subscription order, after the snapshot has been replaced.

        Raises ``StoreError`` if called from inside the reducer.
        """
        if self._dispatching:
            msg = f"Reducers may not dispatch actions (got {action.kind!r} mid-dispatch)."
            raise StoreError(msg)

        self._dispatching = True
        try:
            next_state = self._reducer(self._state, action)
        finally:
            self._dispatching = False

        self._state = next_state
        self._notify()
        return action

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register *listener*. Returns an idempotent unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in tuple(self._listeners):
            listener()


class ServerStore(Store[S]):
    """Per-request store. Subscription is a no-op."""

    __slots__ = ()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        return _noop

    def _notify(self) -> None:
        return None


def create_store(initial: S, reducer: Reducer[S], *, server: bool = False) -> Store[S]:
    """Create a store. ``server=True`` returns the subscription-free variant."""
    if server:
        return ServerStore(initial, reducer)
    return Store(initial, reducer)
