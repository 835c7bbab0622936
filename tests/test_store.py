"""Tests for storefront.store.core — Store, ServerStore, create_store."""

from dataclasses import dataclass, replace

import pytest

from storefront.errors import StoreError
from storefront.store.core import Action, ServerStore, Store, create_store


@dataclass(frozen=True, slots=True)
class Counter:
    value: int = 0


def _reduce(state: Counter, action: Action) -> Counter:
    if action.kind == "counter/add":
        return replace(state, value=state.value + action.payload)
    return state


class TestStore:
    def test_initial_state(self) -> None:
        store = create_store(Counter(), _reduce)
        assert store.get_state() == Counter(0)

    def test_dispatch_replaces_state(self) -> None:
        store = create_store(Counter(), _reduce)
        before = store.get_state()
        store.dispatch(Action("counter/add", 2))
        assert store.get_state() == Counter(2)
        assert before == Counter(0)

    def test_dispatch_returns_action(self) -> None:
        store = create_store(Counter(), _reduce)
        action = Action("counter/add", 1)
        assert store.dispatch(action) is action

    def test_unknown_kind_keeps_identity(self) -> None:
        store = create_store(Counter(), _reduce)
        before = store.get_state()
        store.dispatch(Action("something/else"))
        assert store.get_state() is before

    def test_subscribers_called_in_order(self) -> None:
        store = create_store(Counter(), _reduce)
        calls: list[str] = []
        store.subscribe(lambda: calls.append("a"))
        store.subscribe(lambda: calls.append("b"))

        store.dispatch(Action("counter/add", 1))

        assert calls == ["a", "b"]

    def test_subscriber_sees_new_state(self) -> None:
        store = create_store(Counter(), _reduce)
        seen: list[int] = []
        store.subscribe(lambda: seen.append(store.get_state().value))

        store.dispatch(Action("counter/add", 5))

        assert seen == [5]

    def test_subscriber_notified_for_unknown_kind(self) -> None:
        store = create_store(Counter(), _reduce)
        calls: list[int] = []
        store.subscribe(lambda: calls.append(1))
        store.dispatch(Action("noop"))
        assert calls == [1]

    def test_unsubscribe(self) -> None:
        store = create_store(Counter(), _reduce)
        calls: list[int] = []
        unsubscribe = store.subscribe(lambda: calls.append(1))

        store.dispatch(Action("counter/add", 1))
        unsubscribe()
        unsubscribe()
        store.dispatch(Action("counter/add", 1))

        assert calls == [1]

    def test_subscribe_during_notify_waits_for_next_dispatch(self) -> None:
        store = create_store(Counter(), _reduce)
        calls: list[str] = []

        def late() -> None:
            calls.append("late")

        def first() -> None:
            calls.append("first")
            store.subscribe(late)

        store.subscribe(first)
        store.dispatch(Action("counter/add", 1))
        assert calls == ["first"]

    def test_subscriber_may_dispatch(self) -> None:
        store = create_store(Counter(), _reduce)

        def bump_once() -> None:
            if store.get_state().value == 1:
                store.dispatch(Action("counter/add", 10))

        store.subscribe(bump_once)
        store.dispatch(Action("counter/add", 1))
        assert store.get_state().value == 11

    def test_reducer_dispatch_raises(self) -> None:
        store: Store[Counter]

        def reentrant(state: Counter, action: Action) -> Counter:
            if action.kind == "outer":
                store.dispatch(Action("counter/add", 1))
            return _reduce(state, action)

        store = create_store(Counter(), reentrant)
        with pytest.raises(StoreError, match="mid-dispatch"):
            store.dispatch(Action("outer"))

        # The store is still usable afterwards.
        store.dispatch(Action("counter/add", 1))
        assert store.get_state().value == 1


class TestServerStore:
    def test_create_server_variant(self) -> None:
        assert isinstance(create_store(Counter(), _reduce, server=True), ServerStore)
        assert not isinstance(create_store(Counter(), _reduce), ServerStore)

    def test_dispatch_still_reduces(self) -> None:
        store = create_store(Counter(), _reduce, server=True)
        store.dispatch(Action("counter/add", 3))
        assert store.get_state().value == 3

    def test_subscribe_is_noop(self) -> None:
        store = create_store(Counter(), _reduce, server=True)
        calls: list[int] = []
        unsubscribe = store.subscribe(lambda: calls.append(1))

        store.dispatch(Action("counter/add", 1))
        unsubscribe()

        assert calls == []
