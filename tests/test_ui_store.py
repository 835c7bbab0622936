"""Tests for storefront.store.ui and storefront.store.stores."""

from storefront.store.core import Action, ServerStore
from storefront.store.stores import create_store_set
from storefront.store.ui import Toast, ToastKind, UIAction, UIState, reduce_ui


class TestUIReducer:
    def test_cart_modal(self) -> None:
        state = reduce_ui(UIState(), Action(UIAction.OPEN_CART_MODAL))
        assert state.cart_modal_open is True
        state = reduce_ui(state, Action(UIAction.CLOSE_CART_MODAL))
        assert state.cart_modal_open is False

    def test_global_loading(self) -> None:
        state = reduce_ui(UIState(), Action(UIAction.SET_GLOBAL_LOADING, True))
        assert state.global_loading is True

    def test_show_and_hide_toast(self) -> None:
        state = reduce_ui(UIState(), Action(UIAction.SHOW_TOAST, {"message": "Saved", "kind": "success"}))
        assert state.toast == Toast(visible=True, message="Saved", kind=ToastKind.SUCCESS)

        state = reduce_ui(state, Action(UIAction.HIDE_TOAST))
        assert state.toast.visible is False
        assert state.toast.message == "Saved"

    def test_toast_defaults_to_info(self) -> None:
        state = reduce_ui(UIState(), Action(UIAction.SHOW_TOAST, {"message": "Hi"}))
        assert state.toast.kind is ToastKind.INFO

    def test_unknown_kind_identity(self) -> None:
        state = UIState()
        assert reduce_ui(state, Action("cart/clear")) is state


class TestStoreSet:
    def test_three_independent_stores(self) -> None:
        stores = create_store_set()
        product, cart, ui = stores.snapshot()
        assert product.products == ()
        assert cart.items == ()
        assert ui.cart_modal_open is False
        assert len(list(stores)) == 3

    def test_iterates_in_declaration_order(self) -> None:
        stores = create_store_set()
        assert list(stores) == [stores.product, stores.cart, stores.ui]

    def test_actions_only_reach_their_store(self) -> None:
        stores = create_store_set()
        before = stores.snapshot()
        stores.ui.dispatch(Action(UIAction.OPEN_CART_MODAL))
        after = stores.snapshot()
        assert after[0] is before[0]
        assert after[1] is before[1]
        assert after[2].cart_modal_open is True

    def test_server_set(self) -> None:
        stores = create_store_set(server=True)
        assert all(isinstance(store, ServerStore) for store in stores)

    def test_sets_do_not_share_state(self) -> None:
        first = create_store_set()
        second = create_store_set()
        first.ui.dispatch(Action(UIAction.OPEN_CART_MODAL))
        assert second.ui.get_state().cart_modal_open is False
