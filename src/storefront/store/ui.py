"""UI domain: cart modal, global loading indicator, toast."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from storefront.store.core import Action


class ToastKind(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Toast:
    visible: bool = False
    message: str = ""
    kind: ToastKind = ToastKind.INFO


@dataclass(frozen=True, slots=True)
class UIState:
    cart_modal_open: bool = False
    global_loading: bool = False
    toast: Toast = Toast()


class UIAction(StrEnum):
    OPEN_CART_MODAL = "ui/open_cart_modal"
    CLOSE_CART_MODAL = "ui/close_cart_modal"
    SET_GLOBAL_LOADING = "ui/set_global_loading"
    SHOW_TOAST = "ui/show_toast"
    HIDE_TOAST = "ui/hide_toast"


def _show_toast(state: UIState, payload: Mapping[str, Any]) -> UIState:
    toast = Toast(visible=True, message=payload["message"], kind=ToastKind(payload.get("kind", ToastKind.INFO)))
    return replace(state, toast=toast)


_HANDLERS: dict[str, Callable[[UIState, Any], UIState]] = {
    UIAction.OPEN_CART_MODAL: lambda state, _: replace(state, cart_modal_open=True),
    UIAction.CLOSE_CART_MODAL: lambda state, _: replace(state, cart_modal_open=False),
    UIAction.SET_GLOBAL_LOADING: lambda state, payload: replace(state, global_loading=bool(payload)),
    UIAction.SHOW_TOAST: _show_toast,
    UIAction.HIDE_TOAST: lambda state, _: replace(state, toast=replace(state.toast, visible=False)),
}


def reduce_ui(state: UIState, action: Action) -> UIState:
    """UI reducer. Unknown kinds return *state* unchanged."""
    handler = _HANDLERS.get(action.kind)
    if handler is None:
        return state
    return handler(state, action.payload)
