from __future__ import annotations

from ..core.enums import Screen, ViewState
from .app_state import AppState

_NEEDS_PROFILE = {ViewState.HOME, ViewState.PAYSTUB, ViewState.PROFILE}


def resolve_screen(state: AppState) -> Screen:
    """Map application state to the screen the client should render."""
    if state.is_loading:
        return Screen.LOADING
    if state.session is None:
        return Screen.AUTH
    if state.view in _NEEDS_PROFILE and state.profile is None:
        return Screen.LOADING
    return Screen(state.view.value)
