"""
Session-state glue: the ViewState lives in st.session_state and is only ever
replaced through the pure transitions in `results_dashboard.data.filters`.
Widgets call these from on_click/on_change so the new state is in place
before the script reruns.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from results_dashboard.data.filters import (
    DEFAULT_VIEW,
    ViewState,
    close_edit,
    open_edit,
    serialize_view,
    toggle_sort,
    with_filter,
    with_search,
)
from results_dashboard.data.schema import RowKey

VIEW_KEY = "rd_view"
SEARCH_KEY = "rd_search"
EDIT_ERROR_KEY = "rd_edit_error"
FLASH_KEY = "rd_flash"


def get_view() -> ViewState:
    return st.session_state.get(VIEW_KEY, DEFAULT_VIEW)


def set_view(state: ViewState) -> None:
    st.session_state[VIEW_KEY] = state
    st.session_state["rd_view_serialized"] = serialize_view(state)


def on_filter(mode: str) -> None:
    set_view(with_filter(get_view(), mode))


def on_search() -> None:
    set_view(with_search(get_view(), st.session_state.get(SEARCH_KEY, "")))


def on_sort(column: int) -> None:
    set_view(toggle_sort(get_view(), column))


def on_edit(key: RowKey) -> None:
    st.session_state.pop(EDIT_ERROR_KEY, None)
    set_view(open_edit(get_view(), key))


def on_close_edit() -> None:
    st.session_state.pop(EDIT_ERROR_KEY, None)
    set_view(close_edit(get_view()))


def set_edit_error(message: Optional[str]) -> None:
    if message:
        st.session_state[EDIT_ERROR_KEY] = message
    else:
        st.session_state.pop(EDIT_ERROR_KEY, None)


def edit_error() -> Optional[str]:
    return st.session_state.get(EDIT_ERROR_KEY)


def flash(message: str) -> None:
    """Queue a toast for the next run (st.rerun drops toasts shown before it)."""
    st.session_state[FLASH_KEY] = message


def pop_flash() -> Optional[str]:
    return st.session_state.pop(FLASH_KEY, None)


def snapshot() -> Dict[str, Any]:
    return serialize_view(get_view())
