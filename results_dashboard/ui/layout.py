"""
Layout helpers for the Streamlit application (header, controls, footer).
"""

from __future__ import annotations

from typing import Dict

import streamlit as st

from results_dashboard import messages
from results_dashboard.config import Settings
from results_dashboard.data.filters import FILTER_ALL, FILTER_HAS_DATA, FILTER_NO_DATA, ViewState
from results_dashboard.ui import state
from results_dashboard.ui.components.kpi import render_kpi_cards, status_cards

FILTER_BUTTONS = [
    (FILTER_ALL, messages.FILTER_ALL, "total"),
    (FILTER_HAS_DATA, messages.FILTER_HAS_DATA, "with_data"),
    (FILTER_NO_DATA, messages.FILTER_NO_DATA, "without_data"),
]


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title="תוצאות מועצות סניפים",
        layout="wide",
        page_icon="🗳️",
    )
    _inject_rtl()


def _inject_rtl() -> None:
    st.markdown(
        """
        <style>
        .main .block-container, section[data-testid="stSidebar"] { direction: rtl; text-align: right; }
        div[data-testid="stHorizontalBlock"] { gap: 0.25rem; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_header(counts: Dict[str, int]) -> None:
    st.title(messages.TITLE)
    st.caption(
        messages.SUBTITLE.format(
            total=counts["total"],
            with_data=counts["with_data"],
            without_data=counts["without_data"],
            manual=counts["manual"],
        )
    )
    render_kpi_cards(status_cards(counts), columns=4)


def render_controls(view: ViewState, counts: Dict[str, int], settings: Settings) -> bool:
    """Filter buttons, search, sheet link and refresh. Returns True when refresh was clicked."""
    filter_cols = st.columns(len(FILTER_BUTTONS))
    for col, (mode, label, count_key) in zip(filter_cols, FILTER_BUTTONS):
        with col:
            st.button(
                label.format(count=counts[count_key]),
                key=f"rd_filter_{mode}",
                type="primary" if view.filter_mode == mode else "secondary",
                on_click=state.on_filter,
                args=(mode,),
                use_container_width=True,
            )

    col_search, col_link, col_refresh = st.columns([4, 1, 1])
    with col_search:
        st.text_input(
            messages.SEARCH_PLACEHOLDER,
            key=state.SEARCH_KEY,
            placeholder=messages.SEARCH_PLACEHOLDER,
            label_visibility="collapsed",
            on_change=state.on_search,
        )
    with col_link:
        st.link_button(messages.OPEN_SHEET, settings.sheet_url, use_container_width=True)
    with col_refresh:
        return st.button(messages.REFRESH, key="rd_refresh", use_container_width=True)


def render_load_error() -> bool:
    """Error panel with a retry button. Returns True when retry was clicked."""
    st.subheader(messages.LOAD_ERROR_TITLE)
    st.error(messages.LOAD_ERROR)
    return st.button(messages.RETRY, key="rd_retry")


def render_footer() -> None:
    st.divider()
    st.caption(messages.FOOTER)
