from results_dashboard.bootstrap_env import ensure_env

ensure_env()  # must run before settings are read

import logging
from typing import Optional

import pandas as pd
import streamlit as st

from results_dashboard import messages
from results_dashboard.config import load_settings
from results_dashboard.data.filters import apply_view, configure_collation, serialize_view, status_counts
from results_dashboard.data.loader import clear_cache, load_table
from results_dashboard.data.reconcile import reconcile_table
from results_dashboard.data.schema import COLUMNS, ResultRow, RowKey
from results_dashboard.data.submit import make_writer
from results_dashboard.errors import ConfigError, DashboardError
from results_dashboard.logging_setup import setup_logging
from results_dashboard.ui import state
from results_dashboard.ui.components.tables import render_results_table
from results_dashboard.ui.edit_form import render_edit_form
from results_dashboard.ui.layout import (
    render_controls,
    render_footer,
    render_header,
    render_load_error,
    setup_page,
)

logger = logging.getLogger("results_dashboard.app")


def _find_row(table: pd.DataFrame, key: RowKey) -> Optional[ResultRow]:
    # First match wins, like the sheet-side lookup
    matches = table[(table["branch"] == key[0]) & (table["list_leader"] == key[1])]
    if matches.empty:
        return None
    return ResultRow(*matches.iloc[0][COLUMNS].tolist())


def main() -> None:
    setup_page()

    try:
        settings = load_settings()
    except ConfigError as exc:
        st.error(messages.CONFIG_ERROR.format(detail=exc))
        return
    setup_logging(settings.log_level)
    configure_collation()

    flash = state.pop_flash()
    if flash:
        st.toast(flash, icon="✅")

    try:
        with st.spinner(messages.LOADING):
            raw_df = load_table(settings)
    except DashboardError as exc:
        logger.error("Loading the results table failed: %s", exc)
        if render_load_error():
            clear_cache()
            st.rerun()
        return

    table = reconcile_table(raw_df)
    counts = status_counts(table)
    view = state.get_view()

    render_header(counts)
    if render_controls(view, counts, settings):
        clear_cache()
        st.rerun()

    if view.editing:
        row = _find_row(table, view.editing)
        if row is None:
            state.on_close_edit()
        elif render_edit_form(row, make_writer(settings)):
            state.on_close_edit()
            state.flash(messages.EDIT_SAVED)
            clear_cache()
            st.rerun()

    view = state.get_view()
    rows = apply_view(table, view)
    logger.debug("Rendering %d of %d rows for %s", len(rows), len(table), serialize_view(view))
    render_results_table(rows, view)
    render_footer()


if __name__ == "__main__":
    main()
