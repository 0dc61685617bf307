"""
Results grid: sortable header buttons, one line per row, and an edit action
on rows that have no results yet.
"""

from __future__ import annotations

import re
from typing import List

import pandas as pd
import streamlit as st

from results_dashboard import messages
from results_dashboard.data.filters import ViewState, sort_icon
from results_dashboard.data.reconcile import has_data, status_label
from results_dashboard.data.schema import COLUMNS, STATUS_COL, STATUS_MANUAL, VOTES_COL
from results_dashboard.ui import state
from results_dashboard.ui.components.formatting import format_cell, format_votes

ROW_CLASS_HAS_DATA = "has-data"
ROW_CLASS_NO_DATA = "no-data"
ROW_CLASS_MANUAL = "manual"

# CommonMark punctuation plus the colon used by Streamlit directives and emoji
MARKDOWN_SPECIAL = re.compile(r"[\\`*_{}\[\]()#+\-.!|<>~$:]")


def display_headers(df: pd.DataFrame) -> List[str]:
    width = df.attrs.get("width", len(COLUMNS))
    header = list(df.attrs.get("header") or COLUMNS[:width])
    labels: List[str] = []
    for i, name in enumerate(COLUMNS[:width]):
        label = str(header[i]).strip() if i < len(header) else ""
        # Blank or repeated labels would collide as frame columns
        labels.append(label if label and label not in labels else name)
    return labels


def project_display(df: pd.DataFrame) -> pd.DataFrame:
    """Display grid: the sheet's columns with effective votes and status swapped in."""
    width = df.attrs.get("width", len(COLUMNS))
    out = pd.DataFrame(index=df.index)
    for i, (name, label) in enumerate(zip(COLUMNS[:width], display_headers(df))):
        if i == VOTES_COL:
            out[label] = df["effective_votes"].map(format_votes)
        elif i == STATUS_COL:
            out[label] = df["effective_status"].map(status_label)
        else:
            out[label] = df[name].map(format_cell)
    return out


def row_class(effective_status: str) -> str:
    if effective_status == STATUS_MANUAL:
        return ROW_CLASS_MANUAL
    return ROW_CLASS_HAS_DATA if has_data(effective_status) else ROW_CLASS_NO_DATA


def markdown_text(value: str) -> str:
    """Escape sheet text so it renders literally inside `:color[...]` markdown."""
    return MARKDOWN_SPECIAL.sub(r"\\\g<0>", value)


def render_results_table(df: pd.DataFrame, view: ViewState, export_file_name: str = "results.csv") -> None:
    headers = display_headers(df)
    # Extra narrow column for the row action
    widths = [3 if i < 2 else 2 for i in range(len(headers))] + [1]

    header_cols = st.columns(widths)
    for i, (col, header) in enumerate(zip(header_cols, headers)):
        with col:
            st.button(
                f"{header}{sort_icon(view, i)}",
                key=f"rd_sort_{i}",
                help=messages.SORT_BY.format(header=header),
                on_click=state.on_sort,
                args=(i,),
                use_container_width=True,
            )

    if df.empty:
        st.info(messages.EMPTY)
        return

    display = project_display(df)
    for idx, values in display.iterrows():
        source = df.loc[idx]
        cols = st.columns(widths)
        css = row_class(source["effective_status"])
        for col, value in zip(cols, values):
            value = markdown_text(value)
            with col:
                if css == ROW_CLASS_NO_DATA:
                    st.markdown(f":orange[{value}]")
                elif css == ROW_CLASS_MANUAL:
                    st.markdown(f":blue[{value}]")
                else:
                    st.markdown(value)
        with cols[-1]:
            if css == ROW_CLASS_NO_DATA:
                st.button(
                    messages.EDIT_ACTION,
                    key=f"rd_edit_{idx}",
                    help=messages.EDIT_ACTION_HELP,
                    on_click=state.on_edit,
                    args=((source["branch"], source["list_leader"]),),
                )

    csv_bytes = display.to_csv(index=False).encode("utf-8-sig")
    st.download_button(
        messages.DOWNLOAD_CSV,
        data=csv_bytes,
        file_name=export_file_name,
        mime="text/csv",
    )
