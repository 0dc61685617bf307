"""
Manual data entry for a single row.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from results_dashboard import messages
from results_dashboard.data.schema import ResultRow
from results_dashboard.data.submit import EditDraft, Writer, WriteResult, submit_edit
from results_dashboard.errors import (
    RemoteWriteError,
    RowNotFoundError,
    SubmitTransportError,
    ValidationError,
)
from results_dashboard.ui import state


def error_message(exc: Exception) -> str:
    """Inline message for a failed submission."""
    if isinstance(exc, ValidationError):
        return messages.INVALID_VOTES
    if isinstance(exc, RowNotFoundError):
        return messages.ROW_NOT_FOUND
    if isinstance(exc, RemoteWriteError):
        return messages.REMOTE_ERROR.format(detail=str(exc)[:200])
    return messages.SAVE_ERROR


def handle_submit(draft: EditDraft, writer: Writer) -> Optional[WriteResult]:
    """Submit the draft; on failure record the inline error and keep the draft open."""
    try:
        result = submit_edit(draft, writer)
    except (ValidationError, SubmitTransportError, RowNotFoundError, RemoteWriteError) as exc:
        state.set_edit_error(error_message(exc))
        return None
    state.set_edit_error(None)
    return result


def render_edit_form(row: ResultRow, writer: Writer) -> bool:
    """Render the form for `row`. Returns True after a successful save."""
    with st.container(border=True):
        st.subheader(messages.EDIT_TITLE)
        with st.form("rd_edit_form", clear_on_submit=False):
            st.text_input(messages.EDIT_BRANCH, value=row.branch, disabled=True)
            st.text_input(messages.EDIT_LIST_LEADER, value=row.list_leader, disabled=True)
            votes = st.text_input(messages.EDIT_VOTES, placeholder=messages.EDIT_VOTES_PLACEHOLDER)
            source = st.text_input(messages.EDIT_SOURCE, placeholder=messages.EDIT_SOURCE_PLACEHOLDER)

            error = state.edit_error()
            if error:
                st.error(f"⚠️ {error}")

            col_cancel, col_save = st.columns(2)
            with col_cancel:
                st.form_submit_button(messages.EDIT_CANCEL, on_click=state.on_close_edit)
            with col_save:
                save = st.form_submit_button(messages.EDIT_SAVE, type="primary")
        st.caption(messages.EDIT_FOOTER)

    if not save:
        return False

    draft = EditDraft(branch=row.branch, list_leader=row.list_leader, votes=votes, source=source)
    with st.spinner(messages.SAVING):
        result = handle_submit(draft, writer)
    if result is None:
        # Rerun so the inline error renders inside the form
        st.rerun()
    return True
