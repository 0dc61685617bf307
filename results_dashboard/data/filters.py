"""
View state of the results table and the filter -> search -> sort pipeline
that turns the reconciled table into the rows to render.
"""

from __future__ import annotations

import locale
import logging
import math
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

import pandas as pd

from results_dashboard.data.reconcile import has_data, status_label
from results_dashboard.data.schema import COLUMNS, STATUS_COL, VOTES_COL, RowKey, is_absent

logger = logging.getLogger(__name__)

FILTER_ALL = "all"
FILTER_HAS_DATA = "has-data"
FILTER_NO_DATA = "no-data"
FILTER_MODES = (FILTER_ALL, FILTER_HAS_DATA, FILTER_NO_DATA)

ASC = "asc"
DESC = "desc"

COLLATION_LOCALES = ("he_IL.UTF-8", "he_IL.utf8", "he_IL")


@dataclass(frozen=True)
class ViewState:
    filter_mode: str = FILTER_ALL
    search: str = ""
    sort_column: Optional[int] = None
    sort_direction: str = ASC
    editing: Optional[RowKey] = None


DEFAULT_VIEW = ViewState()


def with_filter(state: ViewState, mode: str) -> ViewState:
    if mode not in FILTER_MODES:
        raise ValueError(f"Unknown filter mode: {mode!r}")
    return replace(state, filter_mode=mode)


def with_search(state: ViewState, term: str) -> ViewState:
    return replace(state, search=term or "")


def toggle_sort(state: ViewState, column: int) -> ViewState:
    """Same column flips the direction, a new column starts ascending."""
    if state.sort_column == column:
        return replace(state, sort_direction=DESC if state.sort_direction == ASC else ASC)
    return replace(state, sort_column=column, sort_direction=ASC)


def open_edit(state: ViewState, key: RowKey) -> ViewState:
    return replace(state, editing=key)


def close_edit(state: ViewState) -> ViewState:
    return replace(state, editing=None)


def sort_icon(state: ViewState, column: int) -> str:
    if state.sort_column != column:
        return " ⇅"
    return " ↑" if state.sort_direction == ASC else " ↓"


def numeric_sort_value(value: Any) -> float:
    """Placeholder, blank and non-numeric text all sort as 0."""
    if is_absent(value):
        return 0.0
    try:
        number = float(str(value).replace(",", "").strip())
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


@lru_cache(maxsize=1)
def configure_collation() -> Callable[[str], str]:
    """Pick the sort key for text columns, once per process.

    Selecting a Hebrew locale changes LC_COLLATE for the whole process, so
    this runs at startup rather than from inside a sort.
    """
    for name in COLLATION_LOCALES:
        try:
            locale.setlocale(locale.LC_COLLATE, name)
            return locale.strxfrm
        except locale.Error:
            continue
    logger.debug("No Hebrew collation locale installed, sorting by case-folded text")
    return str.casefold


def collation_key(value: Any) -> str:
    return configure_collation()("" if value is None else str(value))


def filter_by_status(df: pd.DataFrame, mode: str) -> pd.DataFrame:
    if mode == FILTER_ALL or df.empty:
        return df
    mask = df["effective_status"].map(has_data).astype(bool)
    return df[mask] if mode == FILTER_HAS_DATA else df[~mask]


def filter_by_search(df: pd.DataFrame, term: str) -> pd.DataFrame:
    needle = (term or "").lower()
    if not needle or df.empty:
        return df
    width = df.attrs.get("width", len(COLUMNS))
    cells = df[COLUMNS[:width]].astype(str)
    mask = pd.Series(False, index=df.index)
    for col in cells.columns:
        mask |= cells[col].str.lower().str.contains(needle, regex=False, na=False)
    return df[mask]


def sort_rows(df: pd.DataFrame, column: Optional[int], direction: str = ASC) -> pd.DataFrame:
    if column is None or df.empty:
        return df
    if column == VOTES_COL:
        keys = df["effective_votes"].map(numeric_sort_value)
    elif column == STATUS_COL:
        keys = df["effective_status"].map(lambda s: collation_key(status_label(s)))
    else:
        keys = df[COLUMNS[column]].map(collation_key)
    order = keys.sort_values(ascending=direction == ASC, kind="stable").index
    return df.loc[order]


def apply_view(df: pd.DataFrame, state: ViewState) -> pd.DataFrame:
    """Filter by status, then by search term, then sort. The input is left untouched."""
    if df.empty:
        return df.copy()
    out = filter_by_status(df, state.filter_mode)
    out = filter_by_search(out, state.search)
    out = sort_rows(out, state.sort_column, state.sort_direction)
    return out.copy()


def status_counts(df: pd.DataFrame) -> Dict[str, int]:
    if df.empty:
        return {"total": 0, "with_data": 0, "without_data": 0, "manual": 0}
    mask = df["effective_status"].map(has_data).astype(bool)
    return {
        "total": int(len(df)),
        "with_data": int(mask.sum()),
        "without_data": int((~mask).sum()),
        "manual": int(df["is_manual"].sum()),
    }


def serialize_view(state: ViewState) -> Dict[str, Any]:
    """
    Convert the ViewState dataclass to a JSON-serialisable dictionary to be
    stored in session_state or used for logging/debugging.
    """
    return {
        "filter_mode": state.filter_mode,
        "search": state.search,
        "sort_column": state.sort_column,
        "sort_direction": state.sort_direction,
        "editing": list(state.editing) if state.editing else None,
    }
