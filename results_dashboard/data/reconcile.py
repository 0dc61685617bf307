"""
Row Reconciler: derive the effective status and vote count of each row,
preferring the manual override columns over the original ones.
"""

from __future__ import annotations

from typing import NamedTuple

import pandas as pd

from results_dashboard.data.schema import (
    COLUMNS,
    MISSING_DISPLAY,
    STATUS_HAS_DATA,
    STATUS_MANUAL,
    STATUS_MANUAL_LABEL,
    STATUS_NO_DATA,
    ResultRow,
    is_absent,
)


class Reconciled(NamedTuple):
    status: str
    votes: str
    is_manual: bool


def reconcile_row(row: ResultRow) -> Reconciled:
    if not is_absent(row.manual_votes):
        return Reconciled(STATUS_MANUAL, row.manual_votes.strip(), True)
    votes = row.votes if not is_absent(row.votes) else MISSING_DISPLAY
    return Reconciled(row.status, votes, False)


def reconcile_table(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of the table with the effective_* columns recomputed."""
    out = df.copy()
    reconciled = [
        reconcile_row(ResultRow(*values))
        for values in out[COLUMNS].itertuples(index=False)
    ]
    out["effective_status"] = pd.Series([r.status for r in reconciled], index=out.index, dtype=object)
    out["effective_votes"] = pd.Series([r.votes for r in reconciled], index=out.index, dtype=object)
    out["is_manual"] = pd.Series([r.is_manual for r in reconciled], index=out.index, dtype=bool)
    return out


def has_data(effective_status: str) -> bool:
    """Manual rows count as having data; anything but the has-data label does not."""
    return effective_status in (STATUS_HAS_DATA, STATUS_MANUAL)


def status_label(effective_status: str) -> str:
    if effective_status == STATUS_MANUAL:
        return STATUS_MANUAL_LABEL
    return effective_status or STATUS_NO_DATA
