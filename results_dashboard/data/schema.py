"""
Column schema of the results sheet and the record each row is decoded into.

The sheet is addressed positionally (A..J). Rows are decoded once, right after
the fetch, so the rest of the code only deals with named fields.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, List, Optional, Sequence, Tuple

from results_dashboard.errors import MalformedRowError

# Positional layout of the sheet (0-based)
COLUMNS: List[str] = [
    "branch",
    "list_leader",
    "unused",
    "votes",
    "detail_1",
    "detail_2",
    "status",
    "manual_votes",
    "manual_source",
    "manual_date",
]

BRANCH_COL = 0
LIST_LEADER_COL = 1
VOTES_COL = 3
STATUS_COL = 6
MANUAL_VOTES_COL = 7
MANUAL_SOURCE_COL = 8
MANUAL_DATE_COL = 9

# Basic range (A..G) stops at the status column
BASIC_COLUMN_COUNT = STATUS_COL + 1
EXTENDED_COLUMN_COUNT = len(COLUMNS)

STATUS_HAS_DATA = "יש נתונים"
STATUS_NO_DATA = "אין נתונים"
STATUS_MANUAL = "manual"
STATUS_MANUAL_LABEL = "ידני"

PLACEHOLDER = "-"
MISSING_DISPLAY = "–"

RowKey = Tuple[str, str]


def is_absent(value: Any) -> bool:
    """True for None, blank text and the placeholder sentinel."""
    if value is None:
        return True
    text = str(value).strip()
    return text == "" or text == PLACEHOLDER


def cell_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float):
        if value != value:  # NaN
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


@dataclass(frozen=True)
class ResultRow:
    branch: str
    list_leader: str
    unused: str = ""
    votes: str = ""
    detail_1: str = ""
    detail_2: str = ""
    status: str = ""
    manual_votes: str = ""
    manual_source: str = ""
    manual_date: str = ""

    @property
    def key(self) -> RowKey:
        return (self.branch, self.list_leader)

    def cells(self) -> List[str]:
        return [getattr(self, f.name) for f in fields(self)]


def decode_row(cells: Sequence[Any], width: int, row_number: Optional[int] = None) -> ResultRow:
    """Decode positional cells into a ResultRow.

    Short rows are padded (the endpoints drop trailing empty cells); rows wider
    than the table are rejected.
    """
    if width < BASIC_COLUMN_COUNT or width > EXTENDED_COLUMN_COUNT:
        raise MalformedRowError(
            f"Table has {width} columns, expected {BASIC_COLUMN_COUNT} or {EXTENDED_COLUMN_COUNT}",
            row_number,
        )
    if len(cells) > width:
        raise MalformedRowError(
            f"Row {row_number} has {len(cells)} cells, table has {width} columns",
            row_number,
        )
    values = [cell_to_text(c) for c in cells]
    values += [""] * (EXTENDED_COLUMN_COUNT - len(values))
    return ResultRow(*values)
