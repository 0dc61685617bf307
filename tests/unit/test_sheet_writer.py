from __future__ import annotations

import datetime as dt
from unittest.mock import MagicMock

import pytest
import requests

from results_dashboard.data.loader import table_from_rows
from results_dashboard.data.reconcile import reconcile_table
from results_dashboard.data.schema import STATUS_MANUAL, STATUS_NO_DATA
from results_dashboard.data.sheet_writer import SheetWriter, find_row
from results_dashboard.data.submit import EditDraft, submit_edit
from results_dashboard.errors import RowNotFoundError, SubmitTransportError
from tests.conftest import HEADER


def _sheet(values):
    """Worksheet double that applies range updates to `values` in place."""
    ws = MagicMock()
    ws.get_all_values.side_effect = lambda: [list(r) for r in values]

    def update(range_name, values_):
        start = range_name.split(":")[0]
        row = int(start[1:]) - 1
        col = ord(start[0]) - ord("A")
        for offset, value in enumerate(values_[0]):
            values[row][col + offset] = str(value)

    ws.update.side_effect = lambda range_name, values: update(range_name, values)
    client = MagicMock()
    client.open_by_key.return_value.get_worksheet.return_value = ws
    return client, ws


def test_find_row_is_first_match_wins():
    values = [HEADER, ["A", "X"], ["B", "Y"], ["A", "X"]]
    assert find_row(values, "A", "X") == 2
    assert find_row(values, "B", "Y") == 3
    assert find_row(values, "C", "Z") is None


def test_find_row_skips_header_and_short_rows():
    values = [["A", "X"], [], ["A"], ["A", "X"]]
    assert find_row(values, "A", "X") == 4


def test_submission_then_refetch_shows_manual_result():
    values = [list(HEADER), ["Branch A", "Leader X", "Y", "150", "d1", "d2", STATUS_NO_DATA, "", "", ""]]
    client, ws = _sheet(values)
    writer = SheetWriter("sheet-123", "unused.json", client=client)

    result = submit_edit(
        EditDraft("Branch A", "Leader X", votes="300", source="meeting"), writer, dt.date(2026, 10, 19)
    )
    assert result.row == 2
    ws.update.assert_called_once()
    assert ws.update.call_args.kwargs["range_name"] == "H2:J2"

    refetched = reconcile_table(table_from_rows(values[0], values[1:]))
    row = refetched.iloc[0]
    assert row["effective_status"] == STATUS_MANUAL
    assert row["effective_votes"] == "300"
    assert row["manual_source"] == "meeting"
    assert row["manual_date"] == "19.10.2026"


def test_missing_row_raises_not_found():
    client, ws = _sheet([list(HEADER)])
    writer = SheetWriter("sheet-123", "unused.json", client=client)
    with pytest.raises(RowNotFoundError):
        writer.submit({"branch": "A", "listLeader": "X", "votes": 1, "source": "", "date": "1.1.2026"})
    ws.update.assert_not_called()


def test_transport_failure_is_reported_as_such():
    client = MagicMock()
    client.open_by_key.side_effect = requests.ConnectionError("offline")
    writer = SheetWriter("sheet-123", "unused.json", client=client)
    with pytest.raises(SubmitTransportError):
        writer.submit({"branch": "A", "listLeader": "X", "votes": 1, "source": "", "date": "1.1.2026"})
