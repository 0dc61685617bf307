from __future__ import annotations

import pytest

from results_dashboard.data.schema import STATUS_MANUAL_LABEL, STATUS_NO_DATA
from results_dashboard.ui.components.tables import (
    ROW_CLASS_HAS_DATA,
    ROW_CLASS_MANUAL,
    ROW_CLASS_NO_DATA,
    display_headers,
    markdown_text,
    project_display,
    row_class,
)
from results_dashboard.data.filters import apply_view, toggle_sort
from results_dashboard.data.filters import DEFAULT_VIEW
from tests.conftest import HEADER


def test_display_headers_fill_blank_labels(table):
    headers = display_headers(table)
    assert headers[0] == HEADER[0]
    assert headers[2] == "unused"
    assert len(headers) == 10


def test_project_display_swaps_in_effective_values(table):
    display = project_display(table)
    votes = display[HEADER[3]].tolist()
    status = display[HEADER[6]].tolist()
    assert votes == ["150", "200", "–", "90", "75"]
    assert status[0] == STATUS_NO_DATA
    assert status[4] == STATUS_MANUAL_LABEL
    assert display.loc[0, "unused"] == "Y"
    assert display.loc[1, "unused"] == "-"


def test_project_display_follows_view_order(table):
    rows = apply_view(table, toggle_sort(DEFAULT_VIEW, 3))
    assert list(project_display(rows)[HEADER[0]]) == ["Branch C", "Branch E", "Branch D", "Branch A", "Branch B"]


def test_row_class(table):
    classes = [row_class(s) for s in table["effective_status"]]
    assert classes == [ROW_CLASS_NO_DATA, ROW_CLASS_HAS_DATA, ROW_CLASS_NO_DATA, ROW_CLASS_HAS_DATA, ROW_CLASS_MANUAL]


@pytest.mark.parametrize(
    "raw, escaped",
    [
        ("-", "\\-"),
        ("a]b", "a\\]b"),
        ("snake_case *bold*", "snake\\_case \\*bold\\*"),
        (":smile:", "\\:smile\\:"),
        ("סניף תל אביב", "סניף תל אביב"),
    ],
)
def test_markdown_text_escapes_sheet_text(raw, escaped):
    assert markdown_text(raw) == escaped
