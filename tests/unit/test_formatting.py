from __future__ import annotations

import pytest

from results_dashboard.ui.components.formatting import format_cell, format_number, format_votes


@pytest.mark.parametrize(
    "value,expected",
    [("1500", "1,500"), ("150.0", "150"), ("-", "–"), ("", "–"), (None, "–"), ("12a", "12a"), ("2.5", "2.5")],
)
def test_format_votes(value, expected):
    assert format_votes(value) == expected


def test_format_number_handles_missing_and_bad_values():
    assert format_number(None) == "–"
    assert format_number("x") == "–"
    assert format_number(1234.5, decimals=1) == "1,234.5"


def test_format_cell_shows_placeholder_for_blank():
    assert format_cell("") == "-"
    assert format_cell("  ") == "-"
    assert format_cell(None) == "-"
    assert format_cell("Branch A") == "Branch A"
