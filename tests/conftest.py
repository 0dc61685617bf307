# Shared pytest fixtures
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence
from unittest.mock import MagicMock

import pytest

from results_dashboard.data.loader import table_from_rows
from results_dashboard.data.reconcile import reconcile_table
from results_dashboard.data.schema import STATUS_HAS_DATA, STATUS_NO_DATA

HEADER = [
    "סניף",
    "ראש רשימה",
    "",
    "קולות",
    "פרט 1",
    "פרט 2",
    "סטטוס",
    "קולות ידניים",
    "מקור נתונים",
    "תאריך עדכון",
]

FIVE_ROWS = [
    ["Branch A", "Leader X", "Y", "150", "d1", "d2", STATUS_NO_DATA, "", "", ""],
    ["Branch B", "leader x junior", "", "200", "d1", "d2", STATUS_HAS_DATA, "", "", ""],
    ["Branch C", "Leader Y", "", "-", "d1", "d2", STATUS_NO_DATA, "-", "", ""],
    ["Branch D", "Someone", "note about LEADER X", "90", "d1", "d2", STATUS_HAS_DATA, "", "", ""],
    ["Branch E", "Leader Z", "", "", "d1", "d2", STATUS_NO_DATA, "75", "meeting", "1.1.2026"],
]


def _cell(value: Any) -> Optional[Dict[str, Any]]:
    # Dicts are passed through so tests can supply formatted cells
    if value is None or isinstance(value, dict):
        return value
    return {"v": value}


def gviz_text(rows: Sequence[Sequence[Any]], labels: Optional[List[str]] = None) -> str:
    """Wrap rows the way the visualization query endpoint does."""
    width = len(labels) if labels else max((len(r) for r in rows), default=0)
    cols = [
        {"id": chr(ord("A") + i), "label": labels[i] if labels else "", "type": "string"}
        for i in range(width)
    ]
    payload = {
        "version": "0.6",
        "reqId": "0",
        "status": "ok",
        "sig": "123",
        "table": {
            "cols": cols,
            "rows": [{"c": [_cell(v) for v in row]} for row in rows],
        },
    }
    body = json.dumps(payload, ensure_ascii=False)
    return f"/*O_o*/\ngoogle.visualization.Query.setResponse({body});"


def fake_response(text: str = "", status_code: int = 200, json_body: Any = None) -> MagicMock:
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    if json_body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture()
def raw_table():
    return table_from_rows(HEADER, FIVE_ROWS)


@pytest.fixture()
def table(raw_table):
    return reconcile_table(raw_table)
