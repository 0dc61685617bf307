"""
Sheet Reader: fetch the results range and decode it into a table.

Two backends read the same range:
- gviz (default): the public visualization query endpoint, no credentials.
- gspread: service account credentials, for sheets that are not public.
"""

from __future__ import annotations

import json
import logging
import os
import re
import time
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import gspread
import pandas as pd
import requests
import streamlit as st
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from results_dashboard.data.schema import COLUMNS, decode_row
from results_dashboard.errors import FetchError, MalformedRowError, ParseError

logger = logging.getLogger(__name__)

GVIZ_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:json&range={cell_range}"
GVIZ_PREFIX = "/*O_o*/\ngoogle.visualization.Query.setResponse("
GVIZ_SUFFIX = ");"
GVIZ_DATE = re.compile(r"^Date\((\d+),(\d+),(\d+)(?:,\d+)*\)$")

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]


def build_query_url(sheet_id: str, cell_range: str) -> str:
    return GVIZ_URL.format(sheet_id=sheet_id, cell_range=quote(cell_range, safe=":"))


def strip_envelope(text: str) -> str:
    """Remove the JavaScript callback wrapper around the gviz JSON body."""
    body = text.strip()
    if not body.startswith(GVIZ_PREFIX.strip()) or not body.endswith(GVIZ_SUFFIX):
        raise ParseError("Response is not a google.visualization.Query.setResponse envelope")
    return body[len(GVIZ_PREFIX.strip()):-len(GVIZ_SUFFIX)]


def parse_gviz_response(text: str) -> Dict[str, Any]:
    try:
        payload = json.loads(strip_envelope(text))
    except json.JSONDecodeError as exc:
        raise ParseError(f"Envelope body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ParseError("Envelope body is not an object")
    if payload.get("status") == "error":
        reasons = "; ".join(
            str(e.get("detailed_message") or e.get("message") or e.get("reason"))
            for e in payload.get("errors", [])
        )
        raise ParseError(f"Query endpoint reported an error: {reasons or 'unknown'}")
    table = payload.get("table")
    if not isinstance(table, dict) or not isinstance(table.get("rows"), list):
        raise ParseError("Response has no table.rows")
    return payload


def _cell_value(cell: Optional[Dict[str, Any]]) -> Any:
    if not cell:
        return None
    value = cell.get("v")
    if isinstance(value, str):
        match = GVIZ_DATE.match(value)
        if match:
            # Date and datetime cells: months are zero-based in the raw literal
            if cell.get("f"):
                return cell["f"]
            year, month, day = (int(g) for g in match.groups())
            return f"{day}.{month + 1}.{year}"
    return value


def table_from_payload(payload: Dict[str, Any]) -> pd.DataFrame:
    """Build the table from a parsed gviz payload.

    Header comes from the column labels when the endpoint detected any
    (blank labels are filled in at display time), otherwise from the first
    data row.
    """
    table = payload["table"]
    labels = [str(col.get("label") or "").strip() for col in table.get("cols", [])]
    raw_rows = [[_cell_value(c) for c in (row or {}).get("c") or []] for row in table["rows"]]

    if any(labels):
        return table_from_rows(labels, raw_rows, header_source="labels")
    if not raw_rows:
        raise ParseError("Table is empty: no header row")
    header = ["" if v is None else str(v) for v in raw_rows[0]]
    return table_from_rows(header, raw_rows[1:], header_source="first_row", first_row_number=2)


def table_from_rows(
    header: Sequence[str],
    raw_rows: Sequence[Sequence[Any]],
    header_source: str = "first_row",
    first_row_number: int = 2,
) -> pd.DataFrame:
    width = len(header)
    if width == 0:
        raise MalformedRowError("Header row is empty", first_row_number - 1)
    rows = []
    for offset, cells in enumerate(raw_rows):
        if not any(c not in (None, "") for c in cells):
            continue
        rows.append(decode_row(cells, width, row_number=first_row_number + offset))

    df = pd.DataFrame([r.cells() for r in rows], columns=COLUMNS, dtype=object)
    key_counts = Counter(r.key for r in rows)
    df.attrs["header"] = list(header)
    df.attrs["width"] = width
    df.attrs["diagnostics"] = {
        "row_count": len(rows),
        "header_source": header_source,
        "duplicate_keys": sorted(k for k, n in key_counts.items() if n > 1),
        "fetched_at": pd.Timestamp.now(tz="UTC").isoformat(),
    }
    return df


def fetch_table(
    sheet_id: str,
    cell_range: str,
    session: Optional[requests.Session] = None,
    timeout: float = 30.0,
) -> pd.DataFrame:
    url = build_query_url(sheet_id, cell_range)
    http = session or requests
    started = time.monotonic()
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Read of %s failed: %s", cell_range, exc)
        raise FetchError(f"Could not read {cell_range}: {exc}") from exc

    response.encoding = "utf-8"
    try:
        df = table_from_payload(parse_gviz_response(response.text))
    except ParseError:
        logger.warning("Unparseable response for %s (%d bytes)", cell_range, len(response.text))
        raise
    logger.info(
        "Fetched %d rows from %s in %.2fs", len(df), cell_range, time.monotonic() - started
    )
    duplicates = df.attrs["diagnostics"]["duplicate_keys"]
    if duplicates:
        logger.warning("Duplicate (branch, list leader) keys: %s", duplicates)
    return df


def fetch_table_gspread(sheet_id: str, cell_range: str, service_account_file: str) -> pd.DataFrame:
    """Read the same range through the Sheets API with a service account."""
    if not os.path.exists(service_account_file):
        raise FetchError(f"Service account file not found: {service_account_file}")
    try:
        credentials = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
        client = gspread.authorize(credentials)
        values: List[List[Any]] = client.open_by_key(sheet_id).values_get(cell_range).get("values", [])
    except (gspread.exceptions.GSpreadException, GoogleAuthError, requests.RequestException, ValueError) as exc:
        logger.warning("Service account read of %s failed: %s", cell_range, exc)
        raise FetchError(f"Could not read {cell_range}: {exc}") from exc

    if not values:
        raise ParseError("Table is empty: no header row")
    df = table_from_rows([str(v) for v in values[0]], values[1:], header_source="first_row")
    logger.info("Fetched %d rows from %s via service account", len(df), cell_range)
    return df


@st.cache_data(show_spinner=False, ttl=60)
def _load_table_impl(
    read_backend: str,
    sheet_id: str,
    cell_range: str,
    service_account_file: str,
    timeout: float,
) -> pd.DataFrame:
    if read_backend == "gspread":
        return fetch_table_gspread(sheet_id, cell_range, service_account_file)
    return fetch_table(sheet_id, cell_range, timeout=timeout)


def load_table(settings) -> pd.DataFrame:
    """Wrapper that resolves settings and calls the cached implementation."""
    return _load_table_impl(
        settings.read_backend,
        settings.spreadsheet_id,
        settings.sheet_range,
        settings.credentials_file,
        settings.request_timeout,
    )


def clear_cache() -> None:
    _load_table_impl.clear()  # type: ignore[attr-defined]
