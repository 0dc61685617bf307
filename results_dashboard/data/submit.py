"""
Edit Submission: validate a manual vote count for one row and write it back.

The default writer posts to the Apps Script web app bound to the sheet. Unlike
a no-cors browser request, the response is read, so a missing row or a script
failure is reported instead of being taken for success.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests

from results_dashboard import messages
from results_dashboard.data.schema import ResultRow, RowKey
from results_dashboard.errors import (
    RemoteWriteError,
    RowNotFoundError,
    SubmitTransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# ASCII digits with an optional sign; no underscores or other numeral systems
VOTES_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class EditDraft:
    branch: str
    list_leader: str
    votes: str = ""
    source: str = ""

    @classmethod
    def for_row(cls, row: ResultRow) -> "EditDraft":
        return cls(branch=row.branch, list_leader=row.list_leader)

    @property
    def key(self) -> RowKey:
        return (self.branch, self.list_leader)


@dataclass(frozen=True)
class WriteResult:
    row: Optional[int]
    message: str = ""


class Writer(Protocol):
    def submit(self, payload: Dict[str, Any]) -> WriteResult:
        ...


def validate_votes(text: Any) -> int:
    value = "" if text is None else str(text).strip()
    if not VOTES_PATTERN.fullmatch(value):
        raise ValidationError(messages.INVALID_VOTES, field="votes")
    return int(value)


def format_sheet_date(day: dt.date) -> str:
    """Short Hebrew-locale date, e.g. 19.10.2026."""
    return f"{day.day}.{day.month}.{day.year}"


def build_payload(draft: EditDraft, today: Optional[dt.date] = None) -> Dict[str, Any]:
    return {
        "branch": draft.branch,
        "listLeader": draft.list_leader,
        "votes": validate_votes(draft.votes),
        "source": draft.source.strip() or messages.DEFAULT_SOURCE,
        "date": format_sheet_date(today or dt.date.today()),
    }


class AppsScriptClient:
    """POSTs edits to the Apps Script web app and reads its JSON answer."""

    def __init__(self, url: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit(self, payload: Dict[str, Any]) -> WriteResult:
        try:
            # text/plain keeps the request "simple" for Apps Script; the body is still JSON
            r = self.session.post(
                self.url,
                data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise SubmitTransportError(str(exc)) from exc

        if r.status_code >= 400:
            raise RemoteWriteError(f"{self.url} -> {r.status_code}: {r.text[:500]}")
        try:
            body = r.json()
        except ValueError:
            raise RemoteWriteError(f"Non-JSON response: {r.text[:200]}") from None
        return interpret_response(body, payload)


def interpret_response(body: Any, payload: Dict[str, Any]) -> WriteResult:
    """Map the web app's {success, message|error, row} envelope onto results/errors."""
    if not isinstance(body, dict) or "success" not in body:
        raise RemoteWriteError(f"Unexpected response: {str(body)[:200]}")
    if body["success"]:
        return WriteResult(row=body.get("row"), message=str(body.get("message") or ""))
    error = str(body.get("error") or "")
    if error == messages.ROW_NOT_FOUND:
        raise RowNotFoundError(payload["branch"], payload["listLeader"], error)
    raise RemoteWriteError(error or "Write rejected")


def submit_edit(draft: EditDraft, writer: Writer, today: Optional[dt.date] = None) -> WriteResult:
    """Validate the draft, then send it. Invalid input never reaches the writer."""
    payload = build_payload(draft, today)
    logger.info("Submitting %s votes for %s / %s", payload["votes"], draft.branch, draft.list_leader)
    try:
        result = writer.submit(payload)
    except (SubmitTransportError, RowNotFoundError, RemoteWriteError) as exc:
        logger.warning("Submission for %s / %s failed: %s", draft.branch, draft.list_leader, exc)
        raise
    logger.info("Saved %s / %s at sheet row %s", draft.branch, draft.list_leader, result.row)
    return result


def make_writer(settings) -> Writer:
    if settings.write_backend == "gspread":
        from results_dashboard.data.sheet_writer import SheetWriter

        return SheetWriter(settings.spreadsheet_id, settings.credentials_file)
    return AppsScriptClient(settings.apps_script_url, timeout=settings.request_timeout)
