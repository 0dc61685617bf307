"""
Direct writer: does what the Apps Script web app does, through the Sheets API
with a service account. Useful when the web app is not deployed.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from results_dashboard import messages
from results_dashboard.data.schema import BRANCH_COL, LIST_LEADER_COL, MANUAL_DATE_COL, MANUAL_VOTES_COL
from results_dashboard.data.submit import WriteResult
from results_dashboard.errors import RemoteWriteError, RowNotFoundError, SubmitTransportError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def _column_letter(index: int) -> str:
    return chr(ord("A") + index)


def find_row(values: List[List[Any]], branch: str, list_leader: str) -> Optional[int]:
    """1-based sheet row of the first data row matching (branch, list leader)."""
    for i, row in enumerate(values[1:], start=2):
        cells = list(row) + [""] * 2
        if cells[BRANCH_COL] == branch and cells[LIST_LEADER_COL] == list_leader:
            return i
    return None


class SheetWriter:
    def __init__(self, spreadsheet_id: str, service_account_file: str, client: Optional[gspread.Client] = None):
        self.spreadsheet_id = spreadsheet_id
        self.service_account_file = service_account_file
        self._client = client

    def _worksheet(self):
        if self._client is None:
            if not os.path.exists(self.service_account_file):
                raise RemoteWriteError(f"Service account file not found: {self.service_account_file}")
            credentials = Credentials.from_service_account_file(self.service_account_file, scopes=SCOPES)
            self._client = gspread.authorize(credentials)
        return self._client.open_by_key(self.spreadsheet_id).get_worksheet(0)

    def submit(self, payload: Dict[str, Any]) -> WriteResult:
        try:
            ws = self._worksheet()
            values = ws.get_all_values()
            row_number = find_row(values, payload["branch"], payload["listLeader"])
            if row_number is None:
                raise RowNotFoundError(payload["branch"], payload["listLeader"], messages.ROW_NOT_FOUND)
            first = _column_letter(MANUAL_VOTES_COL)
            last = _column_letter(MANUAL_DATE_COL)
            ws.update(
                range_name=f"{first}{row_number}:{last}{row_number}",
                values=[[payload["votes"], payload.get("source") or messages.DEFAULT_SOURCE, payload["date"]]],
            )
        except requests.RequestException as exc:
            raise SubmitTransportError(str(exc)) from exc
        except (gspread.exceptions.GSpreadException, GoogleAuthError) as exc:
            raise RemoteWriteError(str(exc)) from exc

        logger.info("Updated %s%d:%s%d", first, row_number, last, row_number)
        return WriteResult(row=row_number, message=messages.EDIT_SAVED)
