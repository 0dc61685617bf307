from __future__ import annotations

import datetime as dt
import json
from unittest.mock import MagicMock

import pytest
import requests

from results_dashboard import messages
from results_dashboard.config import Settings
from results_dashboard.data.sheet_writer import SheetWriter
from results_dashboard.data.submit import (
    AppsScriptClient,
    EditDraft,
    WriteResult,
    build_payload,
    format_sheet_date,
    interpret_response,
    make_writer,
    submit_edit,
    validate_votes,
)
from results_dashboard.data.schema import ResultRow
from results_dashboard.errors import (
    RemoteWriteError,
    RowNotFoundError,
    SubmitTransportError,
    ValidationError,
)
from tests.conftest import fake_response

TODAY = dt.date(2026, 10, 19)
DRAFT = EditDraft(branch="Branch A", list_leader="Leader X", votes="300", source="meeting")


@pytest.mark.parametrize("text", ["abc", "", "   ", None, "3.5", "12abc", "1_000", "١٢٣", "３００", "+"])
def test_validate_votes_rejects_non_integers(text):
    with pytest.raises(ValidationError) as excinfo:
        validate_votes(text)
    assert excinfo.value.field == "votes"
    assert str(excinfo.value) == messages.INVALID_VOTES


def test_validate_votes_accepts_integers():
    assert validate_votes(" 300 ") == 300
    assert validate_votes(0) == 0


def test_format_sheet_date_matches_short_hebrew_date():
    assert format_sheet_date(dt.date(2026, 1, 5)) == "5.1.2026"
    assert format_sheet_date(TODAY) == "19.10.2026"


def test_build_payload_shape():
    assert build_payload(DRAFT, TODAY) == {
        "branch": "Branch A",
        "listLeader": "Leader X",
        "votes": 300,
        "source": "meeting",
        "date": "19.10.2026",
    }


def test_build_payload_defaults_source_label():
    payload = build_payload(EditDraft("Branch A", "Leader X", votes="1", source="  "), TODAY)
    assert payload["source"] == messages.DEFAULT_SOURCE


def test_invalid_votes_never_reach_the_writer():
    writer = MagicMock()
    with pytest.raises(ValidationError):
        submit_edit(EditDraft("Branch A", "Leader X", votes="abc"), writer, TODAY)
    writer.submit.assert_not_called()


def test_submit_edit_passes_payload_to_writer():
    writer = MagicMock()
    writer.submit.return_value = WriteResult(row=2, message="ok")
    result = submit_edit(DRAFT, writer, TODAY)
    assert result.row == 2
    writer.submit.assert_called_once_with(build_payload(DRAFT, TODAY))


def test_draft_for_row_keeps_identity():
    draft = EditDraft.for_row(ResultRow("Branch A", "Leader X", votes="150"))
    assert draft.key == ("Branch A", "Leader X")
    assert draft.votes == ""


def _client(response=None, side_effect=None):
    session = MagicMock()
    if side_effect is not None:
        session.post.side_effect = side_effect
    else:
        session.post.return_value = response
    return AppsScriptClient("https://script.example/exec", timeout=7, session=session), session


def test_apps_script_client_posts_json_body_and_reads_answer():
    client, session = _client(fake_response(json_body={"success": True, "message": "saved", "row": 5}))
    payload = build_payload(DRAFT, TODAY)
    result = client.submit(payload)
    assert result == WriteResult(row=5, message="saved")
    args, kwargs = session.post.call_args
    assert args == ("https://script.example/exec",)
    assert json.loads(kwargs["data"].decode("utf-8")) == payload
    assert kwargs["timeout"] == 7


def test_apps_script_client_transport_failure():
    client, _ = _client(side_effect=requests.ConnectionError("offline"))
    with pytest.raises(SubmitTransportError):
        client.submit(build_payload(DRAFT, TODAY))


def test_apps_script_client_not_found_is_distinct():
    body = {"success": False, "error": messages.ROW_NOT_FOUND}
    client, _ = _client(fake_response(json_body=body))
    with pytest.raises(RowNotFoundError) as excinfo:
        client.submit(build_payload(DRAFT, TODAY))
    assert (excinfo.value.branch, excinfo.value.list_leader) == ("Branch A", "Leader X")


@pytest.mark.parametrize(
    "response",
    [
        fake_response("<html>login</html>"),
        fake_response("oops", status_code=500),
        fake_response(json_body={"success": False, "error": "TypeError: x"}),
        fake_response(json_body=["unexpected"]),
    ],
)
def test_apps_script_client_remote_failures(response):
    client, _ = _client(response)
    with pytest.raises(RemoteWriteError):
        client.submit(build_payload(DRAFT, TODAY))


def test_interpret_response_success_without_row():
    assert interpret_response({"success": True}, {}) == WriteResult(row=None, message="")


def test_make_writer_selects_backend():
    assert isinstance(make_writer(Settings()), AppsScriptClient)
    assert isinstance(make_writer(Settings(write_backend="gspread")), SheetWriter)
