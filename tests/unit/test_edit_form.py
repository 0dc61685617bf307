from __future__ import annotations

import requests

from results_dashboard import messages
from results_dashboard.errors import (
    RemoteWriteError,
    RowNotFoundError,
    SubmitTransportError,
    ValidationError,
)
from results_dashboard.ui.edit_form import error_message


def test_each_failure_has_its_own_inline_message():
    assert error_message(ValidationError(messages.INVALID_VOTES)) == messages.INVALID_VOTES
    assert error_message(RowNotFoundError("A", "X")) == messages.ROW_NOT_FOUND
    assert error_message(SubmitTransportError(str(requests.ConnectionError("offline")))) == messages.SAVE_ERROR
    assert error_message(RemoteWriteError("quota")) == messages.REMOTE_ERROR.format(detail="quota")
