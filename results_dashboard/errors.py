"""
Exception types raised by the data layer and surfaced by the UI.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for every error the dashboard knows how to present."""


class ConfigError(DashboardError):
    pass


class FetchError(DashboardError):
    """The read request itself failed (network, timeout, HTTP status)."""


class ParseError(DashboardError):
    """The read endpoint answered with something other than the expected envelope."""


class MalformedRowError(ParseError):
    """A row does not fit the column schema."""

    def __init__(self, message: str, row_number: int | None = None):
        super().__init__(message)
        self.row_number = row_number


class ValidationError(DashboardError):
    """User input rejected before any network call."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class SubmitError(DashboardError):
    pass


class SubmitTransportError(SubmitError):
    """The write request never produced a response."""


class RowNotFoundError(SubmitError):
    """The write endpoint found no row for the (branch, list leader) key."""

    def __init__(self, branch: str, list_leader: str, message: str | None = None):
        super().__init__(message or f"No row for {branch!r} / {list_leader!r}")
        self.branch = branch
        self.list_leader = list_leader


class RemoteWriteError(SubmitError):
    """The write endpoint answered but reported (or implied) a failure."""
