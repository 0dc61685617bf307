"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from results_dashboard.errors import ConfigError

DEFAULT_SPREADSHEET_ID = "1oINu6aCW38HJ4hI5ZiKf8C83zuBWf4I6GRGs6z9yfNc"
DEFAULT_SHEET_RANGE = "Sheet1!A1:J202"
BASIC_SHEET_RANGE = "Sheet1!A1:G202"
DEFAULT_APPS_SCRIPT_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbyzCowr7rOwW9QnZN5e2GFYgNJw345Ykj0-2kgY0QTbwpH5zC6r4kmqVX7lIilM24zmaQ/exec"
)
DEFAULT_CREDENTIALS_FILE = "google-credentials.json"

READ_BACKENDS = ("gviz", "gspread")
WRITE_BACKENDS = ("apps_script", "gspread")


@dataclass(frozen=True)
class Settings:
    spreadsheet_id: str = DEFAULT_SPREADSHEET_ID
    sheet_range: str = DEFAULT_SHEET_RANGE
    apps_script_url: str = DEFAULT_APPS_SCRIPT_URL
    read_backend: str = "gviz"
    write_backend: str = "apps_script"
    credentials_file: str = DEFAULT_CREDENTIALS_FILE
    request_timeout: float = 30.0
    log_level: str = "INFO"

    @property
    def sheet_url(self) -> str:
        return f"https://docs.google.com/spreadsheets/d/{self.spreadsheet_id}/edit"


def _get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists (local runs, tests)
        pass
    return default


def _choice(name: str, value: str, allowed: tuple) -> str:
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise ConfigError(f"{name} must be one of {', '.join(allowed)}, got {value!r}")
    return normalized


def _number(name: str, value: str, cast):
    try:
        number = cast(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if number <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return number


def load_settings() -> Settings:
    """Resolve settings from env / st.secrets, falling back to the built-in sheet."""
    defaults = Settings()
    return Settings(
        spreadsheet_id=_get_secret("SPREADSHEET_ID", defaults.spreadsheet_id) or defaults.spreadsheet_id,
        sheet_range=_get_secret("SHEET_RANGE", defaults.sheet_range) or defaults.sheet_range,
        apps_script_url=_get_secret("APPS_SCRIPT_URL", defaults.apps_script_url) or defaults.apps_script_url,
        read_backend=_choice("READ_BACKEND", _get_secret("READ_BACKEND", defaults.read_backend), READ_BACKENDS),
        write_backend=_choice("WRITE_BACKEND", _get_secret("WRITE_BACKEND", defaults.write_backend), WRITE_BACKENDS),
        credentials_file=_get_secret("GOOGLE_APPLICATION_CREDENTIALS", defaults.credentials_file)
        or defaults.credentials_file,
        request_timeout=_number(
            "REQUEST_TIMEOUT", _get_secret("REQUEST_TIMEOUT", str(defaults.request_timeout)), float
        ),
        log_level=(_get_secret("LOG_LEVEL", defaults.log_level) or defaults.log_level).upper(),
    )
