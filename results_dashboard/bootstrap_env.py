"""
Bootstrap environment for Streamlit Cloud & local dev:
- Flatten st.secrets into uppercase os.environ keys (nested -> PREFIX_CHILD)
- If GOOGLE_CREDENTIALS_JSON is provided in secrets (dict or JSON string),
  write it to a temp file and set GOOGLE_APPLICATION_CREDENTIALS. Only the
  gspread read/write backends need it; the public gviz reader and the Apps
  Script writer run without credentials.
- Finally, load .env (without overriding existing env vars)
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from typing import Iterator, Tuple

import streamlit as st
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CREDENTIALS_TMP_PATH = os.path.join(tempfile.gettempdir(), "results-dashboard-credentials.json")


def _sanitize_key(key: str) -> str:
    # Uppercase and replace non-alphanumeric with underscores
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def _flatten_secrets(prefix: str, val) -> Iterator[Tuple[str, str]]:
    if isinstance(val, dict):
        for k, v in val.items():
            yield from _flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield _sanitize_key(prefix), str(val)


def _secrets_dict() -> dict:
    items = getattr(st, "secrets", None)
    if not items:
        return {}
    try:
        return items.to_dict()  # type: ignore[attr-defined]
    except AttributeError:
        return dict(items)


def _bridge_secrets_to_env() -> None:
    try:
        secrets_dict = _secrets_dict()
    except Exception:
        # st.secrets raises when no secrets.toml is present
        logger.debug("No Streamlit secrets available")
        return

    for key, value in secrets_dict.items():
        if key == "GOOGLE_CREDENTIALS_JSON":
            continue
        if isinstance(value, dict):
            for flat_k, flat_v in _flatten_secrets(key, value):
                os.environ.setdefault(flat_k, flat_v)
        else:
            os.environ.setdefault(_sanitize_key(key), str(value))


def repair_json_private_key(text: str) -> str:
    """If JSON text contains an unescaped multi-line private_key, escape newlines.
    This fixes the common case when TOML triple-quoted strings preserve newlines.
    """
    pattern = r'"private_key"\s*:\s*"(.*?)"'

    def _repl(m: re.Match[str]) -> str:
        val = m.group(1)
        val = val.replace("\r\n", "\\n").replace("\n", "\\n")
        return f'"private_key": "{val}"'

    return re.sub(pattern, _repl, text, flags=re.DOTALL)


def credentials_json_text(raw) -> str | None:
    """Normalise a credentials secret (dict or JSON text) into valid JSON text."""
    if isinstance(raw, dict):
        return json.dumps(raw)
    text = str(raw).strip()
    if not (text.startswith("{") and text.endswith("}")):
        return None
    try:
        json.loads(text)
        return text
    except json.JSONDecodeError:
        repaired = repair_json_private_key(text)
        try:
            json.loads(repaired)
        except json.JSONDecodeError:
            logger.warning("Inline Google credentials are not valid JSON")
            return None
        return repaired


def _materialize_google_credentials() -> None:
    """Create a temp service account file from secrets if needed.

    Priority:
    1) If GOOGLE_APPLICATION_CREDENTIALS already set and exists -> keep
    2) If GOOGLE_APPLICATION_CREDENTIALS holds inline JSON -> write it out
    3) Else if GOOGLE_CREDENTIALS_JSON provided in secrets -> write it out
    4) Else do nothing (the gspread backends fail clearly when used)
    """
    existing = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if existing and os.path.exists(existing):
        return

    json_text = credentials_json_text(existing) if existing else None
    if json_text is None:
        try:
            raw = _secrets_dict().get("GOOGLE_CREDENTIALS_JSON")
        except Exception:
            raw = None
        if not raw:
            return
        json_text = credentials_json_text(raw)
        if json_text is None:
            return

    with open(CREDENTIALS_TMP_PATH, "w", encoding="utf-8") as f:
        f.write(json_text)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = CREDENTIALS_TMP_PATH
    logger.info("Service account credentials written to %s", CREDENTIALS_TMP_PATH)


def ensure_env() -> None:
    """Idempotent: make sure env vars and creds are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    """
    _bridge_secrets_to_env()
    _materialize_google_credentials()
    # load_dotenv will not override existing env vars by default
    load_dotenv()
