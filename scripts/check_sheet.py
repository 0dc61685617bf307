"""Quick check that the results sheet is readable and decodes cleanly.

Run with `python scripts/check_sheet.py` (uses the same settings as the app)
to print the row counts per status and any duplicate (branch, list leader)
keys before deploying.
"""

from __future__ import annotations

from results_dashboard.bootstrap_env import ensure_env
from results_dashboard.config import load_settings
from results_dashboard.data.filters import status_counts
from results_dashboard.data.loader import fetch_table, fetch_table_gspread
from results_dashboard.data.reconcile import reconcile_table
from results_dashboard.errors import DashboardError
from results_dashboard.logging_setup import setup_logging


def main() -> None:
    ensure_env()
    settings = load_settings()
    setup_logging(settings.log_level)

    try:
        if settings.read_backend == "gspread":
            raw = fetch_table_gspread(settings.spreadsheet_id, settings.sheet_range, settings.credentials_file)
        else:
            raw = fetch_table(settings.spreadsheet_id, settings.sheet_range, timeout=settings.request_timeout)
    except DashboardError as exc:
        raise SystemExit(f"Sheet check failed: {exc}")

    counts = status_counts(reconcile_table(raw))
    diagnostics = raw.attrs["diagnostics"]
    print("Header:", " | ".join(raw.attrs["header"]))
    print(
        "Rows: {total} (with data {with_data}, without {without_data}, manual {manual})".format(**counts)
    )
    if diagnostics["duplicate_keys"]:
        raise SystemExit(f"Duplicate (branch, list leader) keys: {diagnostics['duplicate_keys']}")
    print("Sheet check passed.")


if __name__ == "__main__":
    main()
