"""
Utility helpers for formatting vote counts and table cells for display.
"""

from __future__ import annotations

from typing import Any, Optional

from results_dashboard.data.schema import MISSING_DISPLAY, PLACEHOLDER, is_absent


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return MISSING_DISPLAY
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return MISSING_DISPLAY


def format_votes(value: Any) -> str:
    """Vote counts with thousands separators; non-numeric text passes through."""
    if is_absent(value):
        return MISSING_DISPLAY
    text = str(value).strip()
    try:
        return format_number(int(text))
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return text
    if number.is_integer():
        return format_number(number)
    return text


def format_cell(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    text = str(value)
    return text if text.strip() else PLACEHOLDER
