from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import streamlit as st

from results_dashboard import messages
from results_dashboard.ui.components.formatting import format_number


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    value_display: Optional[str] = None
    decimals: int = 0
    share_of: Optional[float] = None
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    return format_number(card.value, decimals=card.decimals)


def _format_share(card: KpiCard) -> Optional[str]:
    if card.value is None or not card.share_of:
        return None
    return f"{card.value / card.share_of * 100:.0f}%"


def status_cards(counts: Dict[str, int]) -> List[KpiCard]:
    total = counts.get("total", 0)
    return [
        KpiCard(label=messages.KPI_TOTAL, value=total),
        KpiCard(label=messages.KPI_WITH_DATA, value=counts.get("with_data", 0), share_of=total),
        KpiCard(label=messages.KPI_WITHOUT_DATA, value=counts.get("without_data", 0), share_of=total),
        KpiCard(label=messages.KPI_MANUAL, value=counts.get("manual", 0), share_of=total),
    ]


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 4) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(
                    label=card.label,
                    value=_format_value(card),
                    delta=_format_share(card),
                    delta_color="off",
                )
                if card.help_text:
                    st.caption(card.help_text)
