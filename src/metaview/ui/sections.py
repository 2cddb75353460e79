"""
Collapsible group sections rendered with native Streamlit components.
"""

from typing import List, Optional, Sequence

import pandas as pd
import streamlit as st

from metaview.meta.controller import SectionState
from metaview.meta.models import Row, ViewMode

COMPONENT_LABEL = "Component"
IDENTIFIER_LABEL = "TCM ID"
EMPTY_MESSAGE = "No fields found."
CARD_COLUMNS = 3


def section_header(title: str, rows: Sequence[Row]) -> str:
    return f"{title} · {len(rows)} fields"


def table_frame(rows: Sequence[Row]) -> pd.DataFrame:
    """Two-column frame in row order; a single placeholder row when empty."""
    if not rows:
        return pd.DataFrame([{COMPONENT_LABEL: EMPTY_MESSAGE, IDENTIFIER_LABEL: ""}])
    return pd.DataFrame(
        [{COMPONENT_LABEL: row.component, IDENTIFIER_LABEL: row.identifier} for row in rows],
        columns=[COMPONENT_LABEL, IDENTIFIER_LABEL],
    )


def card_grid(rows: Sequence[Row], columns: int = CARD_COLUMNS) -> List[List[Row]]:
    """Split rows into grid lines of `columns` cards, keeping row order."""
    if columns < 1:
        raise ValueError("columns must be >= 1")
    return [list(rows[i:i + columns]) for i in range(0, len(rows), columns)]


def _render_table(rows: Sequence[Row]) -> None:
    st.dataframe(table_frame(rows), hide_index=True)


def _render_cards(rows: Sequence[Row]) -> None:
    if not rows:
        st.caption(EMPTY_MESSAGE)
        return
    for line in card_grid(rows):
        cols = st.columns(CARD_COLUMNS)
        for col, row in zip(cols, line):
            with col:
                with st.container(border=True):
                    st.caption(COMPONENT_LABEL)
                    st.text(row.component)
                    st.caption(IDENTIFIER_LABEL)
                    st.text(row.identifier)


def render_section(
    title: str,
    rows: Sequence[Row],
    view: ViewMode,
    state: SectionState,
    key: Optional[str] = None,
) -> None:
    """
    Render one group as a collapsible section.

    The header button (title and field count) is always shown and flips the
    section's own state; the body is rendered only while expanded.

    Args:
        title: Group name
        rows: Rows of the group, in display order
        view: Table or card presentation
        state: Expand/collapse state owned by this section
        key: Unique widget key prefix for this section
    """
    key = key or f"section_{title}"
    with st.container(border=True):
        marker = "▾" if state.expanded else "▸"
        st.button(
            f"{marker} {section_header(title, rows)}",
            key=f"{key}_toggle",
            on_click=state.toggle,
            help="Collapse section" if state.expanded else "Expand section",
        )
        if not state.expanded:
            return
        if ViewMode(view) is ViewMode.TABLE:
            _render_table(rows)
        else:
            _render_cards(rows)
