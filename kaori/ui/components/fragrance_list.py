"""Collapsible fragrance list (compact layout)."""

from typing import List, Optional, Tuple

import streamlit as st

from kaori.config.settings import SORTABLE_COLUMNS
from kaori.core.sorting import CatalogSorter
from kaori.data.models import FragranceRecord
from kaori.services.pubchem_client import compound_page_url
from kaori.ui.components.fragrance_table import (
    ACTION_DESCRIBE,
    ACTION_STRUCTURE,
    Action,
    format_compound_type,
    format_weight,
)
from kaori.utils.session_state import SessionState

SORT_SELECT_KEY = "compact_sort_key"


def _on_sort_select() -> None:
    key = SessionState.get(SORT_SELECT_KEY)
    if key and key != SessionState.get_sort_state().key:
        state = SessionState.toggle_sort(key)
        st.query_params.update(state.to_params())


def _on_flip() -> None:
    state = SessionState.toggle_sort(SessionState.get_sort_state().key)
    st.query_params.update(state.to_params())


def render_compact_sort_controls(sorter: CatalogSorter) -> None:
    """Sort key selector plus a direction toggle (no table header on narrow screens)."""
    # A keyed selectbox ignores index= once its key holds a value, so the
    # widget state is pushed from the sort state on every run
    SessionState.set(SORT_SELECT_KEY, sorter.state.key)
    col1, col2 = st.columns([3, 1])
    with col1:
        st.selectbox(
            "Sort by",
            list(SORTABLE_COLUMNS),
            format_func=SORTABLE_COLUMNS.get,
            key=SORT_SELECT_KEY,
            on_change=_on_sort_select,
            label_visibility="collapsed",
        )
    with col2:
        st.button(
            sorter.indicator(sorter.state.key),
            key="compact_sort_flip",
            on_click=_on_flip,
            use_container_width=True,
        )


def render_fragrance_list(
    rows: List[Tuple[str, FragranceRecord]],
    sorter: CatalogSorter
) -> Optional[Action]:
    """Render one collapsible entry per record.

    Returns:
        (action, record) for the clicked button, or None
    """
    render_compact_sort_controls(sorter)

    clicked = None
    for name, record in rows:
        with st.expander(f"**{name}** {record.category_glyph}"):
            st.markdown(f"**Found in:** {record.source}")
            st.markdown(f"**Type:** {format_compound_type(record)}")
            st.markdown(f"**Molecular weight:** {format_weight(record.molecular_weight)}")
            st.markdown(
                f"**PubChem CID:** [{record.pubchem_id}]({compound_page_url(record.pubchem_id)})"
            )

            col1, col2 = st.columns(2)
            if col1.button("ℹ️ About", key=f"list_about_{name}", use_container_width=True):
                clicked = (ACTION_DESCRIBE, record)
            if col2.button("🧊 3D", key=f"list_structure_{name}", use_container_width=True):
                clicked = (ACTION_STRUCTURE, record)
    return clicked
