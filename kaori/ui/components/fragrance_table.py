"""Sortable fragrance table (wide layout).

Header buttons toggle the session's sort state; row buttons report which
record the user wants to inspect so the page can open the right dialog.
"""

import logging
from typing import List, Optional, Tuple

import streamlit as st

from kaori.config.settings import SORTABLE_COLUMNS
from kaori.core.sorting import CatalogSorter
from kaori.data.models import FALLBACK_GLYPH, FragranceRecord
from kaori.services.pubchem_client import compound_page_url
from kaori.utils.session_state import SessionState

logger = logging.getLogger(__name__)

# Actions reported back to the page
ACTION_DESCRIBE = "describe"
ACTION_STRUCTURE = "structure"

# name, category, source, type, weight, about, 3D, PubChem
COLUMN_WIDTHS = [3, 1.4, 3, 1.6, 1.6, 0.8, 0.8, 1.6]

Action = Tuple[str, FragranceRecord]


def _on_sort(key: str) -> None:
    """Callback for header buttons (runs before the rerun)."""
    state = SessionState.toggle_sort(key)
    st.query_params.update(state.to_params())
    logger.debug(f"Header sort: {state.key} {state.direction.value}")


def format_weight(weight: float) -> str:
    return f"{weight:.2f}"


def format_compound_type(record: FragranceRecord) -> str:
    """Compound type label, flagged when it is outside the known set."""
    if record.has_known_type:
        return record.compound_type
    return f"{FALLBACK_GLYPH} {record.compound_type}"


def render_table_header(sorter: CatalogSorter) -> None:
    """Render the sortable header row."""
    cols = st.columns(COLUMN_WIDTHS)
    for col, (key, label) in zip(cols, SORTABLE_COLUMNS.items()):
        with col:
            st.button(
                f"{label} {sorter.indicator(key)}",
                key=f"sort_{key}",
                on_click=_on_sort,
                args=(key,),
                type="primary" if key == sorter.state.key else "secondary",
                use_container_width=True,
            )
    for col, label in zip(cols[len(SORTABLE_COLUMNS):], ("About", "3D", "PubChem")):
        col.markdown(f"**{label}**")


def render_table_row(name: str, record: FragranceRecord) -> Optional[str]:
    """Render one record row.

    Returns:
        ACTION_DESCRIBE / ACTION_STRUCTURE if a row button was clicked
    """
    action = None
    cols = st.columns(COLUMN_WIDTHS)
    cols[0].markdown(f"**{name}**")
    cols[1].markdown(record.category_glyph, help=record.category)
    cols[2].write(record.source)
    cols[3].write(format_compound_type(record))
    cols[4].write(format_weight(record.molecular_weight))

    if cols[5].button("ℹ️", key=f"about_{name}", help=f"About {name}"):
        action = ACTION_DESCRIBE
    if cols[6].button("🧊", key=f"structure_{name}", help=f"3D structure of {name}"):
        action = ACTION_STRUCTURE
    cols[7].markdown(f"[{record.pubchem_id} ↗]({compound_page_url(record.pubchem_id)})")
    return action


def render_fragrance_table(
    rows: List[Tuple[str, FragranceRecord]],
    sorter: CatalogSorter
) -> Optional[Action]:
    """Render the full table for an already sorted list of rows.

    Returns:
        (action, record) for the clicked row button, or None
    """
    clicked = None
    with st.container(border=True):
        render_table_header(sorter)
        st.divider()
        for name, record in rows:
            action = render_table_row(name, record)
            if action:
                clicked = (action, record)
    return clicked
