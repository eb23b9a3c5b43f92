"""Catalog page for Kaori.

Shows the fragrance records as a sortable table on wide screens and as a
collapsible list on narrow ones. Row actions open the description and
3D structure dialogs.

Flow per full rerun:
- unmount any structure viewer left over from a closed dialog
- restore sort state and viewport width from the URL
- derive the sorted rows and render the layout the viewport calls for
"""

import logging
from typing import Mapping, Optional

import streamlit as st

from kaori.config.settings import LAYOUT_MODES, config
from kaori.core.layout import ViewportSelector, parse_width
from kaori.core.sorting import CatalogSorter
from kaori.data.models import FragranceRecord
from kaori.utils.session_state import SessionState
from kaori.ui.components import (
    ACTION_DESCRIBE,
    ACTION_STRUCTURE,
    render_fragrance_list,
    render_fragrance_table,
    render_viewport_reporter,
    show_description_dialog,
    show_help_dialog,
    show_structure_dialog,
)
from kaori.ui.components.viewport_reporter import WIDTH_PARAM

logger = logging.getLogger(__name__)

LAYOUT_LABELS = {
    "auto": "Automatic",
    "table": "Table",
    "list": "List",
}


def render_catalog_page(records: Mapping[str, FragranceRecord]) -> None:
    """Render the catalog page."""
    # Dialogs rerun on their own; a full rerun means any dialog was closed
    SessionState.close_viewer()

    params = st.query_params
    SessionState.restore_sort(params.get("sort"), params.get("order"))

    render_header()
    mode = render_layout_selector()

    viewport = _resolve_viewport(params.get(WIDTH_PARAM))
    compact = viewport.resolve(mode)

    sorter = CatalogSorter(SessionState.get_sort_state())
    rows = sorter.derive(records)

    if compact:
        action = render_fragrance_list(rows, sorter)
    else:
        action = render_fragrance_table(rows, sorter)

    st.caption(f"{len(rows)} molecules · structure data from PubChem")

    if action:
        _dispatch(*action)


def render_header() -> None:
    """Title row with the help button."""
    col1, col2 = st.columns([6, 1])
    with col1:
        st.title(f"{config.APP_ICON} {config.APP_TITLE}")
    with col2:
        if st.button("❓ Help", key="open_help", use_container_width=True):
            show_help_dialog()


def render_layout_selector() -> str:
    """Sidebar override for the responsive layout."""
    current = SessionState.get_layout_mode()
    index = LAYOUT_MODES.index(current) if current in LAYOUT_MODES else 0

    with st.sidebar:
        st.markdown(f"### {config.APP_NAME}")
        mode = st.radio(
            "Layout",
            LAYOUT_MODES,
            index=index,
            format_func=LAYOUT_LABELS.get,
            help="Automatic switches to a list on narrow screens",
        )
        st.caption(f"v{config.APP_VERSION}")

    SessionState.set('layout_mode', mode)
    return mode


def _resolve_viewport(reported: Optional[str]) -> ViewportSelector:
    """Combine the URL width (if any) with the last known width and keep the reporter running."""
    viewport = ViewportSelector()
    width = parse_width(reported) or SessionState.get('viewport_width')
    viewport.update(width)

    if viewport.width != SessionState.get('viewport_width'):
        logger.info(f"Viewport width reported: {viewport.width}px")
        SessionState.set('viewport_width', viewport.width)

    render_viewport_reporter(viewport.width, viewport.breakpoint)
    return viewport


def _dispatch(action: str, record: FragranceRecord) -> None:
    """Open the dialog for a row action."""
    logger.debug(f"Row action {action} on {record.name}")
    if action == ACTION_DESCRIBE:
        show_description_dialog(record)
    elif action == ACTION_STRUCTURE:
        show_structure_dialog(record)
    else:
        logger.warning(f"Unknown row action: {action}")
