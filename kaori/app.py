"""Kaori Streamlit Application.

Molecules of Scent: a sortable catalog of fragrance compounds with
on-demand 2D and 3D structure views.
"""

import logging
from pathlib import Path
from types import MappingProxyType

# Load environment variables from .env file BEFORE any other imports
# so the frozen config sees them
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

import streamlit as st

from kaori.config.settings import config
from kaori.core.sorting import configure_collation
from kaori.data.loader import load_fragrance_data
from kaori.utils.exceptions import DatasetError
from kaori.utils.session_state import SessionState
from kaori.ui.pages import render_catalog_page

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@st.cache_resource(show_spinner=False)
def get_catalog() -> MappingProxyType:
    """Load the bundled dataset once per server process (read-only)."""
    configure_collation(config.COLLATION_LOCALE)
    return load_fragrance_data()


def main():
    """Main application entry point."""
    # Page configuration - must be first Streamlit command
    st.set_page_config(
        page_title=f"{config.APP_NAME} · {config.APP_TITLE}",
        page_icon=config.APP_ICON,
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    _apply_custom_css()

    # Initialize session state with defaults
    SessionState.init_defaults()
    logger.debug(f"Rendering catalog for session {SessionState.get_session_id()[:8]}")

    try:
        records = get_catalog()
    except DatasetError as e:
        logger.error(f"Could not load fragrance data: {e}")
        st.error(f"Could not load the fragrance catalog: {e}")
        st.stop()

    render_catalog_page(records)


def _apply_custom_css():
    """Apply custom CSS styling."""
    st.markdown("""
        <style>
        /* Tighter table rows */
        div[data-testid="stHorizontalBlock"] {
            align-items: center;
        }

        /* Header sort buttons */
        .stButton > button {
            font-size: 0.875rem;
        }

        /* SMILES block in the description dialog */
        pre {
            font-size: 0.75rem;
            white-space: pre-wrap;
            word-break: break-all;
        }

        /* Hide Streamlit footer only (keep menu for theme settings) */
        footer {visibility: hidden;}
        </style>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
