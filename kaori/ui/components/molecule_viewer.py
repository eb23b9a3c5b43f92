"""Molecule viewer components.

2D depictions are drawn server-side with RDKit. The 3D panel drives the
session's ViewerController and embeds its 3Dmol.js surface once a cycle
has settled.
"""

import base64
import html
import logging
from io import BytesIO

import streamlit as st
import streamlit.components.v1 as components
from rdkit import Chem
from rdkit.Chem import Draw

from kaori.config.settings import config
from kaori.core.viewer import ViewerController, ViewerStatus
from kaori.data.models import FragranceRecord
from kaori.ui.components.structure_viewer import get_viewer_placeholder
from kaori.utils.session_state import SessionState

logger = logging.getLogger(__name__)


def render_2d_structure(smiles: str, size: tuple = None) -> bool:
    """Render a 2D depiction of a SMILES string using RDKit.

    Args:
        smiles: SMILES string of the molecule
        size: Tuple of (width, height) for the image

    Returns:
        True if rendered successfully, False otherwise
    """
    size = size or config.MOLECULE_2D_SIZE
    if not smiles or not str(smiles).strip():
        st.caption("No structure available")
        return False

    try:
        mol = Chem.MolFromSmiles(str(smiles))
        if mol is None:
            st.caption("Invalid SMILES")
            return False

        img = Draw.MolToImage(mol, size=size)

        buffered = BytesIO()
        img.save(buffered, format="PNG")
        img_str = base64.b64encode(buffered.getvalue()).decode()

        st.markdown(
            f'<div style="display: flex; justify-content: center; padding: 10px;">'
            f'<img src="data:image/png;base64,{img_str}" alt="{html.escape(str(smiles))}" />'
            f'</div>',
            unsafe_allow_html=True
        )
        return True

    except Exception as e:
        logger.error(f"Error rendering 2D structure: {e}")
        st.caption("Structure rendering failed")
        return False


def _wait_budget() -> float:
    """Longest time the panel blocks for one cycle (all fetch attempts)."""
    attempts = config.VIEWER_FETCH_RETRIES + 1
    return config.STRUCTURE_FETCH_TIMEOUT_SECONDS * attempts + 5


def embed_structure_viewer(viewer: ViewerController) -> None:
    """Embed the viewer's surface, or a quiet placeholder if it has nothing to show."""
    status = viewer.status
    height = config.VIEWER_HEIGHT_PX

    if status is ViewerStatus.READY:
        components.html(viewer.surface.to_html(height), height=height + 16)
    elif status is ViewerStatus.FAILED:
        st.markdown(get_viewer_placeholder("3D structure unavailable", height), unsafe_allow_html=True)
    else:
        st.markdown(get_viewer_placeholder("Loading 3D structure...", height), unsafe_allow_html=True)


def render_structure_panel(record: FragranceRecord) -> ViewerController:
    """Show the 3D structure of a record in the session's viewer.

    Mounts (or reuses) the viewer for this record, starts a cycle for its
    CID and waits for it to settle. Failures stay inside the panel.
    """
    viewer = SessionState.open_viewer(record.name)
    viewer.select(record.pubchem_id)

    if not viewer.status.settled:
        with st.spinner("Fetching 3D structure from PubChem..."):
            viewer.wait(timeout=_wait_budget())

    embed_structure_viewer(viewer)

    status = viewer.status
    if status is ViewerStatus.FAILED:
        error = viewer.error
        st.caption(f"Could not display CID {record.pubchem_id}: {error}")
        st.button("Retry", key=f"retry_{record.pubchem_id}", on_click=viewer.retry)
    elif not status.settled:
        st.caption("PubChem is taking longer than usual.")
        st.button("Refresh", key=f"refresh_{record.pubchem_id}")

    return viewer
