"""Modal dialogs: record description, 3D structure and help."""

import streamlit as st

from kaori.data.models import COMPOUND_TYPES, FRAGRANCE_CATEGORIES, FragranceRecord
from kaori.services.pubchem_client import compound_page_url
from kaori.ui.components.molecule_viewer import render_2d_structure, render_structure_panel


@st.dialog("About this scent", width="large")
def show_description_dialog(record: FragranceRecord) -> None:
    """Describe a record's fragrance with its 2D depiction."""
    st.subheader(f"{record.category_glyph} {record.name}")
    st.write(record.fragrance)

    col1, col2 = st.columns([1, 1])
    with col1:
        render_2d_structure(record.smiles)
    with col2:
        if record.molecular_formula:
            st.markdown(f"**Formula:** {record.molecular_formula}")
        st.markdown(f"**Category:** {record.category}")
        st.markdown(f"**Type:** {record.compound_type}")
        st.markdown("**SMILES:**")
        st.code(record.smiles, language=None)
        st.link_button("Open in PubChem", compound_page_url(record.pubchem_id))


@st.dialog("3D structure", width="large")
def show_structure_dialog(record: FragranceRecord) -> None:
    """Show the interactive 3D structure of a record."""
    st.subheader(record.name)
    render_structure_panel(record)
    st.caption("Drag to rotate, scroll to zoom. Structure data: PubChem.")


def render_help_content() -> None:
    st.write(
        "Compare the molecules behind everyday scents: where they are found, "
        "what kind of compound they are and how heavy they are."
    )

    st.markdown("#### Categories")
    cols = st.columns(3)
    for i, (category, glyph) in enumerate(FRAGRANCE_CATEGORIES.items()):
        cols[i % 3].markdown(f"{glyph} {category}")

    st.markdown("#### Compound types")
    for compound_type, description in COMPOUND_TYPES.items():
        st.markdown(f"- **{compound_type}**: {description}")

    st.markdown("#### How to use")
    st.markdown(
        "- Click a column header to sort by it; click again to reverse the order.\n"
        "- ℹ️ shows a description of the scent.\n"
        "- 🧊 opens the molecule's 3D structure.\n"
        "- The PubChem ID links to the compound's PubChem page."
    )


@st.dialog("Help", width="large")
def show_help_dialog() -> None:
    render_help_content()
