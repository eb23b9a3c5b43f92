"""Reusable UI components for Kaori."""
from kaori.ui.components.structure_viewer import (
    Mol3DSurface,
    get_viewer_placeholder,
)
from kaori.ui.components.molecule_viewer import (
    embed_structure_viewer,
    render_2d_structure,
    render_structure_panel,
)
from kaori.ui.components.fragrance_table import (
    ACTION_DESCRIBE,
    ACTION_STRUCTURE,
    render_fragrance_table,
)
from kaori.ui.components.fragrance_list import render_fragrance_list
from kaori.ui.components.dialogs import (
    show_description_dialog,
    show_structure_dialog,
    show_help_dialog,
)
from kaori.ui.components.viewport_reporter import render_viewport_reporter

__all__ = [
    # Structure viewer
    "Mol3DSurface",
    "get_viewer_placeholder",
    "embed_structure_viewer",
    "render_2d_structure",
    "render_structure_panel",
    # Catalog views
    "ACTION_DESCRIBE",
    "ACTION_STRUCTURE",
    "render_fragrance_table",
    "render_fragrance_list",
    # Dialogs
    "show_description_dialog",
    "show_structure_dialog",
    "show_help_dialog",
    # Layout
    "render_viewport_reporter",
]
