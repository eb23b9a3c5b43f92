"""Catalog ordering, layout selection and the structure viewer pipeline."""
from kaori.core.sorting import (
    SORT_KEYS,
    SortDirection,
    SortState,
    CatalogSorter,
    compare,
    comparator_for,
    configure_collation,
    derive,
)
from kaori.core.layout import ViewportSelector, parse_width
from kaori.core.renderer import (
    RenderSurface,
    StructureRenderer,
    check_structure_text,
)
from kaori.core.viewer import (
    ViewerController,
    ViewerSession,
    ViewerStatus,
    get_viewer_executor,
)

__all__ = [
    # Sorting
    "SORT_KEYS",
    "SortDirection",
    "SortState",
    "CatalogSorter",
    "compare",
    "comparator_for",
    "configure_collation",
    "derive",
    # Layout
    "ViewportSelector",
    "parse_width",
    # Rendering
    "RenderSurface",
    "StructureRenderer",
    "check_structure_text",
    # Viewer lifecycle
    "ViewerController",
    "ViewerSession",
    "ViewerStatus",
    "get_viewer_executor",
]
