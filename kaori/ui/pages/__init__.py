"""Page components for Kaori."""
from kaori.ui.pages.catalog import render_catalog_page

__all__ = [
    "render_catalog_page",
]
