"""
Kaori Configuration.

Frozen dataclass for immutable configuration with environment overrides.
All magic numbers and configuration values should be defined here.

Environment variables can override defaults (read at module import time):
- PUBCHEM_BASE_URL: PubChem REST root used for structure downloads
- STRUCTURE_FETCH_TIMEOUT_SECONDS: Per-request timeout for structure fetches
- VIEWER_FETCH_RETRIES: Extra fetch attempts per viewer cycle
- VIEWER_MAX_WORKERS: Size of the structure fetch thread pool
- COLLATION_LOCALE: Locale used for name/category/source ordering
- KAORI_DATA_PATH: Alternative fragrance dataset (JSON)
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _get_int_env(name: str, default: int) -> int:
    """Get integer environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            pass
    return default


def _get_float_env(name: str, default: float) -> float:
    """Get float environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            pass
    return default


def _get_str_env(name: str, default: str) -> str:
    """Get string environment variable or return default."""
    return os.getenv(name, default)


def _get_optional_str_env(name: str) -> Optional[str]:
    """Get string environment variable, treating empty values as unset."""
    val = os.getenv(name)
    return val or None


@dataclass(frozen=True)
class KaoriConfig:
    """Immutable Kaori configuration.

    frozen=True ensures config values cannot be accidentally modified.
    Environment variables are read at module import time.
    """

    # Application
    APP_NAME: str = "Kaori"
    APP_TITLE: str = "Molecules of Scent"
    APP_ICON: str = "🌸"
    APP_VERSION: str = field(
        default_factory=lambda: _get_str_env('APP_VERSION', "1.0.0")
    )

    # PubChem
    PUBCHEM_BASE_URL: str = field(
        default_factory=lambda: _get_str_env(
            'PUBCHEM_BASE_URL', 'https://pubchem.ncbi.nlm.nih.gov'
        )
    )
    STRUCTURE_FETCH_TIMEOUT_SECONDS: float = field(
        default_factory=lambda: _get_float_env('STRUCTURE_FETCH_TIMEOUT_SECONDS', 30.0)
    )
    STRUCTURE_FORMAT: str = "sdf"

    # Viewer lifecycle
    VIEWER_FETCH_RETRIES: int = field(
        default_factory=lambda: _get_int_env('VIEWER_FETCH_RETRIES', 0)
    )
    VIEWER_MAX_WORKERS: int = field(
        default_factory=lambda: _get_int_env('VIEWER_MAX_WORKERS', 4)
    )

    # 3D surface
    VIEWER_HEIGHT_PX: int = 480
    VIEWER_BACKGROUND: str = "white"
    VIEWER_ZOOM_MARGIN: float = 0.9
    VIEWER_SCRIPT_URL: str = "https://cdnjs.cloudflare.com/ajax/libs/3Dmol/2.0.1/3Dmol-min.js"

    # Layout
    COMPACT_BREAKPOINT_PX: int = 768

    # Ordering
    COLLATION_LOCALE: Optional[str] = field(
        default_factory=lambda: _get_optional_str_env('COLLATION_LOCALE')
    )

    # Dataset
    DATA_PATH: Optional[str] = field(
        default_factory=lambda: _get_optional_str_env('KAORI_DATA_PATH')
    )

    # Molecule viewer
    MOLECULE_2D_SIZE: tuple = (320, 240)

    @property
    def STRUCTURE_URL_TEMPLATE(self) -> str:
        """URL template for 3D SDF records, formatted with ``cid``."""
        return (
            f"{self.PUBCHEM_BASE_URL}/rest/pug/compound/CID/{{cid}}/record/SDF/"
            "?record_type=3d&response_type=display"
        )

    @property
    def COMPOUND_PAGE_TEMPLATE(self) -> str:
        """URL template for the public compound page, formatted with ``cid``."""
        return f"{self.PUBCHEM_BASE_URL}/compound/{{cid}}"


# Global immutable config instance
config = KaoriConfig()

# Column labels for the sortable table, in display order
SORTABLE_COLUMNS = {
    'name': "Name",
    'category': "Category",
    'source': "Found in",
    'compound_type': "Type",
    'molecular_weight': "Mol. weight",
}

# Layout override choices shown in the sidebar
LAYOUT_MODES = ("auto", "table", "list")
