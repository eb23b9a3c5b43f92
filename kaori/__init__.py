"""Kaori Package.

Molecules of Scent, a Streamlit catalog of fragrance compounds with:
- Frozen dataclass configuration
- Stable, locale-aware catalog sorting
- PubChem structure fetcher
- Cancellable 3D structure viewer lifecycle
- Session state management
"""

__version__ = "1.0.0"
