"""Fragrance dataset for Kaori.

Loading lives in ``kaori.data.loader``; this package only re-exports the
record model and the fixed category/compound-type sets.
"""
from kaori.data.models import (
    FragranceRecord,
    FRAGRANCE_CATEGORIES,
    COMPOUND_TYPES,
    FALLBACK_GLYPH,
    category_glyph,
)

__all__ = [
    "FragranceRecord",
    "FRAGRANCE_CATEGORIES",
    "COMPOUND_TYPES",
    "FALLBACK_GLYPH",
    "category_glyph",
]
