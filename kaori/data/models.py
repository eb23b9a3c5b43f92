"""Fragrance record model and the fixed category/compound-type sets."""

from dataclasses import dataclass
from typing import Dict, Optional

# Category -> display glyph
FRAGRANCE_CATEGORIES: Dict[str, str] = {
    "Citrus": "🍋",
    "Floral": "🌸",
    "Fruity": "🍑",
    "Green": "🌱",
    "Herbal": "🌿",
    "Minty": "🍃",
    "Musky": "🦌",
    "Spicy": "🌶️",
    "Sweet": "🍯",
    "Woody": "🌲",
    "Earthy": "🍂",
}

# Compound type -> short description used in the help dialog
COMPOUND_TYPES: Dict[str, str] = {
    "Alcohol": "Hydroxyl group on a saturated carbon",
    "Aldehyde": "Terminal carbonyl group",
    "Ester": "Condensation product of an acid and an alcohol",
    "Ether": "Oxygen bridging two carbon groups",
    "Ketone": "Carbonyl group between two carbons",
    "Lactone": "Cyclic ester",
    "Phenol": "Hydroxyl group on an aromatic ring",
    "Terpene": "Hydrocarbon built from isoprene units",
}

# Shown for values outside the fixed sets
FALLBACK_GLYPH = "❔"

RECORD_FIELDS = (
    "category",
    "compound_type",
    "source",
    "molecular_weight",
    "pubchem_id",
    "smiles",
    "fragrance",
)


@dataclass(frozen=True)
class FragranceRecord:
    """One catalog entry describing a single aromatic compound."""
    name: str
    category: str
    compound_type: str
    source: str
    molecular_weight: float
    pubchem_id: int
    smiles: str
    fragrance: str
    molecular_formula: Optional[str] = None

    @property
    def category_glyph(self) -> str:
        return category_glyph(self.category)

    @property
    def has_known_type(self) -> bool:
        return self.compound_type in COMPOUND_TYPES


def category_glyph(category: str) -> str:
    """Return the display glyph for a category, or the neutral fallback."""
    return FRAGRANCE_CATEGORIES.get(category, FALLBACK_GLYPH)
