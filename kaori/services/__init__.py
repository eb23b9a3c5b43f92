"""Services for Kaori."""
from kaori.services.pubchem_client import (
    StructureFetcher,
    get_structure_fetcher,
    compound_page_url,
    structure_url,
)

__all__ = [
    "StructureFetcher",
    "get_structure_fetcher",
    "compound_page_url",
    "structure_url",
]
