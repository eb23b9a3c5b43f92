"""
PubChem client for Kaori.

Downloads 3D structure records (SDF) used by the molecule viewer and
builds links to the public compound pages.

Every call issues exactly one HTTP request: retry policy belongs to the
viewer controller and caching is left to callers.
"""

import logging
import threading
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from kaori.config.settings import config
from kaori.utils.exceptions import FetchError
from kaori.utils.validators import RecordValidator

logger = logging.getLogger(__name__)


def compound_page_url(pubchem_id: int) -> str:
    """Return the PubChem page URL for a CID (the page itself is never fetched)."""
    return config.COMPOUND_PAGE_TEMPLATE.format(cid=pubchem_id)


def structure_url(pubchem_id: int) -> str:
    """Return the 3D SDF record URL for a CID."""
    return config.STRUCTURE_URL_TEMPLATE.format(cid=pubchem_id)


class StructureFetcher:
    """Fetches 3D structure text for PubChem compound IDs."""

    def __init__(self, timeout: float = None, session: requests.Session = None):
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds (default from config)
            session: Pre-configured requests session (mainly for tests)
        """
        self.timeout = timeout or config.STRUCTURE_FETCH_TIMEOUT_SECONDS
        self.session = session or self._build_session()

    @staticmethod
    def _build_session() -> requests.Session:
        session = requests.Session()
        # One request per fetch: no transport-level retries
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "chemical/x-mdl-sdfile, text/plain"})
        return session

    def fetch(self, compound_id: int) -> str:
        """Download the 3D SDF record for a compound.

        Args:
            compound_id: PubChem CID (positive integer)

        Returns:
            Raw SDF text

        Raises:
            FetchError: On invalid ids, non-200 responses and transport failures
        """
        check = RecordValidator.validate_pubchem_id(compound_id)
        if not check:
            raise FetchError(check.errors[0], compound_id=compound_id)

        url = structure_url(compound_id)
        logger.debug(f"Fetching 3D structure for CID {compound_id}: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise FetchError(
                f"Timed out fetching structure for CID {compound_id}", compound_id=compound_id
            ) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(
                f"Request failed for CID {compound_id}: {e}", compound_id=compound_id
            ) from e

        if response.status_code != 200:
            raise FetchError(
                f"PubChem returned HTTP {response.status_code} for CID {compound_id}",
                compound_id=compound_id,
                status_code=response.status_code,
            )

        logger.info(f"Fetched 3D structure for CID {compound_id} ({len(response.text)} chars)")
        return response.text

    def close(self) -> None:
        self.session.close()


# Global fetcher instance (lazy initialization with thread safety)
_fetcher: Optional[StructureFetcher] = None
_fetcher_lock = threading.Lock()


def get_structure_fetcher() -> StructureFetcher:
    """Get the shared structure fetcher (thread-safe)."""
    global _fetcher
    if _fetcher is None:
        with _fetcher_lock:
            if _fetcher is None:
                _fetcher = StructureFetcher()
    return _fetcher
