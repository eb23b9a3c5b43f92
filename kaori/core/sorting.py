"""
Catalog ordering.

Comparator engine plus the sort state machine used by the catalog page.
Ordering is always derived from scratch: ``derive(records, state)`` is a
pure function that the page calls on every rerun.

Text keys use the collation picked by ``configure_collation()`` (call it
once at startup): a linguistic LC_COLLATE locale through ``locale.strcoll``,
or the Unicode Collation Algorithm when the process runs in a C locale.
"""

import locale
import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from functools import cmp_to_key
from typing import Callable, List, Mapping, Optional, Tuple

from pyuca import Collator

from kaori.data.models import FragranceRecord

logger = logging.getLogger(__name__)

# Record attribute compared for each sort key
TEXT_SORT_KEYS = {
    'name': 'name',
    'category': 'category',
    'source': 'source',
    'compound_type': 'compound_type',
}
NUMERIC_SORT_KEYS = {
    'molecular_weight': 'molecular_weight',
}
SORT_KEYS = tuple(TEXT_SORT_KEYS) + tuple(NUMERIC_SORT_KEYS)

DEFAULT_SORT_KEY = 'name'

Comparator = Callable[[FragranceRecord, FragranceRecord], int]


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


# Locales whose LC_COLLATE is a plain code point order
_CODE_POINT_LOCALES = ("C", "POSIX")

# Collation in effect for text keys: a linguistic LC_COLLATE locale, or
# the Unicode Collation Algorithm (DUCET) when the locale is C/POSIX
_use_locale = False
_uca: Optional[Collator] = None
_uca_lock = threading.Lock()


def _get_uca() -> Collator:
    """Get the shared UCA collator (thread-safe, the table loads once)."""
    global _uca
    if _uca is None:
        with _uca_lock:
            if _uca is None:
                _uca = Collator()
    return _uca


def _is_linguistic(locale_name: str) -> bool:
    return locale_name.split(".")[0] not in _CODE_POINT_LOCALES


def configure_collation(locale_name: Optional[str] = None) -> str:
    """Select the collation used for text keys.

    An explicitly requested locale is used as is. Otherwise the
    environment's LC_COLLATE is used when it is a linguistic locale; a
    C/POSIX environment (the usual container default) falls back to the
    Unicode Collation Algorithm so case and accents still sort naturally.

    Args:
        locale_name: Locale such as ``"en_US.UTF-8"``; None or empty uses
            the environment's locale settings

    Returns:
        The active LC_COLLATE locale name, or ``"UCA"``
    """
    global _use_locale

    if locale_name:
        try:
            active = locale.setlocale(locale.LC_COLLATE, locale_name)
            _use_locale = True
            logger.info(f"Text ordering uses locale {active}")
            return active
        except locale.Error as e:
            logger.warning(f"Collation locale {locale_name!r} unavailable ({e}), using the default collation")

    try:
        active = locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Environment locale unusable ({e})")
        active = locale.setlocale(locale.LC_COLLATE)

    if _is_linguistic(active):
        _use_locale = True
        logger.info(f"Text ordering uses locale {active}")
        return active

    _use_locale = False
    _get_uca()
    logger.info(f"Locale {active} has no linguistic collation, text ordering uses UCA")
    return "UCA"


def compare_text(a: str, b: str) -> int:
    """Compare two strings with the active collation (-1, 0 or 1)."""
    if _use_locale:
        return _sign(locale.strcoll(a, b))
    uca = _get_uca()
    key_a, key_b = uca.sort_key(a), uca.sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def compare(key: str, a: FragranceRecord, b: FragranceRecord) -> int:
    """Compare two records on one sort key.

    Args:
        key: One of SORT_KEYS
        a: Left record
        b: Right record

    Returns:
        -1, 0 or 1. Unknown keys compare every pair as equal.
    """
    if key in TEXT_SORT_KEYS:
        attr = TEXT_SORT_KEYS[key]
        return compare_text(getattr(a, attr), getattr(b, attr))

    if key in NUMERIC_SORT_KEYS:
        attr = NUMERIC_SORT_KEYS[key]
        return _sign(getattr(a, attr) - getattr(b, attr))

    return 0


def comparator_for(key: str) -> Comparator:
    """Return a two-argument ordering function for ``key``."""
    if key not in SORT_KEYS:
        logger.debug(f"Unknown sort key {key!r}, ordering is a no-op")

    def _compare(a: FragranceRecord, b: FragranceRecord) -> int:
        return compare(key, a, b)

    return _compare


@dataclass(frozen=True)
class SortState:
    """Current sort key and direction."""
    key: str = DEFAULT_SORT_KEY
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASCENDING

    def toggle(self, key: str) -> "SortState":
        """Same key flips the direction; a new key starts ascending."""
        if key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {key!r}")
        if key == self.key:
            return replace(self, direction=self.direction.flipped())
        return SortState(key=key, direction=SortDirection.ASCENDING)

    @classmethod
    def from_params(cls, key: Optional[str], direction: Optional[str]) -> "SortState":
        """Rebuild a state from URL query values, falling back to the default."""
        if key not in SORT_KEYS:
            return cls()
        try:
            return cls(key=key, direction=SortDirection(direction))
        except ValueError:
            return cls(key=key)

    def to_params(self) -> dict:
        return {"sort": self.key, "order": self.direction.value}


def derive(
    records: Mapping[str, FragranceRecord],
    state: SortState
) -> List[Tuple[str, FragranceRecord]]:
    """Return a new, ordered list of (name, record) pairs.

    The sort is stable: records that compare equal keep the iteration
    order of ``records`` in both directions. ``records`` is not modified.
    """
    base = comparator_for(state.key)

    if state.ascending:
        cmp = base
    else:
        def cmp(a: FragranceRecord, b: FragranceRecord) -> int:
            return -base(a, b)

    order_key = cmp_to_key(cmp)
    return sorted(records.items(), key=lambda item: order_key(item[1]))


class CatalogSorter:
    """Holds the page's SortState and derives sorted views from it.

    Example:
        >>> sorter = CatalogSorter()
        >>> sorter.toggle('name').direction
        <SortDirection.DESCENDING: 'desc'>
        >>> sorter.toggle('category').direction
        <SortDirection.ASCENDING: 'asc'>
    """

    def __init__(self, state: SortState = None):
        self._state = state or SortState()

    @property
    def state(self) -> SortState:
        return self._state

    def toggle(self, key: str) -> SortState:
        self._state = self._state.toggle(key)
        logger.debug(f"Sort state is now {self._state.key} {self._state.direction.value}")
        return self._state

    def derive(self, records: Mapping[str, FragranceRecord]) -> List[Tuple[str, FragranceRecord]]:
        return derive(records, self._state)

    def indicator(self, key: str) -> str:
        """Header glyph for a column: ▲/▼ on the active key, ⇅ elsewhere."""
        if key != self._state.key:
            return "⇅"
        return "▲" if self._state.ascending else "▼"
