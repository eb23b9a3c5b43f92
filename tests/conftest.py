"""
Shared test fixtures for Kaori tests.
"""
import os
from concurrent.futures import Future
from unittest.mock import patch

import pytest

# Keep the environment out of the frozen config
for _name in ("COLLATION_LOCALE", "KAORI_DATA_PATH", "VIEWER_FETCH_RETRIES"):
    os.environ.pop(_name, None)


WATER_SDF = """water
  Kaori

  3  2  0  0  0  0  0  0  0  0999 V2000
    0.0000    0.0000    0.0000 O   0  0  0  0  0  0  0  0  0  0  0  0
    0.9572    0.0000    0.0000 H   0  0  0  0  0  0  0  0  0  0  0  0
   -0.2400    0.9266    0.0000 H   0  0  0  0  0  0  0  0  0  0  0  0
  1  2  1  0  0  0  0
  1  3  1  0  0  0  0
M  END
$$$$
"""

METHANOL_SDF = """methanol
  Kaori

  2  1  0  0  0  0  0  0  0  0999 V2000
    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
    1.4300    0.0000    0.0000 O   0  0  0  0  0  0  0  0  0  0  0  0
  1  2  1  0  0  0  0
M  END
$$$$
"""


class ManualExecutor:
    """Executor whose futures only resolve when a test says so."""

    def __init__(self):
        self.submitted = []
        self.shutdown_called = False

    def submit(self, fn, *args, **kwargs):
        if self.shutdown_called:
            raise RuntimeError("cannot schedule new futures after shutdown")
        future = Future()
        self.submitted.append((future, fn, args, kwargs))
        return future

    def future(self, index=-1) -> Future:
        return self.submitted[index][0]

    def run(self, index=-1) -> None:
        """Run one submitted call to completion (no-op if it was cancelled)."""
        future, fn, args, kwargs = self.submitted[index]
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    def run_pending(self) -> None:
        for index, (future, _, _, _) in enumerate(list(self.submitted)):
            if not future.done() and not future.running():
                self.run(index)

    def shutdown(self, wait=True):
        self.shutdown_called = True


class FakeFetcher:
    """Structure fetcher serving canned payloads.

    Each CID maps to a value or a list of values consumed in order; an
    exception instance is raised instead of returned.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def fetch(self, compound_id):
        self.calls.append(compound_id)
        value = self.responses[compound_id]
        if isinstance(value, list):
            value = value.pop(0)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def water_sdf():
    return WATER_SDF


@pytest.fixture
def methanol_sdf():
    return METHANOL_SDF


@pytest.fixture
def manual_executor():
    return ManualExecutor()


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    def _make(responses=None):
        return FakeFetcher(responses)
    return _make


@pytest.fixture
def sample_records():
    """Four records with a molecular weight tie and a category tie."""
    from kaori.data.models import FragranceRecord

    def make(name, category, source, compound_type, weight, cid):
        return FragranceRecord(
            name=name,
            category=category,
            compound_type=compound_type,
            source=source,
            molecular_weight=weight,
            pubchem_id=cid,
            smiles="C",
            fragrance=f"{name} scent",
        )

    records = {
        "Apple": make("Apple", "Fruity", "Orchard", "Ester", 94.11, 101),
        "Basil": make("Basil", "Herbal", "Garden", "Terpene", 150.22, 102),
        "Cedar": make("Cedar", "Woody", "Forest", "Alcohol", 150.22, 103),
        "Dill": make("Dill", "Herbal", "Meadow", "Ketone", 68.12, 104),
    }
    return records


@pytest.fixture
def session_store():
    """Dict-backed replacement for st.session_state."""
    from kaori.utils.session_state import SessionState

    store = {}
    with patch.object(SessionState, '_get_session_state', return_value=store):
        yield store


@pytest.fixture
def dataset_entry():
    """A valid raw dataset entry."""
    return {
        "molecular_formula": "C8H8O3",
        "molecular_weight": 152.15,
        "category": "Sweet",
        "compound_type": "Aldehyde",
        "source": "Vanilla beans",
        "pubchem_id": 1183,
        "smiles": "COC1=C(C=CC(=C1)C=O)O",
        "fragrance": "Warm vanilla.",
    }
