"""Utilities for Kaori.

Session state lives in ``kaori.utils.session_state`` (it depends on the
viewer pipeline, so it is not re-exported here).
"""
from kaori.utils.exceptions import (
    KaoriError,
    DatasetError,
    ViewerError,
    FetchError,
    RenderError,
    StaleResultDiscarded,
)
from kaori.utils.validators import (
    ValidationResult,
    RecordValidator,
)

__all__ = [
    # Exceptions
    "KaoriError",
    "DatasetError",
    "ViewerError",
    "FetchError",
    "RenderError",
    "StaleResultDiscarded",
    # Validators
    "ValidationResult",
    "RecordValidator",
]
