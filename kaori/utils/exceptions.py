"""Custom exceptions for Kaori.

This module defines a hierarchy of exceptions for better error handling
and more informative error messages.

Exception Hierarchy:
    KaoriError (base)
    ├── DatasetError
    ├── ViewerError
    │   ├── FetchError
    │   └── RenderError
    └── StaleResultDiscarded
"""

from typing import Optional


class KaoriError(Exception):
    """Base exception for Kaori.

    All custom exceptions in this application should inherit from this class.
    This allows catching all application-specific errors with a single except clause.

    Example:
        >>> try:
        ...     risky_operation()
        ... except KaoriError as e:
        ...     handle_error(e)
    """

    def __init__(self, message: str = "An error occurred in Kaori"):
        self.message = message
        super().__init__(self.message)


class DatasetError(KaoriError):
    """Raised when the fragrance dataset violates its schema.

    Missing fields, wrong types, duplicate names and non-positive
    weights or CIDs are load-time contract violations.

    Attributes:
        path: Dataset location (optional)
        errors: Individual validation messages

    Example:
        >>> raise DatasetError("Dataset is invalid", path="fragrances.json",
        ...                    errors=["Limonene: missing field 'source'"])
    """

    def __init__(self, message: str = "Dataset is invalid", path: str = None, errors: list = None):
        self.path = path
        self.errors = list(errors or [])
        super().__init__(message)

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return f"{self.message}: " + "; ".join(self.errors)


class ViewerError(KaoriError):
    """Base exception for failures contained to a single structure viewer.

    Attributes:
        compound_id: PubChem CID the viewer was working on (optional)
    """

    def __init__(self, message: str = "Structure viewer error", compound_id: int = None):
        self.compound_id = compound_id
        super().__init__(message)


class FetchError(ViewerError):
    """Raised when structure text cannot be retrieved.

    Covers non-success HTTP statuses as well as transport failures
    (timeouts, DNS errors, connection resets).

    Attributes:
        compound_id: PubChem CID that was requested
        status_code: HTTP status code (None for transport failures)

    Example:
        >>> raise FetchError("PubChem returned HTTP 404", compound_id=1183, status_code=404)
    """

    def __init__(
        self,
        message: str = "Failed to fetch structure data",
        compound_id: int = None,
        status_code: Optional[int] = None
    ):
        self.status_code = status_code
        super().__init__(message, compound_id=compound_id)

    @property
    def is_transient(self) -> bool:
        """True for transport failures and server-side (5xx) statuses."""
        return self.status_code is None or self.status_code >= 500

    def __repr__(self) -> str:
        return (
            f"FetchError(compound_id={self.compound_id!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )


class RenderError(ViewerError):
    """Raised when structure text cannot be drawn on a surface.

    Either the payload could not be parsed, or the surface was no longer
    valid (already disposed) when the render was attempted.

    Example:
        >>> raise RenderError("Surface has been disposed", compound_id=1183)
    """

    def __init__(self, message: str = "Failed to render structure", compound_id: int = None):
        super().__init__(message, compound_id=compound_id)


class StaleResultDiscarded(KaoriError):
    """Internal signal: a result arrived for a superseded viewer cycle.

    Never shown to the user. Raised and caught inside the viewer
    controller so that late fetch results are dropped without touching
    state or surface.

    Attributes:
        cycle: Cycle number the result belongs to
        current_cycle: Cycle number of the controller when it arrived
    """

    def __init__(self, cycle: int, current_cycle: int):
        self.cycle = cycle
        self.current_cycle = current_cycle
        super().__init__(
            f"Discarded result of cycle {cycle} (current cycle is {current_cycle})"
        )
