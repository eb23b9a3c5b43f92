"""Input validation utilities.

This module validates raw fragrance entries before they become
FragranceRecord objects. Validators return ValidationResult objects for
consistent error handling: errors make an entry unusable, warnings are
logged and the entry is kept.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping

from kaori.data.models import COMPOUND_TYPES, FRAGRANCE_CATEGORIES, RECORD_FIELDS

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        errors: List of error messages (empty if valid)
        warnings: List of warning messages (non-fatal issues)

    Example:
        >>> result = ValidationResult(is_valid=True)
        >>> if result.is_valid:
        ...     build_record()
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.is_valid

    def add_error(self, error: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid weight or CID
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class RecordValidator:
    """Validates raw fragrance entries from the dataset file."""

    TEXT_FIELDS = ("category", "compound_type", "source", "smiles", "fragrance")

    @classmethod
    def validate_name(cls, name: Any) -> ValidationResult:
        """Validate a record name (the dataset key)."""
        result = ValidationResult(is_valid=True)
        if not isinstance(name, str) or not name.strip():
            result.add_error(f"Invalid record name: {name!r}")
        return result

    @classmethod
    def validate_pubchem_id(cls, value: Any) -> ValidationResult:
        """Validate a PubChem CID (positive integer).

        Example:
            >>> RecordValidator.validate_pubchem_id(1183).is_valid
            True
            >>> RecordValidator.validate_pubchem_id(0).is_valid
            False
        """
        result = ValidationResult(is_valid=True)
        if not isinstance(value, int) or isinstance(value, bool):
            result.add_error(f"pubchem_id must be an integer, got {type(value).__name__}")
        elif value <= 0:
            result.add_error(f"pubchem_id must be positive, got {value}")
        return result

    @classmethod
    def validate_record(cls, name: str, raw: Mapping[str, Any]) -> ValidationResult:
        """Validate one raw dataset entry.

        Performs the following checks:
        1. Entry is a mapping with every required field
        2. Text fields are strings
        3. molecular_weight is a positive number
        4. pubchem_id is a positive integer
        5. category / compound_type belong to the fixed sets (warning only)

        Args:
            name: Record name (dataset key)
            raw: Raw field mapping

        Returns:
            ValidationResult with is_valid flag, errors and warnings
        """
        result = cls.validate_name(name)
        if not result:
            return result

        if not isinstance(raw, Mapping):
            result.add_error(f"{name}: entry must be an object")
            return result

        missing = [f for f in RECORD_FIELDS if f not in raw]
        for field_name in missing:
            result.add_error(f"{name}: missing field '{field_name}'")
        if missing:
            return result

        for field_name in cls.TEXT_FIELDS:
            if not isinstance(raw[field_name], str):
                result.add_error(f"{name}: field '{field_name}' must be a string")

        weight = raw["molecular_weight"]
        if not _is_number(weight):
            result.add_error(f"{name}: molecular_weight must be a number")
        elif weight <= 0:
            result.add_error(f"{name}: molecular_weight must be positive, got {weight}")

        for error in cls.validate_pubchem_id(raw["pubchem_id"]).errors:
            result.add_error(f"{name}: {error}")

        formula = raw.get("molecular_formula")
        if formula is not None and not isinstance(formula, str):
            result.add_error(f"{name}: molecular_formula must be a string")

        if result and raw["category"] not in FRAGRANCE_CATEGORIES:
            result.add_warning(f"{name}: unknown category '{raw['category']}'")
        if result and raw["compound_type"] not in COMPOUND_TYPES:
            result.add_warning(f"{name}: unknown compound type '{raw['compound_type']}'")

        return result
