"""Fragrance dataset loading.

The dataset is a JSON object mapping compound name to its fields. It is
read once at startup and handed to the rest of the app as an
insertion-ordered, read-only mapping (the RecordStore).
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union

from kaori.config.settings import config
from kaori.data.models import FragranceRecord
from kaori.utils.exceptions import DatasetError
from kaori.utils.validators import RecordValidator

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).parent / "fragrances.json"


def _reject_duplicates(pairs: List[Tuple[str, Any]]) -> dict:
    """object_pairs_hook that refuses duplicate keys instead of keeping the last."""
    result = {}
    for key, value in pairs:
        if key in result:
            raise DatasetError("Dataset is invalid", errors=[f"duplicate record name '{key}'"])
        result[key] = value
    return result


def parse_fragrance_data(raw: Mapping[str, Any], path: str = None) -> Mapping[str, FragranceRecord]:
    """Validate raw entries and build the record store.

    Args:
        raw: Mapping of name -> field mapping
        path: Source location, used in error messages

    Returns:
        Read-only mapping of name -> FragranceRecord in source order

    Raises:
        DatasetError: If any entry violates the schema
    """
    if not isinstance(raw, Mapping):
        raise DatasetError("Dataset must be a JSON object keyed by name", path=path)

    errors = []
    records = {}
    for name, fields in raw.items():
        result = RecordValidator.validate_record(name, fields)
        for warning in result.warnings:
            logger.warning(f"Dataset warning: {warning}")
        if not result:
            errors.extend(result.errors)
            continue

        records[name] = FragranceRecord(
            name=name,
            category=fields["category"],
            compound_type=fields["compound_type"],
            source=fields["source"],
            molecular_weight=float(fields["molecular_weight"]),
            pubchem_id=fields["pubchem_id"],
            smiles=fields["smiles"],
            fragrance=fields["fragrance"],
            molecular_formula=fields.get("molecular_formula"),
        )

    if errors:
        raise DatasetError("Dataset is invalid", path=path, errors=errors)

    return MappingProxyType(records)


def load_fragrance_data(path: Optional[Union[str, Path]] = None) -> Mapping[str, FragranceRecord]:
    """Load the fragrance dataset from disk.

    Args:
        path: JSON file to read (default: KAORI_DATA_PATH or the bundled file)

    Returns:
        Read-only mapping of name -> FragranceRecord

    Raises:
        DatasetError: If the file is missing, is not valid JSON or
            violates the record schema
    """
    data_path = Path(path or config.DATA_PATH or DEFAULT_DATA_PATH)

    try:
        with open(data_path, encoding="utf-8") as f:
            raw = json.load(f, object_pairs_hook=_reject_duplicates)
    except FileNotFoundError:
        raise DatasetError("Dataset file not found", path=str(data_path))
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset is not valid JSON: {e}", path=str(data_path))
    except DatasetError as e:
        e.path = str(data_path)
        raise

    records = parse_fragrance_data(raw, path=str(data_path))
    logger.info(f"Loaded {len(records)} fragrance records from {data_path}")
    return records
