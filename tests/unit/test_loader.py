"""
Unit tests for dataset loading and record validation.
"""
import json
from types import MappingProxyType
from unittest.mock import patch

import pytest


def _write(tmp_path, text, name="fragrances.json"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestBundledDataset:
    """Tests for the dataset shipped with the package."""

    def test_loads_all_records(self):
        from kaori.data.loader import load_fragrance_data
        from kaori.data.models import FragranceRecord

        records = load_fragrance_data()

        assert len(records) == 29
        assert all(isinstance(r, FragranceRecord) for r in records.values())

    def test_source_order_preserved(self):
        from kaori.data.loader import load_fragrance_data

        names = list(load_fragrance_data())
        assert names[0] == "Limonene"
        assert names[-1] == "Geosmin"

    def test_record_fields(self):
        from kaori.data.loader import load_fragrance_data

        vanillin = load_fragrance_data()["Vanillin"]
        assert vanillin.pubchem_id == 1183
        assert vanillin.molecular_weight == pytest.approx(152.15)
        assert vanillin.category == "Sweet"
        assert vanillin.category_glyph == "🍯"
        assert vanillin.molecular_formula == "C8H8O3"

    def test_categories_and_types_known(self):
        """Test the bundled data only uses the fixed sets."""
        from kaori.data.loader import load_fragrance_data
        from kaori.data.models import COMPOUND_TYPES, FRAGRANCE_CATEGORIES

        for record in load_fragrance_data().values():
            assert record.category in FRAGRANCE_CATEGORIES
            assert record.compound_type in COMPOUND_TYPES

    def test_store_is_read_only(self):
        from kaori.data.loader import load_fragrance_data

        records = load_fragrance_data()
        assert isinstance(records, MappingProxyType)
        with pytest.raises(TypeError):
            records["New"] = None

    def test_unique_pubchem_ids(self):
        from kaori.data.loader import load_fragrance_data

        ids = [r.pubchem_id for r in load_fragrance_data().values()]
        assert len(ids) == len(set(ids))


class TestLoadFragranceData:
    """Tests for loading from disk."""

    def test_custom_path(self, tmp_path, dataset_entry):
        from kaori.data.loader import load_fragrance_data

        path = _write(tmp_path, json.dumps({"Vanillin": dataset_entry}))
        records = load_fragrance_data(path)
        assert list(records) == ["Vanillin"]

    def test_path_from_config(self, tmp_path, dataset_entry):
        """Test KAORI_DATA_PATH is used when no path is given."""
        from kaori.data.loader import load_fragrance_data

        path = _write(tmp_path, json.dumps({"Vanillin": dataset_entry}))
        with patch("kaori.data.loader.config") as mock_config:
            mock_config.DATA_PATH = str(path)
            records = load_fragrance_data()
        assert len(records) == 1

    def test_missing_file(self, tmp_path):
        from kaori.data.loader import load_fragrance_data
        from kaori.utils.exceptions import DatasetError

        with pytest.raises(DatasetError) as exc_info:
            load_fragrance_data(tmp_path / "nope.json")
        assert exc_info.value.path.endswith("nope.json")

    def test_invalid_json(self, tmp_path):
        from kaori.data.loader import load_fragrance_data
        from kaori.utils.exceptions import DatasetError

        path = _write(tmp_path, "{not json")
        with pytest.raises(DatasetError, match="not valid JSON"):
            load_fragrance_data(path)

    def test_duplicate_names_rejected(self, tmp_path, dataset_entry):
        """Test duplicate keys fail instead of silently overwriting."""
        from kaori.data.loader import load_fragrance_data
        from kaori.utils.exceptions import DatasetError

        entry = json.dumps(dataset_entry)
        path = _write(tmp_path, f'{{"Vanillin": {entry}, "Vanillin": {entry}}}')

        with pytest.raises(DatasetError) as exc_info:
            load_fragrance_data(path)

        assert "duplicate record name 'Vanillin'" in str(exc_info.value)
        assert exc_info.value.path == str(path)

    def test_top_level_must_be_object(self, tmp_path):
        from kaori.data.loader import load_fragrance_data
        from kaori.utils.exceptions import DatasetError

        path = _write(tmp_path, "[]")
        with pytest.raises(DatasetError):
            load_fragrance_data(path)


class TestParseFragranceData:
    """Tests for schema validation while building the store."""

    def test_missing_field(self, dataset_entry):
        from kaori.data.loader import parse_fragrance_data
        from kaori.utils.exceptions import DatasetError

        del dataset_entry["source"]
        with pytest.raises(DatasetError) as exc_info:
            parse_fragrance_data({"Vanillin": dataset_entry})
        assert "Vanillin: missing field 'source'" in exc_info.value.errors

    def test_all_errors_reported(self, dataset_entry):
        """Test every bad entry is listed, not just the first."""
        from kaori.data.loader import parse_fragrance_data
        from kaori.utils.exceptions import DatasetError

        bad_weight = dict(dataset_entry, molecular_weight=0)
        bad_cid = dict(dataset_entry, pubchem_id="1183")
        with pytest.raises(DatasetError) as exc_info:
            parse_fragrance_data({"A": bad_weight, "B": bad_cid, "C": dataset_entry})

        assert len(exc_info.value.errors) == 2

    def test_unknown_category_is_warning(self, dataset_entry, caplog):
        """Test unknown categories load with the fallback glyph."""
        from kaori.data.loader import parse_fragrance_data
        from kaori.data.models import FALLBACK_GLYPH

        entry = dict(dataset_entry, category="Smoky")
        with caplog.at_level("WARNING"):
            records = parse_fragrance_data({"Guaiacol": entry})

        assert records["Guaiacol"].category_glyph == FALLBACK_GLYPH
        assert "unknown category 'Smoky'" in caplog.text

    def test_integer_weight_becomes_float(self, dataset_entry):
        from kaori.data.loader import parse_fragrance_data

        records = parse_fragrance_data({"Vanillin": dict(dataset_entry, molecular_weight=152)})
        assert isinstance(records["Vanillin"].molecular_weight, float)

    def test_formula_optional(self, dataset_entry):
        from kaori.data.loader import parse_fragrance_data

        del dataset_entry["molecular_formula"]
        records = parse_fragrance_data({"Vanillin": dataset_entry})
        assert records["Vanillin"].molecular_formula is None


class TestRecordValidator:
    """Tests for RecordValidator."""

    def test_valid_entry(self, dataset_entry):
        from kaori.utils.validators import RecordValidator

        result = RecordValidator.validate_record("Vanillin", dataset_entry)
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_invalid_name(self, name, dataset_entry):
        from kaori.utils.validators import RecordValidator

        assert not RecordValidator.validate_record(name, dataset_entry)

    def test_entry_must_be_mapping(self):
        from kaori.utils.validators import RecordValidator

        result = RecordValidator.validate_record("Vanillin", ["not", "a", "dict"])
        assert "Vanillin: entry must be an object" in result.errors

    @pytest.mark.parametrize("weight", [0, -1.5, "152.15", True, None])
    def test_invalid_weight(self, weight, dataset_entry):
        from kaori.utils.validators import RecordValidator

        entry = dict(dataset_entry, molecular_weight=weight)
        assert not RecordValidator.validate_record("Vanillin", entry)

    def test_text_field_type(self, dataset_entry):
        from kaori.utils.validators import RecordValidator

        entry = dict(dataset_entry, smiles=123)
        result = RecordValidator.validate_record("Vanillin", entry)
        assert "Vanillin: field 'smiles' must be a string" in result.errors

    def test_unknown_compound_type_warns(self, dataset_entry):
        from kaori.utils.validators import RecordValidator

        entry = dict(dataset_entry, compound_type="Thiol")
        result = RecordValidator.validate_record("Vanillin", entry)
        assert result.is_valid
        assert result.warnings == ["Vanillin: unknown compound type 'Thiol'"]

    @pytest.mark.parametrize("cid,valid", [
        (1183, True),
        (0, False),
        (-1, False),
        (True, False),
        (1183.0, False),
    ])
    def test_validate_pubchem_id(self, cid, valid):
        from kaori.utils.validators import RecordValidator

        assert RecordValidator.validate_pubchem_id(cid).is_valid is valid
