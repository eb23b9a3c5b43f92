"""
Unit tests for UI helpers that do not need a running Streamlit session.
"""
import pytest


class TestViewportReporter:
    """Tests for the viewport reporter document."""

    def test_unreported_width(self):
        from kaori.ui.components.viewport_reporter import WIDTH_PARAM, get_viewport_reporter_html

        html = get_viewport_reporter_html(None, 768)
        assert "var reported = null;" in html
        assert "var breakpoint = 768;" in html
        assert f'"{WIDTH_PARAM}"' in html

    def test_reported_width(self):
        from kaori.ui.components.viewport_reporter import get_viewport_reporter_html

        html = get_viewport_reporter_html(1024, 900)
        assert "var reported = 1024;" in html
        assert "var breakpoint = 900;" in html

    def test_default_breakpoint(self):
        from kaori.config.settings import config
        from kaori.ui.components.viewport_reporter import get_viewport_reporter_html

        html = get_viewport_reporter_html()
        assert f"var breakpoint = {config.COMPACT_BREAKPOINT_PX};" in html


class TestFormatting:
    """Tests for table cell formatting."""

    @pytest.mark.parametrize("weight,expected", [
        (152.15, "152.15"),
        (100.1, "100.10"),
        (238.4082, "238.41"),
        (68, "68.00"),
    ])
    def test_format_weight(self, weight, expected):
        from kaori.ui.components.fragrance_table import format_weight

        assert format_weight(weight) == expected

    def test_known_compound_type(self, sample_records):
        from kaori.ui.components.fragrance_table import format_compound_type

        assert format_compound_type(sample_records["Apple"]) == "Ester"

    def test_unknown_compound_type_flagged(self, sample_records):
        """Test types outside the fixed set get the fallback glyph."""
        import dataclasses

        from kaori.data.models import FALLBACK_GLYPH
        from kaori.ui.components.fragrance_table import format_compound_type

        record = dataclasses.replace(sample_records["Apple"], compound_type="Thiol")
        assert format_compound_type(record) == f"{FALLBACK_GLYPH} Thiol"


class TestCategoryGlyph:
    """Tests for category glyph lookup."""

    def test_known_category(self):
        from kaori.data.models import category_glyph

        assert category_glyph("Citrus") == "🍋"

    def test_unknown_category(self):
        from kaori.data.models import FALLBACK_GLYPH, category_glyph

        assert category_glyph("Smoky") == FALLBACK_GLYPH

    def test_every_category_has_distinct_glyph(self):
        from kaori.data.models import FRAGRANCE_CATEGORIES

        glyphs = list(FRAGRANCE_CATEGORIES.values())
        assert len(glyphs) == len(set(glyphs))


class TestCompactSortControls:
    """Tests for the compact layout's sort selector."""

    @pytest.fixture
    def st_mock(self):
        from unittest.mock import MagicMock, patch

        with patch("kaori.ui.components.fragrance_list.st") as st:
            st.columns.return_value = (MagicMock(), MagicMock())
            yield st

    def test_selector_follows_sort_state(self, session_store, st_mock):
        """Test a header toggle made elsewhere shows up in the selector."""
        from kaori.core.sorting import CatalogSorter, SortState
        from kaori.ui.components.fragrance_list import SORT_SELECT_KEY, render_compact_sort_controls

        session_store[SORT_SELECT_KEY] = 'name'
        render_compact_sort_controls(CatalogSorter(SortState(key='molecular_weight')))

        assert session_store[SORT_SELECT_KEY] == 'molecular_weight'
        _, kwargs = st_mock.selectbox.call_args
        assert kwargs["key"] == SORT_SELECT_KEY
        assert "index" not in kwargs

    def test_selecting_new_key_sorts_ascending(self, session_store, st_mock):
        from kaori.core.sorting import SortDirection
        from kaori.ui.components.fragrance_list import SORT_SELECT_KEY, _on_sort_select
        from kaori.utils.session_state import SessionState

        session_store[SORT_SELECT_KEY] = 'source'
        _on_sort_select()

        state = SessionState.get_sort_state()
        assert state.key == 'source'
        assert state.direction is SortDirection.ASCENDING
        st_mock.query_params.update.assert_called_once_with({"sort": "source", "order": "asc"})
