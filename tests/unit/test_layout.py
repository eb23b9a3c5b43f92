"""
Unit tests for responsive layout selection.
"""
import pytest


class TestViewportSelector:
    """Tests for ViewportSelector."""

    def test_wide_until_reported(self):
        """Test the viewport is wide before any width is known."""
        from kaori.core.layout import ViewportSelector

        selector = ViewportSelector(breakpoint=768)
        assert selector.width is None
        assert selector.is_compact is False

    @pytest.mark.parametrize("width,compact", [
        (320, True),
        (767, True),
        (768, False),
        (1440, False),
    ])
    def test_breakpoint(self, width, compact):
        """Test widths below the breakpoint are compact."""
        from kaori.core.layout import ViewportSelector

        assert ViewportSelector(breakpoint=768, width=width).is_compact is compact

    def test_update_reports_changes(self):
        """Test update returns True only when the decision flips."""
        from kaori.core.layout import ViewportSelector

        selector = ViewportSelector(breakpoint=768)
        assert selector.update(1200) is False
        assert selector.update(500) is True
        assert selector.update(400) is False
        assert selector.update(900) is True
        assert selector.width == 900

    def test_update_ignores_invalid(self):
        """Test missing or non-positive widths are ignored."""
        from kaori.core.layout import ViewportSelector

        selector = ViewportSelector(breakpoint=768, width=500)
        assert selector.update(None) is False
        assert selector.update(0) is False
        assert selector.width == 500
        assert selector.is_compact is True

    def test_default_breakpoint(self):
        """Test the breakpoint defaults to config."""
        from kaori.config.settings import config
        from kaori.core.layout import ViewportSelector

        assert ViewportSelector().breakpoint == config.COMPACT_BREAKPOINT_PX


class TestResolve:
    """Tests for layout overrides."""

    def test_auto_follows_viewport(self):
        from kaori.core.layout import ViewportSelector

        assert ViewportSelector(breakpoint=768, width=500).resolve("auto") is True
        assert ViewportSelector(breakpoint=768, width=1000).resolve("auto") is False

    def test_forced_modes(self):
        """Test table/list ignore the viewport."""
        from kaori.core.layout import ViewportSelector

        assert ViewportSelector(breakpoint=768, width=500).resolve("table") is False
        assert ViewportSelector(breakpoint=768, width=1000).resolve("list") is True

    def test_unknown_mode_falls_back_to_auto(self, caplog):
        from kaori.core.layout import ViewportSelector

        with caplog.at_level("WARNING"):
            assert ViewportSelector(breakpoint=768, width=500).resolve("grid") is True
        assert "Unknown layout mode" in caplog.text


class TestParseWidth:
    """Tests for query parameter parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("1024", 1024),
        (800, 800),
        (None, None),
        ("", None),
        ("wide", None),
        ("-5", None),
        ("0", None),
    ])
    def test_parse_width(self, value, expected):
        from kaori.core.layout import parse_width

        assert parse_width(value) == expected
