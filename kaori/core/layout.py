"""Responsive view selection (table vs. collapsible list)."""

import logging
from typing import Optional

from kaori.config.settings import LAYOUT_MODES, config

logger = logging.getLogger(__name__)


class ViewportSelector:
    """Tracks the viewport width and exposes ``is_compact``.

    Widths below the breakpoint select the compact (list) layout. Until a
    width has been reported the viewport is treated as wide.
    """

    def __init__(self, breakpoint: int = None, width: Optional[int] = None):
        self.breakpoint = breakpoint or config.COMPACT_BREAKPOINT_PX
        self._width: Optional[int] = None
        self._compact = False
        if width is not None:
            self.update(width)

    @property
    def width(self) -> Optional[int]:
        return self._width

    @property
    def is_compact(self) -> bool:
        return self._compact

    def update(self, width: Optional[int]) -> bool:
        """Record a resize signal.

        Returns:
            True if the compact/wide decision changed
        """
        if width is None or width <= 0:
            return False
        self._width = width
        compact = width < self.breakpoint
        changed = compact != self._compact
        self._compact = compact
        if changed:
            logger.debug(f"Viewport {width}px -> {'compact' if compact else 'wide'} layout")
        return changed

    def resolve(self, mode: str = "auto") -> bool:
        """Apply a layout override and return whether to render compact.

        Args:
            mode: 'auto' follows the viewport, 'table' and 'list' force a shape
        """
        if mode not in LAYOUT_MODES:
            logger.warning(f"Unknown layout mode {mode!r}, using auto")
            mode = "auto"
        if mode == "table":
            return False
        if mode == "list":
            return True
        return self._compact


def parse_width(value) -> Optional[int]:
    """Parse a width reported through a query parameter."""
    try:
        width = int(value)
    except (TypeError, ValueError):
        return None
    return width if width > 0 else None
