"""Session state management for Kaori.

This module provides centralized session state management for Streamlit,
with features like:
- Default value initialization
- Type-safe access
- Sort state transitions (the page's only way to change ordering)
- Structure viewer ownership (one mounted viewer per browser session)
"""

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from kaori.core.sorting import SortState
from kaori.core.viewer import ViewerController

logger = logging.getLogger(__name__)

# Layout modes
LAYOUT_AUTO = "auto"


class SessionState:
    """Centralized session state management for Kaori.

    This class provides a clean interface for managing Streamlit session state.
    It handles initialization, access, and cleanup of session state values.

    Example:
        >>> from kaori.utils.session_state import SessionState
        >>> SessionState.init_defaults()
        >>> SessionState.toggle_sort('molecular_weight')
        SortState(key='molecular_weight', direction=<SortDirection.ASCENDING: 'asc'>)
    """

    # Default value factories for session state keys
    # Using factories prevents mutable defaults from being shared across sessions
    _DEFAULT_FACTORIES: Dict[str, Callable[[], Any]] = {
        # Session isolation - unique ID per browser session
        'session_id': lambda: str(uuid.uuid4()),

        # Catalog state
        'sort_state': lambda: None,  # restored from the URL on first render
        'layout_mode': lambda: LAYOUT_AUTO,
        'viewport_width': lambda: None,

        # Structure viewer
        'viewer': lambda: None,
        'viewer_compound': lambda: None,
    }

    # Keys associated with each mode
    MODE_KEYS: Dict[str, List[str]] = {
        'viewer': [
            'viewer',
            'viewer_compound',
        ],
    }

    @classmethod
    def _get_session_state(cls):
        """Get Streamlit session state (lazy import for testing)."""
        import streamlit as st
        return st.session_state

    @classmethod
    def init_defaults(cls) -> None:
        """Initialize default session state values.

        Call this at the start of your Streamlit app to ensure
        all expected keys exist with sensible defaults.
        """
        session_state = cls._get_session_state()

        for key, factory in cls._DEFAULT_FACTORIES.items():
            if key not in session_state:
                session_state[key] = factory()
                logger.debug(f"Initialized session state key: {key}")

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a value from session state."""
        session_state = cls._get_session_state()
        return session_state.get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set a value in session state."""
        session_state = cls._get_session_state()
        session_state[key] = value
        logger.debug(f"Set session state: {key} = {type(value).__name__}")

    @classmethod
    def clear(cls, key: str) -> None:
        """Clear a session state key."""
        session_state = cls._get_session_state()
        if key in session_state:
            del session_state[key]
            logger.debug(f"Cleared session state key: {key}")

    @classmethod
    def clear_mode(cls, mode: str) -> None:
        """Clear all state associated with a specific mode."""
        keys = cls.MODE_KEYS.get(mode, [])
        for key in keys:
            cls.clear(key)
        logger.debug(f"Cleared session state for mode: {mode}")

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if a key exists in session state."""
        session_state = cls._get_session_state()
        return key in session_state

    # Sort helpers
    @classmethod
    def get_sort_state(cls) -> SortState:
        """Get the catalog sort state."""
        return cls.get('sort_state') or SortState()

    @classmethod
    def toggle_sort(cls, key: str) -> SortState:
        """Apply a header click: same key flips, a new key starts ascending."""
        state = cls.get_sort_state().toggle(key)
        cls.set('sort_state', state)
        return state

    @classmethod
    def restore_sort(cls, key: Optional[str], direction: Optional[str]) -> SortState:
        """Seed the sort state from URL parameters, once per session.

        An already established sort state always wins over the URL.
        """
        state = cls.get('sort_state')
        if state is None:
            state = SortState.from_params(key, direction)
            cls.set('sort_state', state)
            logger.debug(f"Restored sort state {state.key}/{state.direction.value}")
        return state

    # Layout helpers
    @classmethod
    def get_layout_mode(cls) -> str:
        return cls.get('layout_mode', LAYOUT_AUTO)

    # Viewer helpers
    @classmethod
    def get_viewer(cls) -> Optional[ViewerController]:
        """Get the mounted structure viewer, if any."""
        return cls.get('viewer')

    @classmethod
    def open_viewer(cls, compound_name: str, factory: Callable[[], ViewerController] = None) -> ViewerController:
        """Return the viewer for ``compound_name``, mounting a new one if needed.

        A viewer opened for a different compound is unmounted first.

        Args:
            compound_name: Record shown in the viewer dialog
            factory: Builds the controller (default: 3Dmol.js surface with
                the shared fetcher, renderer and executor)
        """
        viewer = cls.get_viewer()
        if viewer is not None and viewer.is_mounted and cls.get('viewer_compound') == compound_name:
            return viewer

        cls.close_viewer()
        if factory is None:
            from kaori.ui.components.structure_viewer import Mol3DSurface
            viewer = ViewerController(Mol3DSurface())
        else:
            viewer = factory()
        cls.set('viewer', viewer)
        cls.set('viewer_compound', compound_name)
        logger.info(f"Mounted structure viewer for {compound_name}")
        return viewer

    @classmethod
    def close_viewer(cls) -> None:
        """Unmount the structure viewer (safe to call when none is open)."""
        viewer = cls.get_viewer()
        if viewer is not None:
            viewer.unmount()
        cls.clear_mode('viewer')

    # Session ID helpers
    @classmethod
    def get_session_id(cls) -> str:
        """Get the unique session ID for this browser session.

        Returns:
            Unique session ID string (UUID format)
        """
        session_id = cls.get('session_id')
        if not session_id:
            session_id = str(uuid.uuid4())
            cls.set('session_id', session_id)
            logger.info(f"Generated new session ID: {session_id[:8]}...")
        return session_id
