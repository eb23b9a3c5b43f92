"""
Viewer lifecycle controller.

Coordinates the structure fetcher and renderer for one mounted viewer:

    idle -> fetching -> rendering -> ready | failed

Selecting a different compound starts a new cycle and supersedes the
old one. Every completion callback compares its captured cycle number
with the controller's current one before touching state or surface, so
late results from superseded cycles (or from an unmounted viewer) are
dropped.

Thread Safety:
- Fetches run on a shared ThreadPoolExecutor
- All state and surface access happens under the controller's lock
- Done callbacks run in worker threads but use the lock
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from kaori.config.settings import config
from kaori.core.renderer import RenderSurface, StructureRenderer
from kaori.services.pubchem_client import StructureFetcher, get_structure_fetcher
from kaori.utils.exceptions import (
    FetchError,
    RenderError,
    StaleResultDiscarded,
    ViewerError,
)

logger = logging.getLogger(__name__)


class ViewerStatus(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    RENDERING = "rendering"
    READY = "ready"
    FAILED = "failed"

    @property
    def settled(self) -> bool:
        return self in (ViewerStatus.READY, ViewerStatus.FAILED)


@dataclass
class ViewerSession:
    """State of one fetch-then-render cycle."""
    compound_id: int
    cycle: int
    status: ViewerStatus = ViewerStatus.FETCHING
    error: Optional[ViewerError] = None
    attempts: int = 0


class ViewerController:
    """Owns one rendering surface and runs at most one cycle on it at a time.

    Example:
        >>> controller = ViewerController(Mol3DSurface())
        >>> controller.select(1183)
        1
        >>> controller.wait(timeout=30)
        <ViewerStatus.READY: 'ready'>
        >>> controller.unmount()
    """

    def __init__(
        self,
        surface: RenderSurface,
        fetcher: StructureFetcher = None,
        renderer: StructureRenderer = None,
        executor=None,
        background: str = None,
        retries: int = None,
        fmt: str = None
    ):
        """
        Args:
            surface: Rendering surface, exclusively owned from now on
            fetcher: Structure fetcher (default: shared PubChem fetcher)
            renderer: Structure renderer (default: stick style renderer)
            executor: Object with ``submit(fn, *args) -> Future``
                (default: shared viewer thread pool)
            background: Surface background color
            retries: Extra fetch attempts for transient failures
            fmt: Structure text format passed to the renderer
        """
        self._surface = surface
        self._fetcher = fetcher or get_structure_fetcher()
        self._renderer = renderer or StructureRenderer()
        self._executor = executor or get_viewer_executor()
        self._background = background or config.VIEWER_BACKGROUND
        self._retries = config.VIEWER_FETCH_RETRIES if retries is None else retries
        self._format = fmt or config.STRUCTURE_FORMAT

        self._lock = threading.RLock()
        self._settled = threading.Condition(self._lock)
        self._cycle = 0
        self._mounted = True
        self._session: Optional[ViewerSession] = None
        self._future: Optional[Future] = None

    # Read-only views

    @property
    def surface(self) -> RenderSurface:
        return self._surface

    @property
    def cycle(self) -> int:
        with self._lock:
            return self._cycle

    @property
    def is_mounted(self) -> bool:
        with self._lock:
            return self._mounted

    @property
    def session(self) -> Optional[ViewerSession]:
        with self._lock:
            return self._session

    @property
    def status(self) -> ViewerStatus:
        with self._lock:
            return self._session.status if self._session else ViewerStatus.IDLE

    @property
    def error(self) -> Optional[ViewerError]:
        with self._lock:
            return self._session.error if self._session else None

    # Lifecycle

    def select(self, compound_id: int) -> int:
        """Show a compound, superseding any cycle in flight.

        Re-selecting the current compound is a no-op unless its last
        cycle failed.

        Returns:
            The cycle number now responsible for the viewer

        Raises:
            RuntimeError: If the viewer has been unmounted
        """
        with self._lock:
            if not self._mounted:
                raise RuntimeError("Viewer has been unmounted")
            current = self._session
            if (
                current is not None
                and current.compound_id == compound_id
                and current.status is not ViewerStatus.FAILED
            ):
                return current.cycle
            return self._start_cycle(compound_id)

    def retry(self) -> Optional[int]:
        """Restart the current compound in a fresh cycle."""
        with self._lock:
            if not self._mounted or self._session is None:
                return None
            return self._start_cycle(self._session.compound_id)

    def unmount(self) -> None:
        """Tear the viewer down. Outstanding results will be discarded."""
        with self._lock:
            if not self._mounted:
                return
            self._mounted = False
            self._cycle += 1
            self._cancel_pending()
            self._session = None
            try:
                self._surface.dispose()
            except Exception as e:
                logger.warning(f"Error disposing viewer surface: {e}")
            self._settled.notify_all()
        logger.info("Viewer unmounted")

    def wait(self, timeout: Optional[float] = None) -> ViewerStatus:
        """Block until the current cycle settles, the viewer unmounts or
        the timeout expires; return the status at that point."""
        with self._settled:
            self._settled.wait_for(self._is_quiet, timeout)
            return self.status

    # Internals (lock held)

    def _is_quiet(self) -> bool:
        return not self._mounted or self._session is None or self._session.status.settled

    def _start_cycle(self, compound_id: int) -> int:
        self._cycle += 1
        cycle = self._cycle
        self._cancel_pending()
        self._session = ViewerSession(compound_id=compound_id, cycle=cycle)
        logger.info(f"Viewer cycle {cycle}: fetching structure for CID {compound_id}")
        self._submit_fetch(cycle)
        return cycle

    def _submit_fetch(self, cycle: int) -> None:
        session = self._session
        session.attempts += 1
        try:
            future = self._executor.submit(self._fetcher.fetch, session.compound_id)
        except RuntimeError as e:
            # Executor already shut down
            self._fail(FetchError(f"Could not schedule fetch: {e}", compound_id=session.compound_id))
            return
        self._future = future
        future.add_done_callback(lambda f: self._on_fetch_done(cycle, f))

    def _cancel_pending(self) -> None:
        future, self._future = self._future, None
        if future is not None and not future.done():
            future.cancel()

    def _ensure_current(self, cycle: int) -> None:
        if not self._mounted or cycle != self._cycle:
            raise StaleResultDiscarded(cycle, self._cycle)

    def _fail(self, error: ViewerError) -> None:
        session = self._session
        if error.compound_id is None:
            error.compound_id = session.compound_id
        session.status = ViewerStatus.FAILED
        session.error = error
        logger.warning(f"Viewer cycle {session.cycle} failed for CID {session.compound_id}: {error}")

    def _on_fetch_done(self, cycle: int, future: Future) -> None:
        with self._lock:
            try:
                self._ensure_current(cycle)
                if future.cancelled():
                    return

                try:
                    structure_text = future.result()
                except FetchError as e:
                    if e.is_transient and self._session.attempts <= self._retries:
                        logger.warning(
                            f"Fetch attempt {self._session.attempts} for CID "
                            f"{self._session.compound_id} failed ({e}), retrying"
                        )
                        self._submit_fetch(cycle)
                        return
                    self._fail(e)
                    return
                except Exception as e:
                    self._fail(FetchError(f"Unexpected fetch failure: {e}"))
                    return

                self._draw(cycle, structure_text)
            except StaleResultDiscarded as e:
                logger.debug(str(e))
            finally:
                self._settled.notify_all()

    def _draw(self, cycle: int, structure_text: str) -> None:
        session = self._session
        session.status = ViewerStatus.RENDERING
        try:
            self._ensure_current(cycle)
            self._renderer.reset(self._surface, self._background)
            self._ensure_current(cycle)
            self._renderer.load_and_draw(self._surface, structure_text, self._format)
        except RenderError as e:
            self._fail(e)
            return
        except StaleResultDiscarded:
            raise
        except Exception as e:
            self._fail(RenderError(f"Unexpected render failure: {e}"))
            return
        session.status = ViewerStatus.READY
        logger.info(f"Viewer cycle {cycle}: rendered CID {session.compound_id}")


# Global executor instance (lazy initialization with thread safety)
_viewer_executor: Optional[ThreadPoolExecutor] = None
_viewer_executor_lock = threading.Lock()


def get_viewer_executor() -> ThreadPoolExecutor:
    """Get the shared structure fetch thread pool (thread-safe)."""
    global _viewer_executor
    if _viewer_executor is None:
        with _viewer_executor_lock:
            if _viewer_executor is None:
                _viewer_executor = ThreadPoolExecutor(
                    max_workers=config.VIEWER_MAX_WORKERS,
                    thread_name_prefix="structure_fetch"
                )
                logger.info(f"Viewer executor initialized with {config.VIEWER_MAX_WORKERS} workers")
    return _viewer_executor
