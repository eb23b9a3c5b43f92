"""
3Dmol.js rendering surface.

The browser does the actual drawing; this module records the calls made
against a surface (create, background, models, style, camera, render)
and replays them as a self-contained HTML/JS document that Streamlit
embeds with ``components.html``.
"""

import html
import json
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from kaori.config.settings import config

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = frozenset({"sdf", "mol", "pdb", "xyz", "mol2"})


def _js(value: Any) -> str:
    """Encode a Python value as a JS literal that is safe inside <script>."""
    return json.dumps(value).replace("</", "<\\/")


class Mol3DSurface:
    """One 3Dmol.js viewer element.

    Calls are recorded in order. ``create`` starts a fresh element state
    with no models, and ``dispose`` makes every later call fail with
    RuntimeError.
    """

    def __init__(self, element_id: str = None, height: int = None):
        self.element_id = element_id or f"kaori-viewer-{uuid.uuid4().hex[:12]}"
        self.height = height or config.VIEWER_HEIGHT_PX
        self._background = config.VIEWER_BACKGROUND
        self._calls: List[Tuple[str, tuple]] = []
        self._models: List[Tuple[str, int]] = []
        self._created = False
        self._rendered = False
        self._disposed = False

    def _check(self) -> None:
        if self._disposed:
            raise RuntimeError(f"Surface {self.element_id} has been disposed")
        if not self._created:
            raise RuntimeError(f"Surface {self.element_id} has not been created")

    # Capability set

    def create(self, background: str = None) -> None:
        if self._disposed:
            raise RuntimeError(f"Surface {self.element_id} has been disposed")
        self._background = background or self._background
        self._calls = []
        self._models = []
        self._created = True
        self._rendered = False

    def set_background(self, color: str) -> None:
        self._check()
        self._background = color
        self._calls.append(("setBackgroundColor", (color,)))

    def add_model(self, data: str, fmt: str) -> None:
        self._check()
        if fmt not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported structure format: {fmt!r}")
        self._models.append((fmt, len(data)))
        self._calls.append(("addModel", (data, fmt)))
        self._rendered = False

    def set_style(self, selector: Dict[str, Any], style: Dict[str, Any]) -> None:
        self._check()
        self._calls.append(("setStyle", (selector, style)))

    def zoom_to(self, margin: float = 1.0) -> None:
        self._check()
        self._calls.append(("zoomTo", ()))
        if margin != 1.0:
            self._calls.append(("zoom", (margin,)))

    def render(self) -> None:
        self._check()
        self._calls.append(("render", ()))
        self._rendered = True

    def dispose(self) -> None:
        self._disposed = True
        self._calls = []
        self._models = []
        self._rendered = False

    # Introspection

    @property
    def models(self) -> List[Tuple[str, int]]:
        """(format, payload length) for each loaded model."""
        return list(self._models)

    @property
    def calls(self) -> List[str]:
        return [name for name, _ in self._calls]

    @property
    def is_rendered(self) -> bool:
        return self._rendered

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def to_html(self, height: Optional[int] = None) -> str:
        """Build the HTML document that replays the recorded calls."""
        height = height or self.height
        statements = "\n".join(
            f"        viewer.{name}({', '.join(_js(arg) for arg in args)});"
            for name, args in self._calls
        )
        element_id = _js(self.element_id)
        return f"""
    <script src="{config.VIEWER_SCRIPT_URL}"></script>
    <div id={element_id} style="width:100%;height:{height}px;position:relative;border-radius:8px;"></div>
    <script>
    (function() {{
        const element = document.getElementById({element_id});
        if (typeof $3Dmol === 'undefined' || !element) {{
            console.error('[Kaori viewer] 3Dmol.js not available');
            return;
        }}
        const viewer = $3Dmol.createViewer(element, {{backgroundColor: {_js(self._background)}}});
{statements}
    }})();
    </script>
    """


def get_viewer_placeholder(message: str, height: int = None) -> str:
    """Static placeholder shown instead of a structure (loading or failure)."""
    height = height or config.VIEWER_HEIGHT_PX
    return (
        f"<div style='height: {height}px; display: flex; align-items: center; "
        f"justify-content: center; color: #888; font-size: 16px; background: #f8f9fa; "
        f"border-radius: 8px;'>{html.escape(message)}</div>"
    )
