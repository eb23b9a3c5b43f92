"""
Structure renderer.

Drives an exclusively owned rendering surface: reset it, load one
structure, apply the catalog-wide stick style, frame the camera and
draw. Any failure comes back as RenderError so the viewer controller can
contain it.
"""

import logging
from typing import Any, Dict, Optional, Protocol

from rdkit import Chem

from kaori.config.settings import config
from kaori.utils.exceptions import RenderError

logger = logging.getLogger(__name__)

# Uniform style for every compound
STRUCTURE_STYLE: Dict[str, Any] = {"stick": {}}
ALL_ATOMS: Dict[str, Any] = {}

_PARSERS = {
    "sdf": lambda text: Chem.MolFromMolBlock(text, sanitize=False, removeHs=False),
    "mol": lambda text: Chem.MolFromMolBlock(text, sanitize=False, removeHs=False),
    "pdb": lambda text: Chem.MolFromPDBBlock(text, sanitize=False, removeHs=False),
    "mol2": lambda text: Chem.MolFromMol2Block(text, sanitize=False, removeHs=False),
    "xyz": lambda text: Chem.MolFromXYZBlock(text),
}


class RenderSurface(Protocol):
    """Capability set required from a 3D molecular rendering surface."""

    def create(self, background: str = None) -> None: ...

    def set_background(self, color: str) -> None: ...

    def add_model(self, data: str, fmt: str) -> None: ...

    def set_style(self, selector: Dict[str, Any], style: Dict[str, Any]) -> None: ...

    def zoom_to(self, margin: float = 1.0) -> None: ...

    def render(self) -> None: ...

    def dispose(self) -> None: ...


def check_structure_text(structure_text: str, fmt: str) -> int:
    """Parse structure text with RDKit to catch malformed payloads early.

    Returns:
        Number of atoms in the first record

    Raises:
        RenderError: If the text is empty, the format is unknown or the
            payload cannot be parsed
    """
    if not structure_text or not structure_text.strip():
        raise RenderError("Structure text is empty")

    parser = _PARSERS.get(fmt)
    if parser is None:
        raise RenderError(f"Unsupported structure format: {fmt!r}")

    try:
        mol = parser(structure_text)
    except Exception as e:
        raise RenderError(f"Could not parse {fmt} structure: {e}") from e

    if mol is None or mol.GetNumAtoms() == 0:
        raise RenderError(f"Could not parse {fmt} structure")
    return mol.GetNumAtoms()


class StructureRenderer:
    """Loads structure text onto a rendering surface."""

    def __init__(
        self,
        style: Optional[Dict[str, Any]] = None,
        zoom_margin: float = None,
        validate: bool = True
    ):
        self.style = style or STRUCTURE_STYLE
        self.zoom_margin = zoom_margin or config.VIEWER_ZOOM_MARGIN
        self.validate = validate

    def reset(self, surface: RenderSurface, background: str = None) -> None:
        """(Re)initialize a surface, discarding any previously loaded models.

        Raises:
            RenderError: If the surface rejects the reset (e.g. disposed)
        """
        background = background or config.VIEWER_BACKGROUND
        try:
            surface.create(background)
            surface.set_background(background)
        except Exception as e:
            raise RenderError(f"Could not reset surface: {e}") from e

    def load_and_draw(
        self,
        surface: RenderSurface,
        structure_text: str,
        fmt: str = None
    ) -> None:
        """Load one structure, style it, frame it and draw.

        Raises:
            RenderError: On malformed structure text or surface failures
        """
        fmt = fmt or config.STRUCTURE_FORMAT
        if self.validate:
            atoms = check_structure_text(structure_text, fmt)
            logger.debug(f"Structure parsed: {atoms} atoms ({fmt})")

        try:
            surface.add_model(structure_text, fmt)
            surface.set_style(ALL_ATOMS, self.style)
            surface.zoom_to(self.zoom_margin)
            surface.render()
        except Exception as e:
            raise RenderError(f"Could not draw structure: {e}") from e
