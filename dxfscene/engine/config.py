"""Scene loading options."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any


@dataclass(frozen=True)
class SceneOptions:
    """Controls color correction of loaded entities."""

    # Invert pure white/black entities that would vanish on the background
    black_white_inversion: bool = True
    # Adjust any color with too little contrast against the background
    color_correction: bool = False
    # Background (frame buffer clear) color, 0xRRGGBB
    clear_color: int = 0xFFFFFF

    # Carried for the parsing stage, not used by the core
    file_encoding: str = "utf-8"
    # Keep the parsed drawing passed along with the scene
    retain_parsed_dxf: bool = False

    def merged(self, **overrides: Any) -> SceneOptions:
        """Copy with ``overrides`` applied; None values and unknown names are ignored."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **changes)
