"""Entity (engine output unit) and SceneContext (per-load session state).

The whole context is built once per load and discarded on the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from dxfscene.engine.buffers import SceneBuffers
from dxfscene.engine.keys import GeometryType
from dxfscene.engine.registry import BlockRegistry, LayerRegistry
from dxfscene.models.scene import Bounds, Point


@dataclass
class Entity:
    """One renderable piece of geometry with a fully resolved color."""

    # Nx2 array of (x, y), owned by the entity
    points: NDArray[np.float32]
    # Concrete 0xRRGGBB, already contrast corrected
    color: int
    layer: str
    geometry_type: GeometryType
    # Names from the originating batch key, for traceability only
    block: str | None = None
    parent_block: str | None = None
    # Transforms of the instance that produced this entity, None for direct geometry
    instance_transforms: NDArray[np.float32] | None = None

    @property
    def point_count(self) -> int:
        return int(self.points.shape[0])

    @property
    def vertices(self) -> list[dict[str, float]]:
        return [{"x": float(x), "y": float(y)} for x, y in self.points]

    def to_dict(self) -> dict[str, Any]:
        return {
            "vertices": self.vertices,
            "color": self.color,
            "layer": self.layer,
            "geometryType": int(self.geometry_type),
            "block": self.block,
            "parentBlock": self.parent_block,
        }


@dataclass
class SceneContext:
    """Everything one load produces. Read-only after the load completes."""

    buffers: SceneBuffers | None = None
    layers: LayerRegistry = field(default_factory=LayerRegistry)
    blocks: BlockRegistry = field(default_factory=BlockRegistry)
    entities: list[Entity] = field(default_factory=list)
    origin: Point | None = None
    bounds: Bounds | None = None
    has_missing_chars: bool = False
    dxf: Any = None

    @property
    def num_entities(self) -> int:
        return len(self.entities)

    def dispose(self) -> None:
        """Release geometry views and per-layer entity lists."""
        self.blocks.dispose()
        self.layers.dispose()
        self.layers.clear()
        self.entities = []
        if self.buffers is not None:
            self.buffers.release()
            self.buffers = None
        self.dxf = None
