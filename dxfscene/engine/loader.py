"""Scene loader: registers layers and blocks, then expands every batch into entities."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from typing import Any

from dxfscene.engine.batch import Batch
from dxfscene.engine.buffers import SceneBuffers
from dxfscene.engine.config import SceneOptions
from dxfscene.engine.context import Entity, SceneContext
from dxfscene.engine.contrast import ColorCorrector
from dxfscene.engine.errors import SceneError
from dxfscene.engine.expander import InstanceExpander
from dxfscene.engine.registry import LayerInfo
from dxfscene.models.scene import Bounds, Point, SceneModel

logger = logging.getLogger(__name__)


class SceneLoader:
    """Holds the state of the most recent load. Not safe for concurrent use."""

    def __init__(self, options: SceneOptions | None = None) -> None:
        self.options = options or SceneOptions()
        self.corrector = ColorCorrector(self.options)
        self.ctx = SceneContext()

    def load(self, scene: SceneModel | dict[str, Any]) -> SceneContext:
        """Replace the current state with the given scene.

        On any ``SceneError`` or ``ValidationError`` the loader is left cleared
        and the error re-raised.
        """
        self.clear()
        if not isinstance(scene, SceneModel):
            scene = SceneModel.model_validate(scene)

        start = time.perf_counter()
        try:
            self._load(scene)
        except SceneError as e:
            logger.warning("Scene load failed: %s", e)
            self.clear()
            raise

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Scene loaded: %d entities, %d layers, %d blocks in %.1fms",
            self.ctx.num_entities,
            len(self.ctx.layers),
            self.ctx.blocks.count,
            elapsed,
        )
        return self.ctx

    def _load(self, scene: SceneModel) -> None:
        ctx = self.ctx
        ctx.buffers = SceneBuffers(scene.vertices, scene.indices)
        ctx.origin = scene.origin
        ctx.bounds = scene.bounds
        ctx.has_missing_chars = scene.has_missing_chars
        if self.options.retain_parsed_dxf:
            ctx.dxf = scene.dxf

        for layer in scene.layers:
            ctx.layers.register(layer.name, layer.display_name, layer.color)
        ctx.layers.ensure_default()

        batches = [
            Batch.from_raw(raw, ctx.buffers, ctx.layers, scene.point_shape_has_dot)
            for raw in scene.batches
        ]

        # First pass: all block definitions must be known before any instance expands
        top_level: list[Batch] = []
        for batch in batches:
            if not ctx.blocks.register(batch):
                top_level.append(batch)

        # Second pass: instantiate entities
        expander = InstanceExpander(ctx.blocks, ctx.layers, self.corrector)
        for batch in top_level:
            for entity in expander.expand(batch):
                self._push_entity(entity)

    def _push_entity(self, entity: Entity) -> None:
        self.ctx.entities.append(entity)
        self.ctx.layers.push_entity(self.ctx.layers.get(entity.layer), entity)

    def clear(self) -> None:
        """Reset the loader state, releasing all buffer views."""
        self.ctx.dispose()
        self.ctx = SceneContext()

    def transform_color(self, color: int) -> int:
        """Color actually used for rendering ``color`` on the current background."""
        return self.corrector(color)

    def get_layers(self) -> list[LayerInfo]:
        return self.ctx.layers.list_layers(self.corrector)

    def get_entities(self) -> list[Entity]:
        return self.ctx.entities

    def iter_layer_entities(self, name: str) -> Iterator[Entity]:
        layer = self.ctx.layers.get(name)
        if layer is not None:
            yield from layer.entities

    def get_origin(self) -> Point | None:
        return self.ctx.origin

    def get_bounds(self) -> Bounds | None:
        """Scene bounds in model space, None for an empty scene."""
        return self.ctx.bounds

    @property
    def has_missing_chars(self) -> bool:
        return self.ctx.has_missing_chars

    def get_dxf(self) -> Any:
        """Parsed drawing, only kept with ``retain_parsed_dxf``."""
        return self.ctx.dxf


def create_loader(options: SceneOptions | None = None) -> SceneLoader:
    """Factory function for creating a loader instance."""
    return SceneLoader(options=options)
