"""Instance expander: batches -> entities, resolving block and point instancing.

Expansion is a lazy pre-order walk. An instance batch yields the entities of
every batch in its block definition (in definition order), then its own dot
geometry if it has one. Instances nested inside a definition are first
resolved against the enclosing instance and then expanded as top-level
instances, so the instancing branch never runs under an active instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from dxfscene.engine.batch import Batch
from dxfscene.engine.context import Entity
from dxfscene.engine.errors import CyclicBlockReferenceError, InvalidInstancingError
from dxfscene.engine.keys import ColorCode, KeyColor
from dxfscene.engine.registry import BlockRegistry, Layer, LayerRegistry

logger = logging.getLogger(__name__)


def resolve_instance_color(definition: Batch, instance: Batch) -> KeyColor:
    """Color of block definition geometry placed by ``instance``.

    May still return a sentinel when the instance itself inherits its color;
    ``InstanceExpander`` settles that at the top level.
    """
    color = definition.key.color
    if color is ColorCode.BY_BLOCK:
        return instance.key.color
    if color is ColorCode.BY_LAYER:
        if instance.layer is not None:
            return instance.layer.color
        if definition.layer is not None:
            return definition.layer.color
        return 0
    return color


class InstanceExpander:
    """Turns batches into entities against one load's block and layer registries."""

    def __init__(
        self,
        blocks: BlockRegistry,
        layers: LayerRegistry,
        transform_color: Callable[[int], int] | None = None,
    ) -> None:
        self.blocks = blocks
        self.layers = layers
        self.transform_color = transform_color or (lambda color: color)

    def expand(self, batch: Batch, instance: Batch | None = None) -> Iterator[Entity]:
        """Entities for ``batch``, optionally placed by the ``instance`` batch."""
        return self._expand(batch, instance, ())

    def _expand(
        self, batch: Batch, instance: Batch | None, chain: tuple[str, ...]
    ) -> Iterator[Entity]:
        if batch.is_instance:
            if instance is not None:
                raise InvalidInstancingError(
                    f"Instance batch for block {batch.key.block_name!r} expanded "
                    f"under instance of {instance.key.block_name!r}"
                )
            yield from self._expand_instance(batch, chain)
            return
        yield from self._create_entities(batch, instance)

    def _expand_instance(self, batch: Batch, chain: tuple[str, ...]) -> Iterator[Entity]:
        block_name = batch.key.block_name
        definition = self.blocks.lookup(block_name)
        if definition is None:
            logger.debug("Dangling reference to block %r, skipped", block_name)
            return
        if block_name in chain:
            raise CyclicBlockReferenceError(chain, block_name)

        inner_chain = (*chain, block_name)
        for child in definition:
            if child.is_instance:
                yield from self._expand(self._resolve_nested(child, batch), None, inner_chain)
            else:
                yield from self._expand(child, batch, inner_chain)
        if batch.has_dot:
            # Dots for point shapes
            yield from self._create_entities(batch, None)

    def _resolve_nested(self, nested: Batch, instance: Batch) -> Batch:
        """Nested instance as seen through the enclosing ``instance``."""
        # INSERT layer takes precedence over the layer inside the definition
        layer = instance.layer if instance.layer is not None else nested.layer
        return nested.resolved_under(resolve_instance_color(nested, instance), layer)

    def _resolve_color(self, batch: Batch, instance: Batch | None, layer: Layer) -> int:
        color = resolve_instance_color(batch, instance) if instance is not None else batch.key.color
        if isinstance(color, ColorCode):
            # Sentinel left over at the top level: nothing to inherit from but the layer
            color = layer.color
        return self.transform_color(color)

    def _create_entities(self, batch: Batch, instance: Batch | None) -> Iterator[Entity]:
        layer = None
        if instance is not None:
            layer = instance.layer
        if layer is None:
            layer = batch.layer
        if layer is None:
            layer = self.layers.ensure_default()

        color = self._resolve_color(batch, instance, layer)
        transforms = None
        if instance is not None and instance.transforms is not None:
            transforms = instance.transforms.array.copy()

        for chunk in batch.iter_chunks():
            yield Entity(
                points=chunk.points(),
                color=color,
                layer=layer.name,
                geometry_type=batch.key.geometry_type,
                block=batch.key.block_name,
                parent_block=batch.key.parent_block,
                instance_transforms=transforms,
            )
