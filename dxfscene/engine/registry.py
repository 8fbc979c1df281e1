"""Layer and block registries, rebuilt from scratch on every load.

Usage:
    layers = LayerRegistry()
    layers.register("walls", "Walls", 0xFF0000)
    default = layers.ensure_default()

    blocks = BlockRegistry()
    for batch in batches:
        blocks.register(batch)
    blocks.lookup("DOOR")  # ordered definition batches, or None
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dxfscene.engine.batch import Batch
    from dxfscene.engine.context import Entity

logger = logging.getLogger(__name__)

DEFAULT_LAYER_NAME = "0"


@dataclass
class Layer:
    name: str
    display_name: str
    # Concrete 0xRRGGBB, never a sentinel
    color: int = 0
    entities: list[Entity] = field(default_factory=list)

    def push_entity(self, entity: Entity) -> None:
        self.entities.append(entity)

    def dispose(self) -> None:
        self.entities = []


@dataclass(frozen=True)
class LayerInfo:
    name: str
    display_name: str
    color: int

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "displayName": self.display_name, "color": self.color}


class LayerRegistry:
    """Layers by name. Always holds layer "0" once ``ensure_default`` ran."""

    def __init__(self) -> None:
        self._layers: dict[str, Layer] = {}

    def register(self, name: str, display_name: str | None = None, color: int = 0) -> Layer:
        if name in self._layers:
            logger.warning("Layer %r registered twice, replacing", name)
        layer = Layer(name=name, display_name=display_name or name, color=color)
        self._layers[name] = layer
        logger.debug("Registered layer %s (color #%06x)", name, color)
        return layer

    def get(self, name: str | None) -> Layer | None:
        if name is None:
            return None
        return self._layers.get(name)

    def ensure_default(self) -> Layer:
        layer = self._layers.get(DEFAULT_LAYER_NAME)
        if layer is None:
            layer = self.register(DEFAULT_LAYER_NAME, DEFAULT_LAYER_NAME, 0)
        return layer

    def push_entity(self, layer: Layer | None, entity: Entity) -> Layer:
        """Append to ``layer``, or to the default layer when None."""
        target = layer if layer is not None else self.ensure_default()
        target.push_entity(entity)
        return target

    def list_layers(self, transform: Callable[[int], int] | None = None) -> list[LayerInfo]:
        result = []
        for layer in self._layers.values():
            color = transform(layer.color) if transform is not None else layer.color
            result.append(LayerInfo(layer.name, layer.display_name, color))
        return result

    def dispose(self) -> None:
        for layer in self._layers.values():
            layer.dispose()

    def clear(self) -> None:
        self._layers.clear()

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers.values())

    def __len__(self) -> int:
        return len(self._layers)

    def __contains__(self, name: object) -> bool:
        return name in self._layers


@dataclass
class Block:
    """Ordered definition batches of one block. Not mutated after the first pass."""

    name: str
    batches: list[Batch] = field(default_factory=list)

    def push_batch(self, batch: Batch) -> None:
        self.batches.append(batch)


class BlockRegistry:
    def __init__(self) -> None:
        self._blocks: dict[str, Block] = {}

    def register(self, batch: Batch) -> bool:
        """Add ``batch`` to the definition it belongs to.

        Block geometry goes to ``key.block_name``; an instance nested inside a
        definition goes to ``key.parent_block``. Returns False for batches that
        are not part of any definition.
        """
        key = batch.key
        if key.is_block_definition:
            owner = key.block_name
        elif key.is_nested_instance:
            owner = key.parent_block
        else:
            return False

        block = self._blocks.get(owner)
        if block is None:
            block = Block(owner)
            self._blocks[owner] = block
            logger.debug("Registered block %s", owner)
        block.push_batch(batch)
        return True

    def lookup(self, name: str | None) -> list[Batch] | None:
        if name is None:
            return None
        block = self._blocks.get(name)
        return block.batches if block is not None else None

    def dispose(self) -> None:
        for block in self._blocks.values():
            for batch in block.batches:
                batch.dispose()
        self._blocks.clear()

    @property
    def count(self) -> int:
        return len(self._blocks)

    def __contains__(self, name: object) -> bool:
        return name in self._blocks
