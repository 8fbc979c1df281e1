"""Batching key: geometry type, owning layer/block and key color of a batch."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from dxfscene.models.scene import KeyModel


class GeometryType(enum.IntEnum):
    POINTS = 0
    LINES = 1
    INDEXED_LINES = 2
    TRIANGLES = 3
    INDEXED_TRIANGLES = 4
    BLOCK_INSTANCE = 5
    POINT_INSTANCE = 6

    @property
    def is_instance(self) -> bool:
        return self in (GeometryType.BLOCK_INSTANCE, GeometryType.POINT_INSTANCE)


class InstanceType(enum.IntEnum):
    NONE = 0
    # Full affine transform per instance
    FULL = 1
    # 2D translation vector per instance
    POINT = 2


class ColorCode(enum.Enum):
    """Key color sentinels. Wire values match the serializer's encoding."""

    BY_LAYER = -1
    BY_BLOCK = -2


# Either a concrete packed RGB value or an inheritance sentinel
KeyColor = Union[int, ColorCode]


def parse_key_color(value: int) -> KeyColor:
    if value < 0:
        return ColorCode(value)
    return value & 0xFFFFFF


@dataclass(frozen=True)
class BatchingKey:
    geometry_type: GeometryType
    layer_name: str | None = None
    block_name: str | None = None
    parent_block: str | None = None
    color: KeyColor = 0

    @classmethod
    def from_model(cls, model: KeyModel) -> BatchingKey:
        return cls(
            geometry_type=GeometryType(model.geometry_type),
            layer_name=model.layer_name,
            block_name=model.block_name,
            parent_block=model.parent_block,
            color=parse_key_color(model.color),
        )

    @property
    def is_instance(self) -> bool:
        return self.geometry_type.is_instance

    @property
    def is_block_definition(self) -> bool:
        """Geometry belonging to a block definition (not an instance of one)."""
        return self.block_name is not None and not self.is_instance

    @property
    def is_nested_instance(self) -> bool:
        """Instance placed inside another block's definition."""
        return self.is_instance and self.parent_block is not None

    @property
    def instance_type(self) -> InstanceType:
        if self.geometry_type == GeometryType.BLOCK_INSTANCE:
            return InstanceType.FULL
        if self.geometry_type == GeometryType.POINT_INSTANCE:
            return InstanceType.POINT
        return InstanceType.NONE

    def with_color(self, color: KeyColor) -> BatchingKey:
        return replace(self, color=color)
