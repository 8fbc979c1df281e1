"""Serialized scene model: the output contract of the DXF batching stage.

Offsets and sizes are counted in buffer elements (floats for vertices, uint16
for indices), not bytes.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictBytes, model_validator


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class KeyModel(_WireModel):
    geometry_type: int = Field(..., alias="geometryType", ge=0, le=6)
    layer_name: str | None = Field(default=None, alias="layerName")
    block_name: str | None = Field(default=None, alias="blockName")
    parent_block: str | None = Field(default=None, alias="parentBlock")
    # -1 = by layer, -2 = by block, otherwise 0xRRGGBB
    color: int = Field(default=0, ge=-2, le=0xFFFFFF)


class ChunkModel(_WireModel):
    vertices_offset: int = Field(..., alias="verticesOffset", ge=0)
    vertices_size: int = Field(..., alias="verticesSize", ge=0)
    indices_offset: int = Field(default=0, alias="indicesOffset", ge=0)
    indices_size: int = Field(default=0, alias="indicesSize", ge=0)


class BatchModel(_WireModel):
    key: KeyModel
    vertices_offset: int | None = Field(default=None, alias="verticesOffset", ge=0)
    vertices_size: int | None = Field(default=None, alias="verticesSize", ge=0)
    transforms_offset: int | None = Field(default=None, alias="transformsOffset", ge=0)
    transforms_size: int | None = Field(default=None, alias="transformsSize", ge=0)
    chunks: list[ChunkModel] | None = None

    @property
    def has_inline_vertices(self) -> bool:
        return self.vertices_offset is not None

    @property
    def has_transforms(self) -> bool:
        return self.transforms_offset is not None

    @model_validator(mode="after")
    def _paired_fields(self) -> BatchModel:
        if (self.vertices_offset is None) != (self.vertices_size is None):
            raise ValueError("verticesOffset and verticesSize must be given together")
        if (self.transforms_offset is None) != (self.transforms_size is None):
            raise ValueError("transformsOffset and transformsSize must be given together")
        return self


class LayerModel(_WireModel):
    name: str
    display_name: str | None = Field(default=None, alias="displayName")
    color: int = Field(default=0, ge=0, le=0xFFFFFF)


class Point(BaseModel):
    x: float
    y: float


class Bounds(_WireModel):
    min_x: float = Field(..., alias="minX")
    min_y: float = Field(..., alias="minY")
    max_x: float = Field(..., alias="maxX")
    max_y: float = Field(..., alias="maxY")


class SceneModel(_WireModel):
    """One serialized scene, as delivered per load."""

    # Raw little-endian buffers are only accepted as bytes, never as str
    vertices: list[float] | StrictBytes = Field(default_factory=list)
    indices: list[Annotated[int, Field(ge=0, le=0xFFFF)]] | StrictBytes = Field(default_factory=list)
    batches: list[BatchModel] = Field(default_factory=list)
    layers: list[LayerModel] = Field(default_factory=list)
    origin: Point | None = None
    bounds: Bounds | None = None
    has_missing_chars: bool = Field(default=False, alias="hasMissingChars")
    point_shape_has_dot: bool = Field(default=False, alias="pointShapeHasDot")
    # Parsed drawing, passed through untouched when retained
    dxf: Any = None
