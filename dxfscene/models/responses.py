"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dxfscene.models.scene import Bounds, Point


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class _WireResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EntityResponse(_WireResponse):
    vertices: list[Point] = Field(default_factory=list)
    color: int
    layer: str
    geometry_type: int = Field(..., alias="geometryType")
    block: str | None = None
    parent_block: str | None = Field(default=None, alias="parentBlock")


class LayerResponse(_WireResponse):
    name: str
    display_name: str = Field(..., alias="displayName")
    color: int


class SceneResponse(_WireResponse):
    entities: list[EntityResponse] = Field(default_factory=list)
    layers: list[LayerResponse] = Field(default_factory=list)
    origin: Point | None = None
    bounds: Bounds | None = None
    has_missing_chars: bool = Field(default=False, alias="hasMissingChars")
    entity_count: int = Field(default=0, alias="entityCount")
    processing_time_ms: float = Field(default=0.0, alias="processingTimeMs")
    dxf: Any = None
