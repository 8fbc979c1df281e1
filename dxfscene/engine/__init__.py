"""dxfscene batch resolution, instance expansion and color correction engine."""

from dxfscene.engine.config import SceneOptions
from dxfscene.engine.context import Entity, SceneContext
from dxfscene.engine.errors import (
    CyclicBlockReferenceError,
    InvalidInstancingError,
    MalformedBufferError,
    SceneError,
    StaleBufferError,
)
from dxfscene.engine.keys import BatchingKey, ColorCode, GeometryType
from dxfscene.engine.loader import SceneLoader, create_loader

__all__ = [
    "SceneOptions",
    "Entity",
    "SceneContext",
    "SceneError",
    "InvalidInstancingError",
    "MalformedBufferError",
    "CyclicBlockReferenceError",
    "StaleBufferError",
    "BatchingKey",
    "ColorCode",
    "GeometryType",
    "SceneLoader",
    "create_loader",
]
