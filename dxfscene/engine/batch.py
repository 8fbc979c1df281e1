"""Batch descriptor: a batching key plus read-only views into the scene buffers."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np
from numpy.typing import NDArray

from dxfscene.engine.buffers import BufferView, SceneBuffers
from dxfscene.engine.errors import MalformedBufferError
from dxfscene.engine.keys import BatchingKey, GeometryType, InstanceType, KeyColor
from dxfscene.engine.registry import Layer, LayerRegistry
from dxfscene.models.scene import BatchModel


@dataclass(frozen=True)
class Chunk:
    """One indexed sub-segment of a batch. Yields exactly one entity."""

    vertices: BufferView
    indices: BufferView | None = None

    @property
    def point_count(self) -> int:
        if self.indices is not None:
            return len(self.indices)
        return len(self.vertices) // 2

    def points(self) -> NDArray[np.float32]:
        """Copy of the chunk's points, resolved through the index view if any."""
        pts = self.vertices.points()
        if self.indices is not None:
            return pts[self.indices.array]
        return pts.copy()


def _check_vertices(view: BufferView, what: str) -> BufferView:
    if len(view) % 2:
        raise MalformedBufferError(f"{what} size {len(view)} is not a multiple of 2")
    return view


def _check_indices(indices: BufferView, vertices: BufferView) -> None:
    vertex_count = len(vertices) // 2
    highest = int(indices.array.max())
    if highest >= vertex_count:
        raise MalformedBufferError(
            f"Index {highest} out of range for chunk with {vertex_count} vertices"
        )


@dataclass
class Batch:
    key: BatchingKey
    layer: Layer | None = None
    # Renderable vertices of an unchunked batch (also the dot of a point instance)
    vertices: BufferView | None = None
    # Per-instance transforms of an instance batch
    transforms: BufferView | None = None
    chunks: list[Chunk] | None = None

    @classmethod
    def from_raw(
        cls,
        raw: BatchModel,
        buffers: SceneBuffers,
        layers: LayerRegistry,
        point_shape_has_dot: bool = False,
    ) -> Batch:
        key = BatchingKey.from_model(raw.key)
        # Block instances may carry nothing but their transforms
        placed = key.is_instance and raw.has_transforms
        if not raw.has_inline_vertices and raw.chunks is None and not placed:
            raise MalformedBufferError(
                f"Batch {key.geometry_type.name} (layer={key.layer_name}, "
                f"block={key.block_name}) has neither vertices nor chunks"
            )

        batch = cls(key=key, layer=layers.get(key.layer_name))

        if raw.has_inline_vertices:
            view = _check_vertices(
                buffers.vertex_view(raw.vertices_offset, raw.vertices_size), "Vertices"
            )
            is_point_instance = key.geometry_type == GeometryType.POINT_INSTANCE
            if not is_point_instance or point_shape_has_dot:
                batch.vertices = view
            if is_point_instance:
                batch.transforms = view

        if raw.has_transforms:
            batch.transforms = buffers.vertex_view(raw.transforms_offset, raw.transforms_size)

        if raw.chunks is not None:
            batch.chunks = []
            for raw_chunk in raw.chunks:
                vertices = _check_vertices(
                    buffers.vertex_view(raw_chunk.vertices_offset, raw_chunk.vertices_size),
                    "Chunk vertices",
                )
                indices = None
                # Zero indices means the chunk is drawn unindexed
                if raw_chunk.indices_size:
                    indices = buffers.index_view(raw_chunk.indices_offset, raw_chunk.indices_size)
                    _check_indices(indices, vertices)
                batch.chunks.append(Chunk(vertices, indices))

        return batch

    @property
    def instance_type(self) -> InstanceType:
        return self.key.instance_type

    @property
    def is_instance(self) -> bool:
        return self.key.is_instance

    @property
    def has_dot(self) -> bool:
        """Instance batch carrying visible point-shape vertices."""
        return self.is_instance and self.vertices is not None

    def iter_chunks(self) -> list[Chunk]:
        """Chunks of the batch, or the whole batch as a single unindexed chunk."""
        if self.chunks is not None:
            return self.chunks
        if self.vertices is None:
            return []
        return [Chunk(self.vertices)]

    def resolved_under(self, color: KeyColor, layer: Layer | None) -> Batch:
        """Derived descriptor sharing this batch's views, with a new color and layer."""
        return replace(self, key=self.key.with_color(color), layer=layer)

    def dispose(self) -> None:
        for view in (self.vertices, self.transforms):
            if view is not None:
                view.release()
        for chunk in self.chunks or ():
            chunk.vertices.release()
            if chunk.indices is not None:
                chunk.indices.release()
