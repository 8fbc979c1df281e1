"""Shared test fixtures: a small builder for serialized scenes."""

from __future__ import annotations

from typing import Any

import pytest

BY_LAYER = -1
BY_BLOCK = -2

POINTS = 0
LINES = 1
INDEXED_LINES = 2
BLOCK_INSTANCE = 5
POINT_INSTANCE = 6


class SceneBuilder:
    """Appends geometry to shared buffers and records batch descriptors."""

    def __init__(self) -> None:
        self.vertices: list[float] = []
        self.indices: list[int] = []
        self.batches: list[dict[str, Any]] = []
        self.layers: list[dict[str, Any]] = []

    def layer(self, name: str, color: int = 0, display_name: str | None = None) -> SceneBuilder:
        self.layers.append({"name": name, "displayName": display_name or name, "color": color})
        return self

    def _push_vertices(self, points: list[tuple[float, float]]) -> tuple[int, int]:
        offset = len(self.vertices)
        for x, y in points:
            self.vertices.extend([x, y])
        return offset, len(points) * 2

    def _push_indices(self, indices: list[int]) -> tuple[int, int]:
        offset = len(self.indices)
        self.indices.extend(indices)
        return offset, len(indices)

    @staticmethod
    def _key(geometry_type, layer, block, parent, color) -> dict[str, Any]:
        return {
            "geometryType": geometry_type,
            "layerName": layer,
            "blockName": block,
            "parentBlock": parent,
            "color": color,
        }

    def lines(
        self,
        points: list[tuple[float, float]],
        *,
        layer: str | None = None,
        block: str | None = None,
        parent: str | None = None,
        color: int = 0,
        geometry_type: int = LINES,
    ) -> dict[str, Any]:
        offset, size = self._push_vertices(points)
        batch = {
            "key": self._key(geometry_type, layer, block, parent, color),
            "verticesOffset": offset,
            "verticesSize": size,
        }
        self.batches.append(batch)
        return batch

    def chunked(
        self,
        chunks: list[tuple[list[tuple[float, float]], list[int]]],
        *,
        layer: str | None = None,
        block: str | None = None,
        parent: str | None = None,
        color: int = 0,
    ) -> dict[str, Any]:
        raw_chunks = []
        for points, indices in chunks:
            v_offset, v_size = self._push_vertices(points)
            i_offset, i_size = self._push_indices(indices)
            raw_chunks.append({
                "verticesOffset": v_offset,
                "verticesSize": v_size,
                "indicesOffset": i_offset,
                "indicesSize": i_size,
            })
        batch = {
            "key": self._key(INDEXED_LINES, layer, block, parent, color),
            "chunks": raw_chunks,
        }
        self.batches.append(batch)
        return batch

    def insert(
        self,
        block: str,
        *,
        layer: str | None = None,
        parent: str | None = None,
        color: int = 0,
    ) -> dict[str, Any]:
        """Block instance with a single identity affine transform."""
        offset, size = self._push_vertices([(1.0, 0.0), (0.0, 0.0), (1.0, 0.0)])
        batch = {
            "key": self._key(BLOCK_INSTANCE, layer, block, parent, color),
            "transformsOffset": offset,
            "transformsSize": size,
        }
        self.batches.append(batch)
        return batch

    def point_instance(
        self,
        block: str,
        positions: list[tuple[float, float]],
        *,
        layer: str | None = None,
        color: int = 0,
    ) -> dict[str, Any]:
        offset, size = self._push_vertices(positions)
        batch = {
            "key": self._key(POINT_INSTANCE, layer, block, None, color),
            "verticesOffset": offset,
            "verticesSize": size,
        }
        self.batches.append(batch)
        return batch

    def build(self, **extra: Any) -> dict[str, Any]:
        scene = {
            "vertices": list(self.vertices),
            "indices": list(self.indices),
            "batches": self.batches,
            "layers": self.layers,
        }
        scene.update(extra)
        return scene


def square(x: float = 0.0, y: float = 0.0, size: float = 1.0) -> list[tuple[float, float]]:
    return [(x, y), (x + size, y), (x + size, y + size), (x, y + size)]


@pytest.fixture
def builder() -> SceneBuilder:
    return SceneBuilder()
