"""Shared scene buffers and zero-copy read-only views into them.

A load session owns one ``SceneBuffers``. Every ``BufferView`` remembers the
buffers' generation at creation time; once the session releases its buffers
the generation moves on and any further read raises ``StaleBufferError``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from dxfscene.engine.errors import MalformedBufferError, StaleBufferError

logger = logging.getLogger(__name__)

VERTEX_DTYPE = np.dtype("<f4")
INDEX_DTYPE = np.dtype("<u2")

BufferSource = Union[bytes, bytearray, memoryview, NDArray, Sequence[float], Sequence[int], None]


def _from_sequence(source: BufferSource, dtype: np.dtype, name: str) -> NDArray:
    wide_dtype = np.float64 if dtype.kind == "f" else np.int64
    try:
        wide = np.asarray(source, dtype=wide_dtype).reshape(-1)
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedBufferError(f"{name} buffer is not a flat list of numbers: {e}") from e
    if dtype.kind == "u" and wide.size:
        low, high = int(wide.min()), int(wide.max())
        limit = np.iinfo(dtype).max
        if low < 0 or high > limit:
            raise MalformedBufferError(
                f"{name} buffer value out of range 0..{limit} (got {low}..{high})"
            )
    return wide.astype(dtype)


def _as_readonly(source: BufferSource, dtype: np.dtype, name: str) -> NDArray:
    if source is None:
        arr = np.empty(0, dtype=dtype)
    elif isinstance(source, (bytes, bytearray, memoryview)):
        nbytes = memoryview(source).nbytes
        if nbytes % dtype.itemsize:
            raise MalformedBufferError(
                f"{name} buffer of {nbytes} bytes is not a multiple of {dtype.itemsize}"
            )
        arr = np.frombuffer(source, dtype=dtype)
    elif isinstance(source, np.ndarray) and source.dtype == dtype:
        arr = source.reshape(-1)
    else:
        arr = _from_sequence(source, dtype, name)
    # A fresh view so the caller's own array keeps its flags
    arr = arr.view()
    arr.flags.writeable = False
    return arr


class SceneBuffers:
    """Owner of the vertex (float32) and index (uint16) arrays of one load."""

    _generation_counter = 0

    def __init__(self, vertices: BufferSource, indices: BufferSource = None) -> None:
        self._vertices = _as_readonly(vertices, VERTEX_DTYPE, "Vertices")
        self._indices = _as_readonly(indices, INDEX_DTYPE, "Indices")
        SceneBuffers._generation_counter += 1
        self.generation = SceneBuffers._generation_counter
        self.released = False

    @property
    def vertex_count(self) -> int:
        return int(self._vertices.size)

    @property
    def index_count(self) -> int:
        return int(self._indices.size)

    def vertex_view(self, offset: int, size: int) -> BufferView:
        return self._view(self._vertices, "vertices", offset, size)

    def index_view(self, offset: int, size: int) -> BufferView:
        return self._view(self._indices, "indices", offset, size)

    def _view(self, array: NDArray, name: str, offset: int, size: int) -> BufferView:
        if self.released:
            raise StaleBufferError("Scene buffers have been released")
        if offset < 0 or size < 0 or offset + size > array.size:
            raise MalformedBufferError(
                f"{name} segment [{offset}, {offset + size}) is outside buffer of size {array.size}"
            )
        return BufferView(self, array[offset : offset + size])

    def release(self) -> None:
        """Drop the backing arrays. All views created so far become stale."""
        if self.released:
            return
        self._vertices = np.empty(0, dtype=VERTEX_DTYPE)
        self._indices = np.empty(0, dtype=INDEX_DTYPE)
        SceneBuffers._generation_counter += 1
        self.generation = SceneBuffers._generation_counter
        self.released = True
        logger.debug("Scene buffers released")


class BufferView:
    """Non-owning window into a ``SceneBuffers`` array."""

    __slots__ = ("_owner", "_generation", "_array")

    def __init__(self, owner: SceneBuffers, array: NDArray) -> None:
        self._owner = owner
        self._generation = owner.generation
        self._array = array

    @property
    def valid(self) -> bool:
        return self._owner.generation == self._generation

    @property
    def array(self) -> NDArray:
        if not self.valid:
            raise StaleBufferError("Buffer view used after its scene was disposed")
        return self._array

    def __len__(self) -> int:
        return int(self._array.size)

    def points(self) -> NDArray[np.float32]:
        """Packed (x0, y0, x1, y1, ...) as an Nx2 view."""
        return self.array.reshape(-1, 2)

    def release(self) -> None:
        self._array = self._array[:0]
        self._generation = -1
