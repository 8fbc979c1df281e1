"""Scene loading errors. Any of these aborts the current load."""

from __future__ import annotations


class SceneError(Exception):
    """Base class for fatal scene loading errors."""


class InvalidInstancingError(SceneError):
    """An instance batch was expanded under an already active instance."""


class MalformedBufferError(SceneError):
    """A batch references data outside the shared scene buffers."""


class CyclicBlockReferenceError(SceneError):
    """A block instance references a block that is already being expanded."""

    def __init__(self, chain: tuple[str, ...], block_name: str) -> None:
        self.chain = chain
        self.block_name = block_name
        path = " -> ".join((*chain, block_name))
        super().__init__(f"Cyclic block reference: {path}")


class StaleBufferError(SceneError):
    """A buffer view was read after its scene buffers were released."""
