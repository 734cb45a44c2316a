"""Similarity result - chunk matched by a vector query."""

from dataclasses import dataclass

from wikichat.domain.entities.chunk import Chunk


@dataclass
class SimilarityResult:
    """Chunk with its parent document name and cosine distance to the query."""

    chunk: Chunk
    document_name: str
    distance: float

    @property
    def similarity(self) -> float:
        """Similarity in [0, 1], clamped against floating-point drift."""
        return min(1.0, max(0.0, 1.0 - self.distance))
