"""Chunk repository port."""

from typing import Protocol
from uuid import UUID

from wikichat.domain.entities import Chunk, SimilarityResult


class ChunkRepository(Protocol):
    """Port for chunk persistence and vector search."""

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]: ...

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]: ...

    async def count_by_document_id(self, document_id: UUID) -> int: ...

    async def delete_by_document_id(self, document_id: UUID) -> None: ...

    async def find_similar(
        self,
        vector_literal: str,
        max_distance: float,
        limit: int,
    ) -> list[SimilarityResult]:
        """Chunks within max_distance of the query vector, nearest first."""
        ...
