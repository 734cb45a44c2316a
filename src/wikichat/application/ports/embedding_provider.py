"""Embedding provider port."""

from typing import Protocol


class EmbeddingProvider(Protocol):
    """Port for generating text embeddings.

    Implementations raise EmptyInput, UpstreamFailure, MalformedResponse
    or CountMismatch from wikichat.domain.exceptions.
    """

    @property
    def dimension(self) -> int: ...

    async def embed_one(self, text: str) -> list[float]: ...

    async def embed_batch(self, texts: list[str]) -> list[list[float]]: ...

    async def health_check(self) -> bool: ...
