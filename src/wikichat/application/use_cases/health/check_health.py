"""Check health use case."""

import asyncio
from dataclasses import dataclass

from wikichat.application.ports import EmbeddingProvider, GenerationProvider


@dataclass
class HealthReport:
    """Reachability of the external providers."""

    embedding: bool
    generation: bool

    @property
    def healthy(self) -> bool:
        return self.embedding and self.generation


class CheckHealthUseCase:
    """Check that the embedding and generation providers respond."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        generation_provider: GenerationProvider,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._generation_provider = generation_provider

    async def execute(self) -> HealthReport:
        embedding, generation = await asyncio.gather(
            self._embedding_provider.health_check(),
            self._generation_provider.health_check(),
        )
        return HealthReport(embedding=embedding, generation=generation)
