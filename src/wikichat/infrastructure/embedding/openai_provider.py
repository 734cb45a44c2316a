"""OpenAI-compatible embedding provider."""

import logging
import time

from openai import AsyncOpenAI, OpenAIError

from wikichat.domain.exceptions import (
    CountMismatch,
    DimensionMismatch,
    EmptyInput,
    MalformedResponse,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100


class OpenAIEmbeddingProvider:
    """Embedding provider using an OpenAI-compatible API.

    Batches are sent one after another, never concurrently, to stay within
    upstream requests-per-minute limits.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        dimension: int = 768,
        batch_size: int = MAX_BATCH_SIZE,
        client: AsyncOpenAI | None = None,
    ) -> None:
        if dimension <= 0:
            raise ValueError("Embedding dimension must be positive")
        if batch_size <= 0:
            raise ValueError("Batch size must be positive")
        self._client = client or AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model
        self._dimension = dimension
        self._batch_size = batch_size

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed_one(self, text: str) -> list[float]:
        """Generate embedding for a single text."""
        if text is None or not text.strip():
            raise EmptyInput("Text cannot be null or empty")

        vectors = await self._request([text])
        if len(vectors) != 1:
            raise MalformedResponse(f"Expected 1 embedding, got {len(vectors)}")
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts, preserving input order."""
        if not texts:
            return []
        for i, text in enumerate(texts):
            if text is None or not text.strip():
                raise EmptyInput(f"Text at index {i} is null or empty", index=i)

        logger.info("Generating embeddings for %d texts", len(texts))
        embeddings: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            batch = texts[start : start + self._batch_size]
            started = time.perf_counter()
            vectors = await self._request(batch)
            if len(vectors) != len(batch):
                raise CountMismatch(expected=len(batch), actual=len(vectors))
            embeddings.extend(vectors)
            logger.debug(
                "Batch %d-%d of %d embedded in %.0fms",
                start + 1,
                start + len(batch),
                len(texts),
                (time.perf_counter() - started) * 1000,
            )
        return embeddings

    async def health_check(self) -> bool:
        """Embed a short test text and verify the dimension. Never raises."""
        try:
            vector = await self.embed_one("test")
        except Exception as e:
            logger.warning("Embedding health check failed: %s", e)
            return False
        return len(vector) == self._dimension

    async def _request(self, texts: list[str]) -> list[list[float]]:
        try:
            response = await self._client.embeddings.create(
                model=self._model,
                input=texts,
            )
        except OpenAIError as e:
            logger.error("Embedding request failed: %s", e)
            raise UpstreamFailure(f"Failed to generate embeddings: {e}") from e

        try:
            data = sorted(response.data or [], key=lambda d: d.index)
            raw = [list(item.embedding or []) for item in data]
        except (AttributeError, TypeError) as e:
            logger.error("Unexpected embedding response: %r", response)
            raise MalformedResponse("Unexpected response from provider") from e

        vectors: list[list[float]] = []
        for vector in raw:
            if not vector:
                raise MalformedResponse("Received empty embedding from provider")
            if len(vector) != self._dimension:
                raise DimensionMismatch(expected=self._dimension, actual=len(vector))
            vectors.append(vector)
        return vectors
