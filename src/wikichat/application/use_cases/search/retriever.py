"""Similarity retrieval over stored chunk embeddings."""

import logging
from decimal import Decimal

from wikichat.application.ports import UnitOfWorkFactory
from wikichat.domain.entities import SimilarityResult
from wikichat.domain.exceptions import (
    InvalidQuery,
    InvalidTopK,
    RetrievalFailure,
    ValidationError,
)
from wikichat.domain.value_objects import to_vector_literal

logger = logging.getLogger(__name__)


def similarity_to_distance(similarity: float) -> float:
    """Convert a similarity threshold to a cosine distance bound (1 - s).

    Goes through Decimal so that clean decimal inputs map exactly,
    e.g. 0.8 -> 0.2 rather than 0.19999999999999996.
    """
    return float(Decimal("1") - Decimal(str(similarity)))


class Retriever:
    """Find chunks whose similarity to a query embedding exceeds a threshold."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        similarity_threshold: float = 0.7,
        default_top_k: int = 5,
    ) -> None:
        if not 0.0 <= similarity_threshold <= 1.0:
            raise ValidationError("Similarity threshold must be between 0.0 and 1.0")
        if default_top_k <= 0:
            raise ValidationError("Default top_k must be positive")
        self._uow_factory = unit_of_work_factory
        self._similarity_threshold = similarity_threshold
        self._default_top_k = default_top_k

    @property
    def similarity_threshold(self) -> float:
        return self._similarity_threshold

    async def find_similar(
        self,
        query_embedding: list[float] | None,
        top_k: int | None = None,
    ) -> list[SimilarityResult]:
        """Up to top_k chunks nearest to the query, nearest first.

        An empty list is a valid outcome. Store errors surface as
        RetrievalFailure with the underlying error chained.
        """
        if not query_embedding:
            raise InvalidQuery("Query embedding cannot be null or empty")
        limit = self._default_top_k if top_k is None else top_k
        if limit <= 0:
            raise InvalidTopK(f"top_k must be positive, got {limit}")

        max_distance = similarity_to_distance(self._similarity_threshold)
        logger.debug(
            "Searching similar chunks: top_k=%d, threshold=%s, max_distance=%s",
            limit,
            self._similarity_threshold,
            max_distance,
        )
        try:
            async with self._uow_factory() as uow:
                results = await uow.chunks.find_similar(
                    to_vector_literal(query_embedding), max_distance, limit
                )
        except Exception as e:
            logger.error("Vector search failed: %s", e)
            raise RetrievalFailure(f"Failed to search similar chunks: {e}") from e

        logger.info("Found %d similar chunks", len(results))
        return results
