"""Pytest fixtures for WikiChat tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from wikichat.application.dto.chunking_config import ChunkingConfig
from wikichat.domain.entities import (
    Chunk,
    Conversation,
    Document,
    Message,
    SimilarityResult,
)
from wikichat.domain.value_objects import DocumentStatus

EMBEDDING_DIMENSION = 8


# --- Fake repositories ---


class FakeDocumentRepository:
    """In-memory document repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Document] = {}
        self.status_updates: list[tuple[UUID, DocumentStatus]] = []

    async def get_by_id(self, document_id: UUID) -> Document | None:
        return self._by_id.get(document_id)

    async def list(self) -> list[Document]:
        return sorted(self._by_id.values(), key=lambda d: d.created_at, reverse=True)

    async def create(self, document: Document) -> Document:
        self._by_id[document.id] = document
        return document

    async def update_status(self, document_id: UUID, status: DocumentStatus) -> None:
        self.status_updates.append((document_id, status))
        doc = self._by_id.get(document_id)
        if doc:
            doc.status = status
            doc.updated_at = datetime.now(UTC)

    async def delete(self, document_id: UUID) -> None:
        self._by_id.pop(document_id, None)


class FakeChunkRepository:
    """In-memory chunk repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Chunk] = {}
        self._similar: list[SimilarityResult] = []
        self.similar_calls: list[tuple[str, float, int]] = []
        self.fail_with: Exception | None = None

    def set_similar_results(self, results: list[SimilarityResult]) -> None:
        """Set predefined find_similar results for testing."""
        self._similar = results

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        for c in chunks:
            self._by_id[c.id] = c
        return chunks

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]:
        return sorted(
            (c for c in self._by_id.values() if c.document_id == document_id),
            key=lambda c: c.chunk_index,
        )

    async def count_by_document_id(self, document_id: UUID) -> int:
        return len(await self.get_by_document_id(document_id))

    async def delete_by_document_id(self, document_id: UUID) -> None:
        self._by_id = {k: c for k, c in self._by_id.items() if c.document_id != document_id}

    async def find_similar(
        self, vector_literal: str, max_distance: float, limit: int
    ) -> list[SimilarityResult]:
        self.similar_calls.append((vector_literal, max_distance, limit))
        if self.fail_with:
            raise self.fail_with
        matches = [r for r in self._similar if r.distance < max_distance]
        return sorted(matches, key=lambda r: r.distance)[:limit]


class FakeConversationRepository:
    """In-memory conversation repository."""

    def __init__(self, messages: FakeMessageRepository) -> None:
        self._by_session: dict[str, Conversation] = {}
        self._messages = messages

    async def get_by_session_id(self, session_id: str) -> Conversation | None:
        return self._by_session.get(session_id)

    async def create(self, conversation: Conversation) -> Conversation:
        return self._by_session.setdefault(conversation.session_id, conversation)

    async def touch(self, conversation: Conversation) -> None:
        self._by_session[conversation.session_id] = conversation

    async def delete(self, conversation: Conversation) -> None:
        self._by_session.pop(conversation.session_id, None)
        self._messages.delete_by_conversation(conversation.id)


class FakeMessageRepository:
    """In-memory append-only message repository."""

    def __init__(self) -> None:
        self._store: list[Message] = []

    async def create(self, message: Message) -> Message:
        self._store.append(message)
        return message

    async def list_by_conversation(self, conversation_id: UUID) -> list[Message]:
        return [m for m in self._store if m.conversation_id == conversation_id]

    async def list_recent(self, conversation_id: UUID, limit: int) -> list[Message]:
        return (await self.list_by_conversation(conversation_id))[-limit:]

    def delete_by_conversation(self, conversation_id: UUID) -> None:
        self._store = [m for m in self._store if m.conversation_id != conversation_id]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.documents = FakeDocumentRepository()
        self.chunks = FakeChunkRepository()
        self.messages = FakeMessageRepository()
        self.conversations = FakeConversationRepository(self.messages)
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork, so state survives across transactions."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory


def make_document(
    filename: str = "guide.md",
    status: DocumentStatus = DocumentStatus.COMPLETED,
) -> Document:
    now = datetime.now(UTC)
    return Document(
        id=uuid4(),
        filename=filename,
        content_type="text/markdown",
        file_size=128,
        status=status,
        created_at=now,
        updated_at=now,
    )


def make_similarity_result(
    content: str,
    distance: float,
    document_name: str = "guide.md",
    chunk_index: int = 0,
) -> SimilarityResult:
    chunk = Chunk(
        id=uuid4(),
        document_id=uuid4(),
        content=content,
        chunk_index=chunk_index,
        created_at=datetime.now(UTC),
    )
    return SimilarityResult(chunk=chunk, document_name=document_name, distance=distance)


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def mock_embedding_provider():
    """AsyncMock for EmbeddingProvider - returns fixed vectors per text."""

    async def _embed_batch(texts: list[str]) -> list[list[float]]:
        return [[0.1] * EMBEDDING_DIMENSION for _ in texts]

    mock = AsyncMock()
    mock.dimension = EMBEDDING_DIMENSION
    mock.embed_one = AsyncMock(return_value=[0.1] * EMBEDDING_DIMENSION)
    mock.embed_batch = AsyncMock(side_effect=_embed_batch)
    mock.health_check = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def mock_generation_provider():
    """AsyncMock for GenerationProvider - returns a fixed answer."""
    mock = AsyncMock()
    mock.generate = AsyncMock(return_value="WikiChat answers questions about documents.")
    mock.health_check = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Small chunking config for SemanticChunker tests."""
    return ChunkingConfig(chunk_size=150, chunk_overlap=20)
