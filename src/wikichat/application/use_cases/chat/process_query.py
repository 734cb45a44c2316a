"""Process query use case - retrieval-augmented answer generation."""

import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from wikichat.application.dto.chat_dto import ChatAnswer
from wikichat.application.ports import EmbeddingProvider, GenerationProvider, UnitOfWorkFactory
from wikichat.application.use_cases.search.retriever import Retriever
from wikichat.domain.entities import Conversation, Message, SimilarityResult
from wikichat.domain.exceptions import (
    EmbeddingStageFailure,
    GenerationStageFailure,
    RetrievalStageFailure,
    ValidationError,
)
from wikichat.domain.value_objects import MessageRole, SourceReference

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "You are a helpful assistant answering questions about the user's documents.\n"
    "Answer using only the information in the context below. If the context does "
    "not contain the answer, say that you don't know. Cite the documents you used."
)
NO_CONTEXT = "No relevant material was found in the uploaded documents."
TITLE_LENGTH = 100


def build_context(results: list[SimilarityResult]) -> str:
    """Concatenate chunks in retrieval order, each tagged with its origin."""
    return "\n\n".join(
        f"[Document: {r.document_name}, Chunk {r.chunk.chunk_index}]\n{r.chunk.content}"
        for r in results
    )


def build_prompt(query: str, results: list[SimilarityResult], history: list[Message]) -> str:
    """Instructions, then context, then prior turns, then the question."""
    sections = [INSTRUCTIONS]
    if results:
        sections.append(f"Context:\n{build_context(results)}")
    else:
        sections.append(f"Context:\n{NO_CONTEXT}")
    if history:
        turns = "\n".join(
            f"{'User' if m.role == MessageRole.USER else 'Assistant'}: {m.content}"
            for m in history
        )
        sections.append(f"Conversation history:\n{turns}")
    sections.append(f"Question: {query}\nAnswer:")
    return "\n\n".join(sections)


def to_sources(results: list[SimilarityResult]) -> list[SourceReference]:
    return [
        SourceReference(
            document_name=r.document_name,
            chunk_content=r.chunk.content,
            similarity_score=r.similarity,
            chunk_index=r.chunk.chunk_index,
        )
        for r in results
    ]


class ProcessQueryUseCase:
    """Answer a question from retrieved chunks and record the exchange."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        embedding_provider: EmbeddingProvider,
        generation_provider: GenerationProvider,
        retriever: Retriever,
        history_limit: int = 10,
        include_history: bool = True,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._embedding_provider = embedding_provider
        self._generation_provider = generation_provider
        self._retriever = retriever
        self._history_limit = history_limit
        self._include_history = include_history

    async def execute(self, query: str, session_id: str) -> ChatAnswer:
        """Run embed, retrieve, generate; persist both turns in one transaction.

        Nothing is written unless an answer was produced.
        """
        if not query or not query.strip():
            raise ValidationError("Query cannot be empty")
        if not session_id or not session_id.strip():
            raise ValidationError("Session ID cannot be empty")

        logger.info("Processing query for session %s", session_id)

        history: list[Message] = []
        async with self._uow_factory() as uow:
            conversation = await uow.conversations.get_by_session_id(session_id)
            if conversation and self._include_history and self._history_limit > 0:
                history = await uow.messages.list_recent(conversation.id, self._history_limit)

        try:
            query_embedding = await self._embedding_provider.embed_one(query)
        except Exception as e:
            raise EmbeddingStageFailure(f"Failed to embed query: {e}") from e

        try:
            results = await self._retriever.find_similar(query_embedding)
        except Exception as e:
            raise RetrievalStageFailure(f"Failed to retrieve chunks: {e}") from e

        if not results:
            logger.warning("No relevant chunks found for session %s", session_id)

        prompt = build_prompt(query, results, history)
        try:
            answer = await self._generation_provider.generate(prompt)
        except Exception as e:
            raise GenerationStageFailure(f"Failed to generate answer: {e}") from e

        sources = to_sources(results)
        await self._record_exchange(session_id, query, answer, sources)

        logger.info(
            "Query processed for session %s with %d sources", session_id, len(sources)
        )
        return ChatAnswer(answer=answer, sources=sources)

    async def _record_exchange(
        self,
        session_id: str,
        query: str,
        answer: str,
        sources: list[SourceReference],
    ) -> None:
        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            conversation = await uow.conversations.get_by_session_id(session_id)
            if conversation is None:
                conversation = await uow.conversations.create(
                    Conversation(
                        id=uuid4(),
                        session_id=session_id,
                        created_at=now,
                        updated_at=now,
                        title=query.strip()[:TITLE_LENGTH],
                    )
                )
                logger.info("Created conversation for session %s", session_id)
            else:
                conversation.updated_at = now
                await uow.conversations.touch(conversation)

            await uow.messages.create(
                Message(
                    id=uuid4(),
                    conversation_id=conversation.id,
                    role=MessageRole.USER,
                    content=query,
                    created_at=now,
                )
            )
            await uow.messages.create(
                Message(
                    id=uuid4(),
                    conversation_id=conversation.id,
                    role=MessageRole.ASSISTANT,
                    content=answer,
                    created_at=max(datetime.now(UTC), now + timedelta(microseconds=1)),
                    sources=sources or None,
                )
            )
