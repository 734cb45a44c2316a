"""Application entry point and composition root."""

import logging
from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from wikichat import __version__
from wikichat.application.dto.chunking_config import ChunkingConfig
from wikichat.application.use_cases.chat.delete_conversation import DeleteConversationUseCase
from wikichat.application.use_cases.chat.get_history import GetHistoryUseCase
from wikichat.application.use_cases.chat.process_query import ProcessQueryUseCase
from wikichat.application.use_cases.document.delete_document import DeleteDocumentUseCase
from wikichat.application.use_cases.document.get_document import GetDocumentUseCase
from wikichat.application.use_cases.document.get_document_chunks import (
    GetDocumentChunksUseCase,
)
from wikichat.application.use_cases.document.list_documents import ListDocumentsUseCase
from wikichat.application.use_cases.document.process_document import ProcessDocumentUseCase
from wikichat.application.use_cases.document.upload_document import UploadDocumentUseCase
from wikichat.application.use_cases.health.check_health import CheckHealthUseCase
from wikichat.application.use_cases.search.retriever import Retriever
from wikichat.config import Settings, get_settings
from wikichat.infrastructure.chunking.semantic_chunker import SemanticChunker
from wikichat.infrastructure.document_parsers import PlainTextParser
from wikichat.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from wikichat.infrastructure.generation.openai_provider import OpenAIGenerationProvider
from wikichat.infrastructure.persistence.postgres.connection import create_pool
from wikichat.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from wikichat.logging_config import configure_logging

logger = logging.getLogger(__name__)


@dataclass
class WikiChatServices:
    """Use cases wired to the Postgres store and OpenAI-compatible providers."""

    pool: AsyncConnectionPool
    process_query: ProcessQueryUseCase
    get_history: GetHistoryUseCase
    delete_conversation: DeleteConversationUseCase
    upload_document: UploadDocumentUseCase
    process_document: ProcessDocumentUseCase
    get_document: GetDocumentUseCase
    list_documents: ListDocumentsUseCase
    get_document_chunks: GetDocumentChunksUseCase
    delete_document: DeleteDocumentUseCase
    check_health: CheckHealthUseCase

    async def open(self) -> None:
        await self.pool.open()

    async def close(self) -> None:
        """Stop background ingestion, then release the pool."""
        await self.process_document.shutdown()
        await self.pool.close()


def main() -> None:
    """CLI entry point."""
    print(f"WikiChat v{__version__}")


def create_wikichat_services(settings: Settings | None = None) -> WikiChatServices:
    """Composition root - build use cases with all dependencies."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    embedding_provider = OpenAIEmbeddingProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
        dimension=settings.embedding_dimension,
        batch_size=settings.embedding_batch_size,
    )
    generation_provider = OpenAIGenerationProvider(
        base_url=settings.generation_api_url,
        api_key=settings.generation_api_key,
        model=settings.generation_model,
        temperature=settings.generation_temperature,
    )
    retriever = Retriever(
        unit_of_work_factory=uow_factory,
        similarity_threshold=settings.similarity_threshold,
        default_top_k=settings.top_k,
    )
    process_document = ProcessDocumentUseCase(
        unit_of_work_factory=uow_factory,
        parser=PlainTextParser(),
        chunker=SemanticChunker(),
        embedding_provider=embedding_provider,
        chunking_config=ChunkingConfig(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
        ),
    )

    logger.info(
        "WikiChat v%s configured (%s): embedding=%s, generation=%s",
        __version__,
        settings.environment,
        settings.embedding_model,
        settings.generation_model,
    )
    return WikiChatServices(
        pool=pool,
        process_query=ProcessQueryUseCase(
            unit_of_work_factory=uow_factory,
            embedding_provider=embedding_provider,
            generation_provider=generation_provider,
            retriever=retriever,
            history_limit=settings.history_limit,
            include_history=settings.include_history,
        ),
        get_history=GetHistoryUseCase(unit_of_work_factory=uow_factory),
        delete_conversation=DeleteConversationUseCase(unit_of_work_factory=uow_factory),
        upload_document=UploadDocumentUseCase(
            unit_of_work_factory=uow_factory,
            process_document=process_document,
            allowed_content_types=settings.allowed_content_type_list,
            max_file_size=settings.max_file_size,
        ),
        process_document=process_document,
        get_document=GetDocumentUseCase(unit_of_work_factory=uow_factory),
        list_documents=ListDocumentsUseCase(unit_of_work_factory=uow_factory),
        get_document_chunks=GetDocumentChunksUseCase(unit_of_work_factory=uow_factory),
        delete_document=DeleteDocumentUseCase(unit_of_work_factory=uow_factory),
        check_health=CheckHealthUseCase(
            embedding_provider=embedding_provider,
            generation_provider=generation_provider,
        ),
    )
