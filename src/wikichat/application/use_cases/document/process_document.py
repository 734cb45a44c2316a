"""Process document use case - parse, chunk, embed, store."""

import asyncio
import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from wikichat.application.dto.chunking_config import ChunkingConfig
from wikichat.application.ports import (
    Chunker,
    DocumentParser,
    EmbeddingProvider,
    UnitOfWorkFactory,
)
from wikichat.domain.entities import Chunk
from wikichat.domain.value_objects import DocumentStatus

logger = logging.getLogger(__name__)


class ProcessDocumentUseCase:
    """Turn an uploaded document into embedded chunks.

    Runs in the background after upload. The document always leaves
    PROCESSING: COMPLETED on success, FAILED on any error or cancellation.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        parser: DocumentParser,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
        chunking_config: ChunkingConfig,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._parser = parser
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._chunking_config = chunking_config
        self._tasks: dict[asyncio.Task, UUID] = {}

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def execute(self, document_id: UUID, content_type: str, data: bytes) -> int:
        """Process the document and return the number of stored chunks."""
        status = DocumentStatus.FAILED
        try:
            logger.info("Processing document %s", document_id)
            text = self._parser.parse(data, content_type)
            chunk_texts = self._chunker.chunk(text, self._chunking_config)
            embeddings = (
                await self._embedding_provider.embed_batch(chunk_texts) if chunk_texts else []
            )

            now = datetime.now(UTC)
            chunks = [
                Chunk(
                    id=uuid4(),
                    document_id=document_id,
                    content=content,
                    chunk_index=i,
                    created_at=now,
                    embedding=embedding,
                )
                for i, (content, embedding) in enumerate(
                    zip(chunk_texts, embeddings, strict=True)
                )
            ]
            if chunks:
                async with self._uow_factory() as uow:
                    await uow.chunks.create_batch(chunks)

            status = DocumentStatus.COMPLETED
            logger.info("Document %s processed: %d chunks", document_id, len(chunks))
            return len(chunks)
        finally:
            await self._set_status(document_id, status)

    def schedule(self, document_id: UUID, content_type: str, data: bytes) -> asyncio.Task:
        """Start processing in the background; the task is tracked until done."""
        task = asyncio.create_task(
            self._run(document_id, content_type, data),
            name=f"process-document-{document_id}",
        )
        self._tasks[task] = document_id
        task.add_done_callback(self._forget)
        return task

    async def shutdown(self) -> None:
        """Cancel outstanding processing and wait for it to settle.

        A task cancelled before it started never reaches its own status
        update, so every cancelled document is marked FAILED here.
        """
        tasks = dict(self._tasks)
        if not tasks:
            return
        logger.info("Cancelling %d document processing tasks", len(tasks))
        for task in tasks:
            task.cancel()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for document_id, result in zip(tasks.values(), results):
            if isinstance(result, asyncio.CancelledError):
                await self._set_status(document_id, DocumentStatus.FAILED)

    async def _run(self, document_id: UUID, content_type: str, data: bytes) -> None:
        try:
            await self.execute(document_id, content_type, data)
        except Exception:
            logger.exception("Failed to process document %s", document_id)

    def _forget(self, task: asyncio.Task) -> None:
        self._tasks.pop(task, None)

    async def _set_status(self, document_id: UUID, status: DocumentStatus) -> None:
        async with self._uow_factory() as uow:
            await uow.documents.update_status(document_id, status)
        if status == DocumentStatus.FAILED:
            logger.warning("Document %s marked %s", document_id, status)
