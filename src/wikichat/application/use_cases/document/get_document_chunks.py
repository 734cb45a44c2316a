"""Get document chunks use case."""

from uuid import UUID

from wikichat.application.ports import UnitOfWorkFactory
from wikichat.domain.entities import Chunk
from wikichat.domain.exceptions import DocumentNotFound


class GetDocumentChunksUseCase:
    """Chunks of a document ordered by chunk index."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> list[Chunk]:
        async with self._uow_factory() as uow:
            if not await uow.documents.get_by_id(document_id):
                raise DocumentNotFound(f"Document not found: {document_id}")
            return await uow.chunks.get_by_document_id(document_id)
