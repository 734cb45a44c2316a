"""Get document use case."""

from uuid import UUID

from wikichat.application.dto.document_dto import DocumentOutput
from wikichat.application.ports import UnitOfWorkFactory
from wikichat.domain.exceptions import DocumentNotFound


class GetDocumentUseCase:
    """Get document by id with its chunk count."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> DocumentOutput:
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise DocumentNotFound(f"Document not found: {document_id}")
            chunk_count = await uow.chunks.count_by_document_id(document_id)
            return DocumentOutput.from_entity(document, chunk_count=chunk_count)
