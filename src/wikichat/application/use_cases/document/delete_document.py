"""Delete document use case."""

import logging
from uuid import UUID

from wikichat.application.ports import UnitOfWorkFactory
from wikichat.domain.exceptions import DocumentNotFound

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """Delete a document and its chunks in one transaction."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> None:
        async with self._uow_factory() as uow:
            if not await uow.documents.get_by_id(document_id):
                raise DocumentNotFound(f"Document not found: {document_id}")
            await uow.chunks.delete_by_document_id(document_id)
            await uow.documents.delete(document_id)
        logger.info("Deleted document %s", document_id)
