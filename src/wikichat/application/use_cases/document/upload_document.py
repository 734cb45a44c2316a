"""Upload document use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from wikichat.application.dto.document_dto import DocumentOutput, DocumentUploadInput
from wikichat.application.ports import UnitOfWorkFactory
from wikichat.application.use_cases.document.process_document import ProcessDocumentUseCase
from wikichat.domain.entities import Document
from wikichat.domain.exceptions import UnsupportedContentType, ValidationError
from wikichat.domain.value_objects import DocumentStatus, base_content_type

logger = logging.getLogger(__name__)


class UploadDocumentUseCase:
    """Validate and register an upload, then hand it to background processing."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        process_document: ProcessDocumentUseCase,
        allowed_content_types: list[str],
        max_file_size: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._process_document = process_document
        self._allowed_content_types = {t.lower() for t in allowed_content_types}
        self._max_file_size = max_file_size

    async def execute(self, input_data: DocumentUploadInput) -> DocumentOutput:
        """Store the document as PROCESSING and return without waiting."""
        if not input_data.filename or not input_data.filename.strip():
            raise ValidationError("Filename cannot be empty")
        if base_content_type(input_data.content_type) not in self._allowed_content_types:
            raise UnsupportedContentType(
                f"Content type not allowed: {input_data.content_type}. "
                f"Allowed types: {', '.join(sorted(self._allowed_content_types))}"
            )
        if not input_data.data:
            raise ValidationError("File is empty")
        if len(input_data.data) > self._max_file_size:
            raise ValidationError(
                f"File size {len(input_data.data)} exceeds maximum {self._max_file_size}"
            )

        now = datetime.now(UTC)
        document = Document(
            id=uuid4(),
            filename=input_data.filename,
            content_type=input_data.content_type,
            file_size=len(input_data.data),
            status=DocumentStatus.PROCESSING,
            created_at=now,
            updated_at=now,
        )
        async with self._uow_factory() as uow:
            await uow.documents.create(document)

        logger.info("Document uploaded: %s (%s)", document.filename, document.id)
        self._process_document.schedule(document.id, input_data.content_type, input_data.data)
        return DocumentOutput.from_entity(document)
