"""Document repository port."""

from typing import Protocol
from uuid import UUID

from wikichat.domain.entities import Document
from wikichat.domain.value_objects import DocumentStatus


class DocumentRepository(Protocol):
    """Port for document persistence."""

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def list(self) -> list[Document]: ...

    async def create(self, document: Document) -> Document: ...

    async def update_status(self, document_id: UUID, status: DocumentStatus) -> None: ...

    async def delete(self, document_id: UUID) -> None: ...
