"""Document DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from wikichat.domain.entities import Document
from wikichat.domain.value_objects import DocumentStatus


@dataclass
class DocumentUploadInput:
    """Input for uploading a document."""

    filename: str
    content_type: str
    data: bytes


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: UUID
    filename: str
    content_type: str
    file_size: int
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
    chunk_count: int | None = None

    @classmethod
    def from_entity(cls, document: Document, chunk_count: int | None = None) -> "DocumentOutput":
        return cls(
            id=document.id,
            filename=document.filename,
            content_type=document.content_type,
            file_size=document.file_size,
            status=document.status,
            created_at=document.created_at,
            updated_at=document.updated_at,
            chunk_count=chunk_count,
        )
