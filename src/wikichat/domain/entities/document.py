"""Document entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from wikichat.domain.value_objects import DocumentStatus


@dataclass
class Document:
    """Uploaded document and its processing status."""

    id: UUID
    filename: str
    content_type: str
    file_size: int
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
