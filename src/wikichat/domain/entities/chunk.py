"""Chunk entity - text segment with embedding."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Chunk:
    """Chunk - slice of a document's text with its vector embedding."""

    id: UUID
    document_id: UUID
    content: str
    chunk_index: int
    created_at: datetime
    embedding: list[float] | None = None
