"""Message entity - one conversation turn."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from wikichat.domain.value_objects import MessageRole, SourceReference


@dataclass
class Message:
    """Single user or assistant turn. Append-only."""

    id: UUID
    conversation_id: UUID
    role: MessageRole
    content: str
    created_at: datetime
    sources: list[SourceReference] | None = None
