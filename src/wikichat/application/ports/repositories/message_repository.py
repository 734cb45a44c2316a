"""Message repository port."""

from typing import Protocol
from uuid import UUID

from wikichat.domain.entities import Message


class MessageRepository(Protocol):
    """Port for append-only conversation turns."""

    async def create(self, message: Message) -> Message: ...

    async def list_by_conversation(self, conversation_id: UUID) -> list[Message]: ...

    async def list_recent(self, conversation_id: UUID, limit: int) -> list[Message]:
        """Most recent `limit` messages, oldest first."""
        ...
