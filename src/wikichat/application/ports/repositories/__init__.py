"""Repository ports."""

from wikichat.application.ports.repositories.chunk_repository import ChunkRepository
from wikichat.application.ports.repositories.conversation_repository import (
    ConversationRepository,
)
from wikichat.application.ports.repositories.document_repository import (
    DocumentRepository,
)
from wikichat.application.ports.repositories.message_repository import (
    MessageRepository,
)

__all__ = [
    "ChunkRepository",
    "ConversationRepository",
    "DocumentRepository",
    "MessageRepository",
]
