"""Domain entities."""

from wikichat.domain.entities.chunk import Chunk
from wikichat.domain.entities.conversation import Conversation
from wikichat.domain.entities.document import Document
from wikichat.domain.entities.message import Message
from wikichat.domain.entities.similarity_result import SimilarityResult

__all__ = [
    "Chunk",
    "Conversation",
    "Document",
    "Message",
    "SimilarityResult",
]
