"""Application ports - interfaces for external adapters."""

from wikichat.application.ports.chunker import Chunker
from wikichat.application.ports.document_parser import DocumentParser
from wikichat.application.ports.embedding_provider import EmbeddingProvider
from wikichat.application.ports.generation_provider import GenerationProvider
from wikichat.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Chunker",
    "DocumentParser",
    "EmbeddingProvider",
    "GenerationProvider",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
