"""Domain value objects."""

from wikichat.domain.value_objects.content_type import base_content_type
from wikichat.domain.value_objects.document_status import DocumentStatus
from wikichat.domain.value_objects.message_role import MessageRole
from wikichat.domain.value_objects.source_reference import SourceReference
from wikichat.domain.value_objects.vector_literal import to_vector_literal

__all__ = [
    "DocumentStatus",
    "MessageRole",
    "SourceReference",
    "base_content_type",
    "to_vector_literal",
]
