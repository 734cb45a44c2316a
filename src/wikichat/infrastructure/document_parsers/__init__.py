"""Document parsers: extract text from uploaded files."""

from wikichat.infrastructure.document_parsers.text_parser import (
    SUPPORTED_CONTENT_TYPES,
    PlainTextParser,
)

__all__ = ["SUPPORTED_CONTENT_TYPES", "PlainTextParser"]
