"""Parser for plain text and markdown."""

from wikichat.domain.exceptions import DocumentParsingError
from wikichat.domain.value_objects import base_content_type

SUPPORTED_CONTENT_TYPES = frozenset({"text/plain", "text/markdown"})


def decode_text(data: bytes) -> str:
    """Decode as UTF-8, falling back to cp1251, then to replacement characters."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        try:
            return data.decode("cp1251")
        except UnicodeDecodeError:
            return data.decode("utf-8", errors="replace")


class PlainTextParser:
    """Treat text/plain and text/markdown uploads as text, stored as-is."""

    def parse(self, data: bytes, content_type: str) -> str:
        media_type = base_content_type(content_type)
        if media_type not in SUPPORTED_CONTENT_TYPES:
            raise DocumentParsingError(f"Unsupported content type: {content_type}")
        return decode_text(data)
