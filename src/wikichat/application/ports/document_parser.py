"""Document parser port - bytes to plain text."""

from typing import Protocol


class DocumentParser(Protocol):
    """Port for extracting plain text from uploaded bytes."""

    def parse(self, data: bytes, content_type: str) -> str: ...
