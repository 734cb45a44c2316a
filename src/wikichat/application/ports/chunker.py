"""Chunker port - text splitting strategies."""

from typing import Protocol

from wikichat.application.dto.chunking_config import ChunkingConfig


class Chunker(Protocol):
    """Port for splitting text into chunks."""

    def split(self, text: str, chunk_size: int, overlap: int) -> list[str]: ...

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]: ...
