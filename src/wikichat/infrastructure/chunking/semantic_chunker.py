"""Semantic boundary chunker with sliding-window overlap."""

import logging
import re
from collections.abc import Callable

from wikichat.application.dto.chunking_config import ChunkingConfig
from wikichat.domain.exceptions import InvalidParameters

logger = logging.getLogger(__name__)

# Chunks shorter than this carry too little meaning to embed on their own.
MIN_CHUNK_SIZE = 50

_PARAGRAPH_BOUNDARY = re.compile(r"\n\n+")
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")

_PARAGRAPH_JOINER = "\n\n"
_SENTENCE_JOINER = " "
_WORD_JOINER = " "
_OVERLAP_JOINER = "\n"


class SemanticChunker:
    """Chunker splitting on paragraphs, then sentences, then words.

    Every chunk after the first is prefixed with the tail of the previous
    chunk so that information at a boundary is present in both. Pure and
    deterministic; safe to share between tasks.
    """

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]:
        """Split text using the configured chunk size and overlap."""
        return self.split(text, config.chunk_size, config.chunk_overlap)

    def split(self, text: str, chunk_size: int, overlap: int) -> list[str]:
        """Split text into overlapping chunks.

        Raises InvalidParameters unless chunk_size > 0 and
        0 <= overlap < chunk_size. Blank text yields an empty list.
        """
        if not self.are_valid_parameters(chunk_size, overlap):
            raise InvalidParameters(
                f"Invalid parameters: chunk_size={chunk_size}, overlap={overlap}. "
                "chunk_size must be > 0, overlap must be >= 0 and < chunk_size"
            )

        normalized = _preprocess(text or "")
        if not normalized:
            logger.debug("Empty text provided, returning no chunks")
            return []

        if len(normalized) <= chunk_size:
            return [normalized]

        logger.debug(
            "Chunking text: %d chars, target size: %d, overlap: %d",
            len(normalized),
            chunk_size,
            overlap,
        )
        semantic_chunks = _split_paragraphs(normalized, chunk_size)
        overlapped = _apply_overlap(semantic_chunks, overlap)
        chunks = [c for c in overlapped if len(c) >= MIN_CHUNK_SIZE]

        if len(chunks) < len(overlapped):
            logger.debug(
                "Filtered out %d small chunks (< %d chars)",
                len(overlapped) - len(chunks),
                MIN_CHUNK_SIZE,
            )
        logger.info(
            "Chunking complete: %d chars -> %d chunks", len(normalized), len(chunks)
        )
        return chunks

    @staticmethod
    def are_valid_parameters(chunk_size: int, overlap: int) -> bool:
        return chunk_size > 0 and 0 <= overlap < chunk_size


def _preprocess(text: str) -> str:
    """Normalize line endings, drop control characters, trim."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    normalized = _CONTROL_CHARS.sub("", normalized)
    return normalized.strip()


def _pack(
    pieces: list[str],
    chunk_size: int,
    joiner: str,
    split_oversized: Callable[[str, int], list[str]],
) -> list[str]:
    """Greedily accumulate pieces into chunks no longer than chunk_size.

    A piece that alone exceeds chunk_size is handed to split_oversized and
    its output appended as finished chunks.
    """
    chunks: list[str] = []
    current = ""
    for piece in pieces:
        piece = piece.strip()
        if not piece:
            continue
        if len(current) + len(piece) + len(joiner) > chunk_size:
            if current:
                chunks.append(current.strip())
            if len(piece) > chunk_size:
                chunks.extend(split_oversized(piece, chunk_size))
                current = ""
            else:
                current = piece
        else:
            current = f"{current}{joiner}{piece}" if current else piece
    if current:
        chunks.append(current.strip())
    return chunks


def _split_paragraphs(text: str, chunk_size: int) -> list[str]:
    chunks = _pack(
        _PARAGRAPH_BOUNDARY.split(text), chunk_size, _PARAGRAPH_JOINER, _split_sentences
    )
    logger.debug("Split into %d semantic chunks", len(chunks))
    return chunks


def _split_sentences(paragraph: str, chunk_size: int) -> list[str]:
    return _pack(
        _SENTENCE_BOUNDARY.split(paragraph), chunk_size, _SENTENCE_JOINER, _split_words
    )


def _split_words(sentence: str, chunk_size: int) -> list[str]:
    """Last resort: pack words; hard-slice any word longer than chunk_size."""
    chunks: list[str] = []
    current = ""
    for word in sentence.split():
        if len(word) > chunk_size:
            if current:
                chunks.append(current)
                current = ""
            chunks.extend(word[i : i + chunk_size] for i in range(0, len(word), chunk_size))
            continue
        if len(current) + len(word) + len(_WORD_JOINER) > chunk_size:
            if current:
                chunks.append(current)
            current = word
        else:
            current = f"{current}{_WORD_JOINER}{word}" if current else word
    if current:
        chunks.append(current)
    return chunks


def _apply_overlap(chunks: list[str], overlap: int) -> list[str]:
    """Prefix each chunk with the tail of the previous pre-overlap chunk."""
    if overlap <= 0 or len(chunks) <= 1:
        return chunks

    overlapped = [chunks[0]]
    for previous, current in zip(chunks, chunks[1:]):
        tail = _tail(previous, overlap)
        if tail.strip():
            current = f"{tail}{_OVERLAP_JOINER}{current}"
        overlapped.append(current)
    return overlapped


def _tail(text: str, n: int) -> str:
    """Last n characters, advanced past a space found in the first half."""
    if len(text) <= n:
        return text
    tail = text[-n:]
    first_space = tail.find(" ")
    if 0 < first_space < n // 2:
        return tail[first_space + 1 :]
    return tail
