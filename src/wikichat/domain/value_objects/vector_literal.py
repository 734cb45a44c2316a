"""pgvector text encoding of embedding vectors."""

from collections.abc import Sequence


def to_vector_literal(vector: Sequence[float]) -> str:
    """Encode a vector as "[0.1,0.2,...]"."""
    if not vector:
        raise ValueError("Vector cannot be empty")
    return "[" + ",".join(repr(float(v)) for v in vector) + "]"
