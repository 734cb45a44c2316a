"""Citation snapshot attached to assistant answers."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourceReference:
    """Snapshot of a retrieved chunk, independent of the live chunk row."""

    document_name: str
    chunk_content: str
    similarity_score: float
    chunk_index: int

    def __post_init__(self) -> None:
        if not 0.0 <= self.similarity_score <= 1.0:
            raise ValueError("Similarity score must be between 0.0 and 1.0")

    def to_dict(self) -> dict[str, Any]:
        return {
            "documentName": self.document_name,
            "chunkContent": self.chunk_content,
            "similarityScore": self.similarity_score,
            "chunkIndex": self.chunk_index,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceReference":
        return cls(
            document_name=data["documentName"],
            chunk_content=data["chunkContent"],
            similarity_score=float(data["similarityScore"]),
            chunk_index=int(data["chunkIndex"]),
        )
