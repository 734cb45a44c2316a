"""PostgreSQL chunk repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from wikichat.domain.entities import Chunk, SimilarityResult
from wikichat.domain.value_objects import to_vector_literal


class PostgresChunkRepository:
    """Chunk repository implementation with pgvector cosine search."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        """Create chunks in batch."""
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO chunks (id, document_id, content, chunk_index, embedding, created_at) "
                "VALUES (%s, %s, %s, %s, %s::vector, %s)",
                [
                    (
                        c.id,
                        c.document_id,
                        c.content,
                        c.chunk_index,
                        to_vector_literal(c.embedding) if c.embedding else None,
                        c.created_at,
                    )
                    for c in chunks
                ],
            )
        return chunks

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]:
        """Get chunks by document id ordered by index. Embeddings are not loaded."""
        cur = await self._conn.execute(
            "SELECT id, document_id, content, chunk_index, created_at "
            "FROM chunks WHERE document_id = %s ORDER BY chunk_index",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [
            Chunk(id=r[0], document_id=r[1], content=r[2], chunk_index=r[3], created_at=r[4])
            for r in rows
        ]

    async def count_by_document_id(self, document_id: UUID) -> int:
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM chunks WHERE document_id = %s", (document_id,)
        )
        r = await cur.fetchone()
        return int(r[0]) if r else 0

    async def delete_by_document_id(self, document_id: UUID) -> None:
        """Delete all chunks for document."""
        await self._conn.execute("DELETE FROM chunks WHERE document_id = %s", (document_id,))

    async def find_similar(
        self,
        vector_literal: str,
        max_distance: float,
        limit: int,
    ) -> list[SimilarityResult]:
        """Chunks with cosine distance strictly below max_distance, nearest first."""
        cur = await self._conn.execute(
            """
            SELECT c.id, c.document_id, c.content, c.chunk_index, c.created_at,
                   d.filename, (c.embedding <=> %s::vector) AS distance
            FROM chunks c
            JOIN documents d ON d.id = c.document_id
            WHERE c.embedding IS NOT NULL
              AND (c.embedding <=> %s::vector) < %s
            ORDER BY distance
            LIMIT %s
            """,
            (vector_literal, vector_literal, max_distance, limit),
        )
        rows = await cur.fetchall()
        return [
            SimilarityResult(
                chunk=Chunk(
                    id=r[0],
                    document_id=r[1],
                    content=r[2],
                    chunk_index=r[3],
                    created_at=r[4],
                ),
                document_name=r[5],
                distance=float(r[6]),
            )
            for r in rows
        ]
