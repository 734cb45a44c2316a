"""PostgreSQL document repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from wikichat.domain.entities import Document
from wikichat.domain.value_objects import DocumentStatus

_COLUMNS = "id, filename, content_type, file_size, status, created_at, updated_at"


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        filename=r[1],
        content_type=r[2],
        file_size=r[3],
        status=DocumentStatus(r[4]),
        created_at=r[5],
        updated_at=r[6],
    )


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM documents WHERE id = %s", (document_id,)
        )
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def list(self) -> list[Document]:
        """List documents, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM documents ORDER BY created_at DESC"
        )
        rows = await cur.fetchall()
        return [_row_to_document(r) for r in rows]

    async def create(self, document: Document) -> Document:
        """Create document."""
        await self._conn.execute(
            f"INSERT INTO documents ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                document.id,
                document.filename,
                document.content_type,
                document.file_size,
                document.status.value,
                document.created_at,
                document.updated_at,
            ),
        )
        return document

    async def update_status(self, document_id: UUID, status: DocumentStatus) -> None:
        await self._conn.execute(
            "UPDATE documents SET status = %s, updated_at = NOW() WHERE id = %s",
            (status.value, document_id),
        )

    async def delete(self, document_id: UUID) -> None:
        await self._conn.execute("DELETE FROM documents WHERE id = %s", (document_id,))
