"""PostgreSQL message repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from wikichat.domain.entities import Message
from wikichat.domain.value_objects import MessageRole, SourceReference

_COLUMNS = "id, conversation_id, role, content, created_at, sources"
# Within one timestamp a question sorts before its answer.
_ROLE_ORDER = "CASE role WHEN 'USER' THEN 0 ELSE 1 END"


def _row_to_message(r: tuple) -> Message:
    return Message(
        id=r[0],
        conversation_id=r[1],
        role=MessageRole(r[2]),
        content=r[3],
        created_at=r[4],
        sources=[SourceReference.from_dict(s) for s in r[5]] if r[5] is not None else None,
    )


class PostgresMessageRepository:
    """Message repository implementation. Sources are stored as a JSONB array."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, message: Message) -> Message:
        sources = (
            Jsonb([s.to_dict() for s in message.sources]) if message.sources is not None else None
        )
        await self._conn.execute(
            f"INSERT INTO messages ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
            (
                message.id,
                message.conversation_id,
                message.role.value,
                message.content,
                message.created_at,
                sources,
            ),
        )
        return message

    async def list_by_conversation(self, conversation_id: UUID) -> list[Message]:
        """All messages of a conversation, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM messages WHERE conversation_id = %s "
            f"ORDER BY created_at, {_ROLE_ORDER}",
            (conversation_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_message(r) for r in rows]

    async def list_recent(self, conversation_id: UUID, limit: int) -> list[Message]:
        """Most recent `limit` messages, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM messages WHERE conversation_id = %s "
            f"ORDER BY created_at DESC, {_ROLE_ORDER} DESC LIMIT %s",
            (conversation_id, limit),
        )
        rows = await cur.fetchall()
        return [_row_to_message(r) for r in reversed(rows)]
