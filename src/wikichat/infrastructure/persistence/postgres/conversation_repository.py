"""PostgreSQL conversation repository implementation."""

from psycopg import AsyncConnection

from wikichat.domain.entities import Conversation


class PostgresConversationRepository:
    """Conversation repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_session_id(self, session_id: str) -> Conversation | None:
        cur = await self._conn.execute(
            "SELECT id, session_id, created_at, updated_at, title "
            "FROM conversations WHERE session_id = %s",
            (session_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Conversation(
            id=r[0], session_id=r[1], created_at=r[2], updated_at=r[3], title=r[4]
        )

    async def create(self, conversation: Conversation) -> Conversation:
        """Insert the conversation unless its session already has one.

        Returns the stored row, which belongs to a concurrent writer when
        the insert lost the race on ``session_id``.
        """
        await self._conn.execute(
            "INSERT INTO conversations (id, session_id, title, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (session_id) DO NOTHING",
            (
                conversation.id,
                conversation.session_id,
                conversation.title,
                conversation.created_at,
                conversation.updated_at,
            ),
        )
        stored = await self.get_by_session_id(conversation.session_id)
        return stored or conversation

    async def touch(self, conversation: Conversation) -> None:
        """Record activity on the conversation."""
        await self._conn.execute(
            "UPDATE conversations SET updated_at = %s WHERE id = %s",
            (conversation.updated_at, conversation.id),
        )

    async def delete(self, conversation: Conversation) -> None:
        """Delete conversation; messages are removed by cascade."""
        await self._conn.execute("DELETE FROM conversations WHERE id = %s", (conversation.id,))
