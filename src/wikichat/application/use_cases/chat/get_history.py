"""Get conversation history use case."""

from wikichat.application.ports import UnitOfWorkFactory
from wikichat.domain.entities import Message
from wikichat.domain.exceptions import ConversationNotFound


class GetHistoryUseCase:
    """Return every turn of a session's conversation, oldest first."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, session_id: str) -> list[Message]:
        async with self._uow_factory() as uow:
            conversation = await uow.conversations.get_by_session_id(session_id)
            if not conversation:
                raise ConversationNotFound(f"Conversation not found for session: {session_id}")
            return await uow.messages.list_by_conversation(conversation.id)
