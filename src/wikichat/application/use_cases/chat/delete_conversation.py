"""Delete conversation use case."""

import logging

from wikichat.application.ports import UnitOfWorkFactory
from wikichat.domain.exceptions import ConversationNotFound

logger = logging.getLogger(__name__)


class DeleteConversationUseCase:
    """Delete a session's conversation; its messages go with it."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, session_id: str) -> None:
        async with self._uow_factory() as uow:
            conversation = await uow.conversations.get_by_session_id(session_id)
            if not conversation:
                raise ConversationNotFound(f"Conversation not found for session: {session_id}")
            await uow.conversations.delete(conversation)
        logger.info("Deleted conversation for session %s", session_id)
