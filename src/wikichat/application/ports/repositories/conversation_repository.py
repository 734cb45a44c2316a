"""Conversation repository port."""

from typing import Protocol

from wikichat.domain.entities import Conversation


class ConversationRepository(Protocol):
    """Port for conversation persistence."""

    async def get_by_session_id(self, session_id: str) -> Conversation | None: ...

    async def create(self, conversation: Conversation) -> Conversation: ...

    async def touch(self, conversation: Conversation) -> None: ...

    async def delete(self, conversation: Conversation) -> None: ...
