"""Conversation entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Conversation:
    """Chat session identified by a client-supplied session id."""

    id: UUID
    session_id: str
    created_at: datetime
    updated_at: datetime
    title: str | None = None
