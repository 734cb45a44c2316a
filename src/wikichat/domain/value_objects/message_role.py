"""Author of a conversation message."""

from enum import StrEnum


class MessageRole(StrEnum):
    """Message author."""

    USER = "USER"
    ASSISTANT = "ASSISTANT"
