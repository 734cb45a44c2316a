"""Chat DTOs."""

from dataclasses import dataclass, field

from wikichat.domain.value_objects import SourceReference


@dataclass
class ChatAnswer:
    """Generated answer with the chunks it was grounded on."""

    answer: str
    sources: list[SourceReference] = field(default_factory=list)
