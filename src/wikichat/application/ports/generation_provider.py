"""Generation provider port - text completion."""

from typing import Protocol


class GenerationProvider(Protocol):
    """Port for generating text from a prompt."""

    async def generate(self, prompt: str, temperature: float | None = None) -> str: ...

    async def health_check(self) -> bool: ...
