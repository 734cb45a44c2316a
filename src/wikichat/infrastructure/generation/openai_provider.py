"""OpenAI-compatible text generation provider."""

import logging
import time

from openai import AsyncOpenAI, OpenAIError

from wikichat.domain.exceptions import (
    EmptyInput,
    MalformedResponse,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)


class OpenAIGenerationProvider:
    """Generation provider using the chat completions API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        temperature: float = 0.7,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model
        self._temperature = temperature

    async def generate(self, prompt: str, temperature: float | None = None) -> str:
        """Generate a completion for a single-turn prompt."""
        if prompt is None or not prompt.strip():
            raise EmptyInput("Prompt cannot be null or empty")

        started = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature if temperature is None else temperature,
            )
        except OpenAIError as e:
            logger.error("Generation request failed: %s", e)
            raise UpstreamFailure(f"Failed to generate text: {e}") from e

        try:
            content = response.choices[0].message.content if response.choices else None
        except (AttributeError, TypeError, IndexError) as e:
            logger.error("Unexpected generation response: %r", response)
            raise MalformedResponse("Unexpected response from provider") from e
        if not isinstance(content, str) or not content:
            raise MalformedResponse("Received empty response from provider")

        logger.debug(
            "Response generated in %.0fms, length: %d characters",
            (time.perf_counter() - started) * 1000,
            len(content),
        )
        return content

    async def health_check(self) -> bool:
        """Send a short test prompt. Never raises."""
        try:
            await self.generate("ping")
        except Exception as e:
            logger.warning("Generation health check failed: %s", e)
            return False
        return True
