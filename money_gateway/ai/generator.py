"""
Text generation backed by a PydanticAI agent.

The gateway only needs two things from the model: a single completion and
an incremental stream of text fragments. Both are expressed by the
`TextGenerator` protocol so the API layer never touches the provider.
"""
import logging
from typing import AsyncIterator, Optional, Protocol

from pydantic_ai import Agent
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from money_gateway.config import Settings
from money_gateway.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Protocol for anything that can produce text for a prompt."""

    @property
    def is_configured(self) -> bool: ...
    def stream(self, prompt: str) -> AsyncIterator[str]: ...
    async def complete(self, prompt: str) -> str: ...


class GeminiGenerator:
    """
    Gemini text generator.

    The agent is created on first use so a missing API key only fails the
    request that needs it.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._agent: Optional[Agent[None, str]] = None

    @property
    def is_configured(self) -> bool:
        return self._settings.generator_configured

    def _get_agent(self) -> Agent[None, str]:
        if not self.is_configured:
            raise ConfigurationError("GEMINI_API_KEY not configured")

        if self._agent is None:
            logger.info("Creating generation agent with model: %s", self._settings.llm_model)
            model = GoogleModel(
                self._settings.llm_model,
                provider=GoogleProvider(api_key=self._settings.gemini_api_key),
            )
            self._agent = Agent(model=model)
        return self._agent

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        """
        Yield text fragments as the model produces them.

        stream_text() returns accumulated text, so each fragment is the
        difference from the previous one.
        """
        agent = self._get_agent()
        accumulated = ""

        async with agent.run_stream(prompt) as result:
            async for text in result.stream_text():
                delta = text[len(accumulated):]
                accumulated = text
                yield delta

        logger.debug("Generation stream finished, total chars: %d", len(accumulated))

    async def complete(self, prompt: str) -> str:
        """Run a single, non-streaming generation."""
        agent = self._get_agent()

        try:
            result = await agent.run(prompt)
        except Exception as e:
            logger.exception("Generation failed: %s", e)
            raise UpstreamError("Failed to generate response") from e

        return result.output
