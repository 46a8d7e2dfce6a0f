"""Text generation capability used by the portfolio and resume workflows."""
import logging
from functools import lru_cache
from typing import Callable, Optional, Protocol

from google import genai
from google.genai import types

from app.core.config import Settings, require_api_key
from app.core.errors import GenerationError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str:
        ...


@lru_cache(maxsize=8)
def shared_client(api_key: str) -> genai.Client:
    """One client per API key, reused across requests."""
    return genai.Client(api_key=api_key)


class GeminiTextGenerator:
    """Sends a single prompt to a Gemini model and returns the raw response text."""

    def __init__(self, api_key: str, model: str, temperature: float = 0.7, client: Optional[genai.Client] = None):
        self.model = model
        self.temperature = temperature
        self._client = client or genai.Client(api_key=api_key)

    @classmethod
    def from_settings(cls, config: Settings) -> "GeminiTextGenerator":
        # Raises MissingConfigurationError before any client is built
        api_key = require_api_key(config)
        return cls(api_key=api_key, model=config.GENERATION_MODEL, client=shared_client(api_key))

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=self.temperature),
            )
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            raise GenerationError("Gemini returned an empty response")
        logger.info("Received %d characters from %s", len(text), self.model)
        return text


GeneratorFactory = Callable[[Settings], TextGenerator]


def default_generator_factory(config: Settings) -> TextGenerator:
    return GeminiTextGenerator.from_settings(config)
