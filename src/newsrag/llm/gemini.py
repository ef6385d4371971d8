"""Google Gemini generation service implementation."""

import asyncio
import logging

from google import genai
from google.genai import types

from newsrag.errors import GenerationProviderError
from newsrag.llm.base import GenerationConfig

logger = logging.getLogger(__name__)


class GeminiService:
    """Google Gemini generation service implementation.

    Uses the Google Gemini API through the ``google-genai`` SDK. If no API key
    is passed, the SDK reads GEMINI_API_KEY from the environment. The client
    is created on first use so that a missing key surfaces as a generation
    failure rather than at construction time.
    """

    def __init__(self, model: str, api_key: str | None = None) -> None:
        """Initialize the Gemini service.

        Args:
            model: The model name to use (e.g., "gemini-2.5-flash")
            api_key: Optional API key; defaults to GEMINI_API_KEY
        """
        self.model = model
        self.api_key = api_key
        self._client: genai.Client | None = None
        logger.info(f"🤖 Initializing GeminiService: model={model}")

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self.api_key)
            except Exception as e:
                raise GenerationProviderError(f"Gemini client unavailable: {e}") from e
        return self._client

    async def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        """Generate a response using Gemini.

        Args:
            prompt: The fully assembled prompt
            config: Sampling parameters. If None, uses the defaults.

        Returns:
            str: The generated response text
        """
        config = config or GenerationConfig()
        logger.info(f"🗣️  Generating response with {self.model}")
        logger.debug(f"Prompt preview: {prompt[:100]}...")

        generate_config = types.GenerateContentConfig(
            temperature=config.temperature,
            top_p=config.top_p,
            top_k=config.top_k,
            max_output_tokens=config.max_output_tokens,
        )

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=prompt,
                    config=generate_config,
                ),
                timeout=config.timeout,
            )
        except GenerationProviderError:
            raise
        except asyncio.TimeoutError as e:
            raise GenerationProviderError(
                f"Gemini request timed out after {config.timeout}s"
            ) from e
        except Exception as e:
            logger.error(f"❌ Gemini API error: {e}", exc_info=True)
            raise GenerationProviderError(f"Gemini API error: {e}") from e

        content = response.text
        if not content:
            raise GenerationProviderError("Invalid response from Gemini API: no text")

        logger.info(f"✅ Response generated: {len(content)} characters")
        return content
