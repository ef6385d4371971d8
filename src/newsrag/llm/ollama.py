"""Ollama generation service implementation."""

import asyncio
import logging

import ollama

from newsrag.errors import GenerationProviderError
from newsrag.llm.base import GenerationConfig

logger = logging.getLogger(__name__)


class OllamaService:
    """Ollama generation service implementation.

    This service uses the Ollama API to generate responses from local models.
    """

    def __init__(self, host: str, model: str) -> None:
        """Initialize the Ollama service.

        Args:
            host: The Ollama server host URL (e.g., "http://localhost:11434")
            model: The model name to use (e.g., "llama3")
        """
        self.host = host
        self.model = model
        logger.info(f"🤖 Initializing OllamaService: host={host}, model={model}")
        self.client = ollama.AsyncClient(host=host)

    async def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        """Generate a response using Ollama.

        Args:
            prompt: The fully assembled prompt
            config: Sampling parameters. If None, uses the defaults.

        Returns:
            str: The generated response content from the model.
        """
        config = config or GenerationConfig()
        logger.info(f"🗣️  Generating response with {self.model}")

        options = {
            "temperature": config.temperature,
            "top_p": config.top_p,
            "top_k": config.top_k,
            "num_predict": config.max_output_tokens,
        }

        try:
            response = await asyncio.wait_for(
                self.client.chat(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    options=options,
                ),
                timeout=config.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationProviderError(
                f"Ollama request timed out after {config.timeout}s"
            ) from e
        except Exception as e:
            logger.error(f"❌ Ollama API error: {e}", exc_info=True)
            raise GenerationProviderError(f"Ollama API error: {e}") from e

        content = response.message.content or ""
        if not content:
            raise GenerationProviderError("Invalid response from Ollama: no content")

        logger.info(f"✅ Response generated: {len(content)} characters")
        return content
