"""Base protocol and settings for generation services."""

from dataclasses import dataclass
from typing import Protocol

from newsrag.constants import (
    GENERATION_MAX_OUTPUT_TOKENS,
    GENERATION_TEMPERATURE,
    GENERATION_TIMEOUT_SECONDS,
    GENERATION_TOP_K,
    GENERATION_TOP_P,
)


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters and time budget for one generation call."""

    temperature: float = GENERATION_TEMPERATURE
    top_p: float = GENERATION_TOP_P
    top_k: int = GENERATION_TOP_K
    max_output_tokens: int = GENERATION_MAX_OUTPUT_TOKENS
    timeout: float = GENERATION_TIMEOUT_SECONDS


class LLMService(Protocol):
    """Protocol defining the interface for generation services.

    This protocol allows multiple LLM provider implementations while
    maintaining a consistent interface for the answer generator.
    """

    model: str

    async def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        """Generate text for a single prompt.

        Args:
            prompt: The fully assembled prompt
            config: Sampling parameters. If None, uses the defaults.

        Returns:
            str: The generated text, verbatim

        Raises:
            GenerationProviderError: On timeout, provider error or a response
                without text
        """
        ...
