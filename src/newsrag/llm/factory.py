"""Factory function for creating generation service instances."""

import logging

from newsrag.config import PipelineConfig
from newsrag.llm.base import LLMService
from newsrag.llm.gemini import GeminiService
from newsrag.llm.ollama import OllamaService

logger = logging.getLogger(__name__)


def get_llm_service(config: PipelineConfig | None = None) -> LLMService:
    """Factory function to create a generation service instance.

    Args:
        config: Pipeline configuration. If None, uses environment variables.
                Relevant fields:
                - 'llm_service': Service type ("gemini" or "ollama")
                - 'llm_model': Model name (default depends on the service)
                - 'ollama_host': Ollama host URL
                - 'gemini_api_key': Gemini API key

    Returns:
        LLMService: An instance implementing the LLMService protocol.
    """
    if config is None:
        config = PipelineConfig.from_env()

    service_type = config.llm_service

    if service_type == "gemini":
        return GeminiService(model=config.resolved_llm_model, api_key=config.gemini_api_key)

    if service_type == "ollama":
        return OllamaService(host=config.ollama_host, model=config.resolved_llm_model)

    raise ValueError(f"Unsupported service type: {service_type}")
