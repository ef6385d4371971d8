"""Generation service abstraction layer for newsrag.

This package provides a unified interface for multiple LLM providers:
- GeminiService: Google Gemini API
- OllamaService: Local LLM via Ollama

All services implement the LLMService protocol.

Usage:
    from newsrag.llm import get_llm_service

    # Create service from environment config
    service = get_llm_service()
    text = await service.generate("Summarize today's tech news.")
"""

from newsrag.llm.base import GenerationConfig, LLMService
from newsrag.llm.factory import get_llm_service
from newsrag.llm.gemini import GeminiService
from newsrag.llm.ollama import OllamaService

__all__ = [
    "GenerationConfig",
    "LLMService",
    "GeminiService",
    "OllamaService",
    "get_llm_service",
]
