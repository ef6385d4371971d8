"""Runtime configuration for the retrieval-and-answer pipeline."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from newsrag.constants import (
    DEFAULT_BATCH_DELAY_SECONDS,
    DEFAULT_COLLECTION_NAME,
    DEFAULT_EMBEDDING_API_URL,
    DEFAULT_EMBEDDING_BATCH_SIZE,
    DEFAULT_EMBEDDING_DIMENSIONS,
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_OLLAMA_HOST,
    DEFAULT_QDRANT_URL,
    DEFAULT_SCORE_THRESHOLD,
    DEFAULT_TOP_K,
    LLM_MODEL_DEFAULTS,
    MIN_SENTENCE_LENGTH,
)

# Load environment variables
load_dotenv()

ENVIRONMENTS = ("development", "production")


@dataclass
class PipelineConfig:
    """Configuration container for pipeline dependencies.

    Build it with ``PipelineConfig.from_env()`` in applications, or construct
    it directly in tests.
    """

    environment: str = "development"

    # Embeddings
    embedding_backend: str = "synthetic"
    embedding_api_key: str | None = None
    embedding_api_url: str = DEFAULT_EMBEDDING_API_URL
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    embedding_dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS
    embedding_batch_size: int = DEFAULT_EMBEDDING_BATCH_SIZE
    embedding_batch_delay: float = DEFAULT_BATCH_DELAY_SECONDS

    # Generation
    llm_service: str = "gemini"
    llm_model: str | None = None
    gemini_api_key: str | None = None
    ollama_host: str = DEFAULT_OLLAMA_HOST

    # Vector store
    qdrant_url: str = DEFAULT_QDRANT_URL
    qdrant_api_key: str | None = None
    collection_name: str = DEFAULT_COLLECTION_NAME

    # Retrieval
    score_threshold: float = DEFAULT_SCORE_THRESHOLD
    default_top_k: int = DEFAULT_TOP_K
    min_sentence_length: int = MIN_SENTENCE_LENGTH

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def resolved_llm_model(self) -> str:
        """Generation model name, defaulting per service."""
        return self.llm_model or LLM_MODEL_DEFAULTS.get(self.llm_service, "")

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Read configuration from environment variables.

        Returns:
            PipelineConfig: Configuration with environment overrides applied

        Raises:
            ValueError: If NEWSRAG_ENV is not development or production
        """
        environment = os.getenv("NEWSRAG_ENV", "development").lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(
                f"NEWSRAG_ENV must be one of {', '.join(ENVIRONMENTS)}, got '{environment}'"
            )

        api_key = os.getenv("JINA_API_KEY") or None
        default_backend = "remote" if api_key or environment == "production" else "synthetic"

        return cls(
            environment=environment,
            embedding_backend=os.getenv("EMBEDDING_BACKEND", default_backend).lower(),
            embedding_api_key=api_key,
            embedding_api_url=os.getenv("EMBEDDING_API_URL", DEFAULT_EMBEDDING_API_URL),
            embedding_model=os.getenv("EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL),
            embedding_dimensions=int(
                os.getenv("EMBEDDING_DIMENSIONS", str(DEFAULT_EMBEDDING_DIMENSIONS))
            ),
            embedding_batch_size=int(
                os.getenv("EMBEDDING_BATCH_SIZE", str(DEFAULT_EMBEDDING_BATCH_SIZE))
            ),
            embedding_batch_delay=float(
                os.getenv("EMBEDDING_BATCH_DELAY", str(DEFAULT_BATCH_DELAY_SECONDS))
            ),
            llm_service=os.getenv("LLM_SERVICE", "gemini").lower(),
            llm_model=os.getenv("LLM_MODEL") or None,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            ollama_host=os.getenv("OLLAMA_HOST", DEFAULT_OLLAMA_HOST),
            qdrant_url=os.getenv("QDRANT_URL", DEFAULT_QDRANT_URL),
            qdrant_api_key=os.getenv("QDRANT_API_KEY") or None,
            collection_name=os.getenv("QDRANT_COLLECTION", DEFAULT_COLLECTION_NAME),
            score_threshold=float(os.getenv("SCORE_THRESHOLD", str(DEFAULT_SCORE_THRESHOLD))),
            default_top_k=int(os.getenv("DEFAULT_TOP_K", str(DEFAULT_TOP_K))),
            min_sentence_length=int(os.getenv("MIN_SENTENCE_LENGTH", str(MIN_SENTENCE_LENGTH))),
        )
