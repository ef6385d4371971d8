"""Factory for building an EmbeddingGenerator from configuration."""

import logging

from newsrag.config import PipelineConfig
from newsrag.embeddings.generator import EmbeddingGenerator
from newsrag.embeddings.remote import RemoteBackend
from newsrag.embeddings.synthetic import SyntheticBackend

logger = logging.getLogger(__name__)


def get_embedding_generator(config: PipelineConfig | None = None) -> EmbeddingGenerator:
    """Create an EmbeddingGenerator for the configured backend.

    Args:
        config: Pipeline configuration. If None, reads it from the environment.

    Returns:
        EmbeddingGenerator: Generator using the remote or synthetic backend.
            In development mode the remote backend falls back to synthetic
            vectors when the provider fails.
    """
    if config is None:
        config = PipelineConfig.from_env()

    synthetic = SyntheticBackend(dimensions=config.embedding_dimensions)

    if config.embedding_backend == "synthetic":
        logger.info(f"🧮 Using synthetic embeddings ({config.embedding_dimensions} dims)")
        return EmbeddingGenerator(
            synthetic,
            batch_size=config.embedding_batch_size,
            batch_delay=config.embedding_batch_delay,
        )

    if config.embedding_backend == "remote":
        backend = RemoteBackend(
            api_key=config.embedding_api_key,
            model=config.embedding_model,
            api_url=config.embedding_api_url,
        )
        fallback = synthetic if config.is_development else None
        return EmbeddingGenerator(
            backend,
            fallback=fallback,
            batch_size=config.embedding_batch_size,
            batch_delay=config.embedding_batch_delay,
        )

    raise ValueError(f"Unsupported embedding backend: {config.embedding_backend}")
