"""Embedding generation with normalization, fallback and chunked batching."""

import asyncio
import logging

from newsrag.constants import DEFAULT_BATCH_DELAY_SECONDS, DEFAULT_EMBEDDING_BATCH_SIZE
from newsrag.embeddings.base import EmbeddingBackend
from newsrag.errors import EmbeddingProviderError, NewsRAGError, ValidationError
from newsrag.models import BatchEmbeddingResult, EmbeddingResult
from newsrag.service.text import normalize_text

logger = logging.getLogger(__name__)


class EmbeddingGenerator:
    """Turns texts into embedding vectors through an ``EmbeddingBackend``.

    When a ``fallback`` backend is given (development mode), a failure of the
    primary backend is replaced by the fallback's vectors instead of being
    raised. Without one, ``EmbeddingProviderError`` propagates.
    """

    def __init__(
        self,
        backend: EmbeddingBackend,
        fallback: EmbeddingBackend | None = None,
        batch_size: int = DEFAULT_EMBEDDING_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY_SECONDS,
    ) -> None:
        self.backend = backend
        self.fallback = fallback
        self.batch_size = batch_size
        self.batch_delay = batch_delay

    @property
    def dimensions(self) -> int | None:
        """Vector size produced by the active backend, if known."""
        return self.backend.dimensions or (self.fallback.dimensions if self.fallback else None)

    async def embed(self, texts: list[str]) -> list[EmbeddingResult]:
        """Embed a non-empty batch of texts in one provider call.

        Args:
            texts: Raw texts; each is normalized before submission

        Returns:
            list[EmbeddingResult]: One result per text, in input order

        Raises:
            ValidationError: If ``texts`` is empty or a text normalizes to ""
            EmbeddingProviderError: If the backend fails and no fallback is set
        """
        if not texts:
            raise ValidationError("No texts provided for embedding")

        cleaned = [normalize_text(text) for text in texts]
        empty = [i for i, text in enumerate(cleaned) if not text]
        if empty:
            raise ValidationError(
                "Text is empty after normalization", details={"indices": empty}
            )

        try:
            vectors = await self.backend.embed_texts(cleaned)
        except EmbeddingProviderError as e:
            if self.fallback is None:
                logger.error(f"❌ Error generating embeddings: {e.message}")
                raise
            logger.warning(
                f"⚠️ Embedding provider failed ({e.message}); "
                f"using {self.fallback.name} embeddings"
            )
            vectors = await self.fallback.embed_texts(cleaned)

        if len(vectors) != len(cleaned):
            raise EmbeddingProviderError(
                f"Expected {len(cleaned)} embeddings, got {len(vectors)}",
                details={"backend": self.backend.name},
            )

        return [
            EmbeddingResult(vector=vector, source_text=text, dimensions=len(vector))
            for vector, text in zip(vectors, cleaned)
        ]

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query text and return its vector."""
        results = await self.embed([text])
        return results[0].vector

    async def embed_batch(
        self, texts: list[str], batch_size: int | None = None
    ) -> BatchEmbeddingResult:
        """Embed a large list of texts in sequential chunks.

        Chunks are separated by ``batch_delay`` seconds to stay under the
        provider's rate limit. A failing chunk is logged and skipped; its
        positions in the result stay None.

        Args:
            texts: Raw texts to embed
            batch_size: Texts per provider call (defaults to the generator's)

        Returns:
            BatchEmbeddingResult: Per-text results aligned with ``texts``
        """
        size = batch_size or self.batch_size
        if size <= 0:
            raise ValidationError(f"batch_size must be positive, got {size}")

        result = BatchEmbeddingResult(items=[None] * len(texts))
        total_batches = (len(texts) + size - 1) // size

        for batch_number, start in enumerate(range(0, len(texts), size), 1):
            chunk = texts[start : start + size]
            logger.info(f"Processing batch {batch_number}/{total_batches}")
            try:
                embeddings = await self.embed(chunk)
                result.items[start : start + len(embeddings)] = embeddings
            except NewsRAGError as e:
                logger.error(f"❌ Error processing batch {batch_number}: {e.message}")

            if start + size < len(texts):
                await asyncio.sleep(self.batch_delay)

        if result.is_partial:
            logger.warning(
                f"⚠️ Batch embedding incomplete: {len(result.failed_indices)} "
                f"of {len(texts)} texts were not embedded"
            )
        return result
