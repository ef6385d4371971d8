"""Synthetic embedding backend for development without provider credentials."""

import hashlib
import logging
import random

from newsrag.constants import DEFAULT_EMBEDDING_DIMENSIONS

logger = logging.getLogger(__name__)


class SyntheticBackend:
    """Produces random vectors of a fixed dimensionality.

    Values are uniform in [-1, 1). The generator is seeded from a hash of the
    text, so the same text always maps to the same vector and a document
    can still be found by querying with its own text.
    """

    name = "synthetic"

    def __init__(self, dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS) -> None:
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self.dimensions = dimensions

    def _vector(self, text: str) -> list[float]:
        seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
        rng = random.Random(seed)
        return [rng.uniform(-1.0, 1.0) for _ in range(self.dimensions)]

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        logger.debug(f"Generating {len(texts)} synthetic embeddings ({self.dimensions} dims)")
        return [self._vector(text) for text in texts]
