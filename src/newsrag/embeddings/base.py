"""Base protocol and helpers for embedding backends."""

import math
from typing import Any, Protocol


class EmbeddingBackend(Protocol):
    """Protocol for anything that turns a batch of texts into vectors.

    Implementations receive already-normalized, non-empty texts and must
    return exactly one vector per text, in input order. Failures are raised
    as ``EmbeddingProviderError``.
    """

    name: str
    dimensions: int | None

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts.

        Args:
            texts: Normalized texts to embed

        Returns:
            list[list[float]]: One vector per input text, in input order
        """
        ...


def is_valid_vector(vector: Any) -> bool:
    """Return True iff ``vector`` is a non-empty sequence of finite numbers."""
    if not isinstance(vector, (list, tuple)) or not vector:
        return False
    return all(
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        for value in vector
    )
