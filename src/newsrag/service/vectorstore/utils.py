"""Utility functions for vector operations."""

import math
import uuid

from newsrag.errors import DimensionMismatchError

# Deterministic namespace for stable point ids derived from string document ids
_POINT_ID_NAMESPACE = uuid.UUID("0b5e3c1a-7f4d-4a52-9c36-2f8e1d7a6b90")

# Largest point id a Qdrant server accepts (unsigned 64-bit)
MAX_POINT_ID = 2**64 - 1


def cosine_similarity(vec_a: list[float], vec_b: list[float]) -> float:
    """Compute cosine similarity between two vectors.

    Args:
        vec_a: First embedding vector
        vec_b: Second embedding vector

    Returns:
        float: Cosine similarity in [-1, 1]; 0.0 if either vector has zero
            magnitude

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(vec_a) != len(vec_b):
        raise DimensionMismatchError(len(vec_a), len(vec_b))

    dot_product = sum(a * b for a, b in zip(vec_a, vec_b))
    magnitude_a = math.sqrt(sum(a * a for a in vec_a))
    magnitude_b = math.sqrt(sum(b * b for b in vec_b))

    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0

    # Clamp rounding drift so identical vectors never exceed 1.0
    return max(-1.0, min(1.0, dot_product / (magnitude_a * magnitude_b)))


def make_point_id(document_id: int | str) -> int | str:
    """Map a document id to a vector store point id.

    Qdrant accepts unsigned 64-bit integers and UUIDs. Integers in that range
    and UUID strings pass through; anything else is mapped to a UUIDv5 so
    that re-indexing the same document overwrites its point.
    """
    if isinstance(document_id, int) and not isinstance(document_id, bool):
        if 0 <= document_id <= MAX_POINT_ID:
            return document_id
    text = str(document_id)
    if text.isascii() and text.isdigit() and len(text) <= 20 and int(text) <= MAX_POINT_ID:
        return int(text)
    try:
        return str(uuid.UUID(text))
    except ValueError:
        return str(uuid.uuid5(_POINT_ID_NAMESPACE, text))
