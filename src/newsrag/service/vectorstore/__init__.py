"""Vector store access for newsrag.

This package wraps a Qdrant collection:
- Configuration and client creation (QdrantConfig, create_qdrant_client)
- Collection lifecycle, upsert and threshold-filtered search (VectorIndex)
- Vector helpers (cosine_similarity, make_point_id)

Usage:
    from newsrag.service.vectorstore import VectorIndex, create_qdrant_client

    index = VectorIndex(create_qdrant_client(), "news_articles", dimensions=1024)
    await index.ensure_collection()
"""

from newsrag.service.vectorstore.config import QdrantConfig, create_qdrant_client
from newsrag.service.vectorstore.index import DISTANCE_METRICS, VectorIndex
from newsrag.service.vectorstore.utils import cosine_similarity, make_point_id

__all__ = [
    # Config
    "QdrantConfig",
    "create_qdrant_client",
    # Index
    "DISTANCE_METRICS",
    "VectorIndex",
    # Utils
    "cosine_similarity",
    "make_point_id",
]
