"""Embedding generation for newsrag.

Two backends implement the ``EmbeddingBackend`` protocol:
- RemoteBackend: Jina-compatible HTTP embedding API
- SyntheticBackend: hash-seeded random vectors for development

Usage:
    from newsrag.embeddings import get_embedding_generator

    generator = get_embedding_generator()
    vector = await generator.embed_query("How did Apple's stock perform?")
"""

from newsrag.embeddings.base import EmbeddingBackend, is_valid_vector
from newsrag.embeddings.factory import get_embedding_generator
from newsrag.embeddings.generator import EmbeddingGenerator
from newsrag.embeddings.remote import RemoteBackend
from newsrag.embeddings.synthetic import SyntheticBackend

__all__ = [
    "EmbeddingBackend",
    "EmbeddingGenerator",
    "RemoteBackend",
    "SyntheticBackend",
    "get_embedding_generator",
    "is_valid_vector",
]
