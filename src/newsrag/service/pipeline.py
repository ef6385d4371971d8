"""Retrieval-augmented pipeline: index articles, answer questions."""

import logging
from typing import Any

from newsrag.config import PipelineConfig
from newsrag.constants import DEFAULT_SEARCH_LIMIT, TRY_AGAIN_MESSAGE
from newsrag.embeddings import EmbeddingGenerator, get_embedding_generator, is_valid_vector
from newsrag.errors import EmbeddingProviderError, NewsRAGError, ValidationError, VectorStoreError
from newsrag.llm import get_llm_service
from newsrag.models import (
    Answer,
    ArticlePayload,
    Document,
    IndexedPoint,
    RetrievalResult,
    SourceAttribution,
    utc_now_iso,
)
from newsrag.service.answer import AnswerGenerator
from newsrag.service.text import extract_relevant_sentence, normalize_text
from newsrag.service.vectorstore import VectorIndex, create_qdrant_client, make_point_id

logger = logging.getLogger(__name__)


class RAGPipeline:
    """Composes embedding, vector search, passage extraction and generation.

    Each call keeps its working data (query vector, hits, prompt) local, so
    one pipeline instance can serve many concurrent requests.
    """

    def __init__(
        self,
        embedder: EmbeddingGenerator,
        vector_index: VectorIndex,
        answer_generator: AnswerGenerator,
        score_threshold: float,
        default_top_k: int,
        min_sentence_length: int,
    ) -> None:
        self.embedder = embedder
        self.vector_index = vector_index
        self.answer_generator = answer_generator
        self.score_threshold = score_threshold
        self.default_top_k = default_top_k
        self.min_sentence_length = min_sentence_length

    async def initialize(self) -> None:
        """Make sure the backing collection exists."""
        await self.vector_index.ensure_collection()

    async def _embed_document(self, document: Document, position: int) -> IndexedPoint | None:
        text = normalize_text(document.embedding_text())
        label = str(document.title)[:50] or f"#{position}"
        if not text:
            logger.warning(f"⚠️ Skipping article {position}: no text to embed")
            return None

        try:
            vector = (await self.embedder.embed([text]))[0].vector
        except NewsRAGError as e:
            logger.error(f"❌ Skipping article {position} ({label}): {e.message}")
            return None

        if not is_valid_vector(vector) or len(vector) != self.vector_index.dimensions:
            logger.error(
                f"❌ Skipping article {position} ({label}): expected a "
                f"{self.vector_index.dimensions}-dim vector, got {len(vector) if vector else 0}"
            )
            return None

        point_id = make_point_id(document.id if document.id is not None else position)
        logger.info(f"Processed article {position}: {label}")
        return IndexedPoint(
            id=point_id, vector=vector, payload=ArticlePayload.from_document(document)
        )

    async def index(self, documents: list[Document | dict[str, Any]]) -> int:
        """Embed and store articles.

        Articles whose text is empty or whose embedding fails are skipped;
        the rest are written in one batch. Compare the returned count with
        ``len(documents)`` to detect partial success.

        Args:
            documents: Articles as Document objects or article dictionaries

        Returns:
            int: Number of articles stored (0 if the vector store fails)
        """
        if not documents:
            return 0

        logger.info(f"📥 Storing {len(documents)} articles in vector database")

        try:
            await self.vector_index.ensure_collection()
        except VectorStoreError as e:
            logger.error(f"❌ Vector store unavailable, nothing stored: {e.message}")
            return 0

        points: list[IndexedPoint] = []
        for position, item in enumerate(documents, 1):
            try:
                document = item if isinstance(item, Document) else Document.from_dict(item)
                point = await self._embed_document(document, position)
            except (AttributeError, TypeError, ValueError) as e:
                logger.error(f"❌ Skipping malformed article {position}: {e}")
                continue
            if point is not None:
                points.append(point)

        try:
            stored = await self.vector_index.upsert(points)
        except VectorStoreError as e:
            logger.error(f"❌ Error storing articles: {e.message}")
            return 0

        if stored < len(documents):
            logger.warning(f"⚠️ Stored {stored} of {len(documents)} articles")
        else:
            logger.info(f"✅ Successfully stored {stored} articles in vector database")
        return stored

    async def retrieve_relevant_passages(self, query: str, k: int) -> list[RetrievalResult]:
        """Embed a query, search above the threshold and extract passages.

        Search failures degrade to an empty list.

        Raises:
            EmbeddingProviderError: If the query cannot be embedded
        """
        logger.info(f"🔍 Retrieving top-{k} passages for query: '{query[:100]}'")
        query_vector = await self.embedder.embed_query(query)

        try:
            hits = await self.vector_index.search(query_vector, k, self.score_threshold)
        except VectorStoreError as e:
            logger.error(f"❌ Error retrieving passages: {e.message}")
            return []

        for hit in hits:
            full_text = f"{hit.title} {hit.description} {hit.content}"
            hit.relevant_text = extract_relevant_sentence(
                full_text, query, hit.description, self.min_sentence_length
            )

        logger.info(f"Found {len(hits)} relevant passages")
        return hits

    async def answer(self, query: str, k: int | None = None) -> Answer:
        """Answer a question from the indexed articles.

        Args:
            query: The user's question
            k: Maximum number of articles to use (defaults to the configured top-k)

        Returns:
            Answer: Text plus one source per article used as context, in the
                same order. Always contains readable text.

        Raises:
            ValidationError: If the query is empty or k is not positive
        """
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Query must be a non-empty string")
        k = self.default_top_k if k is None else k
        if k <= 0:
            raise ValidationError(f"k must be positive, got {k}")

        try:
            context = await self.retrieve_relevant_passages(query, k)
        except (EmbeddingProviderError, ValidationError) as e:
            logger.error(f"❌ Could not embed query: {e.message}")
            return Answer(text=TRY_AGAIN_MESSAGE, sources=[])

        text = await self.answer_generator.generate_answer(query, context)
        sources = [SourceAttribution.from_result(hit) for hit in context]
        return Answer(text=text, sources=sources)

    async def search_articles(
        self, keywords: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[RetrievalResult]:
        """Nearest-neighbour search without a similarity floor.

        Returns an empty list when the keywords cannot be embedded or the
        search fails.
        """
        try:
            query_vector = await self.embedder.embed_query(keywords)
            return await self.vector_index.search(query_vector, limit, score_threshold=None)
        except NewsRAGError as e:
            logger.error(f"❌ Error searching articles: {e.message}")
            return []

    async def stats(self) -> dict[str, Any]:
        """Collection statistics.

        Raises:
            VectorStoreError: If the collection cannot be read
        """
        info = await self.vector_index.stats()
        return {
            "total_documents": info["count"],
            "dimensions": info["dimensions"],
            "distance": info["distance"],
            "status": info["status"],
        }

    async def health_check(self) -> dict[str, Any]:
        """Report vector store reachability and document count. Never raises."""
        reachable = await self.vector_index.is_reachable()
        document_count = 0
        if reachable:
            try:
                document_count = (await self.stats())["total_documents"]
            except VectorStoreError as e:
                logger.warning(f"⚠️ Could not read collection stats: {e.message}")

        return {
            "status": "healthy" if reachable else "unhealthy",
            "vector_store_reachable": reachable,
            "document_count": document_count,
            "last_checked": utc_now_iso(),
        }

    async def clear(self) -> None:
        """Remove every indexed article by recreating the collection."""
        await self.vector_index.clear()


def create_pipeline(config: PipelineConfig | None = None) -> RAGPipeline:
    """Wire a RAGPipeline from configuration.

    Args:
        config: Pipeline configuration. If None, reads it from the environment.

    Returns:
        RAGPipeline: Pipeline with embedding, vector store and generation
            clients that are reused across calls
    """
    if config is None:
        config = PipelineConfig.from_env()

    logger.info(
        f"🔧 Creating pipeline: env={config.environment}, "
        f"embeddings={config.embedding_backend}, llm={config.llm_service}"
    )
    vector_index = VectorIndex(
        client=create_qdrant_client(config.qdrant_url, config.qdrant_api_key),
        collection_name=config.collection_name,
        dimensions=config.embedding_dimensions,
    )
    return RAGPipeline(
        embedder=get_embedding_generator(config),
        vector_index=vector_index,
        answer_generator=AnswerGenerator(get_llm_service(config)),
        score_threshold=config.score_threshold,
        default_top_k=config.default_top_k,
        min_sentence_length=config.min_sentence_length,
    )
