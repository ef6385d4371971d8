"""Pytest configuration and shared fixtures for the test suite."""

import re
from typing import Callable

import pytest
import requests
from qdrant_client import QdrantClient

from newsrag.embeddings import EmbeddingGenerator
from newsrag.errors import EmbeddingProviderError
from newsrag.models import Document
from newsrag.service.answer import AnswerGenerator
from newsrag.service.pipeline import RAGPipeline
from newsrag.service.vectorstore import VectorIndex

# Keyword topics for the fake embedding backend. Each topic is one vector
# dimension; the last dimension is a constant bias so no vector is zero.
TOPICS = {
    "finance": {"apple", "stock", "stocks", "shares", "sales", "earnings", "market", "iphone"},
    "weather": {"rain", "weather", "forecast", "storm", "meteorologists", "weekend", "saturday"},
    "sports": {"match", "team", "goal", "league", "season", "championship"},
}
TOPIC_DIMENSIONS = len(TOPICS) + 1


def qdrant_available() -> bool:
    """Check if a Qdrant server is running on localhost.

    Returns:
        True if Qdrant is available, False otherwise
    """
    try:
        response = requests.get("http://localhost:6333/collections", timeout=2)
        return response.status_code == 200
    except requests.RequestException:
        return False


class TopicBackend:
    """Embedding backend that counts topic keywords per dimension."""

    name = "topic"
    dimensions = TOPIC_DIMENSIONS

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.calls: list[list[str]] = []

    def vector(self, text: str) -> list[float]:
        words = re.findall(r"\w+", text.lower())
        counts = [float(sum(1 for word in words if word in keywords)) for keywords in TOPICS.values()]
        return counts + [1.0]

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.fail_on and any(self.fail_on in text for text in texts):
            raise EmbeddingProviderError("Provider rejected the request", model="topic")
        return [self.vector(text) for text in texts]


class RecordingLLM:
    """Generation service that records prompts and returns a fixed answer."""

    model = "recording"

    def __init__(self, response: str = "Apple shares rose 5% on record iPhone sales."):
        self.response = response
        self.prompts: list[str] = []

    async def generate(self, prompt, config=None):
        self.prompts.append(prompt)
        return self.response


# Data fixtures
@pytest.fixture
def apple_article() -> dict:
    return {
        "id": 1,
        "title": "Apple stock rises",
        "description": "Apple reported record iPhone sales in Q4, driving shares up 5%.",
        "source": "Reuters",
        "url": "https://example.com/apple-stock",
        "publish_date": "2024-01-15T10:00:00Z",
        "category": "Business",
    }


@pytest.fixture
def rain_article() -> dict:
    return {
        "id": 2,
        "title": "Rain expected this weekend",
        "description": "Meteorologists forecast heavy rain across the region Saturday.",
        "source": "BBC",
        "url": "https://example.com/weekend-rain",
        "publish_date": "2024-01-16T08:30:00Z",
        "category": "Weather",
    }


@pytest.fixture
def sample_documents(apple_article, rain_article) -> list[Document]:
    """Two unrelated articles, one about markets and one about weather."""
    return [Document.from_dict(apple_article), Document.from_dict(rain_article)]


# Component fixtures
@pytest.fixture
def topic_backend() -> TopicBackend:
    return TopicBackend()


@pytest.fixture
def qdrant_client() -> QdrantClient:
    """Provide an in-process Qdrant client with no persistence."""
    client = QdrantClient(location=":memory:")
    yield client
    client.close()


@pytest.fixture
def vector_index(qdrant_client) -> VectorIndex:
    return VectorIndex(
        client=qdrant_client, collection_name="test_articles", dimensions=TOPIC_DIMENSIONS
    )


@pytest.fixture
def recording_llm() -> RecordingLLM:
    return RecordingLLM()


@pytest.fixture
def make_pipeline(vector_index, recording_llm) -> Callable[..., RAGPipeline]:
    """Factory fixture to build a pipeline over the in-memory index.

    Returns:
        Function that creates a RAGPipeline with custom components
    """

    def _make_pipeline(
        backend=None,
        llm_service=recording_llm,
        score_threshold: float = 0.3,
        default_top_k: int = 5,
    ) -> RAGPipeline:
        embedder = EmbeddingGenerator(backend or TopicBackend(), batch_delay=0)
        return RAGPipeline(
            embedder=embedder,
            vector_index=vector_index,
            answer_generator=AnswerGenerator(llm_service),
            score_threshold=score_threshold,
            default_top_k=default_top_k,
            min_sentence_length=20,
        )

    return _make_pipeline
