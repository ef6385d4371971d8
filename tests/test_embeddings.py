"""Tests for embedding backends and the embedding generator."""

import math
import threading
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import requests

from newsrag.config import PipelineConfig
from newsrag.embeddings import (
    EmbeddingGenerator,
    RemoteBackend,
    SyntheticBackend,
    get_embedding_generator,
    is_valid_vector,
)
from newsrag.errors import EmbeddingProviderError, ValidationError


def _mock_session(body=None, side_effect=None):
    session = MagicMock()
    if side_effect is not None:
        session.post.side_effect = side_effect
        return session
    response = MagicMock()
    response.json.return_value = body
    response.raise_for_status.return_value = None
    session.post.return_value = response
    return session


class TestIsValidVector:
    """Tests for is_valid_vector."""

    def test_accepts_finite_numbers(self):
        assert is_valid_vector([0.1, -2, 3.5])

    @pytest.mark.parametrize(
        "value",
        [None, [], "abc", [0.1, "x"], [0.1, math.nan], [math.inf], [True, False], {"a": 1}],
    )
    def test_rejects_invalid(self, value):
        """Test that empty, non-numeric and non-finite vectors are rejected."""
        assert not is_valid_vector(value)


class TestRemoteBackend:
    """Tests for RemoteBackend."""

    @pytest.mark.asyncio
    async def test_posts_batch_and_orders_by_index(self):
        """Test that the request format is correct and vectors follow data[].index."""
        session = _mock_session(
            {"data": [{"index": 1, "embedding": [0.0, 1.0]}, {"index": 0, "embedding": [1.0, 0.0]}]}
        )
        backend = RemoteBackend(api_key="secret", model="jina-embeddings-v3", session=session)

        vectors = await backend.embed_texts(["first", "second"])

        assert vectors == [[1.0, 0.0], [0.0, 1.0]]
        assert backend.dimensions == 2
        call = session.post.call_args
        assert call.args[0] == "https://api.jina.ai/v1/embeddings"
        assert call.kwargs["json"] == {"input": ["first", "second"], "model": "jina-embeddings-v3"}
        assert call.kwargs["headers"]["Authorization"] == "Bearer secret"

    def test_default_session_is_per_thread(self):
        """Test that worker threads never share a default session."""
        backend = RemoteBackend(api_key="secret")
        sessions = []

        def grab():
            sessions.append(backend._session())

        worker = threading.Thread(target=grab)
        worker.start()
        worker.join()
        grab()
        grab()

        assert sessions[1] is sessions[2]
        assert sessions[0] is not sessions[1]
        assert all(isinstance(session, requests.Session) for session in sessions)

    @pytest.mark.asyncio
    async def test_missing_api_key_raises(self):
        """Test that no request is made without credentials."""
        session = _mock_session({"data": []})
        backend = RemoteBackend(api_key=None, session=session)

        with pytest.raises(EmbeddingProviderError):
            await backend.embed_texts(["text"])
        session.post.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [requests.Timeout("slow"), requests.ConnectionError("down"), requests.HTTPError("500")],
    )
    async def test_transport_errors_wrapped(self, error):
        """Test that timeouts and HTTP failures become EmbeddingProviderError."""
        backend = RemoteBackend(api_key="secret", session=_mock_session(side_effect=error))

        with pytest.raises(EmbeddingProviderError) as exc_info:
            await backend.embed_texts(["text"])
        assert exc_info.value.details["model"] == "jina-embeddings-v3"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"data": "nope"},
            {"data": [{"index": 0, "embedding": []}]},
            {"data": [{"index": 5, "embedding": [0.1]}]},
            {"data": []},
        ],
    )
    async def test_malformed_body_raises(self, body):
        """Test that missing data, bad vectors or missing indices are rejected."""
        backend = RemoteBackend(api_key="secret", session=_mock_session(body))

        with pytest.raises(EmbeddingProviderError):
            await backend.embed_texts(["text"])


class TestSyntheticBackend:
    """Tests for SyntheticBackend."""

    @pytest.mark.asyncio
    async def test_vectors_are_deterministic_and_bounded(self):
        backend = SyntheticBackend(dimensions=64)

        first, second, again = await backend.embed_texts(["alpha", "beta", "alpha"])

        assert len(first) == 64
        assert first == again
        assert first != second
        assert all(-1.0 <= value <= 1.0 for value in first)

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValueError):
            SyntheticBackend(dimensions=0)


class TestEmbeddingGenerator:
    """Tests for EmbeddingGenerator."""

    @pytest.mark.asyncio
    async def test_embed_preserves_order_and_normalizes(self, topic_backend):
        """Test that results line up with inputs after normalization."""
        generator = EmbeddingGenerator(topic_backend)

        results = await generator.embed(["<b>Rain</b>  today", "Apple &amp; stock"])

        assert [r.source_text for r in results] == ["Rain today", "Apple stock"]
        assert results[0].vector == topic_backend.vector("Rain today")
        assert results[1].dimensions == topic_backend.dimensions

    @pytest.mark.asyncio
    async def test_empty_input_rejected(self, topic_backend):
        generator = EmbeddingGenerator(topic_backend)

        with pytest.raises(ValidationError):
            await generator.embed([])
        with pytest.raises(ValidationError):
            await generator.embed(["<p> </p>"])
        assert topic_backend.calls == []

    @pytest.mark.asyncio
    async def test_provider_error_propagates_without_fallback(self):
        backend = MagicMock()
        backend.name = "remote"
        backend.embed_texts = AsyncMock(side_effect=EmbeddingProviderError("down"))
        generator = EmbeddingGenerator(backend)

        with pytest.raises(EmbeddingProviderError):
            await generator.embed_query("hello world")

    @pytest.mark.asyncio
    async def test_fallback_used_when_provider_fails(self):
        """Test that development mode substitutes synthetic vectors."""
        backend = MagicMock()
        backend.name = "remote"
        backend.embed_texts = AsyncMock(side_effect=EmbeddingProviderError("down"))
        generator = EmbeddingGenerator(backend, fallback=SyntheticBackend(dimensions=8))

        vector = await generator.embed_query("hello world")

        assert len(vector) == 8

    @pytest.mark.asyncio
    async def test_embed_batch_chunks_and_delays(self, topic_backend):
        """Test that texts are sent in chunks with a pause between them."""
        generator = EmbeddingGenerator(topic_backend, batch_size=2, batch_delay=0.5)

        with patch("newsrag.embeddings.generator.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            result = await generator.embed_batch(["rain one", "rain two", "rain three"])

        assert [len(call) for call in topic_backend.calls] == [2, 1]
        mock_sleep.assert_awaited_once_with(0.5)
        assert not result.is_partial
        assert [item.source_text for item in result.embeddings] == [
            "rain one",
            "rain two",
            "rain three",
        ]

    @pytest.mark.asyncio
    async def test_embed_batch_reports_failed_chunk(self, topic_backend):
        """Test that a failing chunk is skipped and reported per item."""
        topic_backend.fail_on = "broken"
        generator = EmbeddingGenerator(topic_backend, batch_size=2, batch_delay=0)

        result = await generator.embed_batch(["good one", "broken two", "good three"])

        assert result.is_partial
        assert result.failed_indices == [0, 1]
        assert result.items[2].source_text == "good three"

    @pytest.mark.asyncio
    async def test_embed_batch_rejects_bad_size(self, topic_backend):
        generator = EmbeddingGenerator(topic_backend)

        with pytest.raises(ValidationError):
            await generator.embed_batch(["text"], batch_size=-1)


class TestEmbeddingFactory:
    """Tests for get_embedding_generator."""

    def test_synthetic_backend(self):
        generator = get_embedding_generator(
            PipelineConfig(embedding_backend="synthetic", embedding_dimensions=16)
        )
        assert isinstance(generator.backend, SyntheticBackend)
        assert generator.dimensions == 16

    def test_remote_backend_has_fallback_in_development(self):
        generator = get_embedding_generator(
            PipelineConfig(environment="development", embedding_backend="remote")
        )
        assert isinstance(generator.backend, RemoteBackend)
        assert isinstance(generator.fallback, SyntheticBackend)

    def test_remote_backend_without_fallback_in_production(self):
        generator = get_embedding_generator(
            PipelineConfig(
                environment="production", embedding_backend="remote", embedding_api_key="k"
            )
        )
        assert generator.fallback is None

    @pytest.mark.asyncio
    async def test_production_without_key_raises(self, monkeypatch):
        """Test that a missing provider key surfaces as an error in production."""
        monkeypatch.setenv("NEWSRAG_ENV", "production")
        monkeypatch.delenv("JINA_API_KEY", raising=False)
        monkeypatch.delenv("EMBEDDING_BACKEND", raising=False)

        generator = get_embedding_generator(PipelineConfig.from_env())

        with pytest.raises(EmbeddingProviderError, match="No API key"):
            await generator.embed_query("Apple stock")

    def test_unknown_backend_raises(self):
        with pytest.raises(ValueError, match="Unsupported embedding backend"):
            get_embedding_generator(PipelineConfig(embedding_backend="magic"))
