"""Tests for configuration, models and errors."""

import pytest

from newsrag.config import PipelineConfig
from newsrag.errors import DimensionMismatchError, EmbeddingProviderError, ValidationError
from newsrag.models import BatchEmbeddingResult, Document, EmbeddingResult


class TestPipelineConfig:
    """Tests for PipelineConfig.from_env."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "NEWSRAG_ENV",
            "EMBEDDING_BACKEND",
            "JINA_API_KEY",
            "LLM_SERVICE",
            "LLM_MODEL",
            "SCORE_THRESHOLD",
            "DEFAULT_TOP_K",
            "QDRANT_URL",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        config = PipelineConfig.from_env()

        assert config.environment == "development"
        assert config.embedding_backend == "synthetic"
        assert config.embedding_dimensions == 1024
        assert config.score_threshold == 0.3
        assert config.default_top_k == 5
        assert config.resolved_llm_model == "gemini-2.5-flash"
        assert config.collection_name == "news_articles"

    def test_api_key_selects_remote_backend(self, monkeypatch):
        monkeypatch.setenv("JINA_API_KEY", "jina-key")

        config = PipelineConfig.from_env()

        assert config.embedding_backend == "remote"
        assert config.embedding_api_key == "jina-key"

    def test_production_defaults_to_remote_backend(self, monkeypatch):
        """Test that production never silently uses synthetic vectors."""
        monkeypatch.setenv("NEWSRAG_ENV", "production")

        config = PipelineConfig.from_env()

        assert config.embedding_backend == "remote"
        assert config.embedding_api_key is None

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("NEWSRAG_ENV", "Production")
        monkeypatch.setenv("SCORE_THRESHOLD", "0.5")
        monkeypatch.setenv("DEFAULT_TOP_K", "3")
        monkeypatch.setenv("LLM_SERVICE", "ollama")
        monkeypatch.setenv("QDRANT_URL", ":memory:")

        config = PipelineConfig.from_env()

        assert not config.is_development
        assert config.score_threshold == 0.5
        assert config.default_top_k == 3
        assert config.resolved_llm_model == "llama3"
        assert config.qdrant_url == ":memory:"

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("NEWSRAG_ENV", "staging")

        with pytest.raises(ValueError, match="NEWSRAG_ENV"):
            PipelineConfig.from_env()


class TestModels:
    """Tests for data model helpers."""

    def test_document_tags_from_string(self):
        document = Document.from_dict({"title": "t", "tags": "tech, markets ,"})
        assert document.tags == ["tech", "markets"]

    def test_batch_result_alignment(self):
        item = EmbeddingResult(vector=[1.0], source_text="a", dimensions=1)
        result = BatchEmbeddingResult(items=[item, None, item])

        assert result.is_partial
        assert result.failed_indices == [1]
        assert len(result.embeddings) == 2


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_to_dict(self):
        error = EmbeddingProviderError("timed out", model="jina-embeddings-v3")

        assert error.to_dict() == {
            "error": {
                "message": "timed out",
                "code": "EmbeddingProviderError",
                "details": {"model": "jina-embeddings-v3"},
            }
        }

    def test_dimension_mismatch_is_validation_error(self):
        assert isinstance(DimensionMismatchError(3, 4), ValidationError)
