"""HTTP embedding backend for Jina-compatible embedding APIs."""

import asyncio
import logging
import threading
from typing import Any

import requests

from newsrag.constants import (
    DEFAULT_EMBEDDING_API_URL,
    DEFAULT_EMBEDDING_MODEL,
    EMBEDDING_TIMEOUT_SECONDS,
)
from newsrag.embeddings.base import is_valid_vector
from newsrag.errors import EmbeddingProviderError

logger = logging.getLogger(__name__)


class RemoteBackend:
    """Embedding backend that POSTs batches to an embedding provider.

    Request body is ``{"input": [...], "model": ...}`` with bearer-token auth.
    The response's ``data[].index`` is used to put vectors back in input
    order, since providers do not promise to preserve it.
    """

    name = "remote"

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_EMBEDDING_MODEL,
        api_url: str = DEFAULT_EMBEDDING_API_URL,
        timeout: float = EMBEDDING_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the remote backend.

        Args:
            api_key: Bearer token for the provider
            model: Embedding model name (e.g., "jina-embeddings-v3")
            api_url: Full URL of the embeddings endpoint
            timeout: Request timeout in seconds
            session: Optional session to use for every request. By default
                each worker thread gets its own session.
        """
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        self.dimensions: int | None = None
        self.session = session
        self._local = threading.local()
        logger.info(f"🧮 Initializing RemoteBackend: url={api_url}, model={model}")

    def _session(self) -> requests.Session:
        # One session per worker thread unless one was injected
        if self.session is not None:
            return self.session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _post(self, texts: list[str]) -> dict[str, Any]:
        try:
            response = self._session().post(
                self.api_url,
                json={"input": texts, "model": self.model},
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.Timeout as e:
            raise EmbeddingProviderError(
                f"Embedding request timed out after {self.timeout}s", model=self.model
            ) from e
        except requests.RequestException as e:
            raise EmbeddingProviderError(
                f"Embedding request failed: {e}", model=self.model
            ) from e
        except ValueError as e:
            raise EmbeddingProviderError(
                f"Embedding response is not valid JSON: {e}", model=self.model
            ) from e

    def _parse(self, body: Any, expected: int) -> list[list[float]]:
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise EmbeddingProviderError(
                "Invalid response from embedding provider: missing 'data'", model=self.model
            )

        vectors: list[list[float] | None] = [None] * expected
        for position, item in enumerate(data):
            if not isinstance(item, dict):
                raise EmbeddingProviderError(
                    "Invalid response from embedding provider: malformed item",
                    model=self.model,
                )
            index = item.get("index", position)
            embedding = item.get("embedding")
            if not isinstance(index, int) or not 0 <= index < expected:
                raise EmbeddingProviderError(
                    f"Embedding provider returned out-of-range index {index!r}",
                    model=self.model,
                )
            if not is_valid_vector(embedding):
                raise EmbeddingProviderError(
                    f"Embedding provider returned an invalid vector at index {index}",
                    model=self.model,
                )
            vectors[index] = [float(value) for value in embedding]

        missing = [i for i, vector in enumerate(vectors) if vector is None]
        if missing:
            raise EmbeddingProviderError(
                f"Embedding provider returned no vector for {len(missing)} input(s)",
                model=self.model,
                details={"missing_indices": missing},
            )
        return vectors  # type: ignore[return-value]

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts with a single provider request.

        Args:
            texts: Normalized texts to embed

        Returns:
            list[list[float]]: One vector per text, in input order

        Raises:
            EmbeddingProviderError: On non-2xx status, timeout or malformed body
        """
        if not self.api_key:
            raise EmbeddingProviderError(
                "No API key configured for the embedding provider", model=self.model
            )

        logger.info(f"Generating embeddings for {len(texts)} texts with {self.model}")
        body = await asyncio.to_thread(self._post, texts)
        vectors = self._parse(body, len(texts))
        self.dimensions = len(vectors[0]) if vectors else self.dimensions
        logger.info(f"✅ Generated {len(vectors)} embeddings with {self.model}")
        return vectors
