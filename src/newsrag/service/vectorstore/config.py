"""Configuration for the Qdrant connection."""

import os

from dotenv import load_dotenv
from qdrant_client import QdrantClient

from newsrag.constants import DEFAULT_COLLECTION_NAME, DEFAULT_QDRANT_URL

# Load environment variables
load_dotenv()

IN_MEMORY_LOCATION = ":memory:"


class QdrantConfig:
    """Configuration class for Qdrant connection details."""

    @staticmethod
    def get_url() -> str:
        """Get the Qdrant server URL from environment variables.

        Returns:
            str: Qdrant URL (default: http://localhost:6333). ":memory:"
                selects the in-process local mode.
        """
        return os.getenv("QDRANT_URL", DEFAULT_QDRANT_URL)

    @staticmethod
    def get_api_key() -> str | None:
        return os.getenv("QDRANT_API_KEY") or None

    @staticmethod
    def get_collection_name() -> str:
        return os.getenv("QDRANT_COLLECTION", DEFAULT_COLLECTION_NAME)


def create_qdrant_client(url: str | None = None, api_key: str | None = None) -> QdrantClient:
    """Create a Qdrant client.

    Args:
        url: Qdrant URL or ":memory:" (defaults to QdrantConfig.get_url())
        api_key: Optional API key (defaults to QdrantConfig.get_api_key())

    Returns:
        QdrantClient: A client that can be shared across concurrent requests
    """
    if url is None:
        url = QdrantConfig.get_url()
    if api_key is None:
        api_key = QdrantConfig.get_api_key()

    if url == IN_MEMORY_LOCATION:
        return QdrantClient(location=IN_MEMORY_LOCATION)
    return QdrantClient(url=url, api_key=api_key)
