"""Vector index operations on a Qdrant collection."""

import asyncio
import logging
from typing import Any

from qdrant_client import QdrantClient
from qdrant_client.models import Distance, PointStruct, VectorParams

from newsrag.constants import DEFAULT_DISTANCE_METRIC, DEFAULT_EMBEDDING_DIMENSIONS
from newsrag.errors import ValidationError, VectorStoreError
from newsrag.models import ArticlePayload, IndexedPoint, RetrievalResult
from newsrag.service.vectorstore.config import QdrantConfig, create_qdrant_client

logger = logging.getLogger(__name__)

DISTANCE_METRICS = {
    "cosine": Distance.COSINE,
    "dot": Distance.DOT,
    "euclid": Distance.EUCLID,
    "manhattan": Distance.MANHATTAN,
}


def _enum_value(value: Any) -> str:
    return str(getattr(value, "value", value))


class VectorIndex:
    """Adapter around one Qdrant collection.

    The underlying client is synchronous; every call runs in a worker thread
    so that concurrent requests keep making progress. The adapter adds no
    locking of its own: writes are as atomic as Qdrant makes them.
    """

    def __init__(
        self,
        client: QdrantClient | None = None,
        collection_name: str | None = None,
        dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS,
        distance: str = DEFAULT_DISTANCE_METRIC,
    ) -> None:
        if distance.lower() not in DISTANCE_METRICS:
            raise ValidationError(f"Unsupported distance metric: {distance}")
        self._client = client
        self.collection_name = collection_name or QdrantConfig.get_collection_name()
        self.dimensions = dimensions
        self.distance = distance.lower()

    @property
    def client(self) -> QdrantClient:
        if self._client is None:
            self._client = create_qdrant_client()
        return self._client

    def _collection_names(self) -> list[str]:
        return [col.name for col in self.client.get_collections().collections]

    async def ensure_collection(
        self,
        name: str | None = None,
        dimensions: int | None = None,
        distance: str | None = None,
    ) -> bool:
        """Create the collection if it does not exist yet.

        Args:
            name: Collection name (defaults to the adapter's collection)
            dimensions: Vector size (defaults to the adapter's dimensions)
            distance: Distance metric name (defaults to the adapter's metric)

        Returns:
            bool: True if the collection was created, False if it existed

        Raises:
            VectorStoreError: If listing or creating collections fails, or the
                existing collection has a different vector size
        """
        name = name or self.collection_name
        size = dimensions or self.dimensions
        metric = (distance or self.distance).lower()
        if metric not in DISTANCE_METRICS:
            raise ValidationError(f"Unsupported distance metric: {metric}")

        def _ensure() -> bool:
            if name in self._collection_names():
                info = self.client.get_collection(name)
                current_size = getattr(info.config.params.vectors, "size", None)
                if current_size is not None and int(current_size) != int(size):
                    raise VectorStoreError(
                        "Collection vector size mismatch",
                        details={"collection": name, "expected": size, "actual": current_size},
                    )
                return False

            self.client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(size=size, distance=DISTANCE_METRICS[metric]),
            )
            return True

        try:
            created = await asyncio.to_thread(_ensure)
        except VectorStoreError:
            raise
        except Exception as e:
            logger.error(f"❌ Error ensuring collection {name}: {e}", exc_info=True)
            raise VectorStoreError(
                "Failed to ensure collection", details={"collection": name, "error": str(e)}
            ) from e

        if created:
            logger.info(f"📂 Created Qdrant collection: {name} ({size} dims, {metric})")
        else:
            logger.info(f"📂 Qdrant collection exists: {name}")
        return created

    async def upsert(self, points: list[IndexedPoint]) -> int:
        """Write all points in one batch and wait for the acknowledgement.

        Args:
            points: Points to insert or overwrite, keyed by their ids

        Returns:
            int: Number of points written
        """
        if not points:
            return 0

        structs = [
            PointStruct(id=point.id, vector=point.vector, payload=point.payload.to_dict())
            for point in points
        ]

        def _upsert() -> None:
            self.client.upsert(collection_name=self.collection_name, points=structs, wait=True)

        try:
            await asyncio.to_thread(_upsert)
        except Exception as e:
            logger.error(f"❌ Error storing points: {e}", exc_info=True)
            raise VectorStoreError(
                "Failed to upsert points",
                details={"collection": self.collection_name, "error": str(e)},
            ) from e

        logger.info(f"📥 Stored {len(structs)} points in {self.collection_name}")
        return len(structs)

    async def search(
        self,
        query_vector: list[float],
        k: int,
        score_threshold: float | None = None,
    ) -> list[RetrievalResult]:
        """Find up to ``k`` nearest neighbours of ``query_vector``.

        Args:
            query_vector: The query embedding
            k: Maximum number of results
            score_threshold: Results scoring below this are excluded.
                None disables the floor.

        Returns:
            list[RetrievalResult]: Hits sorted by descending score. Empty when
                nothing clears the threshold.
        """
        if k <= 0:
            raise ValidationError(f"k must be positive, got {k}")

        def _search() -> list[Any]:
            response = self.client.query_points(
                collection_name=self.collection_name,
                query=query_vector,
                limit=k,
                with_payload=True,
                score_threshold=score_threshold,
            )
            return response.points

        try:
            hits = await asyncio.to_thread(_search)
        except Exception as e:
            logger.error(f"❌ Error searching {self.collection_name}: {e}", exc_info=True)
            raise VectorStoreError(
                "Search failed", details={"collection": self.collection_name, "error": str(e)}
            ) from e

        results = [
            RetrievalResult(
                id=hit.id,
                payload=ArticlePayload.from_dict(hit.payload),
                score=float(hit.score),
            )
            for hit in hits
            if score_threshold is None or hit.score >= score_threshold
        ]
        logger.info(f"🔍 Found {len(results)} results in {self.collection_name}")
        return results

    async def stats(self) -> dict[str, Any]:
        """Return point count, vector size, distance metric and status."""

        def _stats() -> dict[str, Any]:
            info = self.client.get_collection(self.collection_name)
            vectors = info.config.params.vectors
            return {
                "count": info.points_count or 0,
                "dimensions": getattr(vectors, "size", None),
                "distance": _enum_value(getattr(vectors, "distance", "")).lower(),
                "status": _enum_value(info.status).lower(),
            }

        try:
            return await asyncio.to_thread(_stats)
        except Exception as e:
            raise VectorStoreError(
                "Failed to read collection info",
                details={"collection": self.collection_name, "error": str(e)},
            ) from e

    async def clear(self) -> None:
        """Drop and recreate the collection."""

        def _delete() -> None:
            self.client.delete_collection(collection_name=self.collection_name)

        try:
            await asyncio.to_thread(_delete)
        except Exception as e:
            raise VectorStoreError(
                "Failed to delete collection",
                details={"collection": self.collection_name, "error": str(e)},
            ) from e

        await self.ensure_collection()
        logger.info(f"🗑️  Cleared all points from {self.collection_name}")

    async def is_reachable(self) -> bool:
        """Liveness probe. Never raises."""
        try:
            await asyncio.to_thread(self._collection_names)
            return True
        except Exception as e:
            logger.warning(f"⚠️ Qdrant unreachable: {e}")
            return False
