"""Data models for indexed news articles and retrieval results."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

from newsrag.constants import SIMILARITY_DECIMALS


def _as_text(value: Any) -> str:
    """Return ``value`` as a string, with None as an empty string."""
    return "" if value is None else str(value)


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Document:
    """A news article submitted for indexing.

    Attributes:
        id: Stable identifier (int or str). None lets the pipeline assign
            the article's 1-based position in the batch.
        title: Headline
        description: Short summary text
        content: Longer body text, may equal description
        source: Publisher name
        url: Canonical article link
        publish_date: ISO 8601 publish timestamp
        category: Optional category label
        tags: Free-form tags
    """

    title: str = ""
    description: str = ""
    content: str = ""
    source: str = ""
    url: str = ""
    publish_date: str = ""
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    id: int | str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        """Build a Document from a loosely-keyed article dictionary.

        Accepts both snake_case keys and the feed-style keys produced by
        RSS ingestion (``link``, ``pubDate``, ``publishDate``). Scalar values
        of other types are converted to strings.
        """
        tags = data.get("tags") or []
        if isinstance(tags, str):
            tags = [tag.strip() for tag in tags.split(",") if tag.strip()]
        elif not isinstance(tags, (list, tuple)):
            tags = [tags]
        description = _as_text(data.get("description"))
        category = data.get("category")
        return cls(
            id=data.get("id"),
            title=_as_text(data.get("title")),
            description=description,
            content=_as_text(data.get("content")) or description,
            source=_as_text(data.get("source")),
            url=_as_text(data.get("url") or data.get("link")),
            publish_date=_as_text(
                data.get("publish_date") or data.get("publishDate") or data.get("pubDate")
            ),
            category=None if category is None else str(category),
            tags=[str(tag) for tag in tags],
        )

    def embedding_text(self) -> str:
        """Concatenate title, description and content for embedding."""
        return f"{self.title} {self.description} {self.content}"


@dataclass
class ArticlePayload:
    """Displayable article fields stored alongside each vector."""

    title: str = ""
    description: str = ""
    content: str = ""
    url: str = ""
    source: str = "Unknown"
    category: str = "General"
    publish_date: str = ""
    created_at: str = ""
    document_id: int | str | None = None

    @classmethod
    def from_document(cls, document: Document) -> "ArticlePayload":
        return cls(
            title=document.title,
            description=document.description,
            content=document.content,
            url=document.url,
            source=document.source or "Unknown",
            category=document.category or "General",
            publish_date=document.publish_date or utc_now_iso(),
            created_at=utc_now_iso(),
            document_id=document.id,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ArticlePayload":
        data = data or {}
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            content=data.get("content", ""),
            url=data.get("url", ""),
            source=data.get("source", "Unknown"),
            category=data.get("category", "General"),
            publish_date=data.get("publish_date", ""),
            created_at=data.get("created_at", ""),
            document_id=data.get("document_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class IndexedPoint:
    """The persisted unit in the vector store: one per Document."""

    id: int | str
    vector: list[float]
    payload: ArticlePayload


@dataclass
class RetrievalResult:
    """A search hit for one query. Not persisted.

    Attributes:
        id: Vector store point id
        payload: Article fields attached to the point
        score: Similarity score in [-1, 1]
        relevant_text: Sentence selected by the relevance extractor
    """

    id: int | str
    payload: ArticlePayload
    score: float
    relevant_text: str = ""

    @property
    def title(self) -> str:
        return self.payload.title

    @property
    def description(self) -> str:
        return self.payload.description

    @property
    def content(self) -> str:
        return self.payload.content

    @property
    def source(self) -> str:
        return self.payload.source

    @property
    def url(self) -> str:
        return self.payload.url

    @property
    def publish_date(self) -> str:
        return self.payload.publish_date


@dataclass
class EmbeddingResult:
    """One embedded text."""

    vector: list[float]
    source_text: str
    dimensions: int


@dataclass
class BatchEmbeddingResult:
    """Outcome of a chunked batch embedding run.

    ``items`` is aligned with the input texts; an entry is None when the
    chunk containing that text failed and was skipped.
    """

    items: list[EmbeddingResult | None] = field(default_factory=list)

    @property
    def embeddings(self) -> list[EmbeddingResult]:
        """Successful embeddings in input order."""
        return [item for item in self.items if item is not None]

    @property
    def failed_indices(self) -> list[int]:
        return [i for i, item in enumerate(self.items) if item is None]

    @property
    def is_partial(self) -> bool:
        return any(item is None for item in self.items)


@dataclass
class SourceAttribution:
    """A source shown next to a generated answer."""

    title: str
    source: str
    url: str
    similarity: float

    @classmethod
    def from_result(cls, result: RetrievalResult) -> "SourceAttribution":
        return cls(
            title=result.title,
            source=result.source,
            url=result.url,
            similarity=round(result.score, SIMILARITY_DECIMALS),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Answer:
    """Generated answer text plus the sources used as context."""

    text: str
    sources: list[SourceAttribution] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "sources": [s.to_dict() for s in self.sources]}
