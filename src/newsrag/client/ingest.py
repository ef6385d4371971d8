"""Article loading and validation for the ingestion CLI."""

import json
import logging
from pathlib import Path
from typing import Any

from newsrag.constants import MIN_DESCRIPTION_LENGTH, MIN_TITLE_LENGTH
from newsrag.models import Document

logger = logging.getLogger(__name__)


def is_valid_article(document: Document) -> bool:
    """Check an article against the ingestion quality rules.

    An article needs a title of at least 10 characters, a description of at
    least 30 characters, a source and a URL.

    Args:
        document: The article to check

    Returns:
        bool: True if the article may be indexed
    """
    return (
        len(document.title.strip()) >= MIN_TITLE_LENGTH
        and len(document.description.strip()) >= MIN_DESCRIPTION_LENGTH
        and bool(document.source.strip())
        and bool(document.url.strip())
    )


def _read_records(path: Path) -> list[dict[str, Any]]:
    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() == ".jsonl":
        return [json.loads(line) for line in text.splitlines() if line.strip()]

    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("articles", [])
    if not isinstance(data, list):
        raise ValueError(f"{path.name}: expected a list of articles")
    return data


def load_documents(path: Path) -> tuple[list[Document], int]:
    """Load articles from a JSON or JSONL file and drop invalid ones.

    JSON files may hold a list of articles or an object with an
    ``"articles"`` list. JSONL files hold one article per line.

    Args:
        path: Path to the articles file

    Returns:
        tuple: (valid documents, number of rejected records)

    Raises:
        ValueError: If the file is not valid JSON or has the wrong shape
    """
    logger.info(f"Loading articles from {path.name}...")
    try:
        records = _read_records(path)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path.name}: invalid JSON ({e})") from e

    documents = []
    rejected = 0
    for record in records:
        if not isinstance(record, dict):
            rejected += 1
            continue
        document = Document.from_dict(record)
        if is_valid_article(document):
            documents.append(document)
        else:
            rejected += 1
            logger.debug(f"Rejected article: {document.title[:50]!r}")

    logger.info(f"  ✓ Loaded {len(documents)} articles, rejected {rejected}")
    return documents, rejected
