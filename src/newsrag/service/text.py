"""Text normalization and lexical passage extraction."""

import re

from newsrag.constants import (
    EXTRACT_FALLBACK_LENGTH,
    MAX_EMBEDDING_TEXT_LENGTH,
    MIN_QUERY_TERM_LENGTH,
    MIN_SENTENCE_LENGTH,
)

_TAG_RE = re.compile(r"<[^>]+>")
_ENTITY_RE = re.compile(r"&(?:#\d+|#[xX][0-9a-fA-F]+|[a-zA-Z][a-zA-Z0-9]*);")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_BOUNDARY_RE = re.compile(r"[.!?]+")
_WORD_RE = re.compile(r"\w+")


def normalize_text(text: object, max_length: int = MAX_EMBEDDING_TEXT_LENGTH) -> str:
    """Clean raw text before embedding.

    Removes HTML tags and character entities, collapses whitespace, trims,
    and caps the result at ``max_length`` characters. Removed markup is
    replaced by a space so that no new tag or entity can form from the
    surrounding characters, which keeps the function idempotent.

    Args:
        text: Raw text. Anything that is not a string yields "".
        max_length: Maximum number of characters to keep

    Returns:
        str: The normalized text
    """
    if not text or not isinstance(text, str):
        return ""

    cleaned = _TAG_RE.sub(" ", text)
    cleaned = _ENTITY_RE.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    return cleaned[:max_length].rstrip()


def split_sentences(text: str, min_length: int = MIN_SENTENCE_LENGTH) -> list[str]:
    """Split text on ., ! and ? and drop sentences shorter than ``min_length``.

    Args:
        text: Text to split
        min_length: Minimum stripped sentence length to keep

    Returns:
        list[str]: Stripped candidate sentences in document order
    """
    if not text:
        return []
    sentences = (part.strip() for part in _SENTENCE_BOUNDARY_RE.split(text))
    return [sentence for sentence in sentences if len(sentence) >= min_length]


def query_terms(query: str, min_length: int = MIN_QUERY_TERM_LENGTH) -> list[str]:
    """Lowercase word tokens of a query, without short stopword-ish tokens."""
    if not query:
        return []
    return [word for word in _WORD_RE.findall(query.lower()) if len(word) >= min_length]


def extract_relevant_sentence(
    document_text: str,
    query: str,
    description: str = "",
    min_sentence_length: int = MIN_SENTENCE_LENGTH,
) -> str:
    """Select the sentence of a document that best matches a query.

    Each candidate sentence is scored by how many query terms it contains
    (case-insensitive substring match). The first sentence with the highest
    score wins.

    Args:
        document_text: Full article text (title, description and content)
        query: The user's question
        description: Article description used when no sentence matches
        min_sentence_length: Minimum length for a candidate sentence

    Returns:
        str: The best sentence, else the description, else the first
            300 characters of ``document_text``
    """
    terms = query_terms(query)

    best_sentence = ""
    max_matches = 0
    for sentence in split_sentences(document_text, min_sentence_length):
        lower_sentence = sentence.lower()
        matches = sum(1 for term in terms if term in lower_sentence)
        if matches > max_matches:
            max_matches = matches
            best_sentence = sentence

    if best_sentence:
        return best_sentence
    if description:
        return description
    return (document_text or "")[:EXTRACT_FALLBACK_LENGTH]
