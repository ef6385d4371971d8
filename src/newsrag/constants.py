"""Application-wide constants and defaults for newsrag.

This module provides a single source of truth for configuration defaults,
magic numbers, and other constants used throughout the application.
"""

# =============================================================================
# Text Normalization
# =============================================================================
MAX_EMBEDDING_TEXT_LENGTH = 8000  # Characters accepted by the embedding provider

# =============================================================================
# Embedding Settings
# =============================================================================
DEFAULT_EMBEDDING_API_URL = "https://api.jina.ai/v1/embeddings"
DEFAULT_EMBEDDING_MODEL = "jina-embeddings-v3"
DEFAULT_EMBEDDING_DIMENSIONS = 1024
BASELINE_EMBEDDING_DIMENSIONS = 512
EMBEDDING_TIMEOUT_SECONDS = 30.0
DEFAULT_EMBEDDING_BATCH_SIZE = 10
DEFAULT_BATCH_DELAY_SECONDS = 1.0

# =============================================================================
# Retrieval Settings
# =============================================================================
DEFAULT_TOP_K = 5
DEFAULT_SCORE_THRESHOLD = 0.3
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_DISTANCE_METRIC = "cosine"
SIMILARITY_DECIMALS = 3

# =============================================================================
# Passage Extraction
# =============================================================================
MIN_SENTENCE_LENGTH = 20  # Shorter sentences are not informative enough
MIN_QUERY_TERM_LENGTH = 3  # Query tokens of 2 characters or fewer are dropped
EXTRACT_FALLBACK_LENGTH = 300
PROMPT_CONTENT_LENGTH = 500
FALLBACK_SUMMARY_LENGTH = 200
MAX_ANSWER_WORDS = 300

# =============================================================================
# Generation Settings
# =============================================================================
GENERATION_TIMEOUT_SECONDS = 30.0
GENERATION_TEMPERATURE = 0.7
GENERATION_TOP_P = 0.95
GENERATION_TOP_K = 40
GENERATION_MAX_OUTPUT_TOKENS = 1024

NO_CONTEXT_MESSAGE = (
    "I couldn't find any relevant news articles to answer your question. "
    "Could you please try rephrasing your question?"
)
TRY_AGAIN_MESSAGE = (
    "I apologize, but I'm having trouble generating a response right now. "
    "Please try again later."
)

# =============================================================================
# Default URLs and Hosts
# =============================================================================
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_QDRANT_URL = "http://localhost:6333"
DEFAULT_COLLECTION_NAME = "news_articles"

# =============================================================================
# Generation Model Defaults
# =============================================================================
LLM_MODEL_DEFAULTS = {
    "gemini": "gemini-2.5-flash",
    "ollama": "llama3",
}

# =============================================================================
# Article Validation (ingestion side)
# =============================================================================
MIN_TITLE_LENGTH = 10
MIN_DESCRIPTION_LENGTH = 30
