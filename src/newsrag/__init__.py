"""News chat backend: retrieval-augmented answers over indexed articles."""

__version__ = "0.1.0"
