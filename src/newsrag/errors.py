"""Exception hierarchy for newsrag."""

from typing import Any


class NewsRAGError(Exception):
    """Base exception for all newsrag errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging or JSON output."""
        return {
            "error": {
                "message": self.message,
                "code": self.__class__.__name__,
                "details": self.details,
            }
        }


class ValidationError(NewsRAGError):
    """Raised for empty or malformed caller input."""


class DimensionMismatchError(ValidationError):
    """Raised when two vectors of different lengths are compared."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Vectors must have the same dimensions ({expected} != {actual})",
            details={"expected": expected, "actual": actual},
        )


class EmbeddingProviderError(NewsRAGError):
    """Raised when the upstream embedding provider call fails."""

    def __init__(
        self,
        message: str = "Embedding generation failed",
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        error_details = details or {}
        if model:
            error_details["model"] = model
        super().__init__(message, details=error_details)


class VectorStoreError(NewsRAGError):
    """Raised for vector store collection, upsert or search failures."""


class GenerationProviderError(NewsRAGError):
    """Raised when the generation provider fails or returns no text."""
