"""Helper functions for CLI commands."""

import logging
import os

import click

from newsrag.config import PipelineConfig
from newsrag.models import Answer, RetrievalResult
from newsrag.service.pipeline import RAGPipeline, create_pipeline


def configure_logging() -> None:
    """Configure root logging from the LOG_LEVEL environment variable."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_pipeline() -> RAGPipeline:
    """Create the pipeline from environment configuration.

    Raises:
        click.Abort: If the configuration is invalid
    """
    try:
        return create_pipeline(PipelineConfig.from_env())
    except ValueError as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()


def format_search_result(index: int, result: RetrievalResult, max_length: int = 200) -> str:
    """Format a search result for display.

    Args:
        index: Result number (1-based)
        result: Search hit
        max_length: Maximum description length before truncation

    Returns:
        Formatted string for display
    """
    description = result.description
    display_description = (
        description[:max_length] + "..." if len(description) > max_length else description
    )

    lines = [
        f"{index}. {result.title} [{result.source}] (score: {result.score:.4f})",
        f"   {display_description}",
    ]
    if result.url:
        lines.append(f"   {result.url}")
    lines.append("")
    return "\n".join(lines)


def format_answer(answer: Answer) -> str:
    """Format an answer and its sources for display."""
    lines = [answer.text, ""]
    if answer.sources:
        lines.append("Sources:")
        for i, source in enumerate(answer.sources, 1):
            lines.append(
                f"  {i}. {source.title} - {source.source} "
                f"(similarity: {source.similarity:.3f})"
            )
            if source.url:
                lines.append(f"     {source.url}")
    return "\n".join(lines)
