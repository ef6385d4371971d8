"""Command-line interface for newsrag using Click."""

import asyncio
from pathlib import Path

import click
from dotenv import load_dotenv

from newsrag.client.cli_helpers import (
    build_pipeline,
    configure_logging,
    format_answer,
    format_search_result,
)
from newsrag.client.ingest import load_documents
from newsrag.constants import DEFAULT_SEARCH_LIMIT, DEFAULT_TOP_K
from newsrag.errors import NewsRAGError, ValidationError
from newsrag.models import Answer

# Load environment variables
load_dotenv()


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--clear",
    "clear_first",
    is_flag=True,
    default=False,
    help="Remove all indexed articles before ingesting",
)
@click.option(
    "--test-query",
    type=str,
    default=None,
    help="Ask this question after ingesting to check retrieval",
)
def ingest(file: Path, clear_first: bool, test_query: str | None) -> None:
    """Ingest news articles from FILE (JSON or JSONL) into the vector store.

    Example:
        newsrag-ingest articles.json
        newsrag-ingest articles.jsonl --clear
        newsrag-ingest articles.json --test-query "What happened in the markets?"
    """
    configure_logging()

    try:
        documents, rejected = load_documents(file)
    except (OSError, ValueError) as e:
        click.echo(f"✗ Error reading {file.name}: {e}", err=True)
        raise click.Abort()

    click.echo(f"Found {len(documents)} valid article(s) in {file.name}")
    if rejected:
        click.echo(f"  Skipped {rejected} article(s) that failed validation")

    if not documents:
        click.echo("No articles to store.")
        return

    pipeline = build_pipeline()

    async def _run() -> tuple[int, Answer | None]:
        if clear_first:
            await pipeline.clear()
            click.echo("🗑️  Cleared existing articles")
        stored = await pipeline.index(documents)
        answer = await pipeline.answer(test_query) if test_query else None
        return stored, answer

    try:
        stored, answer = asyncio.run(_run())
    except NewsRAGError as e:
        click.echo(f"\n✗ Error storing articles: {e.message}", err=True)
        raise click.Abort()

    if stored == 0:
        click.echo("\n✗ No articles were stored. Check the logs for details.", err=True)
        raise click.Abort()

    click.echo(f"✓ Ingestion complete! Stored {stored} of {len(documents)} article(s).")

    if answer is not None:
        click.echo(f"\n🔍 Test query: '{test_query}'\n")
        click.echo(format_answer(answer))


@click.command()
@click.argument("query", type=str)
@click.option(
    "--top-k",
    type=int,
    default=None,
    help=f"Number of articles to use as context (default: DEFAULT_TOP_K env or {DEFAULT_TOP_K})",
)
def ask(query: str, top_k: int | None) -> None:
    """Answer QUERY from the indexed news articles.

    Example:
        newsrag-ask "How did Apple's stock perform?"
        newsrag-ask "What is the weather forecast?" --top-k 3
    """
    configure_logging()
    pipeline = build_pipeline()

    try:
        answer = asyncio.run(pipeline.answer(query, k=top_k))
    except ValidationError as e:
        click.echo(f"✗ Error: {e.message}", err=True)
        raise click.Abort()

    click.echo(format_answer(answer))


@click.command()
@click.argument("keywords", type=str)
@click.option(
    "--limit",
    type=int,
    default=DEFAULT_SEARCH_LIMIT,
    help=f"Number of results to return (default: {DEFAULT_SEARCH_LIMIT})",
)
def search(keywords: str, limit: int) -> None:
    """Search for articles similar to KEYWORDS, without a score threshold.

    Example:
        newsrag-search "stock market"
        newsrag-search "climate" --limit 3
    """
    configure_logging()
    pipeline = build_pipeline()

    click.echo(f"🔍 Searching for: '{keywords}'")
    click.echo(f"   Returning top {limit} results...\n")

    results = asyncio.run(pipeline.search_articles(keywords, limit=limit))
    if not results:
        click.echo("No results found.")
        return

    click.echo(f"✅ Found {len(results)} result(s):\n")
    for i, result in enumerate(results, 1):
        click.echo(format_search_result(i, result))


@click.command()
def stats() -> None:
    """Show collection statistics.

    Example:
        newsrag-stats
    """
    configure_logging()
    pipeline = build_pipeline()

    try:
        info = asyncio.run(pipeline.stats())
    except NewsRAGError as e:
        click.echo(f"✗ Error reading collection stats: {e.message}", err=True)
        raise click.Abort()

    click.echo(f"📊 Collection contains {info['total_documents']} article(s)")
    click.echo(f"   Dimensions: {info['dimensions']}")
    click.echo(f"   Distance:   {info['distance']}")
    click.echo(f"   Status:     {info['status']}")


@click.command()
def health() -> None:
    """Check that the vector store is reachable.

    Exits with status 1 when the service is unhealthy.

    Example:
        newsrag-health
    """
    configure_logging()
    pipeline = build_pipeline()

    report = asyncio.run(pipeline.health_check())
    if report["status"] == "healthy":
        click.echo(f"✓ Healthy: {report['document_count']} article(s) indexed")
    else:
        click.echo("✗ Unhealthy: vector store is not reachable", err=True)
    click.echo(f"   Last checked: {report['last_checked']}")

    if report["status"] != "healthy":
        raise SystemExit(1)


@click.command()
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation prompt")
def clear(yes: bool) -> None:
    """Delete all indexed articles.

    WARNING: This is irreversible.

    Example:
        newsrag-clear          # Will prompt for confirmation
        newsrag-clear --yes    # Skip confirmation
    """
    configure_logging()
    pipeline = build_pipeline()
    collection = pipeline.vector_index.collection_name

    if not yes:
        click.echo(f"⚠️  WARNING: You are about to delete every article in '{collection}'\n")
        if not click.confirm("Are you sure you want to proceed?", default=False):
            click.echo("Deletion cancelled.")
            return

    click.echo(f"🗑️  Clearing collection '{collection}'...")
    try:
        asyncio.run(pipeline.clear())
    except NewsRAGError as e:
        click.echo(f"✗ Error clearing collection: {e.message}", err=True)
        raise click.Abort()
    click.echo(f"✓ Collection '{collection}' cleared!")


if __name__ == "__main__":
    ingest()
