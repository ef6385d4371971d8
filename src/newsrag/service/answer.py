"""Answer generation from retrieved articles, with extractive fallback."""

import logging

from newsrag.constants import (
    FALLBACK_SUMMARY_LENGTH,
    MAX_ANSWER_WORDS,
    NO_CONTEXT_MESSAGE,
    PROMPT_CONTENT_LENGTH,
    TRY_AGAIN_MESSAGE,
)
from newsrag.llm.base import GenerationConfig, LLMService
from newsrag.models import RetrievalResult

logger = logging.getLogger(__name__)


def format_context(context: list[RetrievalResult]) -> str:
    """Format retrieved articles into numbered prompt blocks.

    Args:
        context: Retrieved articles, most similar first

    Returns:
        Formatted context string
    """
    blocks = []
    for index, article in enumerate(context, 1):
        excerpt = (
            article.relevant_text
            or article.description
            or article.content[:PROMPT_CONTENT_LENGTH]
        )
        blocks.append(
            f"Article {index}:\n"
            f"Title: {article.title}\n"
            f"Content: {excerpt}\n"
            f"Source: {article.source}\n"
            f"Date: {article.publish_date}\n"
            "---"
        )
    return "\n".join(blocks)


def build_prompt(query: str, context: list[RetrievalResult]) -> str:
    """Assemble the grounding prompt sent to the generation service."""
    return (
        "You are a helpful news assistant. Based on the following news articles, "
        "answer the user's question accurately and concisely.\n\n"
        "Context (News Articles):\n"
        f"{format_context(context)}\n\n"
        f"User Question: {query}\n\n"
        "Instructions:\n"
        "1. Answer based only on the provided articles\n"
        "2. Be concise but informative\n"
        "3. Mention relevant sources when possible\n"
        "4. If the articles don't contain enough information, say so\n"
        f"5. Keep the response under {MAX_ANSWER_WORDS} words\n\n"
        "Answer:"
    )


def extractive_fallback(query: str, context: list[RetrievalResult]) -> str:
    """Summarize the top article without calling a model."""
    if not context:
        return TRY_AGAIN_MESSAGE

    top = context[0]
    summary = top.description or top.content[:FALLBACK_SUMMARY_LENGTH]
    return (
        f'Here are the key points from the most relevant article about "{query}":\n\n'
        f"Title: {top.title}\n"
        f"Summary: {summary}..."
    )


class AnswerGenerator:
    """Generates an answer grounded in retrieved articles.

    The generator never raises for provider problems: with no context it
    returns a fixed message without calling the model, and when the model
    call fails it falls back to an extractive summary of the top article.
    Retries, if any, belong to the underlying client.
    """

    def __init__(
        self,
        llm_service: LLMService | None,
        generation_config: GenerationConfig | None = None,
    ) -> None:
        self.llm_service = llm_service
        self.generation_config = generation_config or GenerationConfig()

    async def generate_answer(self, query: str, context: list[RetrievalResult]) -> str:
        """Answer ``query`` from ``context``.

        Args:
            query: The user's question
            context: Retrieved articles sorted by descending similarity

        Returns:
            str: Model output verbatim, an extractive fallback, or a fixed
                no-context message
        """
        if not context:
            logger.info("ℹ️ No context available; skipping generation")
            return NO_CONTEXT_MESSAGE

        prompt = build_prompt(query, context)

        if self.llm_service is None:
            logger.warning("⚠️ No generation service configured; using extractive fallback")
            return extractive_fallback(query, context)

        try:
            logger.info(f"🤖 Generating answer from {len(context)} articles")
            answer = await self.llm_service.generate(prompt, self.generation_config)
            logger.info("✅ Successfully generated answer")
            return answer
        except Exception as e:
            logger.error(f"❌ Error generating answer: {e}", exc_info=True)
            return extractive_fallback(query, context)
