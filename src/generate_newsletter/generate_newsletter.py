"""Search the index for a topic, generate a newsletter from the matches and email it."""

import logging
import re
from typing import Optional

from common.errors import GenerationParseError
from common.models import SearchResult
from common.retry import retry_call
from generate_newsletter.instructions import FORMAT_CORRECTION, NEWSLETTER_INSTRUCTIONS
from generate_newsletter.models import (
    NewsletterContent,
    NewsletterRequest,
    NewsletterResponse,
    NewsletterSettings,
    NewsletterStage,
)
from providers.base import Deliverer, Embedder, Generator, VectorIndex

logger = logging.getLogger(__name__)

SUBJECT_PATTERN = re.compile(r"SUBJECT:[ \t]*(.+?)[ \t]*(?:\r?\n|$)", re.IGNORECASE)
BODY_PATTERN = re.compile(r"BODY:\s*([\s\S]+)", re.IGNORECASE)


def format_articles_context(results: list[SearchResult]) -> str:
    """Render search results as numbered article blocks for the prompt."""
    blocks = []
    for i, result in enumerate(results, 1):
        metadata = result.metadata or {}
        blocks.append(
            "\n".join(
                [
                    f"Article {i}:",
                    f"Title: {metadata.get('title') or 'Untitled'}",
                    f"Source: {metadata.get('source') or 'Unknown'}",
                    f"Author: {metadata.get('author') or 'Unknown'}",
                    f"Published: {metadata.get('publishedAt') or 'Unknown date'}",
                    f"Description: {metadata.get('description') or metadata.get('content') or 'No description'}",
                    f"URL: {metadata.get('url') or 'No URL'}",
                    f"Relevance Score: {result.score * 100:.1f}%",
                ]
            )
        )
    return "\n---\n".join(blocks)


def build_prompt(topic: str, results: list[SearchResult]) -> str:
    return NEWSLETTER_INSTRUCTIONS.format(
        topic=topic,
        count=len(results),
        articles=format_articles_context(results),
    )


def parse_newsletter_content(text: str) -> NewsletterContent:
    """Split model output into subject and body.

    Raises:
        GenerationParseError: If either marker is missing or its section is empty.
    """
    subject_match = SUBJECT_PATTERN.search(text)
    # The body marker only counts after the subject line
    body_match = BODY_PATTERN.search(text, subject_match.end() if subject_match else 0)
    if not subject_match or not body_match:
        missing = [name for name, m in (("SUBJECT", subject_match), ("BODY", body_match)) if not m]
        raise GenerationParseError(
            f"Failed to parse generated newsletter content: missing {', '.join(missing)}",
            raw_output=text,
        )

    subject = subject_match.group(1).strip()
    body = body_match.group(1).strip()
    if not subject or not body:
        raise GenerationParseError(
            "Failed to parse generated newsletter content: empty subject or body",
            raw_output=text,
        )
    return NewsletterContent(subject=subject, body=body)


class NewsletterGenerator:
    """Runs START -> SEARCHING -> GENERATING -> DELIVERING -> DONE.

    Any failure moves to ERROR and is reported in the response; ``generate``
    does not raise.
    """

    def __init__(
        self,
        embedder: Embedder,
        vector_index: VectorIndex,
        generator: Generator,
        deliverer: Deliverer,
        settings: Optional[NewsletterSettings] = None,
    ) -> None:
        self.embedder = embedder
        self.vector_index = vector_index
        self.generator = generator
        self.deliverer = deliverer
        self.settings = settings or NewsletterSettings()
        self.stage = NewsletterStage.START

    def _enter(self, stage: NewsletterStage) -> None:
        logger.info("Newsletter stage: %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def search(self, topic: str, max_articles: int) -> list[SearchResult]:
        vector = retry_call(self.embedder.embed, topic, policy=self.settings.retry, description="embed topic")
        return retry_call(
            self.vector_index.search,
            vector,
            top_k=max_articles,
            include_metadata=True,
            policy=self.settings.retry,
            description="vector search",
        )

    def write(self, topic: str, results: list[SearchResult]) -> NewsletterContent:
        prompt = build_prompt(topic, results)
        for attempt in range(self.settings.parse_retries + 1):
            output = self.generator.generate(prompt, max_tokens=self.settings.max_tokens)
            try:
                return parse_newsletter_content(output)
            except GenerationParseError as e:
                logger.error("Unparseable model output (attempt %d): %r", attempt + 1, e.raw_output)
                if attempt == self.settings.parse_retries:
                    raise
                prompt = build_prompt(topic, results) + FORMAT_CORRECTION

        raise AssertionError("unreachable")

    def generate(self, request: NewsletterRequest) -> NewsletterResponse:
        self.stage = NewsletterStage.START
        articles_found = None
        logger.info(
            "Starting newsletter generation: topic=%r recipients=%d max_articles=%d",
            request.topic,
            len(request.recipients),
            request.max_articles,
        )

        try:
            self._enter(NewsletterStage.SEARCHING)
            results = self.search(request.topic, request.max_articles)
            articles_found = len(results)
            if not results:
                logger.warning("No articles found for topic %r", request.topic)
                self._enter(NewsletterStage.DONE)
                return NewsletterResponse(
                    success=False,
                    message=f"No articles found for topic: {request.topic}",
                    articles_found=0,
                )
            logger.info("Found %d articles", articles_found)

            self._enter(NewsletterStage.GENERATING)
            content = self.write(request.topic, results)
            logger.info("Newsletter content generated: subject=%r body_length=%d", content.subject, len(content.body))

            self._enter(NewsletterStage.DELIVERING)
            delivery = self.deliverer.send(request.recipients, content.subject, content.body, is_html=True)

            self._enter(NewsletterStage.DONE)
            logger.info(
                "Newsletter sent: message_id=%s recipients=%d", delivery.message_id, delivery.recipient_count
            )
            return NewsletterResponse(
                success=True,
                message="Newsletter generated and sent successfully",
                articles_found=articles_found,
                email_sent=True,
                message_id=delivery.message_id,
            )
        except Exception as e:
            failed_stage = self.stage
            self._enter(NewsletterStage.ERROR)
            logger.exception("Newsletter generation failed during %s", failed_stage.value)
            return NewsletterResponse(
                success=False,
                message=f"Failed to generate newsletter: {e}",
                articles_found=articles_found,
                email_sent=False,
            )
