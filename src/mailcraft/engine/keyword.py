"""Keyword-routing suggestion engine.

A placeholder for real language understanding: the lower-cased utterance
is checked against a fixed, ordered list of keywords and the first match
picks a canned block set.
"""

import asyncio
from typing import Callable, Sequence

from mailcraft.engine.base import SuggestionEngine, SuggestionResult
from mailcraft.models.blocks import (
    ContentBlock,
    create_button_block,
    create_text_block,
    create_title_block,
)
from mailcraft.models.message import Message
from mailcraft.utils.logging import get_logger


logger = get_logger(__name__)

FALLBACK_TEXT = "I've generated some blocks for you based on your request."


def _welcome_blocks() -> list[ContentBlock]:
    return [
        create_title_block("Welcome to our Newsletter!"),
        create_text_block(
            "We're so glad to have you with us. Stay tuned for exciting updates, "
            "tips, and exclusive offers."
        ),
        create_button_block("Get Started", "#"),
    ]


def _product_blocks() -> list[ContentBlock]:
    return [
        create_title_block("Featured Product"),
        create_text_block(
            "Check out our latest addition to the collection. Built with quality "
            "and style in mind."
        ),
        create_button_block("Shop Now", "#"),
    ]


def _fallback_blocks() -> list[ContentBlock]:
    return [
        create_title_block("New Section"),
        create_text_block("Tell me more about what you want to add here."),
    ]


# Checked in order; the first keyword found wins.
RULES: list[tuple[str, str, Callable[[], list[ContentBlock]]]] = [
    ("welcome", "Here's a welcome email structure for you:", _welcome_blocks),
    ("product", "I've suggested a product section:", _product_blocks),
]


class KeywordSuggestionEngine(SuggestionEngine):
    """Suggestion engine driven by fixed keyword rules."""

    def __init__(self, delay: float = 0.0):
        """
        Args:
            delay: Simulated latency in seconds before replying
        """
        self.delay = delay

    async def generate(
        self,
        utterance: str,
        history: Sequence[Message],
    ) -> SuggestionResult:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        normalized = utterance.lower()
        for keyword, text, make_blocks in RULES:
            if keyword in normalized:
                logger.debug("keyword_rule_matched", keyword=keyword)
                return SuggestionResult(text=text, blocks=tuple(make_blocks()))

        logger.debug("keyword_rule_fallback")
        return SuggestionResult(text=FALLBACK_TEXT, blocks=tuple(_fallback_blocks()))

    @property
    def engine_type(self) -> str:
        return "keyword"
