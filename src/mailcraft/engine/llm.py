"""LLM-backed suggestion engine.

Drop-in replacement for the keyword heuristic: same ``generate`` contract,
but the reply text and blocks come from a streaming chat model.
"""

from typing import Sequence

import httpx

from mailcraft.engine.base import SuggestionEngine, SuggestionResult
from mailcraft.engine.keyword import FALLBACK_TEXT
from mailcraft.engine.prompts import SYSTEM_PROMPT, build_user_prompt
from mailcraft.models.blocks import ContentBlock, build_block
from mailcraft.models.llm_chunks import SuggestionChunk
from mailcraft.models.message import Message, Role
from mailcraft.services.exceptions import GenerationError
from mailcraft.services.llm_client import LLMClient
from mailcraft.utils.logging import get_logger


logger = get_logger(__name__)

MAX_BLOCKS = 8


class LLMSuggestionEngine(SuggestionEngine):
    """Suggestion engine that asks a language model for blocks."""

    def __init__(self, llm_client: LLMClient, history_limit: int = 6):
        """
        Args:
            llm_client: Client for the chat completions API
            history_limit: Number of prior messages to include as context
        """
        self.llm_client = llm_client
        self.history_limit = history_limit

    async def generate(
        self,
        utterance: str,
        history: Sequence[Message],
    ) -> SuggestionResult:
        prior = list(history)
        # The store appends the user message before calling us
        if prior and prior[-1].role is Role.USER and prior[-1].content == utterance:
            prior = prior[:-1]

        prompt = build_user_prompt(utterance, prior, self.history_limit)

        text = None
        blocks: list[ContentBlock] = []
        try:
            async for chunk in self.llm_client.stream_ndjson(
                prompt=prompt,
                system_prompt=SYSTEM_PROMPT,
                chunk_model=SuggestionChunk,
                request_id="suggestion",
            ):
                if chunk.type == "reply":
                    if chunk.text and text is None:
                        text = chunk.text.strip() or None
                    continue

                if len(blocks) >= MAX_BLOCKS:
                    logger.warning("llm_block_limit_reached", limit=MAX_BLOCKS)
                    continue

                try:
                    blocks.append(build_block(chunk.kind or "", chunk.fields))
                except ValueError as e:
                    logger.warning("llm_block_rejected", kind=chunk.kind, error=str(e))

        except httpx.HTTPError as e:
            raise GenerationError("http_error", str(e)) from e

        if text is None and not blocks:
            raise GenerationError("empty_response", "The model returned no usable output")

        logger.info("llm_suggestion_generated", block_count=len(blocks))
        return SuggestionResult(text=text or FALLBACK_TEXT, blocks=tuple(blocks))

    @property
    def engine_type(self) -> str:
        return "llm"
