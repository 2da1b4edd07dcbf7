"""Abstract base class for suggestion engines.

This module defines the contract every engine honours, whether it is the
built-in keyword heuristic or a network-bound language model:
- ``generate`` is awaited once per user utterance
- it either returns one SuggestionResult or raises
- it may take bounded time; callers must not block on it
"""

from abc import ABC, abstractmethod
from typing import Sequence

from pydantic import BaseModel, Field

from mailcraft.models.blocks import ContentBlock
from mailcraft.models.message import Message


class SuggestionResult(BaseModel):
    """Assistant reply: display text plus zero or more proposed blocks."""

    text: str = Field(..., min_length=1, description="Display text for the reply")
    blocks: tuple[ContentBlock, ...] = Field(
        default_factory=tuple,
        description="Proposed blocks, in insertion order"
    )

    model_config = {"frozen": True}


class SuggestionEngine(ABC):
    """Maps a user utterance to an assistant reply."""

    @abstractmethod
    async def generate(
        self,
        utterance: str,
        history: Sequence[Message],
    ) -> SuggestionResult:
        """Produce a reply for ``utterance``.

        Args:
            utterance: Trimmed user text
            history: Conversation log up to and including the user message

        Returns:
            The reply text and proposed blocks

        Raises:
            Exception: Any failure; callers treat all of them as a failed generation
        """

    @property
    @abstractmethod
    def engine_type(self) -> str:
        """Get the engine type identifier."""
