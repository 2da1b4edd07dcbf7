"""Pydantic models for LLM NDJSON streaming chunks."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class SuggestionChunk(BaseModel):
    """
    NDJSON chunk for suggestion streaming.

    The model answers with one JSON object per line:
    - ``{"type": "reply", "text": "..."}`` carries the display text
    - ``{"type": "block", "kind": "title", "fields": {"content": "..."}}``
      proposes one block; blocks are kept in stream order

    Block ids are never taken from the model; they are minted locally.
    """

    type: Literal["reply", "block"] = Field(
        ...,
        description="Chunk type identifier"
    )

    text: Optional[str] = Field(
        default=None,
        description="Display text (reply chunks)"
    )

    kind: Optional[str] = Field(
        default=None,
        description="Block kind (block chunks)"
    )

    fields: dict[str, Any] = Field(
        default_factory=dict,
        description="Kind-specific block payload (block chunks)"
    )
