"""Message model for the assistant conversation log."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from mailcraft.models.blocks import ContentBlock


class Role(str, Enum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One entry in the conversation log.

    ``suggestions`` is None for messages that do not propose blocks. An empty
    tuple is accepted but, like None, means there is nothing to show.
    """

    id: str = Field(..., description="Unique message identifier")
    role: Role = Field(..., description="Message author")
    content: str = Field(..., description="Display text")
    suggestions: Optional[tuple[ContentBlock, ...]] = Field(
        default=None,
        description="Proposed blocks, in display order (assistant messages only)"
    )

    @model_validator(mode="after")
    def _only_assistant_suggests(self) -> "Message":
        if self.role is Role.USER and self.suggestions is not None:
            raise ValueError("User messages cannot carry suggestions")
        return self

    @property
    def has_suggestions(self) -> bool:
        """True if this message proposes at least one block."""
        return bool(self.suggestions)

    model_config = {"frozen": True}
