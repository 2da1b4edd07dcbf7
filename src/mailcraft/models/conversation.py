"""ConversationState snapshot model."""

from typing import Optional

from pydantic import BaseModel, Field

from mailcraft.models.message import Message


class ConversationState(BaseModel):
    """Immutable snapshot of the conversation.

    ``is_generating`` is true exactly between a submitted utterance and the
    moment its reply is appended. ``epoch`` advances on every reset; replies
    issued under an older epoch are discarded.
    """

    messages: tuple[Message, ...] = Field(default_factory=tuple)
    is_generating: bool = False
    epoch: int = Field(default=0, ge=0)

    @property
    def last_message(self) -> Optional[Message]:
        """Most recently appended message, if any."""
        return self.messages[-1] if self.messages else None

    def suggestion_messages(self) -> list[Message]:
        """Assistant messages that propose blocks, oldest first."""
        return [m for m in self.messages if m.has_suggestions]

    model_config = {"frozen": True}
