"""Conversation state for the assistant panel."""

from .store import FAILURE_MESSAGE, ConversationStore

__all__ = ["ConversationStore", "FAILURE_MESSAGE"]
