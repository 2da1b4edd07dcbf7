"""
Mailcraft: a conversational assistant that proposes email content blocks.

Users describe what they want in plain language; the assistant answers with
ordered content blocks that can be added one at a time to an email template,
or replace the template wholesale.
"""

__version__ = "0.1.0"

from mailcraft.conversation.store import ConversationStore
from mailcraft.editor.bridge import TemplateBridge
from mailcraft.engine.base import SuggestionEngine, SuggestionResult
from mailcraft.engine.keyword import KeywordSuggestionEngine

__all__ = [
    "ConversationStore",
    "KeywordSuggestionEngine",
    "SuggestionEngine",
    "SuggestionResult",
    "TemplateBridge",
]
