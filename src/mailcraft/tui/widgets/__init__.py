"""Textual widget components."""

from mailcraft.tui.widgets.message_list import (
    AddBlockButton,
    ApplyAllButton,
    MessageItem,
    MessageList,
    SuggestionCard,
)
from mailcraft.tui.widgets.template_preview import TemplatePreview

__all__ = [
    "AddBlockButton",
    "ApplyAllButton",
    "MessageItem",
    "MessageList",
    "SuggestionCard",
    "TemplatePreview",
]
