"""Pydantic data models for Mailcraft."""

from mailcraft.models.blocks import (
    ButtonBlock,
    ContentBlock,
    DividerBlock,
    ImageBlock,
    SpacerBlock,
    TextBlock,
    TitleBlock,
)
from mailcraft.models.message import Message, Role
from mailcraft.models.conversation import ConversationState
from mailcraft.models.template import EmailTemplate

__all__ = [
    "ButtonBlock",
    "ContentBlock",
    "ConversationState",
    "DividerBlock",
    "EmailTemplate",
    "ImageBlock",
    "Message",
    "Role",
    "SpacerBlock",
    "TextBlock",
    "TitleBlock",
]
