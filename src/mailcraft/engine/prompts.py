"""Prompt templates for the LLM suggestion engine."""

from typing import Sequence

from mailcraft.models.blocks import block_summary
from mailcraft.models.message import Message, Role


SYSTEM_PROMPT = """You are an assistant inside an email template editor.
The user describes email content; you propose content blocks for it.

Respond ONLY with newline-delimited JSON (one JSON object per line, no prose,
no code fences):

1. Exactly one reply line, first:
   {"type": "reply", "text": "<one short sentence introducing your blocks>"}

2. Then one line per proposed block, in the order they should appear:
   {"type": "block", "kind": "<kind>", "fields": {...}}

Block kinds and their fields:
- title:   {"content": "<heading>", "level": 1}
- text:    {"content": "<paragraph>"}
- button:  {"label": "<caption>", "href": "<url or #>"}
- image:   {"src": "<url>", "alt": "<description>"}
- divider: {}
- spacer:  {"height": 24}

Propose between 1 and 8 blocks. Never include ids."""


def render_history(history: Sequence[Message], limit: int) -> str:
    """
    Render the most recent messages as plain dialogue for the prompt.

    Args:
        history: Conversation log, oldest first
        limit: Maximum number of messages to include (0 disables)

    Returns:
        Dialogue text, or empty string if there is nothing to include
    """
    if limit <= 0 or not history:
        return ""

    lines = []
    for message in history[-limit:]:
        speaker = "User" if message.role is Role.USER else "Assistant"
        lines.append(f"{speaker}: {message.content}")
        if message.has_suggestions:
            kinds = ", ".join(
                f"{block.type} ({block_summary(block)})" for block in message.suggestions
            )
            lines.append(f"  [proposed blocks: {kinds}]")
    return "\n".join(lines)


def build_user_prompt(utterance: str, history: Sequence[Message], limit: int) -> str:
    """Build the user prompt from recent dialogue and the new request."""
    dialogue = render_history(history, limit)
    if dialogue:
        return f"Conversation so far:\n{dialogue}\n\nNew request:\n{utterance}"
    return f"Request:\n{utterance}"
