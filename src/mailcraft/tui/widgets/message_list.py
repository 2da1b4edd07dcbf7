"""MessageList widget for displaying the assistant conversation.

Each message renders as a bubble; assistant messages that propose blocks
get a suggestion card with an "Apply to Template" button and a "+" button
per block.
"""

from typing import Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Label, Static

from mailcraft.models.blocks import ContentBlock, block_summary
from mailcraft.models.message import Message, Role


class AddBlockButton(Button):
    """Adds a single suggested block to the template."""

    def __init__(self, block: ContentBlock, **kwargs):
        super().__init__("+", classes="add-block", **kwargs)
        self.block = block
        self.tooltip = "Add to template"


class ApplyAllButton(Button):
    """Replaces the template with a message's full suggestion list."""

    def __init__(self, message: Message, **kwargs):
        super().__init__("Apply to Template", classes="apply-all", **kwargs)
        self.chat_message = message

    @property
    def blocks(self) -> list[ContentBlock]:
        return list(self.chat_message.suggestions or ())


class SuggestionRow(Horizontal):
    """One suggested block: kind badge, summary, add button."""

    def __init__(self, block: ContentBlock, **kwargs):
        super().__init__(classes="suggestion-row", **kwargs)
        self.block = block

    def compose(self) -> ComposeResult:
        text = Text()
        text.append(f" {self.block.type.upper()} ", style="bold reverse")
        text.append(" ")
        text.append(block_summary(self.block), style="dim")
        yield Static(text, classes="suggestion-summary")
        yield AddBlockButton(self.block)


class SuggestionCard(Vertical):
    """Card listing an assistant message's proposed blocks."""

    def __init__(self, message: Message, **kwargs):
        super().__init__(classes="suggestion-card", **kwargs)
        self.chat_message = message

    def compose(self) -> ComposeResult:
        with Horizontal(classes="suggestion-header"):
            yield Label("AI GENERATED BLOCKS", classes="suggestion-title")
            yield ApplyAllButton(self.chat_message)
        for block in self.chat_message.suggestions or ():
            yield SuggestionRow(block)


class MessageItem(Vertical):
    """A single message bubble, plus its suggestions if any."""

    def __init__(self, message: Message, **kwargs):
        super().__init__(classes=f"message {message.role.value}", **kwargs)
        self.chat_message = message

    def compose(self) -> ComposeResult:
        speaker = "You" if self.chat_message.role is Role.USER else "Assistant"
        text = Text()
        text.append(f"{speaker}\n", style="bold")
        text.append(self.chat_message.content)
        yield Static(text, classes="bubble")
        if self.chat_message.has_suggestions:
            yield SuggestionCard(self.chat_message)


class MessageList(VerticalScroll):
    """Scrollable conversation thread.

    The log is append-only, so ``sync_messages`` only mounts messages it has not
    shown yet. If the rendered prefix no longer matches (after a reset),
    everything is rebuilt.
    """

    def __init__(self, **kwargs):
        super().__init__(id="message-list", **kwargs)

    @property
    def rendered_ids(self) -> list[str]:
        return [child.chat_message.id for child in self.children if isinstance(child, MessageItem)]

    async def sync_messages(self, messages: Sequence[Message]) -> None:
        """Bring the rendered thread in line with ``messages``."""
        shown = self.rendered_ids
        incoming = [message.id for message in messages]

        if incoming[:len(shown)] != shown:
            await self.remove_children()
            shown = []

        new_items = [MessageItem(message) for message in messages[len(shown):]]
        if new_items:
            await self.mount_all(new_items)
            self.scroll_end(animate=False)
