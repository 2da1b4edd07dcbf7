"""Assistant Screen: conversation panel next to the template preview.

The user types a request, the assistant replies with suggested blocks, and
each suggestion card lets the user add single blocks or replace the whole
template.
"""

from typing import Callable, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Input, Label, LoadingIndicator
import structlog

from mailcraft.conversation.store import ConversationStore
from mailcraft.editor.bridge import TemplateBridge
from mailcraft.editor.template_editor import TemplateEditor
from mailcraft.models.conversation import ConversationState
from mailcraft.models.template import EmailTemplate
from mailcraft.tui.widgets.message_list import AddBlockButton, ApplyAllButton, MessageList
from mailcraft.tui.widgets.template_preview import TemplatePreview

logger = structlog.get_logger()


class AssistantScreen(Screen):
    """Conversation panel (left) and template preview (right)."""

    DEFAULT_CSS = """
    AssistantScreen {
        layout: vertical;
    }

    #main-row {
        height: 1fr;
        layout: horizontal;
    }

    #assistant-panel {
        width: 1fr;
        min-width: 40;
        border: solid $accent;
    }

    #panel-header {
        height: auto;
        padding: 0 1;
        text-style: bold;
    }

    #message-list {
        height: 1fr;
        padding: 0 1;
    }

    .message {
        height: auto;
        margin: 1 0 0 0;
    }

    .message.user .bubble {
        background: $primary 30%;
        padding: 0 1;
        margin-left: 8;
    }

    .message.assistant .bubble {
        background: $panel;
        padding: 0 1;
        margin-right: 8;
    }

    .suggestion-card {
        height: auto;
        border: round $accent;
        margin: 0 8 0 2;
        padding: 0 1;
    }

    .suggestion-header {
        height: auto;
    }

    .suggestion-title {
        width: 1fr;
        text-style: bold;
        padding: 1 0 0 0;
    }

    .suggestion-row {
        height: auto;
    }

    .suggestion-summary {
        width: 1fr;
        padding: 1 0 0 0;
    }

    .add-block {
        min-width: 5;
        width: 5;
    }

    #generating {
        height: 1;
        display: none;
    }

    #prompt-input {
        margin: 0 1;
    }

    #disclaimer {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }

    #template-preview {
        width: 1fr;
        border: solid $secondary;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+n", "reset_conversation", "New conversation"),
        ("ctrl+t", "focus_template", "Focus template"),
    ]

    def __init__(
        self,
        store: ConversationStore,
        editor: TemplateEditor,
        bridge: Optional[TemplateBridge] = None,
        **kwargs
    ):
        """Initialize the assistant screen.

        Args:
            store: Conversation store driving the thread
            editor: Host template editor
            bridge: Bridge to the editor (built from the editor if omitted)
        """
        super().__init__(**kwargs)
        self.store = store
        self.editor = editor
        self.bridge = bridge or TemplateBridge(
            on_add_block=editor.add_block,
            on_set_template=editor.set_blocks,
            current_template=editor.snapshot(),
        )
        self._unsubscribers: list[Callable[[], None]] = []

    def compose(self) -> ComposeResult:
        """Compose the assistant screen layout."""
        with Horizontal(id="main-row"):
            with Vertical(id="assistant-panel"):
                yield Label("✦ Active Intelligence  (beta)", id="panel-header")
                yield MessageList()
                yield LoadingIndicator(id="generating")
                yield Input(placeholder="Describe what to build...", id="prompt-input")
                yield Label(
                    "AI can make mistakes. Check important information for accuracy.",
                    id="disclaimer",
                )
            yield TemplatePreview(self.editor.snapshot())

        yield Footer()

    def on_mount(self) -> None:
        """Subscribe to the store and editor, then draw the initial state."""
        self._unsubscribers.append(self.store.subscribe(self._on_conversation_changed))
        self._unsubscribers.append(self.editor.subscribe(self._on_template_changed))
        self.call_later(self._sync_conversation)
        self.query_one("#prompt-input", Input).focus()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # Store / editor notifications

    def _on_conversation_changed(self, state: ConversationState) -> None:
        self.call_later(self._sync_conversation)

    def _on_template_changed(self, template: EmailTemplate) -> None:
        self.bridge.sync(template)
        self.query_one(TemplatePreview).show_template(template)

    async def _sync_conversation(self) -> None:
        """Redraw the thread and input from the latest store snapshot."""
        state = self.store.state
        await self.query_one(MessageList).sync_messages(state.messages)

        self.query_one("#generating", LoadingIndicator).display = state.is_generating
        prompt = self.query_one("#prompt-input", Input)
        was_disabled = prompt.disabled
        prompt.disabled = state.is_generating
        if was_disabled and not state.is_generating:
            prompt.focus()

    # User input

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter submits the request (ignored while a reply is pending)."""
        before = len(self.store.messages)
        self.store.submit(event.value)
        if len(self.store.messages) > before:
            event.input.value = ""
            logger.info("user_action_submit")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route suggestion-card buttons to the template bridge."""
        button = event.button
        if isinstance(button, AddBlockButton):
            if self.bridge.add_block(button.block):
                self.notify(f"Added {button.block.type} block")
            else:
                self.notify("The editor rejected that block", severity="error")
            logger.info("user_action_add_block", block_id=button.block.id)

        elif isinstance(button, ApplyAllButton):
            blocks = button.blocks
            if self.bridge.apply_all(blocks):
                self.notify(f"Template replaced with {len(blocks)} blocks")
            else:
                self.notify("Could not apply these blocks", severity="error")
            logger.info("user_action_apply_all", message_id=button.chat_message.id, block_count=len(blocks))

    def action_reset_conversation(self) -> None:
        """Start a new conversation."""
        self.store.reset()
        logger.info("user_action_reset_conversation")

    def action_focus_template(self) -> None:
        """Focus the template preview widget."""
        self.query_one(TemplatePreview).focus()
        logger.info("user_action_focus_template")
