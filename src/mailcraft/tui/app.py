"""Main Mailcraft TUI Application.

Hosts the assistant panel next to an in-memory template editor. The app
owns the three long-lived objects of a panel session:

- ``store``: conversation log and generating flag
- ``editor``: the template (the only thing suggestions ever modify)
- ``bridge``: the add-one / apply-all glue between the two
"""

from textual.app import App
from textual.binding import Binding
import structlog

from mailcraft.conversation.store import ConversationStore
from mailcraft.editor.bridge import TemplateBridge
from mailcraft.editor.template_editor import TemplateEditor
from mailcraft.tui.screens import AssistantScreen

logger = structlog.get_logger()


class MailcraftApp(App):
    """Email assistant TUI."""

    TITLE = "Mailcraft"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(self, store: ConversationStore, editor: TemplateEditor):
        """Initialize the Mailcraft app.

        Args:
            store: Conversation store for this panel session
            editor: Host template editor
        """
        super().__init__()
        self.store = store
        self.editor = editor
        self.bridge = TemplateBridge(
            on_add_block=editor.add_block,
            on_set_template=editor.set_blocks,
            current_template=editor.snapshot(),
        )

        logger.info(
            "app_initialized",
            engine=store.engine.engine_type,
            template_blocks=len(editor.snapshot().blocks),
        )

    def on_mount(self) -> None:
        """Show the assistant screen."""
        self.push_screen(
            AssistantScreen(store=self.store, editor=self.editor, bridge=self.bridge, name="assistant")
        )

    def on_unmount(self) -> None:
        """Drop any generation still in flight."""
        self.store.close()
        logger.info("app_unmounted")
