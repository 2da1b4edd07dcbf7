"""Shared fixtures for UI tests."""

import pytest

from mailcraft.conversation.store import ConversationStore
from mailcraft.editor.template_editor import TemplateEditor
from mailcraft.tui.app import MailcraftApp


@pytest.fixture
def editor():
    """Empty in-memory template editor."""
    return TemplateEditor()


@pytest.fixture
def app(keyword_engine, editor):
    """App wired to the keyword engine without latency."""
    return MailcraftApp(store=ConversationStore(keyword_engine), editor=editor)
