"""Unit tests for LLM prompt building."""

from mailcraft.engine.prompts import build_user_prompt, render_history
from mailcraft.models.blocks import create_button_block, create_title_block
from mailcraft.models.message import Message, Role


def make_history():
    return [
        Message(id="a0", role=Role.ASSISTANT, content="Hi! What are we building?"),
        Message(id="u1", role=Role.USER, content="welcome email"),
        Message(
            id="a1",
            role=Role.ASSISTANT,
            content="Here's a welcome email structure for you:",
            suggestions=(create_title_block("Welcome!"), create_button_block("Get Started")),
        ),
    ]


class TestRenderHistory:

    def test_speakers_and_proposed_blocks(self):
        text = render_history(make_history(), limit=10)

        assert "Assistant: Hi! What are we building?" in text
        assert "User: welcome email" in text
        assert "[proposed blocks: title (Welcome!), button (Get Started)]" in text

    def test_limit_keeps_most_recent(self):
        text = render_history(make_history(), limit=1)

        assert "welcome email" not in text
        assert "Here's a welcome email structure" in text

    def test_zero_limit(self):
        assert render_history(make_history(), limit=0) == ""


class TestBuildUserPrompt:

    def test_without_history(self):
        assert build_user_prompt("add a footer", [], limit=6) == "Request:\nadd a footer"

    def test_with_history(self):
        prompt = build_user_prompt("add a footer", make_history(), limit=6)

        assert prompt.startswith("Conversation so far:\n")
        assert prompt.endswith("New request:\nadd a footer")
