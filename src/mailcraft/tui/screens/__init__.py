"""Textual screen components."""

from mailcraft.tui.screens.assistant import AssistantScreen

__all__ = ["AssistantScreen"]
