"""TemplatePreview widget showing the template being edited."""

from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import Static

from mailcraft.models.blocks import (
    ButtonBlock,
    ContentBlock,
    DividerBlock,
    ImageBlock,
    SpacerBlock,
    TextBlock,
    TitleBlock,
)
from mailcraft.models.template import EmailTemplate


def render_block(block: ContentBlock) -> Text:
    """Render one block as rich text."""
    if isinstance(block, TitleBlock):
        style = {1: "bold underline", 2: "bold", 3: "bold dim"}[block.level]
        return Text(block.content, style=style)
    if isinstance(block, TextBlock):
        return Text(block.content)
    if isinstance(block, ButtonBlock):
        text = Text()
        text.append(f" {block.label} ", style="bold reverse")
        text.append(f"  → {block.href}", style="dim")
        return text
    if isinstance(block, ImageBlock):
        return Text(f"[image: {block.alt or block.src}]", style="italic")
    if isinstance(block, DividerBlock):
        return Text("─" * 40, style="dim")
    if isinstance(block, SpacerBlock):
        return Text("")
    return Text(block.type)


def render_template(template: EmailTemplate) -> Text:
    """Render a whole template, blocks separated by blank lines."""
    if not template.blocks:
        return Text("This template is empty.\n\nAsk the assistant for some blocks.", style="dim")

    result = Text()
    if template.subject:
        result.append(f"Subject: {template.subject}\n\n", style="bold")
    for i, block in enumerate(template.blocks):
        if i:
            result.append("\n\n")
        result.append_text(render_block(block))
    return result


class TemplatePreview(VerticalScroll):
    """Read-only view of the current template."""

    def __init__(self, template: EmailTemplate, **kwargs):
        super().__init__(id="template-preview", **kwargs)
        self.template = template

    def compose(self):
        yield Static(render_template(self.template), id="template-body")

    def show_template(self, template: EmailTemplate) -> None:
        """Redraw with a new template snapshot."""
        self.template = template
        self.border_title = f"Template: {template.name} ({len(template.blocks)} blocks)"
        self.query_one("#template-body", Static).update(render_template(template))

    def on_mount(self) -> None:
        self.border_title = f"Template: {self.template.name} ({len(self.template.blocks)} blocks)"
