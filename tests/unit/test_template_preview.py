"""Unit tests for template preview rendering."""

from mailcraft.models.blocks import (
    create_button_block,
    create_divider_block,
    create_image_block,
    create_title_block,
)
from mailcraft.models.template import EmailTemplate
from mailcraft.tui.widgets.template_preview import render_block, render_template


def test_empty_template_hint():
    text = render_template(EmailTemplate())

    assert "This template is empty." in text.plain


def test_blocks_rendered_in_order():
    template = EmailTemplate(
        subject="Hello",
        blocks=(
            create_title_block("Big news"),
            create_divider_block(),
            create_button_block("Read more", "https://example.com"),
        ),
    )

    plain = render_template(template).plain

    assert plain.startswith("Subject: Hello")
    assert plain.index("Big news") < plain.index("Read more")
    assert "https://example.com" in plain


def test_image_uses_alt_text():
    assert render_block(create_image_block("logo.png", alt="Company logo")).plain == "[image: Company logo]"
