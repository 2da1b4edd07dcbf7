"""CLI entry point for Mailcraft."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from mailcraft.config import DEFAULT_CONFIG_PATH, ConfigManager
from mailcraft.models.blocks import block_summary
from mailcraft.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
console = Console()


def load_config(config_path: Optional[Path]) -> ConfigManager:
    """
    Load configuration, falling back to defaults if the default file is absent.

    An explicitly given path must exist.

    Args:
        config_path: Path from --config, or None for ~/.config/mailcraft/config.yaml

    Returns:
        ConfigManager instance

    Raises:
        click.ClickException: If config is missing, has invalid permissions, or validation fails
    """
    try:
        if config_path is None:
            return ConfigManager.load_from_path(DEFAULT_CONFIG_PATH, allow_missing=True)
        return ConfigManager.load_from_path(config_path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    except PermissionError as e:
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.ClickException(f"Configuration validation failed:\n{e}")


config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.yaml (default: ~/.config/mailcraft/config.yaml)",
)


@click.group()
@click.version_option(version="0.1.0", prog_name="mailcraft")
def cli():
    """Mailcraft: describe email content in plain language, get ready-made blocks."""
    configure_logging()


@cli.command()
@config_option
@click.option(
    "--template",
    "template_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Template JSON to start from",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the final template here (JSON) when the app exits",
)
def chat(config_path: Optional[Path], template_path: Optional[Path], output_path: Optional[Path]):
    """
    Open the assistant panel next to a template preview.

    Examples:
        mailcraft chat
        mailcraft chat --template newsletter.json --output newsletter.json
    """
    from mailcraft.conversation.store import ConversationStore
    from mailcraft.editor.template_editor import TemplateEditor
    from mailcraft.engine.factory import create_suggestion_engine
    from mailcraft.tui.app import MailcraftApp

    logger.info("chat_command_started", template=str(template_path) if template_path else None)

    config = load_config(config_path)

    try:
        engine = create_suggestion_engine(config)
    except ValueError as e:
        raise click.ClickException(str(e))

    if template_path:
        try:
            editor = TemplateEditor.load(template_path)
        except ValueError as e:
            raise click.ClickException(str(e))
    else:
        editor = TemplateEditor()

    store = ConversationStore(
        engine,
        welcome_message=config.assistant.welcome_message,
        generation_timeout=config.assistant.generation_timeout,
    )

    app = MailcraftApp(store=store, editor=editor)
    app.run()

    if output_path:
        try:
            editor.save(output_path)
        except OSError as e:
            raise click.ClickException(f"Could not write template: {e}")
        click.echo(f"Template written to {output_path}")

    logger.info("chat_command_completed")


@cli.command()
@config_option
@click.argument("utterance")
@click.option("--json", "as_json", is_flag=True, help="Print the reply as JSON")
def suggest(config_path: Optional[Path], utterance: str, as_json: bool):
    """
    Ask the assistant once and print its suggested blocks.

    Examples:
        mailcraft suggest "Create a welcome email for a tech newsletter"
        mailcraft suggest "Add a product section" --json | jq .blocks
    """
    from mailcraft.engine.factory import create_suggestion_engine

    if not utterance.strip():
        raise click.UsageError("UTTERANCE must not be empty")

    logger.info("suggest_command_started", length=len(utterance))

    config = load_config(config_path)
    try:
        engine = create_suggestion_engine(config)
    except ValueError as e:
        raise click.ClickException(str(e))

    try:
        result = asyncio.run(engine.generate(utterance.strip(), []))
    except Exception as e:
        logger.error("suggest_command_failed", error=str(e))
        raise click.ClickException(f"Could not generate suggestions: {e}")

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    console.print(result.text)
    if not result.blocks:
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Content")
    for i, block in enumerate(result.blocks, 1):
        table.add_row(str(i), block.type, block_summary(block))
    console.print(table)


def main():
    """Entry point for the mailcraft console script."""
    cli()


if __name__ == "__main__":
    main()
