"""In-memory template editor used as the host by the TUI and CLI.

The assistant never mutates a template itself; this editor is the owner of
the block list and exposes the two mutation entry points the assistant's
bridge calls into.
"""

import json
from pathlib import Path
from typing import Callable, Optional, Sequence

import structlog
from pydantic import ValidationError

from mailcraft.models.blocks import ContentBlock
from mailcraft.models.template import EmailTemplate
from mailcraft.services.file_operations import atomic_write

logger = structlog.get_logger()

TemplateListener = Callable[[EmailTemplate], None]


class TemplateEditor:
    """Owns an EmailTemplate and notifies listeners on every change."""

    def __init__(self, template: Optional[EmailTemplate] = None):
        self._template = template or EmailTemplate()
        self._listeners: list[TemplateListener] = []

    def snapshot(self) -> EmailTemplate:
        """Current template (immutable)."""
        return self._template

    def subscribe(self, listener: TemplateListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_block(self, block: ContentBlock) -> None:
        """Append one block to the end of the template.

        Raises:
            ValueError: If a block with the same id is already present
        """
        if block.id in self._template.block_ids:
            raise ValueError(f"Duplicate block id: {block.id}")
        self._replace(self._template.blocks + (block,))
        logger.info("editor_block_appended", block_id=block.id, total=len(self._template.blocks))

    def set_blocks(self, blocks: Sequence[ContentBlock]) -> None:
        """Replace every block in the template.

        Raises:
            ValueError: If the new blocks contain duplicate ids
        """
        ids = [block.id for block in blocks]
        if len(set(ids)) != len(ids):
            raise ValueError("Duplicate block ids in replacement")
        self._replace(tuple(blocks))
        logger.info("editor_blocks_replaced", total=len(blocks))

    def _replace(self, blocks: tuple[ContentBlock, ...]) -> None:
        self._template = self._template.model_copy(update={"blocks": blocks})
        for listener in list(self._listeners):
            try:
                listener(self._template)
            except Exception as e:
                logger.error(
                    "editor_listener_failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e),
                )

    @classmethod
    def load(cls, path: Path) -> "TemplateEditor":
        """
        Load a template from a JSON file.

        Args:
            path: Path to template JSON

        Returns:
            Editor holding the loaded template

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a valid template
        """
        text = path.read_text(encoding="utf-8")
        try:
            template = EmailTemplate.model_validate_json(text)
        except ValidationError as e:
            raise ValueError(f"Invalid template file {path}: {e}") from e
        logger.info("template_loaded", path=str(path), blocks=len(template.blocks))
        return cls(template)

    def save(self, path: Path) -> None:
        """Write the template to ``path`` as JSON (atomically)."""
        content = json.dumps(self._template.model_dump(mode="json"), indent=2)
        atomic_write(path, content + "\n")
        logger.info("template_saved", path=str(path), blocks=len(self._template.blocks))
