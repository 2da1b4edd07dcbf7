"""Bridge from assistant suggestions to the host template editor.

The editor owns the template. The assistant only reaches it through two
host-supplied callbacks, both fire-and-forget:

- ``on_add_block(block)``: append one block to the end of the template
- ``on_set_template(blocks)``: replace the whole template with ``blocks``
"""

from typing import Callable, Optional, Sequence

from mailcraft.models.blocks import ContentBlock, with_fresh_id
from mailcraft.models.template import EmailTemplate
from mailcraft.utils.logging import get_logger


logger = get_logger(__name__)

AddBlockCallback = Callable[[ContentBlock], None]
SetTemplateCallback = Callable[[list[ContentBlock]], None]


class TemplateBridge:
    """Applies suggested blocks to the host editor.

    Tracks which block ids are already in the template (from the snapshot
    it was created with, plus everything it has delivered since) so that
    adding a suggestion twice never produces duplicate ids.
    """

    def __init__(
        self,
        on_add_block: AddBlockCallback,
        on_set_template: SetTemplateCallback,
        current_template: Optional[EmailTemplate] = None,
    ):
        """Initialize the bridge.

        Args:
            on_add_block: Host callback appending one block
            on_set_template: Host callback replacing all blocks
            current_template: Read-only snapshot of the template being edited
        """
        self.on_add_block = on_add_block
        self.on_set_template = on_set_template
        self.current_template = current_template
        self._known_ids: set[str] = (
            set(current_template.block_ids) if current_template else set()
        )

    def sync(self, template: EmailTemplate) -> None:
        """Refresh the template snapshot after the host changed it."""
        self.current_template = template
        self._known_ids = set(template.block_ids)

    def add_block(self, block: ContentBlock) -> bool:
        """Ask the editor to append ``block`` to the template.

        The block is passed through unchanged unless its id is already in the
        template, in which case a copy with a fresh id is sent.

        Args:
            block: Suggested block

        Returns:
            True if the editor accepted the call, False if its callback raised
        """
        outgoing = block
        if block.id in self._known_ids:
            outgoing = with_fresh_id(block)
            logger.info(
                "template_block_id_reminted",
                original_id=block.id,
                new_id=outgoing.id,
            )

        try:
            self.on_add_block(outgoing)
        except Exception as e:
            logger.error(
                "template_add_block_failed",
                block_id=outgoing.id,
                block_type=outgoing.type,
                error=str(e),
            )
            return False

        self._known_ids.add(outgoing.id)
        logger.info("template_block_added", block_id=outgoing.id, block_type=outgoing.type)
        return True

    def apply_all(self, blocks: Sequence[ContentBlock]) -> bool:
        """Ask the editor to replace the whole template with ``blocks``.

        Destructive for the template; only call on explicit user request.

        Args:
            blocks: Suggested blocks in their original order

        Returns:
            True if the editor accepted the call, False if there was nothing
            to apply or its callback raised
        """
        if not blocks:
            logger.debug("template_apply_skipped", reason="no_blocks")
            return False

        outgoing = list(blocks)
        try:
            self.on_set_template(outgoing)
        except Exception as e:
            logger.error(
                "template_apply_failed",
                block_count=len(outgoing),
                error=str(e),
            )
            return False

        self._known_ids = {block.id for block in outgoing}
        logger.info("template_replaced", block_count=len(outgoing))
        return True
