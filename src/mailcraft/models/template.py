"""EmailTemplate snapshot model."""

from pydantic import BaseModel, Field

from mailcraft.models.blocks import ContentBlock
from mailcraft.utils.ids import generate_id


class EmailTemplate(BaseModel):
    """Read-only view of the template being edited."""

    id: str = Field(default_factory=generate_id)
    name: str = Field(default="Untitled template")
    subject: str = Field(default="")
    blocks: tuple[ContentBlock, ...] = Field(default_factory=tuple)

    @property
    def block_ids(self) -> set[str]:
        """Ids of every block currently in the template."""
        return {block.id for block in self.blocks}

    model_config = {"frozen": True}
