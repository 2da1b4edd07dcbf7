"""Content block models and factories.

Blocks are immutable values. The assistant only arranges them (ids and
order); the template editor owns them once a suggestion is applied.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from mailcraft.utils.ids import generate_id


class TitleBlock(BaseModel):
    """Heading block."""

    id: str = Field(..., description="Unique block identifier")
    type: Literal["title"] = "title"
    content: str = Field(..., description="Heading text")
    level: int = Field(default=1, ge=1, le=3, description="Heading level (1-3)")

    model_config = {"frozen": True}


class TextBlock(BaseModel):
    """Paragraph block."""

    id: str = Field(..., description="Unique block identifier")
    type: Literal["text"] = "text"
    content: str = Field(..., description="Paragraph text")

    model_config = {"frozen": True}


class ButtonBlock(BaseModel):
    """Call-to-action button."""

    id: str = Field(..., description="Unique block identifier")
    type: Literal["button"] = "button"
    label: str = Field(..., description="Button caption")
    href: str = Field(default="#", description="Link target")

    model_config = {"frozen": True}


class ImageBlock(BaseModel):
    """Inline image."""

    id: str = Field(..., description="Unique block identifier")
    type: Literal["image"] = "image"
    src: str = Field(..., description="Image URL")
    alt: str = Field(default="", description="Alternative text")

    model_config = {"frozen": True}


class DividerBlock(BaseModel):
    """Horizontal rule."""

    id: str = Field(..., description="Unique block identifier")
    type: Literal["divider"] = "divider"

    model_config = {"frozen": True}


class SpacerBlock(BaseModel):
    """Vertical whitespace."""

    id: str = Field(..., description="Unique block identifier")
    type: Literal["spacer"] = "spacer"
    height: int = Field(default=24, ge=0, le=400, description="Height in pixels")

    model_config = {"frozen": True}


ContentBlock = Annotated[
    Union[TitleBlock, TextBlock, ButtonBlock, ImageBlock, DividerBlock, SpacerBlock],
    Field(discriminator="type"),
]

BLOCK_KINDS = ("title", "text", "button", "image", "divider", "spacer")

_block_adapter: TypeAdapter = TypeAdapter(ContentBlock)


def create_title_block(content: str, level: int = 1) -> TitleBlock:
    """Create a title block with a fresh id."""
    return TitleBlock(id=generate_id(), content=content, level=level)


def create_text_block(content: str) -> TextBlock:
    """Create a text block with a fresh id."""
    return TextBlock(id=generate_id(), content=content)


def create_button_block(label: str, href: str = "#") -> ButtonBlock:
    """Create a button block with a fresh id."""
    return ButtonBlock(id=generate_id(), label=label, href=href)


def create_image_block(src: str, alt: str = "") -> ImageBlock:
    """Create an image block with a fresh id."""
    return ImageBlock(id=generate_id(), src=src, alt=alt)


def create_divider_block() -> DividerBlock:
    """Create a divider block with a fresh id."""
    return DividerBlock(id=generate_id())


def create_spacer_block(height: int = 24) -> SpacerBlock:
    """Create a spacer block with a fresh id."""
    return SpacerBlock(id=generate_id(), height=height)


def parse_block(data: dict[str, Any]) -> ContentBlock:
    """
    Validate a dict (including its id) into a content block.

    Args:
        data: Block data with "id" and "type" keys

    Returns:
        The matching block model

    Raises:
        pydantic.ValidationError: If the data does not describe a valid block
    """
    return _block_adapter.validate_python(data)


def build_block(kind: str, payload: dict[str, Any] | None = None) -> ContentBlock:
    """
    Build a block of the given kind from an untrusted payload.

    Any "id" or "type" keys in the payload are ignored; the id is always
    minted here so generated blocks can never collide with template ids.

    Args:
        kind: Block kind (one of BLOCK_KINDS)
        payload: Kind-specific fields

    Returns:
        Newly built block

    Raises:
        ValueError: If the kind is unknown or the payload is invalid
    """
    if kind not in BLOCK_KINDS:
        raise ValueError(f"Unknown block kind: {kind!r}")

    data = {k: v for k, v in (payload or {}).items() if k not in ("id", "type")}
    data["id"] = generate_id()
    data["type"] = kind

    try:
        return parse_block(data)
    except ValidationError as e:
        raise ValueError(f"Invalid {kind} block: {e}") from e


def with_fresh_id(block: ContentBlock) -> ContentBlock:
    """Return a copy of the block with a newly minted id."""
    return block.model_copy(update={"id": generate_id()})


def block_summary(block: ContentBlock) -> str:
    """One-line display text for a block."""
    if isinstance(block, (TitleBlock, TextBlock)):
        return block.content
    if isinstance(block, ButtonBlock):
        return block.label
    if isinstance(block, ImageBlock):
        return block.alt or block.src
    return block.type
