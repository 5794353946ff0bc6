"""Block model - a typed, independently addressable unit of page content."""

import uuid
from typing import Any

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field

from pagecraft.models.block_schemas import BlockType, default_block_data


def generate_block_id() -> str:
    """Generate a short block ID.

    Blocks persisted by the editor use the first 8 hex characters of a UUID4.
    """
    return uuid.uuid4().hex[:8]


class Block(PydanticBaseModel):
    """A single content block inside a document.

    Blocks are immutable values; every editor operation produces new
    instances rather than changing existing ones.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str = Field(default_factory=generate_block_id, min_length=1)
    type: BlockType
    data: dict[str, Any] = Field(default_factory=dict)
    order: int = Field(default=0, ge=0)

    @classmethod
    def create(cls, block_type: BlockType | str, order: int = 0) -> "Block":
        """Create a block with a fresh ID and the type's default payload.

        Args:
            block_type: The block type.
            order: Position of the block in the document.

        Returns:
            New Block instance.
        """
        return cls(
            id=generate_block_id(),
            type=BlockType(block_type),
            data=default_block_data(block_type),
            order=order,
        )


def reindex(blocks: list[Block]) -> list[Block]:
    """Recompute ``order`` so it matches list position.

    Blocks already in place are reused as-is.

    Args:
        blocks: Blocks in their intended order.

    Returns:
        New list with dense ``0..n-1`` ordering.
    """
    return [
        block if block.order == index else block.model_copy(update={"order": index})
        for index, block in enumerate(blocks)
    ]
