"""Version model - immutable record of a past persisted document state."""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pagecraft.models.base import BaseModel
from pagecraft.models.block import Block


class Version(BaseModel):
    """A persisted snapshot of a content document.

    Created by the persistence backend on every successful save and only read
    by the editor.

    Key Pattern:
        PK: CONTENT#{content_id}
        SK: VERSION#{version_number:010d}
    """

    _pk_prefix: ClassVar[str] = "CONTENT#"
    _sk_prefix: ClassVar[str] = "VERSION#"

    content_id: str = Field(default="", description="Document this version belongs to")
    version_number: int = Field(..., ge=1)
    blocks: list[Block] = Field(default_factory=list)
    title: str = Field(default="")
    slug: str = Field(default="")
    meta_title: str = Field(default="")
    meta_description: str = Field(default="")
    primary_keyword: str = Field(default="")
    hero_image: str = Field(default="")
    hero_image_alt: str = Field(default="")
    change_note: str | None = Field(None, max_length=1000)

    def get_pk(self) -> str:
        """Get partition key: CONTENT#{content_id}."""
        return f"{self._pk_prefix}{self.content_id}"

    def get_sk(self) -> str:
        """Get sort key: VERSION#{version_number}, zero padded to sort numerically."""
        return f"{self._sk_prefix}{self.version_number:010d}"


class ChangeKind(str, Enum):
    """Kind of difference between two document states."""

    FIELD_CHANGED = "field_changed"
    BLOCK_ADDED = "block_added"
    BLOCK_REMOVED = "block_removed"
    BLOCK_MODIFIED = "block_modified"
    BLOCK_MOVED = "block_moved"


class Change(PydanticBaseModel):
    """A single field-level or block-level difference, for display."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
    )

    kind: ChangeKind
    field: str | None = None
    block_id: str | None = None
    block_type: str | None = None
    before: Any = None
    after: Any = None
