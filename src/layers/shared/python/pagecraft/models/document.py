"""Content document model - ordered blocks plus page metadata."""

import re
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, model_validator

from pagecraft.models.base import BaseModel
from pagecraft.models.block import Block, reindex
from pagecraft.models.block_schemas import BlockType


class ContentStatus(str, Enum):
    """Publish-lifecycle status of a document."""

    DRAFT = "draft"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


# Fields a persistence call may carry besides blocks
METADATA_FIELDS = (
    "title",
    "slug",
    "meta_title",
    "meta_description",
    "primary_keyword",
    "hero_image",
    "hero_image_alt",
)

# Block layout of a newly created page
TEMPLATE_BLOCK_TYPES = (
    BlockType.HERO,
    BlockType.TEXT,
    BlockType.HIGHLIGHTS,
    BlockType.TIPS,
    BlockType.FAQ,
)


def generate_slug(title: str) -> str:
    """Derive a URL slug from a title.

    Args:
        title: Page title.

    Returns:
        Lowercase slug with hyphens between words.
    """
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()


class Document(BaseModel):
    """Content document being edited.

    Key Pattern:
        PK: CONTENT#{id}
        SK: CONTENT#{id}
    """

    _pk_prefix: ClassVar[str] = "CONTENT#"
    _sk_prefix: ClassVar[str] = "CONTENT#"

    blocks: list[Block] = Field(default_factory=list)

    # Page metadata
    title: str = Field(default="", max_length=500)
    slug: str = Field(default="", max_length=255)
    meta_title: str = Field(default="", max_length=255)
    meta_description: str = Field(default="", max_length=1000)
    primary_keyword: str = Field(default="", max_length=255)
    hero_image: str = Field(default="")
    hero_image_alt: str = Field(default="", max_length=500)

    # Workflow
    status: ContentStatus = Field(default=ContentStatus.DRAFT)
    scheduled_at: datetime | None = Field(None, description="Set only while scheduled")

    @model_validator(mode="after")
    def check_schedule(self) -> "Document":
        """Reject a schedule date on a document that is not scheduled."""
        if self.scheduled_at is not None and self.status != ContentStatus.SCHEDULED:
            raise ValueError("scheduled_at can only be set when status is 'scheduled'")
        return self

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Document":
        """Build a document from a content API response.

        The API returns null for unset metadata and may omit block ids or
        order; nulls become empty strings, missing ids are generated and
        blocks keep their response order.

        Args:
            data: camelCase content record.

        Returns:
            Document instance.
        """
        data = {key: value for key, value in data.items() if value is not None}
        data["blocks"] = [
            {key: value for key, value in block.items() if value is not None}
            if isinstance(block, dict)
            else block
            for block in data.get("blocks") or []
        ]
        document = cls.model_validate(data)
        return document.model_copy(update={"blocks": reindex(document.blocks)})

    @classmethod
    def new_from_template(cls, **fields: Any) -> "Document":
        """Create a draft with the starter page layout.

        The template blocks get fresh IDs and their default payloads, so two
        documents never share block IDs.

        Args:
            **fields: Document fields such as ``title``.

        Returns:
            New Document instance.
        """
        blocks = [
            Block.create(block_type, order=index)
            for index, block_type in enumerate(TEMPLATE_BLOCK_TYPES)
        ]
        return cls(blocks=blocks, **fields)

    def get_pk(self) -> str:
        """Get partition key: CONTENT#{id}."""
        return f"{self._pk_prefix}{self.id}"

    def get_sk(self) -> str:
        """Get sort key: CONTENT#{id}."""
        return f"{self._sk_prefix}{self.id}"

    def with_status(
        self,
        status: ContentStatus,
        scheduled_at: datetime | None = None,
    ) -> "Document":
        """Return a copy in a new workflow status.

        ``scheduled_at`` is kept only when the new status is ``scheduled``.

        Args:
            status: Target status.
            scheduled_at: Schedule date for the scheduled status.

        Returns:
            New Document instance.
        """
        if status != ContentStatus.SCHEDULED:
            scheduled_at = None
        return self.model_copy(
            update={"status": ContentStatus(status).value, "scheduled_at": scheduled_at}
        )

    def effective_slug(self) -> str:
        """Get the slug, falling back to one derived from the title."""
        return self.slug or generate_slug(self.title)

    def to_save_payload(self) -> dict:
        """Build the camelCase payload sent on save.

        Returns:
            Dict with metadata, blocks and status.
        """
        data = self.to_api()
        payload = {key: data[key] for key in (
            "title",
            "metaTitle",
            "metaDescription",
            "primaryKeyword",
            "heroImage",
            "heroImageAlt",
            "blocks",
            "status",
        )}
        payload["slug"] = self.effective_slug()
        if self.status == ContentStatus.SCHEDULED and self.scheduled_at:
            payload["scheduledAt"] = data["scheduledAt"]
        return payload
