"""Content lock status model."""

from datetime import datetime

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class LockHolder(PydanticBaseModel):
    """User currently holding the edit lock."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Someone")
    avatar: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        """Show an anonymous holder as 'Someone'."""
        return v or "Someone"


class LockStatus(PydanticBaseModel):
    """Advisory lock status for a document.

    Informs the editor that someone else is editing; it never prevents local
    mutation or saves.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    is_locked: bool = False
    locked_by: LockHolder | None = None
    locked_at: datetime | None = None
