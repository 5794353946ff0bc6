"""SEO score and validation result models."""

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SeoScore(PydanticBaseModel):
    """Derived SEO quality projection of a document.

    Recomputed on demand and never stored as the source of truth.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    score: int = Field(..., ge=0, le=100)
    max_score: int = 100
    percentage: int = Field(..., ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    passed: list[str] = Field(default_factory=list)
    total_words: int = Field(default=0, ge=0)


class SeoValidation(PydanticBaseModel):
    """Verdict of the external SEO validation gate."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    can_publish: bool = True
    publish_block_reason: str | None = None
    overall_score: int | None = None
    fixable_issues_count: int = 0
