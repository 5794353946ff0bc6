"""Pydantic models for Pagecraft entities."""

from pagecraft.models.base import BaseModel, TimestampMixin, generate_ulid, utc_now
from pagecraft.models.block import Block, generate_block_id, reindex
from pagecraft.models.block_schemas import (
    BLOCK_REGISTRY,
    BlockSpec,
    BlockType,
    default_block_data,
    validate_block_config,
)
from pagecraft.models.document import ContentStatus, Document, generate_slug
from pagecraft.models.lock import LockHolder, LockStatus
from pagecraft.models.seo import SeoScore, SeoValidation
from pagecraft.models.version import Change, ChangeKind, Version

__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    "generate_ulid",
    "utc_now",
    # Blocks
    "Block",
    "BlockSpec",
    "BlockType",
    "BLOCK_REGISTRY",
    "default_block_data",
    "generate_block_id",
    "reindex",
    "validate_block_config",
    # Documents
    "ContentStatus",
    "Document",
    "generate_slug",
    # Versions
    "Change",
    "ChangeKind",
    "Version",
    # SEO
    "SeoScore",
    "SeoValidation",
    # Locks
    "LockHolder",
    "LockStatus",
]
