"""Document services: scoring, diffing, section generation and storage."""

from pagecraft.services.content_store import ContentStore
from pagecraft.services.section_generator import (
    SUPPORTED_SECTION_TYPES,
    existing_content,
    to_block_data,
)
from pagecraft.services.seo_scorer import count_words, extract_block_text, score_document
from pagecraft.services.version_diff import diff_blocks, diff_versions

__all__ = [
    "ContentStore",
    "SUPPORTED_SECTION_TYPES",
    "count_words",
    "diff_blocks",
    "diff_versions",
    "existing_content",
    "extract_block_text",
    "score_document",
    "to_block_data",
]
