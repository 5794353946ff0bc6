"""Live SEO scoring for content documents.

``score_document`` is a pure function of the document: the same state always
yields the same score, and nothing is stored. Rubric (100 points):

- Title (15): exists, 30-60 chars, contains the primary keyword
- Meta description (15): exists, 120-160 chars, contains the keyword
- Hero image (15): exists (10), WebP (5)
- Content volume (15): 300 / 600 / 1000 words
- Structure (15): has blocks, has a heading or hero, has an image or gallery
- Keyword (15): set, found in block payloads, in both title and description
- Slug (10): exists (3), at most 75 chars (3), contains the keyword (4)
"""

import json
import re
from typing import Any

from pagecraft.models.block import Block
from pagecraft.models.block_schemas import BlockType
from pagecraft.models.document import Document
from pagecraft.models.seo import SeoScore

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MIN_LENGTH = 120
META_DESCRIPTION_MAX_LENGTH = 160
SLUG_MAX_LENGTH = 75
WORD_THRESHOLDS = (300, 600, 1000)

HEADING_TYPES = {BlockType.HEADING.value, BlockType.HERO.value}
IMAGE_TYPES = {BlockType.IMAGE.value, BlockType.GALLERY.value}
LIST_TYPES = {BlockType.HIGHLIGHTS.value, BlockType.TIPS.value, BlockType.INFO_GRID.value}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _list_item_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        return " ".join(
            _text(item.get(key)) for key in ("title", "description", "text")
        ).strip()
    return ""


def extract_block_text(block: Block) -> str:
    """Get the readable text of a block.

    Args:
        block: The block.

    Returns:
        Text counted towards word count, or empty string for layout blocks.
    """
    data = block.data
    if block.type == BlockType.TEXT.value:
        return _text(data.get("contents"))
    if block.type == BlockType.HERO.value:
        return _text(data.get("title"))
    if block.type == BlockType.CTA.value:
        return _text(data.get("text"))
    if block.type == BlockType.FAQ.value:
        faqs = data.get("faqs")
        if isinstance(faqs, list):
            return " ".join(
                f"{_text(faq.get('question'))} {_text(faq.get('answer'))}"
                for faq in faqs
                if isinstance(faq, dict)
            )
        return f"{_text(data.get('question'))} {_text(data.get('answer'))}"
    if block.type in LIST_TYPES:
        contents = data.get("contents")
        if isinstance(contents, str) and contents:
            return contents
        items = data.get("items")
        if not isinstance(items, list):
            items = data.get("tips")
        if isinstance(items, list):
            return " ".join(_list_item_text(item) for item in items)
    return ""


def count_words(blocks: list[Block]) -> int:
    """Count words across all blocks.

    Args:
        blocks: Document blocks.

    Returns:
        Number of whitespace-separated words.
    """
    all_text = " ".join(extract_block_text(block) for block in blocks)
    return len(all_text.split())


def _contains(haystack: str, needle: str) -> bool:
    return bool(needle) and needle.lower() in haystack.lower()


def score_document(document: Document) -> SeoScore:
    """Compute the SEO score of a document.

    Args:
        document: The document to score.

    Returns:
        SeoScore with points, failed checks (issues) and passed checks.
    """
    score = 0
    issues: list[str] = []
    passed: list[str] = []

    title = document.title
    meta_description = document.meta_description
    hero_image = document.hero_image
    keyword = document.primary_keyword.strip()
    slug = document.slug
    blocks = document.blocks

    # Title (15 points)
    if title:
        score += 5
        passed.append("Title exists")
        if TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
            score += 5
            passed.append("Title length optimal (30-60)")
        else:
            issues.append(f"Title length: {len(title)} (optimal: 30-60)")
        if _contains(title, keyword):
            score += 5
            passed.append("Keyword in title")
        elif keyword:
            issues.append("Primary keyword not in title")
    else:
        issues.append("Missing title")

    # Meta description (15 points)
    if meta_description:
        score += 5
        passed.append("Meta description exists")
        if META_DESCRIPTION_MIN_LENGTH <= len(meta_description) <= META_DESCRIPTION_MAX_LENGTH:
            score += 5
            passed.append("Meta description length optimal")
        else:
            issues.append(
                f"Meta description: {len(meta_description)} chars (optimal: 120-160)"
            )
        if _contains(meta_description, keyword):
            score += 5
            passed.append("Keyword in meta description")
        elif keyword:
            issues.append("Primary keyword not in meta description")
    else:
        issues.append("Missing meta description")

    # Hero image (15 points)
    if hero_image:
        score += 10
        passed.append("Hero image exists")
        if ".webp" in hero_image.lower():
            score += 5
            passed.append("Image is WebP format")
        else:
            issues.append("Hero image not WebP format")
    else:
        issues.append("Missing hero image")

    # Content volume (15 points)
    total_words = count_words(blocks)
    low, mid, high = WORD_THRESHOLDS
    if total_words >= low:
        score += 5
        passed.append("Content ≥300 words")
    else:
        issues.append(f"Content: {total_words} words (min: 300)")
    if total_words >= mid:
        score += 5
        passed.append("Content ≥600 words")
    if total_words >= high:
        score += 5
        passed.append("Content ≥1000 words")

    # Structure (15 points)
    if blocks:
        score += 5
        passed.append("Has contents blocks")
    else:
        issues.append("No contents blocks")

    if any(block.type in HEADING_TYPES for block in blocks):
        score += 5
        passed.append("Has headings")
    else:
        issues.append("No headings found")

    if any(block.type in IMAGE_TYPES for block in blocks):
        score += 5
        passed.append("Has images")
    else:
        issues.append("No images in contents")

    # Keyword (15 points)
    if keyword:
        score += 5
        passed.append("Primary keyword defined")

        content_text = " ".join(
            json.dumps(block.data, ensure_ascii=False, sort_keys=True) for block in blocks
        )
        if _contains(content_text, keyword):
            score += 5
            passed.append("Keyword in contents")
        else:
            issues.append("Keyword not found in contents")

        if _contains(title, keyword) and _contains(meta_description, keyword):
            score += 5
            passed.append("Keyword in title and meta description")
    else:
        issues.append("No primary keyword set")

    # Slug (10 points)
    if slug:
        score += 3
        passed.append("Slug exists")
        if len(slug) <= SLUG_MAX_LENGTH:
            score += 3
            passed.append("Slug length OK")
        if keyword and re.sub(r"\s+", "-", keyword.lower()) in slug.lower():
            score += 4
            passed.append("Keyword in slug")
    else:
        issues.append("Missing slug")

    score = min(score, 100)
    return SeoScore(
        score=score,
        percentage=score,
        issues=issues,
        passed=passed,
        total_words=total_words,
    )
