"""Section generation helpers.

Builds the context sent to the section generator and turns its structured
response into a block payload patch.
"""

from typing import Any

from pagecraft.models.block import Block
from pagecraft.models.block_schemas import BlockType

SUPPORTED_SECTION_TYPES = ("faq", "tips", "highlights")

CONTEXT_BLOCK_TYPES = {BlockType.TEXT.value, BlockType.HERO.value}


def is_supported(section_type: str) -> bool:
    """Check whether a section type can be generated."""
    return section_type in SUPPORTED_SECTION_TYPES


def existing_content(blocks: list[Block]) -> str:
    """Collect the page text used as generation context.

    Args:
        blocks: Document blocks.

    Returns:
        ``contents`` (or ``title``) of each text and hero block, one per line.
    """
    lines = []
    for block in blocks:
        if block.type not in CONTEXT_BLOCK_TYPES:
            continue
        value = block.data.get("contents") or block.data.get("title") or ""
        lines.append(value if isinstance(value, str) else "")
    return "\n".join(lines)


def to_block_data(section_type: str, result: dict[str, Any]) -> dict[str, Any]:
    """Convert a generator response into a patch for the target block.

    Known response shapes are flattened into the block's payload fields:
    FAQs become a ``faqs`` list, tips and highlights become newline separated
    ``contents``. Any other response is merged as returned.

    Args:
        section_type: The generated section type.
        result: Generator response.

    Returns:
        Dict to shallow-merge into the block's data.
    """
    if section_type == "faq" and isinstance(result.get("faqs"), list):
        return {
            "faqs": [
                {"question": faq.get("question", ""), "answer": faq.get("answer", "")}
                for faq in result["faqs"]
                if isinstance(faq, dict)
            ]
        }

    if section_type == "tips" and isinstance(result.get("tips"), list):
        return {"contents": "\n".join(str(tip) for tip in result["tips"])}

    if section_type == "highlights" and isinstance(result.get("highlights"), list):
        lines = []
        for highlight in result["highlights"]:
            if isinstance(highlight, dict):
                lines.append(f"{highlight.get('title', '')}: {highlight.get('description', '')}")
            else:
                lines.append(str(highlight))
        return {"contents": "\n".join(lines)}

    return dict(result)
