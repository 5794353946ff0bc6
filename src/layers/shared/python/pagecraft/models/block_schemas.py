"""Block payload schemas.

TypedDict definitions for each block type's ``data`` payload, plus the
default payload every new block starts with. The defaults are the wire
contract shared with renderers and with documents that are already
persisted, so they must not drift.
"""

import copy
from enum import Enum
from typing import Any, NamedTuple, NotRequired, Required, TypedDict


class BlockType(str, Enum):
    """Closed set of block variants."""

    HERO = "hero"
    HEADING = "heading"
    TEXT = "text"
    IMAGE = "image"
    GALLERY = "gallery"
    FAQ = "faq"
    CTA = "cta"
    INFO_GRID = "info_grid"
    HIGHLIGHTS = "highlights"
    TIPS = "tips"
    VIDEO = "video"
    QUOTE = "quote"
    DIVIDER = "divider"
    SPACER = "spacer"
    MAP = "map"
    SOCIAL = "social"
    ACCORDION = "accordion"
    TABS = "tabs"
    COLUMNS = "columns"
    HTML = "html"


class HeroData(TypedDict, total=False):
    """Hero block payload."""

    image: Required[str]
    alt: NotRequired[str]
    title: Required[str]


class HeadingData(TypedDict, total=False):
    """Heading block payload."""

    text: Required[str]
    level: NotRequired[str]  # "h2" or "h3"


class TextData(TypedDict, total=False):
    """Rich text paragraph payload."""

    contents: Required[str]
    heading: NotRequired[str]


class ImageData(TypedDict, total=False):
    """Single image payload."""

    image: Required[str]
    alt: NotRequired[str]
    caption: NotRequired[str]


class GalleryImage(TypedDict, total=False):
    """A single gallery image."""

    url: Required[str]
    alt: NotRequired[str]


class GalleryData(TypedDict, total=False):
    """Gallery block payload."""

    images: Required[list[GalleryImage]]


class FAQItem(TypedDict):
    """A single question/answer pair."""

    question: str
    answer: str


class FAQData(TypedDict, total=False):
    """FAQ block payload.

    New blocks hold a single pair; imported content may carry a ``faqs`` list.
    """

    question: Required[str]
    answer: Required[str]
    faqs: NotRequired[list[FAQItem]]


class CTAData(TypedDict, total=False):
    """Call to action payload."""

    text: Required[str]
    url: Required[str]
    style: NotRequired[str]  # "primary", "secondary"


class ListContentData(TypedDict, total=False):
    """Payload shared by info_grid, highlights and tips.

    ``contents`` holds one item per line; older documents carry ``items``
    (highlights) or ``tips`` (tips) lists instead.
    """

    contents: Required[str]
    items: NotRequired[list[Any]]
    tips: NotRequired[list[str]]


class VideoData(TypedDict, total=False):
    """Video embed payload."""

    url: Required[str]
    caption: NotRequired[str]
    provider: NotRequired[str]  # "youtube", "vimeo"


class QuoteData(TypedDict, total=False):
    """Blockquote payload."""

    text: Required[str]
    author: NotRequired[str]
    role: NotRequired[str]


class DividerData(TypedDict, total=False):
    """Divider payload."""

    style: NotRequired[str]  # "line", "dots", "space"


class SpacerData(TypedDict, total=False):
    """Spacer payload."""

    height: Required[int]


class MapData(TypedDict, total=False):
    """Map location payload."""

    address: Required[str]
    lat: Required[float]
    lng: Required[float]
    zoom: NotRequired[int]


class SocialLink(TypedDict, total=False):
    """A single social profile link."""

    platform: Required[str]
    url: Required[str]


class SocialData(TypedDict, total=False):
    """Social links payload."""

    links: Required[list[SocialLink]]


class TitledContent(TypedDict):
    """A titled section used by accordions and tabs."""

    title: str
    contents: str


class AccordionData(TypedDict, total=False):
    """Accordion payload."""

    items: Required[list[TitledContent]]


class TabsData(TypedDict, total=False):
    """Tabs payload."""

    tabs: Required[list[TitledContent]]


class ColumnsData(TypedDict, total=False):
    """Two column payload."""

    left: Required[str]
    right: Required[str]


class HTMLData(TypedDict, total=False):
    """Custom HTML embed payload."""

    code: Required[str]


class BlockSpec(NamedTuple):
    """Registry entry pairing a payload schema with its default value."""

    schema: type
    default: dict[str, Any]


# Registry mapping each block type to its payload schema and default payload
BLOCK_REGISTRY: dict[BlockType, BlockSpec] = {
    BlockType.HERO: BlockSpec(HeroData, {"image": "", "alt": "", "title": ""}),
    BlockType.HEADING: BlockSpec(HeadingData, {"text": "", "level": "h2"}),
    BlockType.TEXT: BlockSpec(TextData, {"contents": ""}),
    BlockType.IMAGE: BlockSpec(ImageData, {"image": "", "alt": "", "caption": ""}),
    BlockType.GALLERY: BlockSpec(GalleryData, {"images": []}),
    BlockType.FAQ: BlockSpec(FAQData, {"question": "", "answer": ""}),
    BlockType.CTA: BlockSpec(CTAData, {"text": "Learn More", "url": "", "style": "primary"}),
    BlockType.INFO_GRID: BlockSpec(ListContentData, {"contents": ""}),
    BlockType.HIGHLIGHTS: BlockSpec(ListContentData, {"contents": ""}),
    BlockType.TIPS: BlockSpec(ListContentData, {"contents": ""}),
    BlockType.VIDEO: BlockSpec(VideoData, {"url": "", "caption": "", "provider": "youtube"}),
    BlockType.QUOTE: BlockSpec(QuoteData, {"text": "", "author": "", "role": ""}),
    BlockType.DIVIDER: BlockSpec(DividerData, {"style": "line"}),
    BlockType.SPACER: BlockSpec(SpacerData, {"height": 40}),
    # Dubai is the default map centre
    BlockType.MAP: BlockSpec(
        MapData, {"address": "", "lat": 25.2048, "lng": 55.2708, "zoom": 14}
    ),
    BlockType.SOCIAL: BlockSpec(SocialData, {"links": []}),
    BlockType.ACCORDION: BlockSpec(AccordionData, {"items": [{"title": "", "contents": ""}]}),
    BlockType.TABS: BlockSpec(TabsData, {"tabs": [{"title": "Tab 1", "contents": ""}]}),
    BlockType.COLUMNS: BlockSpec(ColumnsData, {"left": "", "right": ""}),
    BlockType.HTML: BlockSpec(HTMLData, {"code": ""}),
}


def default_block_data(block_type: BlockType | str) -> dict[str, Any]:
    """Get a fresh default payload for a block type.

    Args:
        block_type: The block type.

    Returns:
        A new dict the caller may mutate freely.
    """
    spec = BLOCK_REGISTRY[BlockType(block_type)]
    return copy.deepcopy(spec.default)


def validate_block_config(block_type: str, config: dict[str, Any]) -> list[str]:
    """Validate a block payload against its schema.

    Args:
        block_type: The type of block.
        config: The block payload.

    Returns:
        List of validation error messages (empty if valid).
    """
    errors: list[str] = []

    try:
        spec = BLOCK_REGISTRY[BlockType(block_type)]
    except ValueError:
        return [f"Unknown block type '{block_type}'"]

    # Get required keys from the TypedDict
    required_keys = getattr(spec.schema, "__required_keys__", set())

    for key in sorted(required_keys):
        if key not in config:
            errors.append(f"Missing required field '{key}' for {block_type} block")

    return errors
