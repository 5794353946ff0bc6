"""Tests for the SEO scorer."""

import pytest

from pagecraft.models.block import Block
from pagecraft.models.document import Document
from pagecraft.services.seo_scorer import count_words, extract_block_text, score_document

TITLE = "Dubai Frame: tickets, opening hours and views"
META_DESCRIPTION = ("Plan your Dubai Frame visit. " * 5)[:140]


@pytest.fixture
def optimized_document():
    """Document that passes every check."""
    body = "The Dubai Frame stands in Zabeel Park. " + "word " * 1000
    return Document(
        id="doc-seo",
        title=TITLE,
        meta_description=META_DESCRIPTION,
        primary_keyword="Dubai Frame",
        hero_image="https://cdn.example.com/frame.webp",
        slug="dubai-frame-visitor-guide",
        blocks=[
            Block(id="b1", type="hero", data={"image": "", "alt": "", "title": "Dubai Frame"}, order=0),
            Block(id="b2", type="heading", data={"text": "Overview", "level": "h2"}, order=1),
            Block(id="b3", type="text", data={"contents": body}, order=2),
            Block(id="b4", type="image", data={"image": "frame.webp", "alt": "", "caption": ""}, order=3),
            Block(id="b5", type="cta", data={"text": "Book tickets", "url": "", "style": "primary"}, order=4),
        ],
    )


class TestScoreDocument:
    """Tests for score_document."""

    def test_empty_document(self):
        """Test a blank document scores near zero with the basic issues."""
        result = score_document(Document())

        assert result.score <= 10
        for issue in (
            "Missing title",
            "Missing meta description",
            "Missing hero image",
            "No contents blocks",
        ):
            assert issue in result.issues

    def test_fully_optimized_document(self, optimized_document):
        """Test a document meeting every criterion scores 100."""
        assert len(TITLE) == 45
        assert len(META_DESCRIPTION) == 140

        result = score_document(optimized_document)

        assert result.score == 100
        assert result.percentage == 100
        assert result.max_score == 100
        assert result.issues == []
        assert "Keyword in slug" in result.passed
        assert result.total_words >= 1000

    def test_referentially_transparent(self, optimized_document):
        """Test scoring the same document twice gives the same result."""
        document = optimized_document.model_copy(update={"hero_image": "frame.jpg"})

        first = score_document(document)
        second = score_document(document)

        assert first == second
        assert first.score == 95
        assert first.issues == ["Hero image not WebP format"]

    def test_length_issue_messages(self):
        """Test length issues report the actual length."""
        result = score_document(Document(title="Short", meta_description="Too short"))

        assert "Title length: 5 (optimal: 30-60)" in result.issues
        assert "Meta description: 9 chars (optimal: 120-160)" in result.issues

    def test_keyword_issues(self):
        """Test missing keyword placements are reported."""
        result = score_document(
            Document(
                title="A title without the term we want here",
                meta_description="Nothing relevant",
                primary_keyword="burj khalifa",
                slug="some-page",
                blocks=[Block(id="t", type="text", data={"contents": "Unrelated"})],
            )
        )

        assert "Primary keyword not in title" in result.issues
        assert "Primary keyword not in meta description" in result.issues
        assert "Keyword not found in contents" in result.issues
        assert "Keyword in slug" not in result.passed

    def test_keyword_matching_is_case_insensitive(self):
        """Test keyword matching ignores case."""
        result = score_document(Document(title="BURJ KHALIFA at night", primary_keyword="burj khalifa"))

        assert "Keyword in title" in result.passed

    def test_no_keyword(self):
        """Test a missing keyword is reported once."""
        result = score_document(Document(title="Title"))

        assert "No primary keyword set" in result.issues
        assert "Primary keyword not in title" not in result.issues

    def test_content_thresholds(self):
        """Test word count tiers."""
        blocks = [Block(id="t", type="text", data={"contents": "word " * 650})]

        result = score_document(Document(blocks=blocks))

        assert "Content ≥300 words" in result.passed
        assert "Content ≥600 words" in result.passed
        assert "Content ≥1000 words" not in result.passed


class TestWordCount:
    """Tests for block text extraction."""

    @pytest.mark.parametrize(
        "block_type,data,expected",
        [
            ("text", {"contents": "one two three"}, "one two three"),
            ("hero", {"title": "Dubai Mall"}, "Dubai Mall"),
            ("cta", {"text": "Book now"}, "Book now"),
            ("faq", {"question": "Open?", "answer": "Daily"}, "Open? Daily"),
            ("tips", {"contents": "Go early"}, "Go early"),
            ("heading", {"text": "Ignored"}, ""),
            ("image", {"caption": "Ignored"}, ""),
        ],
    )
    def test_extract_block_text(self, block_type, data, expected):
        """Test per-type text extraction."""
        assert extract_block_text(Block(type=block_type, data=data)) == expected

    def test_faq_list(self):
        """Test FAQ blocks holding a list of pairs."""
        block = Block(
            type="faq",
            data={"faqs": [{"question": "Q1", "answer": "A1"}, {"question": "Q2", "answer": "A2"}]},
        )

        assert extract_block_text(block) == "Q1 A1 Q2 A2"

    def test_list_items(self):
        """Test highlight blocks with item lists."""
        block = Block(
            type="highlights",
            data={"items": [{"title": "Views", "description": "Old and new Dubai"}, "Sky deck"]},
        )

        assert extract_block_text(block) == "Views Old and new Dubai Sky deck"

    def test_count_words(self, sample_blocks):
        """Test counting across blocks."""
        # "Dubai Frame" + "A picture frame over the city." + empty FAQ
        assert count_words(sample_blocks) == 8
