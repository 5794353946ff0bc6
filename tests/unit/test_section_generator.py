"""Tests for section generation helpers."""

import pytest

from pagecraft.services.section_generator import existing_content, is_supported, to_block_data


class TestSectionGenerator:
    """Tests for section generation helpers."""

    @pytest.mark.parametrize(
        "section_type,expected",
        [("faq", True), ("tips", True), ("highlights", True), ("text", False), ("hero", False)],
    )
    def test_is_supported(self, section_type, expected):
        """Test supported section types."""
        assert is_supported(section_type) is expected

    def test_existing_content(self, sample_blocks):
        """Test only text and hero blocks give context."""
        assert existing_content(sample_blocks) == "Dubai Frame\nA picture frame over the city."

    def test_faq_result(self):
        """Test FAQ results keep question and answer pairs."""
        result = {"faqs": [{"question": "Open?", "answer": "Daily", "score": 0.9}, "junk"]}

        assert to_block_data("faq", result) == {"faqs": [{"question": "Open?", "answer": "Daily"}]}

    def test_highlights_result(self):
        """Test highlights become one line per item."""
        result = {"highlights": [{"title": "Views", "description": "Old and new"}, "Sky deck"]}

        assert to_block_data("highlights", result) == {"contents": "Views: Old and new\nSky deck"}

    def test_unknown_shape_is_merged(self):
        """Test unrecognised responses pass through."""
        assert to_block_data("tips", {"contents": "Arrive early"}) == {"contents": "Arrive early"}
