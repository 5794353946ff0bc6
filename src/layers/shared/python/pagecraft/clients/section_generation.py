"""AI section generation client."""

from typing import Any

import structlog

from pagecraft.clients.base import ApiClient

logger = structlog.get_logger()


class SectionGenerationClient(ApiClient):
    """Requests generated FAQ, tips or highlights content."""

    service_name = "ai-section-generation"

    async def generate_section(
        self,
        section_type: str,
        title: str,
        existing_content: str,
        content_type: str = "article",
    ) -> dict[str, Any]:
        """Generate a section from the page title and existing text.

        Args:
            section_type: One of faq, tips, highlights.
            title: Page title.
            existing_content: Text of the page's text and hero blocks.
            content_type: Kind of page being edited.

        Returns:
            The structured payload returned by the generator.
        """
        logger.info("Generating section", section_type=section_type, title=title)
        data = await self._request(
            "POST",
            "/api/ai/generate-section",
            json={
                "sectionType": section_type,
                "title": title,
                "existingContent": existing_content,
                "contentType": content_type,
            },
        )
        return data or {}
