"""SEO validation gate client."""

import structlog

from pagecraft.clients.base import ApiClient
from pagecraft.models.document import Document
from pagecraft.models.seo import SeoValidation

logger = structlog.get_logger()


class SeoValidationClient(ApiClient):
    """Asks the SEO validation service whether a document may be published."""

    service_name = "seo-validation"

    async def validate(self, document: Document, page_type: str = "article") -> SeoValidation:
        """Validate a document before publishing.

        Args:
            document: The document to validate.
            page_type: Page type the validation rules are chosen for.

        Returns:
            SeoValidation verdict.
        """
        data = await self._request(
            "POST",
            "/api/seo/validate",
            json={"contents": document.to_save_payload(), "pageType": page_type},
        )
        validation = self._parse(SeoValidation.model_validate, data or {}, "/api/seo/validate")
        logger.info(
            "SEO validation completed",
            document_id=document.id,
            can_publish=validation.can_publish,
            overall_score=validation.overall_score,
        )
        return validation
