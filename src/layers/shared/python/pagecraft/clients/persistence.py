"""Content persistence client: save, publish and status changes."""

from datetime import datetime
from typing import Any

import structlog

from pagecraft.clients.base import ApiClient
from pagecraft.models.base import utc_now
from pagecraft.models.document import ContentStatus

logger = structlog.get_logger()


class PersistenceClient(ApiClient):
    """Writes document state through ``PATCH /api/contents/{id}``."""

    service_name = "content-persistence"

    async def save(self, document_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Persist document fields.

        Args:
            document_id: Document to update.
            payload: camelCase fields, including ``editSequence``.

        Returns:
            The stored content record.
        """
        logger.debug("Saving content", document_id=document_id)
        return await self._request("PATCH", f"/api/contents/{document_id}", json=payload) or {}

    async def publish(
        self,
        document_id: str,
        payload: dict[str, Any],
        published_at: datetime | None = None,
    ) -> dict[str, Any]:
        """Persist document fields and mark them published.

        Args:
            document_id: Document to publish.
            payload: camelCase fields.
            published_at: Publish time. Defaults to now.

        Returns:
            The stored content record.
        """
        body = dict(payload)
        body["status"] = ContentStatus.PUBLISHED.value
        body["publishedAt"] = (published_at or utc_now()).isoformat()
        logger.info("Publishing content", document_id=document_id)
        return await self._request("PATCH", f"/api/contents/{document_id}", json=body) or {}

    async def update_status(
        self,
        document_id: str,
        status: ContentStatus | str,
        scheduled_at: datetime | None = None,
    ) -> dict[str, Any]:
        """Change the workflow status only.

        Args:
            document_id: Document to update.
            status: New status.
            scheduled_at: Schedule date, sent only for the scheduled status.

        Returns:
            The stored content record.
        """
        body: dict[str, Any] = {"status": ContentStatus(status).value}
        if scheduled_at is not None:
            body["scheduledAt"] = scheduled_at.isoformat()
        logger.info("Updating content status", document_id=document_id, status=body["status"])
        return await self._request("PATCH", f"/api/contents/{document_id}", json=body) or {}
