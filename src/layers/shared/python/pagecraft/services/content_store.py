"""DynamoDB-backed content store.

Implements the persistence and version endpoints the editor session talks
to, directly on top of the repositories, so a session can run end to end
without the HTTP API. Every save appends a new Version.
"""

import asyncio
from datetime import datetime
from typing import Any

import structlog
from botocore.exceptions import ClientError
from pydantic.alias_generators import to_camel

from pagecraft.models.base import utc_now
from pagecraft.models.document import METADATA_FIELDS, ContentStatus, Document
from pagecraft.models.version import Version
from pagecraft.repositories.document import DocumentRepository
from pagecraft.repositories.version import VersionRepository
from pagecraft.utils.exceptions import ExternalServiceError, NotFoundError

logger = structlog.get_logger()

# camelCase payload keys a save may change
WRITABLE_KEYS = {
    "title",
    "slug",
    "metaTitle",
    "metaDescription",
    "primaryKeyword",
    "heroImage",
    "heroImageAlt",
    "blocks",
    "status",
    "scheduledAt",
}


class ContentStore:
    """Content persistence and version history on DynamoDB."""

    def __init__(self, table_name: str | None = None):
        """Initialize content store.

        Args:
            table_name: DynamoDB table name. Defaults to TABLE_NAME env var.
        """
        self.documents = DocumentRepository(table_name)
        self.versions = VersionRepository(table_name)

    # -- sync operations ----------------------------------------------------

    def _snapshot(self, document: Document, change_note: str | None = None) -> Version:
        version_number = self.versions.get_latest_number(document.id) + 1
        version = Version(
            content_id=document.id,
            version_number=version_number,
            blocks=document.blocks,
            title=document.title,
            slug=document.slug,
            meta_title=document.meta_title,
            meta_description=document.meta_description,
            primary_keyword=document.primary_keyword,
            hero_image=document.hero_image,
            hero_image_alt=document.hero_image_alt,
            change_note=change_note,
        )
        return self.versions.create(version)

    def _apply(self, document_id: str, changes: dict[str, Any], change_note: str | None) -> Document:
        document = self.documents.get_or_raise_by_id(document_id)

        data = document.to_api()
        data.update({key: value for key, value in changes.items() if key in WRITABLE_KEYS})
        if data.get("status") != ContentStatus.SCHEDULED.value:
            data["scheduledAt"] = None
        updated = self.documents.update(Document.model_validate(data))

        version = self._snapshot(updated, change_note)
        logger.info(
            "Content saved",
            document_id=document_id,
            version_number=version.version_number,
            status=updated.status,
        )
        return updated

    def _restore(self, document_id: str, version_id: str) -> Document:
        version = self.versions.get_by_id(document_id, version_id)
        if not version:
            raise NotFoundError("Version", version_id)

        changes = {
            "blocks": [block.model_dump(mode="json") for block in version.blocks],
        }
        for field_name in METADATA_FIELDS:
            changes[to_camel(field_name)] = getattr(version, field_name)

        return self._apply(
            document_id,
            changes,
            change_note=f"Restored from version {version.version_number}",
        )

    # -- async API ----------------------------------------------------------

    async def _run(self, operation, *args):
        """Run a repository operation off the event loop.

        Raises:
            ExternalServiceError: If DynamoDB rejects the call.
        """
        try:
            return await asyncio.to_thread(operation, *args)
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            error_message = e.response["Error"]["Message"]
            logger.error(
                "Content store operation failed",
                operation=operation.__name__,
                error_code=error_code,
                error_message=error_message,
            )
            raise ExternalServiceError(
                "content-store",
                message=f"DynamoDB {error_code}: {error_message}",
                original_error=str(e),
            ) from e

    async def create(self, document: Document) -> Document:
        """Store a new document."""
        return await self._run(self.documents.create, document)

    async def get(self, document_id: str) -> Document:
        """Load a document.

        Raises:
            NotFoundError: If the document does not exist.
        """
        return await self._run(self.documents.get_or_raise_by_id, document_id)

    async def save(self, document_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Save document fields and append a version.

        Args:
            document_id: The document.
            payload: camelCase fields as sent by the editor session.

        Returns:
            The stored content record, echoing ``editSequence``.
        """
        document = await self._run(self._apply, document_id, payload, None)
        result = document.to_api()
        if "editSequence" in payload:
            result["editSequence"] = payload["editSequence"]
        return result

    async def publish(
        self,
        document_id: str,
        payload: dict[str, Any],
        published_at: datetime | None = None,
    ) -> dict[str, Any]:
        """Save document fields as published and append a version."""
        body = dict(payload)
        body["status"] = ContentStatus.PUBLISHED.value
        result = await self.save(document_id, body)
        result["publishedAt"] = (published_at or utc_now()).isoformat()
        return result

    async def update_status(
        self,
        document_id: str,
        status: ContentStatus | str,
        scheduled_at: datetime | None = None,
    ) -> dict[str, Any]:
        """Change the workflow status only."""
        changes: dict[str, Any] = {"status": ContentStatus(status).value}
        if scheduled_at is not None:
            changes["scheduledAt"] = scheduled_at.isoformat()

        def _update() -> Document:
            document = self.documents.get_or_raise_by_id(document_id)
            data = document.to_api()
            data.update(changes)
            if changes["status"] != ContentStatus.SCHEDULED.value:
                data["scheduledAt"] = None
            return self.documents.update(Document.model_validate(data))

        document = await self._run(_update)
        logger.info("Content status updated", document_id=document_id, status=document.status)
        return document.to_api()

    async def list_versions(self, document_id: str) -> list[Version]:
        """List versions of a document, newest first."""
        return await self._run(self.versions.list_by_document, document_id)

    async def restore_version(self, document_id: str, version_id: str) -> Document:
        """Restore a version as the live document and record the restore as a new version.

        Raises:
            NotFoundError: If the version does not belong to the document.
        """
        return await self._run(self._restore, document_id, version_id)
