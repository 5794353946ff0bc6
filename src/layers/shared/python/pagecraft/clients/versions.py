"""Version history client."""

import structlog

from pagecraft.clients.base import ApiClient
from pagecraft.models.document import Document
from pagecraft.models.version import Version
from pagecraft.utils.exceptions import ExternalServiceError

logger = structlog.get_logger()


class VersionClient(ApiClient):
    """Reads stored versions and restores one of them."""

    service_name = "content-versions"

    async def list_versions(self, document_id: str) -> list[Version]:
        """List stored versions of a document, newest first.

        Args:
            document_id: The document.

        Returns:
            Versions sorted by descending version number.
        """
        path = f"/api/contents/{document_id}/versions"
        items = await self._request("GET", path) or []
        if not isinstance(items, list):
            raise ExternalServiceError(
                self.service_name, message=f"{path} did not return a list"
            )
        versions = []
        for item in items:
            if isinstance(item, dict):
                item = {key: value for key, value in item.items() if value is not None}
                item.setdefault("contentId", document_id)
            versions.append(self._parse(Version.model_validate, item, path))
        versions.sort(key=lambda version: version.version_number, reverse=True)
        return versions

    async def restore_version(self, document_id: str, version_id: str) -> Document:
        """Restore a stored version as the live document.

        Args:
            document_id: The document.
            version_id: Version to restore.

        Returns:
            The document as stored after the restore.
        """
        logger.info("Restoring version", document_id=document_id, version_id=version_id)
        path = f"/api/contents/{document_id}/versions/{version_id}/restore"
        data = await self._request("POST", path)
        if not data:
            raise ExternalServiceError(self.service_name, message="Restore returned no content")
        if not isinstance(data, dict):
            raise ExternalServiceError(
                self.service_name, message=f"{path} did not return a document"
            )
        return self._parse(Document.from_api, data, path)
