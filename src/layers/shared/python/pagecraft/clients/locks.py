"""Concurrent-editor lock status client."""

from pagecraft.clients.base import ApiClient
from pagecraft.models.lock import LockStatus


class LockClient(ApiClient):
    """Reads the advisory edit lock of a document."""

    service_name = "content-locks"

    async def get_lock_status(self, document_id: str) -> LockStatus:
        """Get who, if anyone, is editing a document.

        Args:
            document_id: The document.

        Returns:
            LockStatus; unlocked when the API has no lock record.
        """
        path = f"/api/contents-locks/{document_id}"
        data = await self._request("GET", path)
        if not data:
            return LockStatus()
        return self._parse(LockStatus.model_validate, data, path)
