"""Version repository for DynamoDB operations."""

from pagecraft.models.version import Version
from pagecraft.repositories.base import BaseRepository


class VersionRepository(BaseRepository[Version]):
    """Repository for Version entities.

    Versions sort by their zero-padded number inside the document partition.
    """

    def __init__(self, table_name: str | None = None):
        """Initialize version repository."""
        super().__init__(Version, table_name)

    def list_by_document(self, document_id: str, limit: int | None = None) -> list[Version]:
        """List versions of a document, newest first.

        Args:
            document_id: The document ID.
            limit: Maximum versions to return.

        Returns:
            Versions by descending version number.
        """
        return self.query(
            pk=f"{Version._pk_prefix}{document_id}",
            sk_prefix=Version._sk_prefix,
            limit=limit,
            scan_forward=False,
        )

    def get_latest_number(self, document_id: str) -> int:
        """Get the highest version number of a document, or 0."""
        latest = self.list_by_document(document_id, limit=1)
        return latest[0].version_number if latest else 0

    def get_by_id(self, document_id: str, version_id: str) -> Version | None:
        """Find a version of a document by its ID."""
        for version in self.list_by_document(document_id):
            if version.id == version_id:
                return version
        return None
