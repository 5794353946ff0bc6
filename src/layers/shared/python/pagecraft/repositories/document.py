"""Document repository for DynamoDB operations."""

from pagecraft.models.document import Document
from pagecraft.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Repository for Document entities."""

    def __init__(self, table_name: str | None = None):
        """Initialize document repository."""
        super().__init__(Document, table_name)

    def _keys(self, document_id: str) -> dict[str, str]:
        return {
            "pk": f"{Document._pk_prefix}{document_id}",
            "sk": f"{Document._sk_prefix}{document_id}",
        }

    def get_by_id(self, document_id: str) -> Document | None:
        """Get a document by ID."""
        return self.get(**self._keys(document_id))

    def get_or_raise_by_id(self, document_id: str) -> Document:
        """Get a document by ID or raise NotFoundError."""
        return self.get_or_raise(**self._keys(document_id), resource_type="Content")
