"""Repository classes for DynamoDB data access."""

from pagecraft.repositories.base import BaseRepository
from pagecraft.repositories.document import DocumentRepository
from pagecraft.repositories.version import VersionRepository

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "VersionRepository",
]
