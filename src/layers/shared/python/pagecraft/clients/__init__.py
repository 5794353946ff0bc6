"""HTTP clients for the content API."""

from pagecraft.clients.base import ApiClient, create_http_client
from pagecraft.clients.locks import LockClient
from pagecraft.clients.persistence import PersistenceClient
from pagecraft.clients.section_generation import SectionGenerationClient
from pagecraft.clients.seo_gate import SeoValidationClient
from pagecraft.clients.versions import VersionClient

__all__ = [
    "ApiClient",
    "create_http_client",
    "LockClient",
    "PersistenceClient",
    "SectionGenerationClient",
    "SeoValidationClient",
    "VersionClient",
]
