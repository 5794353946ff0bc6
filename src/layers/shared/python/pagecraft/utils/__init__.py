"""Utility functions and helpers."""

from pagecraft.utils.exceptions import (
    CloneError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    PagecraftError,
)
from pagecraft.utils.results import ActionResult

__all__ = [
    # Results
    "ActionResult",
    # Exceptions
    "PagecraftError",
    "NotFoundError",
    "ConflictError",
    "ExternalServiceError",
    "CloneError",
]
