"""User-facing action results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ActionResult:
    """Outcome of a user-facing editor action.

    Refusals and recoverable failures are reported through this value instead
    of being raised, so the caller can surface a message while the document
    stays untouched.
    """

    success: bool = True
    message: str = ""
    error_code: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str = "", data: dict | None = None) -> "ActionResult":
        """Create a successful result.

        Args:
            message: Message to show to the user.
            data: Optional payload for the caller.

        Returns:
            ActionResult instance.
        """
        return cls(success=True, message=message, data=data or {})

    @classmethod
    def refused(
        cls,
        error_code: str,
        message: str,
        data: dict | None = None,
    ) -> "ActionResult":
        """Create a refused/failed result.

        Args:
            error_code: Machine-readable reason.
            message: Message to show to the user.
            data: Optional payload for the caller.

        Returns:
            ActionResult instance.
        """
        return cls(success=False, message=message, error_code=error_code, data=data or {})
