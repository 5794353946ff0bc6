"""Custom exception classes for Pagecraft."""


class PagecraftError(Exception):
    """Base exception for all Pagecraft errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int = 500,
        details: dict | None = None,
    ):
        """Initialize PagecraftError.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            status_code: HTTP status code equivalent.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.status_code = status_code
        self.details = details or {}


class NotFoundError(PagecraftError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
    ):
        """Initialize NotFoundError.

        Args:
            resource_type: Type of resource (e.g., "Content", "Version").
            resource_id: ID of the resource that was not found.
            message: Optional custom message.
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            message=message or f"{resource_type} with ID '{resource_id}' not found",
            error_code="NOT_FOUND",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictError(PagecraftError):
    """Raised when there's a conflict (e.g., duplicate, optimistic lock failure)."""

    def __init__(
        self,
        message: str = "Resource conflict",
        conflict_type: str | None = None,
    ):
        """Initialize ConflictError."""
        super().__init__(
            message=message,
            error_code="CONFLICT",
            status_code=409,
            details={"conflict_type": conflict_type} if conflict_type else None,
        )


class ExternalServiceError(PagecraftError):
    """Raised when an external service call fails."""

    def __init__(
        self,
        service: str,
        message: str | None = None,
        original_error: str | None = None,
        status_code: int = 502,
    ):
        """Initialize ExternalServiceError."""
        self.service = service
        super().__init__(
            message=message or f"External service '{service}' returned an error",
            error_code="EXTERNAL_SERVICE_ERROR",
            status_code=status_code,
            details={
                "service": service,
                "original_error": original_error,
            },
        )


class CloneError(PagecraftError):
    """Raised when a block payload cannot be structurally cloned."""

    def __init__(self, path: str, value_type: str):
        """Initialize CloneError.

        Args:
            path: Location of the offending value inside the block list.
            value_type: Type name of the value that could not be cloned.
        """
        self.path = path
        self.value_type = value_type
        super().__init__(
            message=f"Cannot clone value of type '{value_type}' at {path}",
            error_code="CLONE_ERROR",
            status_code=500,
            details={"path": path, "value_type": value_type},
        )
