"""Shared HTTP plumbing for the content API clients."""

from typing import Any, Callable, TypeVar

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from pagecraft.config import EditorSettings
from pagecraft.utils.exceptions import ExternalServiceError

logger = structlog.get_logger()

T = TypeVar("T")


def create_http_client(
    settings: EditorSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the AsyncClient shared by all API clients of a session.

    Args:
        settings: Editor settings. Defaults to the environment.
        transport: Optional transport (tests pass an ``httpx.MockTransport``).

    Returns:
        Configured httpx.AsyncClient. The caller closes it.
    """
    settings = settings or EditorSettings.from_env()
    return httpx.AsyncClient(
        base_url=settings.api_url,
        timeout=settings.http_timeout_seconds,
        transport=transport,
        headers={"Accept": "application/json"},
    )


class ApiClient:
    """Base class for content API clients.

    Subclasses call :meth:`_request`, which maps transport failures and
    non-2xx responses to :class:`ExternalServiceError`.
    """

    service_name = "content-api"

    def __init__(self, http: httpx.AsyncClient):
        """Initialize API client.

        Args:
            http: Shared AsyncClient with the API base URL configured.
        """
        self.http = http

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON response.

        Args:
            method: HTTP method.
            path: Path relative to the API base URL.
            json: Optional JSON body.

        Returns:
            Decoded JSON body, or None for an empty response.

        Raises:
            ExternalServiceError: On timeout, transport error or non-2xx status.
        """
        try:
            response = await self.http.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.warning("API request timed out", method=method, path=path)
            raise ExternalServiceError(
                self.service_name,
                message=f"{method} {path} timed out",
                original_error=str(e),
                status_code=504,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("API request failed", method=method, path=path, error=str(e))
            raise ExternalServiceError(
                self.service_name,
                message=f"{method} {path} failed",
                original_error=str(e),
            ) from e

        if not response.is_success:
            logger.warning(
                "API returned error status",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise ExternalServiceError(
                self.service_name,
                message=f"{method} {path} returned {response.status_code}",
                original_error=response.text[:500],
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                self.service_name,
                message=f"{method} {path} returned invalid JSON",
                original_error=str(e),
            ) from e

    def _parse(self, parse: Callable[[Any], T], data: Any, path: str) -> T:
        """Build a model from a decoded response body.

        Args:
            parse: Model constructor, e.g. ``LockStatus.model_validate``.
            data: Decoded JSON body.
            path: Request path, for the error message.

        Returns:
            The parsed model.

        Raises:
            ExternalServiceError: If the body does not have the expected shape.
        """
        try:
            return parse(data)
        except PydanticValidationError as e:
            logger.warning(
                "API returned unexpected payload",
                path=path,
                errors=[
                    {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ],
            )
            raise ExternalServiceError(
                self.service_name,
                message=f"{path} returned an unexpected payload",
                original_error=str(e),
            ) from e
