"""Advisory lock polling."""

import asyncio
from typing import Awaitable, Callable

import structlog

from pagecraft.models.lock import LockStatus
from pagecraft.utils.exceptions import PagecraftError

logger = structlog.get_logger()

DEFAULT_POLL_INTERVAL_SECONDS = 30.0


class LockCoordinator:
    """Polls the lock status of a document on a background task.

    The status is informational: nothing in the editor consults it before
    mutating or saving.
    """

    def __init__(
        self,
        document_id: str,
        fetch_status: Callable[[str], Awaitable[LockStatus]],
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        on_change: Callable[[LockStatus], None] | None = None,
    ):
        """Initialize lock coordinator.

        Args:
            document_id: Document to watch.
            fetch_status: Coroutine function returning the current LockStatus.
            poll_interval_seconds: Delay between polls.
            on_change: Optional callback invoked when the status changes.
        """
        self.document_id = document_id
        self._fetch_status = fetch_status
        self.poll_interval_seconds = poll_interval_seconds
        self._on_change = on_change
        self.status = LockStatus()
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> LockStatus:
        """Fetch the lock status once.

        Failures are logged and the previous status is kept.

        Returns:
            The latest known LockStatus.
        """
        try:
            status = await self._fetch_status(self.document_id)
        except PagecraftError as e:
            logger.warning(
                "Lock status poll failed",
                document_id=self.document_id,
                error=e.message,
            )
            return self.status

        if status != self.status:
            self.status = status
            logger.info(
                "Lock status changed",
                document_id=self.document_id,
                is_locked=status.is_locked,
                locked_by=status.locked_by.name if status.locked_by else None,
            )
            if self._on_change:
                self._on_change(status)
        return self.status

    async def _run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self.poll_interval_seconds)

    def start(self) -> None:
        """Start polling. Safe to call when already running."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Stop polling and wait for the task to finish.

        A poll task that already died is reported in the log, not re-raised.
        """
        task, self._task = self._task, None
        if task is None:
            return
        if task.done():
            if not task.cancelled() and task.exception() is not None:
                logger.error(
                    "Lock polling stopped unexpectedly",
                    document_id=self.document_id,
                    error=repr(task.exception()),
                )
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
