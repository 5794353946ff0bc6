"""Debounced autosave for draft documents.

Every local change restarts a quiet timer. When the timer fires the scheduler
asks the session whether a save is still wanted (dirty, still a draft and no
other save in flight) and then awaits the session's persist coroutine.

State cycle::

    idle -> saving -> saved -> (after a short display delay) idle
    idle -> saving -> idle          (failed save, dirty flag kept)
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable

import structlog

from pagecraft.models.base import utc_now
from pagecraft.models.document import ContentStatus
from pagecraft.utils.exceptions import PagecraftError

logger = structlog.get_logger()

DEFAULT_DEBOUNCE_SECONDS = 30.0
DEFAULT_SAVED_DISPLAY_SECONDS = 3.0


class AutosaveState(str, Enum):
    """Autosave indicator state."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"


class AutosaveScheduler:
    """Owns the autosave timers of one editor session."""

    def __init__(
        self,
        persist: Callable[[], Awaitable[bool]],
        should_save: Callable[[], bool],
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        saved_display_seconds: float = DEFAULT_SAVED_DISPLAY_SECONDS,
        on_state_change: Callable[[AutosaveState], None] | None = None,
    ):
        """Initialize autosave scheduler.

        Args:
            persist: Coroutine function performing the save. Returns True on success.
            should_save: Predicate checked when the timer fires.
            debounce_seconds: Quiet period after the last change.
            saved_display_seconds: How long the saved state is shown.
            on_state_change: Optional callback for indicator updates.
        """
        self._persist = persist
        self._should_save = should_save
        self.debounce_seconds = debounce_seconds
        self.saved_display_seconds = saved_display_seconds
        self._on_state_change = on_state_change

        self._state = AutosaveState.IDLE
        self.last_saved_at: datetime | None = None

        self._timer: asyncio.TimerHandle | None = None
        self._reset_timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def state(self) -> AutosaveState:
        return self._state

    @property
    def is_pending(self) -> bool:
        """Whether a debounce timer is armed."""
        return self._timer is not None

    @property
    def is_saving(self) -> bool:
        return self._task is not None and not self._task.done()

    def _set_state(self, state: AutosaveState) -> None:
        if state == self._state:
            return
        self._state = state
        if self._on_state_change:
            self._on_state_change(state)

    def notify_change(self, status: ContentStatus | str) -> None:
        """Restart the quiet timer after a local change.

        Only drafts autosave; for any other status a pending timer is
        cancelled instead.

        Args:
            status: Current workflow status of the document.
        """
        if self._closed:
            return
        self.cancel_pending()
        if ContentStatus(status) != ContentStatus.DRAFT:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce_seconds, self._on_timer)

    def cancel_pending(self) -> None:
        """Cancel the armed debounce timer, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        if self._closed or self.is_saving:
            return
        if not self._should_save():
            logger.debug("Autosave skipped")
            return
        self._task = asyncio.get_running_loop().create_task(self.run())

    async def run(self) -> bool:
        """Perform one autosave now.

        Returns:
            True if the document was saved.
        """
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None

        self._set_state(AutosaveState.SAVING)
        try:
            saved = await self._persist()
        except PagecraftError as e:
            logger.warning("Autosave failed", error=e.message, error_code=e.error_code)
            saved = False

        if self._closed:
            return saved

        if not saved:
            self._set_state(AutosaveState.IDLE)
            return False

        self.last_saved_at = utc_now()
        self._set_state(AutosaveState.SAVED)
        logger.info("Autosave completed", saved_at=self.last_saved_at.isoformat())

        loop = asyncio.get_running_loop()
        self._reset_timer = loop.call_later(self.saved_display_seconds, self._back_to_idle)
        return True

    def _back_to_idle(self) -> None:
        self._reset_timer = None
        if self._state == AutosaveState.SAVED:
            self._set_state(AutosaveState.IDLE)

    async def close(self) -> None:
        """Cancel all timers and any in-flight autosave."""
        self._closed = True
        self.cancel_pending()
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
