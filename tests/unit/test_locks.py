"""Tests for the advisory lock poller."""

import asyncio

import pytest

from pagecraft.editor.locks import LockCoordinator
from pagecraft.models.lock import LockHolder, LockStatus
from pagecraft.utils.exceptions import ExternalServiceError

LOCKED = LockStatus(is_locked=True, locked_by=LockHolder(name="Alice"))


class TestLockCoordinator:
    """Tests for LockCoordinator."""

    @pytest.mark.asyncio
    async def test_poll_reports_changes(self):
        """Test a changed status is stored and passed to the callback."""
        changes = []

        async def fetch(document_id):
            return LOCKED

        coordinator = LockCoordinator("doc-1", fetch, on_change=changes.append)

        await coordinator.poll_once()
        await coordinator.poll_once()

        assert coordinator.status.is_locked
        assert changes == [LOCKED]

    @pytest.mark.asyncio
    async def test_failed_poll_keeps_previous_status(self):
        """Test a service error leaves the last known status in place."""
        responses = [LOCKED]

        async def fetch(document_id):
            if responses:
                return responses.pop()
            raise ExternalServiceError("content-locks", message="down")

        coordinator = LockCoordinator("doc-1", fetch)

        await coordinator.poll_once()
        status = await coordinator.poll_once()

        assert status == LOCKED

    @pytest.mark.asyncio
    async def test_stop_after_task_died(self):
        """Test stopping does not re-raise an unexpected poll failure."""

        async def fetch(document_id):
            raise RuntimeError("boom")

        coordinator = LockCoordinator("doc-1", fetch, poll_interval_seconds=0.01)
        coordinator.start()
        await asyncio.sleep(0.05)

        assert not coordinator.is_running

        await coordinator.stop()
        await coordinator.stop()

    @pytest.mark.asyncio
    async def test_stop_cancels_running_task(self):
        """Test stopping a live poller cancels it."""
        polls = []

        async def fetch(document_id):
            polls.append(document_id)
            return LockStatus()

        coordinator = LockCoordinator("doc-1", fetch, poll_interval_seconds=0.01)
        coordinator.start()
        coordinator.start()
        await asyncio.sleep(0.05)

        assert coordinator.is_running
        await coordinator.stop()

        assert not coordinator.is_running
        assert len(polls) >= 2
