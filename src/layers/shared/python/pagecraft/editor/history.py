"""Bounded undo/redo history for a block document.

The history is a linear list of snapshots with a pointer at the entry that
represents the live document. It subscribes to the document's command stream:

- Discrete commands (add, remove, duplicate, move, reorder) record a
  checkpoint immediately.
- Continuous commands (``UpdateBlock``, i.e. typing) record at most one
  checkpoint per debounce window, so a burst of keystrokes undoes as a unit.

Recording after an undo discards the redo branch. When the list grows past
``max_size`` the oldest entry is evicted.
"""

import time
from typing import Callable

import structlog

from pagecraft.editor.commands import Command, is_discrete
from pagecraft.editor.snapshot import HistorySnapshot, clone_blocks
from pagecraft.models.block import Block

logger = structlog.get_logger()

DEFAULT_MAX_SIZE = 50
DEFAULT_DEBOUNCE_MS = 500


class HistoryManager:
    """Undo/redo stack of block snapshots."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize history manager.

        Args:
            max_size: Maximum number of snapshots kept.
            debounce_ms: Minimum gap between checkpoints for continuous edits.
            clock: Monotonic clock in seconds (injectable for tests).
        """
        if max_size < 2:
            raise ValueError("max_size must be at least 2")
        self.max_size = max_size
        self.debounce_seconds = debounce_ms / 1000
        self._clock = clock
        self._entries: list[HistorySnapshot] = []
        self._pointer = -1
        self._last_push: float | None = None

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def pointer(self) -> int:
        """Index of the entry matching the live document."""
        return self._pointer

    @property
    def can_undo(self) -> bool:
        return self._pointer > 0

    @property
    def can_redo(self) -> bool:
        return self._pointer < len(self._entries) - 1

    def reset(self, blocks: list[Block]) -> None:
        """Drop all history and seed it with the given blocks.

        Args:
            blocks: The live blocks the history starts from.
        """
        self._entries = []
        self._pointer = -1
        self._last_push = None
        result = clone_blocks(blocks)
        if not result.ok:
            logger.warning(
                "History seed skipped",
                error=result.error.message,
                path=result.error.path,
            )
            return
        self._entries.append(result.snapshot)
        self._pointer = 0

    def on_command(self, command: Command, before: list[Block], after: list[Block]) -> None:
        """Command stream subscriber.

        Args:
            command: The applied command.
            before: Blocks before the command.
            after: Blocks after the command.
        """
        if before == after:
            return
        if is_discrete(command):
            self.record(before, after)
            return

        now = self._clock()
        if self._last_push is None or now - self._last_push >= self.debounce_seconds:
            self.record(before, after)

    def break_coalescing(self) -> None:
        """Make the next continuous edit record its own checkpoint."""
        self._last_push = None

    def record(self, before: list[Block], after: list[Block]) -> bool:
        """Record a checkpoint around a mutation.

        The entry at the pointer is refreshed with the pre-mutation blocks
        (it may lag behind debounced edits), the redo branch is dropped and
        the post-mutation blocks become the new head.

        Args:
            before: Blocks before the mutation.
            after: Blocks after the mutation.

        Returns:
            True if a checkpoint was recorded.
        """
        pre = clone_blocks(before)
        post = clone_blocks(after) if pre.ok else pre
        if not pre.ok or not post.ok:
            error = pre.error or post.error
            logger.warning(
                "History snapshot skipped",
                error=error.message,
                path=error.path,
            )
            return False

        if not self._entries:
            self._entries.append(pre.snapshot)
            self._pointer = 0
        else:
            del self._entries[self._pointer + 1:]
            self._entries[self._pointer] = pre.snapshot

        self._entries.append(post.snapshot)
        self._pointer += 1

        while len(self._entries) > self.max_size:
            self._entries.pop(0)
            self._pointer = max(self._pointer - 1, 0)

        self._last_push = self._clock()
        return True

    def undo(self, current: list[Block]) -> list[Block] | None:
        """Step back one checkpoint.

        Args:
            current: The live blocks, kept as the redo target.

        Returns:
            Blocks to restore, or None if there is nothing to undo.
        """
        if not self.can_undo:
            return None
        self._sync_head(current)
        self._pointer -= 1
        return self._restore()

    def redo(self, current: list[Block]) -> list[Block] | None:
        """Step forward one checkpoint.

        Args:
            current: The live blocks.

        Returns:
            Blocks to restore, or None if there is nothing to redo.
        """
        if not self.can_redo:
            return None
        self._sync_head(current)
        self._pointer += 1
        return self._restore()

    def _sync_head(self, current: list[Block]) -> None:
        """Store the live blocks at the pointer so edits inside a debounce window survive."""
        result = clone_blocks(current)
        if result.ok:
            self._entries[self._pointer] = result.snapshot
        else:
            logger.warning(
                "History head sync skipped",
                error=result.error.message,
                path=result.error.path,
            )

    def _restore(self) -> list[Block]:
        # Next keystroke starts a new checkpoint
        self._last_push = None
        # Snapshots only hold JSON values, so cloning them cannot fail
        result = clone_blocks(self._entries[self._pointer])
        return list(result.snapshot)
