"""Structural cloning of block lists for history snapshots.

A snapshot must never share mutable state with the live document, so block
payloads are rebuilt value by value. Only JSON-compatible values can be
cloned; anything else yields a :class:`CloneError` inside the result instead
of an exception, and the caller decides how to recover.
"""

from dataclasses import dataclass
from typing import Any

from pagecraft.models.block import Block
from pagecraft.utils.exceptions import CloneError

HistorySnapshot = tuple[Block, ...]

_SCALARS = (str, int, float, bool, type(None))


@dataclass(frozen=True)
class CloneResult:
    """Either a snapshot or the reason it could not be taken."""

    snapshot: HistorySnapshot | None = None
    error: CloneError | None = None

    @property
    def ok(self) -> bool:
        """Whether the clone succeeded."""
        return self.error is None


def _clone_value(value: Any, path: str) -> Any:
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, dict):
        cloned = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise CloneError(f"{path}.<key>", type(key).__name__)
            cloned[key] = _clone_value(item, f"{path}.{key}")
        return cloned
    if isinstance(value, (list, tuple)):
        return [_clone_value(item, f"{path}[{index}]") for index, item in enumerate(value)]
    raise CloneError(path, type(value).__name__)


def clone_blocks(blocks: list[Block] | HistorySnapshot) -> CloneResult:
    """Clone a block list into an independent snapshot.

    Args:
        blocks: Blocks to clone.

    Returns:
        CloneResult holding the snapshot, or the error that prevented it.
    """
    cloned: list[Block] = []
    try:
        for index, block in enumerate(blocks):
            data = _clone_value(block.data, f"blocks[{index}].data")
            cloned.append(block.model_copy(update={"data": data}))
    except CloneError as e:
        return CloneResult(error=e)
    return CloneResult(snapshot=tuple(cloned))


def snapshots_equal(left: HistorySnapshot, right: list[Block] | HistorySnapshot) -> bool:
    """Compare two block sequences by value."""
    return len(left) == len(right) and all(a == b for a, b in zip(left, right))
