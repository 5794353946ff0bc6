"""Block document commands.

Every mutation of a document's block list is expressed as a Command value
and applied by :func:`apply_command`, a pure function from one block list to
the next. Operating on an id that no longer exists is a no-op.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pagecraft.models.block import Block, generate_block_id, reindex
from pagecraft.models.block_schemas import BlockType


class Direction(str, Enum):
    """Direction for a single-step move."""

    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class AddBlock:
    """Insert a new block with the type's default payload."""

    block_type: BlockType
    after_index: int | None = None
    # Pre-assigned so replaying a command yields the same block
    block_id: str = field(default_factory=generate_block_id)


@dataclass(frozen=True)
class RemoveBlock:
    """Delete a block."""

    block_id: str


@dataclass(frozen=True)
class UpdateBlock:
    """Shallow-merge a partial payload into a block's data."""

    block_id: str
    data: dict[str, Any]


@dataclass(frozen=True)
class DuplicateBlock:
    """Clone a block with a new id, directly after the source."""

    block_id: str
    new_block_id: str = field(default_factory=generate_block_id)


@dataclass(frozen=True)
class MoveBlock:
    """Swap a block with its neighbour."""

    block_id: str
    direction: Direction


@dataclass(frozen=True)
class Reorder:
    """Arbitrary permutation, e.g. the result of a drag-and-drop."""

    block_ids: tuple[str, ...]


Command = AddBlock | RemoveBlock | UpdateBlock | DuplicateBlock | MoveBlock | Reorder

# Commands recorded in history immediately; UpdateBlock is debounced
DISCRETE_COMMANDS = (AddBlock, RemoveBlock, DuplicateBlock, MoveBlock, Reorder)


def is_discrete(command: Command) -> bool:
    """Check whether a command is a discrete (non-typing) mutation."""
    return isinstance(command, DISCRETE_COMMANDS)


def _index_of(blocks: list[Block], block_id: str) -> int:
    for index, block in enumerate(blocks):
        if block.id == block_id:
            return index
    return -1


def _add(blocks: list[Block], command: AddBlock) -> list[Block]:
    new_block = Block.create(command.block_type).model_copy(update={"id": command.block_id})
    result = list(blocks)
    if command.after_index is None:
        result.append(new_block)
    else:
        position = min(max(command.after_index + 1, 0), len(result))
        result.insert(position, new_block)
    return reindex(result)


def _remove(blocks: list[Block], command: RemoveBlock) -> list[Block]:
    if _index_of(blocks, command.block_id) == -1:
        return list(blocks)
    return reindex([block for block in blocks if block.id != command.block_id])


def _update(blocks: list[Block], command: UpdateBlock) -> list[Block]:
    return [
        block.model_copy(update={"data": {**block.data, **command.data}})
        if block.id == command.block_id
        else block
        for block in blocks
    ]


def _duplicate(blocks: list[Block], command: DuplicateBlock) -> list[Block]:
    index = _index_of(blocks, command.block_id)
    if index == -1:
        return list(blocks)
    source = blocks[index]
    duplicate = source.model_copy(
        update={"id": command.new_block_id, "data": copy.deepcopy(source.data)}
    )
    result = list(blocks)
    result.insert(index + 1, duplicate)
    return reindex(result)


def _move(blocks: list[Block], command: MoveBlock) -> list[Block]:
    index = _index_of(blocks, command.block_id)
    if index == -1:
        return list(blocks)
    target = index - 1 if Direction(command.direction) == Direction.UP else index + 1
    if target < 0 or target >= len(blocks):
        return list(blocks)
    result = list(blocks)
    result[index], result[target] = result[target], result[index]
    return reindex(result)


def _reorder(blocks: list[Block], command: Reorder) -> list[Block]:
    by_id = {block.id: block for block in blocks}
    seen: set[str] = set()
    result: list[Block] = []
    for block_id in command.block_ids:
        if block_id in by_id and block_id not in seen:
            result.append(by_id[block_id])
            seen.add(block_id)
    # Blocks the caller left out keep their relative order at the end
    result.extend(block for block in blocks if block.id not in seen)
    return reindex(result)


_HANDLERS = {
    AddBlock: _add,
    RemoveBlock: _remove,
    UpdateBlock: _update,
    DuplicateBlock: _duplicate,
    MoveBlock: _move,
    Reorder: _reorder,
}


def apply_command(blocks: list[Block], command: Command) -> list[Block]:
    """Apply a command to a block list.

    Args:
        blocks: Current blocks, left untouched.
        command: The mutation to apply.

    Returns:
        The new block list with dense ordering.

    Raises:
        TypeError: If the command type is unknown.
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown command: {type(command).__name__}")
    return handler(blocks, command)
