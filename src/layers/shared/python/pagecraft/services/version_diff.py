"""Field-level and block-level differences between document states.

Used only to display what changed between the live document and a stored
version; the result is never applied back.
"""

from pagecraft.models.block import Block
from pagecraft.models.document import Document
from pagecraft.models.version import Change, ChangeKind, Version

DIFF_FIELDS = ("title", "meta_description")


def _blocks_by_id(blocks: list[Block]) -> dict[str, tuple[int, Block]]:
    return {block.id: (index, block) for index, block in enumerate(blocks)}


def diff_blocks(current: list[Block], previous: list[Block]) -> list[Change]:
    """Compare two block sequences by block id.

    Args:
        current: Newer blocks.
        previous: Older blocks.

    Returns:
        Added, removed, modified and moved blocks, in the order they appear.
    """
    changes: list[Change] = []
    old = _blocks_by_id(previous)
    new = _blocks_by_id(current)

    for block_id, (_, block) in old.items():
        if block_id not in new:
            changes.append(
                Change(
                    kind=ChangeKind.BLOCK_REMOVED,
                    block_id=block_id,
                    block_type=block.type,
                    before=block.data,
                )
            )

    # Relative order of blocks present in both, to detect real moves
    common_old = [block.id for block in previous if block.id in new]
    common_new = [block.id for block in current if block.id in old]
    old_rank = {block_id: rank for rank, block_id in enumerate(common_old)}

    for rank, block_id in enumerate(common_new):
        index, block = new[block_id]
        old_index, old_block = old[block_id]
        if old_block.type != block.type or old_block.data != block.data:
            changes.append(
                Change(
                    kind=ChangeKind.BLOCK_MODIFIED,
                    block_id=block_id,
                    block_type=block.type,
                    before=old_block.data,
                    after=block.data,
                )
            )
        if old_rank[block_id] != rank:
            changes.append(
                Change(
                    kind=ChangeKind.BLOCK_MOVED,
                    block_id=block_id,
                    block_type=block.type,
                    before=old_index,
                    after=index,
                )
            )

    for block_id, (_, block) in new.items():
        if block_id not in old:
            changes.append(
                Change(
                    kind=ChangeKind.BLOCK_ADDED,
                    block_id=block_id,
                    block_type=block.type,
                    after=block.data,
                )
            )

    return changes


def diff_versions(current: Document | Version, previous: Document | Version) -> list[Change]:
    """Compare two document states.

    Args:
        current: The newer state (usually the live document).
        previous: The older state (usually a stored version).

    Returns:
        Field changes followed by block changes.
    """
    changes: list[Change] = []
    for field_name in DIFF_FIELDS:
        before = getattr(previous, field_name)
        after = getattr(current, field_name)
        if before != after:
            changes.append(
                Change(
                    kind=ChangeKind.FIELD_CHANGED,
                    field=field_name,
                    before=before,
                    after=after,
                )
            )
    changes.extend(diff_blocks(current.blocks, previous.blocks))
    return changes
