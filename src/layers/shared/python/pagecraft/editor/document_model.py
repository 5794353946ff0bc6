"""Live document model with a command stream."""

from typing import Any, Callable

import structlog

from pagecraft.editor.commands import (
    AddBlock,
    Command,
    Direction,
    DuplicateBlock,
    MoveBlock,
    RemoveBlock,
    Reorder,
    UpdateBlock,
    apply_command,
)
from pagecraft.models.block import Block, reindex
from pagecraft.models.block_schemas import BlockType
from pagecraft.models.document import METADATA_FIELDS, Document

logger = structlog.get_logger()

CommandListener = Callable[[Command, list[Block], list[Block]], None]


class DocumentModel:
    """Owns the live document and applies commands to it.

    Every applied command is published to subscribers as
    ``(command, before, after)``; the history manager and the editor session
    listen on this stream instead of being called from each mutation site.
    """

    def __init__(self, document: Document):
        """Initialize document model.

        Args:
            document: The document being edited.
        """
        self._document = document.model_copy(update={"blocks": reindex(document.blocks)})
        self.selected_block_id: str | None = None
        self._listeners: list[CommandListener] = []

    @property
    def document(self) -> Document:
        """The current document state."""
        return self._document

    @property
    def blocks(self) -> list[Block]:
        """The current block sequence (a copy of the list)."""
        return list(self._document.blocks)

    def subscribe(self, listener: CommandListener) -> Callable[[], None]:
        """Register a command stream listener.

        Args:
            listener: Called after each applied command.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def apply(self, command: Command) -> list[Block]:
        """Apply a command to the live document.

        Args:
            command: The mutation to apply.

        Returns:
            The new block sequence.
        """
        before = self.blocks
        after = apply_command(before, command)
        self._document = self._document.model_copy(update={"blocks": after})
        self._update_selection(command, after)

        for listener in list(self._listeners):
            listener(command, before, list(after))

        return list(after)

    def _update_selection(self, command: Command, after: list[Block]) -> None:
        if isinstance(command, AddBlock):
            self.selected_block_id = command.block_id
        elif isinstance(command, DuplicateBlock):
            if any(block.id == command.new_block_id for block in after):
                self.selected_block_id = command.new_block_id
        elif isinstance(command, RemoveBlock) and self.selected_block_id == command.block_id:
            self.selected_block_id = None

    def add_block(self, block_type: BlockType | str, after_index: int | None = None) -> list[Block]:
        """Insert a block with the type's default payload."""
        return self.apply(AddBlock(block_type=BlockType(block_type), after_index=after_index))

    def remove_block(self, block_id: str) -> list[Block]:
        """Delete a block."""
        return self.apply(RemoveBlock(block_id=block_id))

    def update_block(self, block_id: str, data: dict[str, Any]) -> list[Block]:
        """Shallow-merge data into a block's payload."""
        return self.apply(UpdateBlock(block_id=block_id, data=dict(data)))

    def duplicate_block(self, block_id: str) -> list[Block]:
        """Clone a block directly after itself."""
        return self.apply(DuplicateBlock(block_id=block_id))

    def move_block(self, block_id: str, direction: Direction | str) -> list[Block]:
        """Swap a block with its neighbour."""
        return self.apply(MoveBlock(block_id=block_id, direction=Direction(direction)))

    def reorder(self, block_ids: list[str]) -> list[Block]:
        """Apply a drag-and-drop permutation."""
        return self.apply(Reorder(block_ids=tuple(block_ids)))

    def replace_blocks(self, blocks: list[Block]) -> list[Block]:
        """Swap in a block sequence without publishing a command.

        Used by undo, redo and version restore, which manage history
        themselves.

        Args:
            blocks: The new blocks.

        Returns:
            The new block sequence.
        """
        blocks = reindex(blocks)
        self._document = self._document.model_copy(update={"blocks": blocks})
        if self.selected_block_id and not any(b.id == self.selected_block_id for b in blocks):
            self.selected_block_id = None
        return list(blocks)

    def replace_document(self, document: Document) -> None:
        """Swap in a whole document, e.g. after a version restore or a status change."""
        self._document = document.model_copy(update={"blocks": reindex(document.blocks)})
        if self.selected_block_id and not any(
            b.id == self.selected_block_id for b in self._document.blocks
        ):
            self.selected_block_id = None

    def set_metadata(self, **fields: Any) -> Document:
        """Update page-level metadata fields.

        Args:
            **fields: Any of title, slug, meta_title, meta_description,
                primary_keyword, hero_image, hero_image_alt.

        Returns:
            The updated document.

        Raises:
            ValueError: If a field is not page metadata.
        """
        unknown = set(fields) - set(METADATA_FIELDS)
        if unknown:
            raise ValueError(f"Not metadata fields: {', '.join(sorted(unknown))}")
        data = self._document.model_dump()
        data.update(fields)
        self._document = Document.model_validate(data)
        return self._document
