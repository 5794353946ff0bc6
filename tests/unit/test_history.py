"""Tests for the undo/redo history."""

import pytest

from pagecraft.editor.commands import AddBlock, UpdateBlock
from pagecraft.editor.document_model import DocumentModel
from pagecraft.editor.history import HistoryManager
from pagecraft.editor.snapshot import clone_blocks, snapshots_equal
from pagecraft.models.block import Block
from pagecraft.models.block_schemas import BlockType


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def editor(sample_document, clock):
    """Document model with a subscribed history manager."""
    model = DocumentModel(sample_document)
    history = HistoryManager(clock=clock)
    model.subscribe(history.on_command)
    history.reset(model.blocks)
    return model, history


def undo(model, history):
    blocks = history.undo(model.blocks)
    if blocks is not None:
        model.replace_blocks(blocks)
    return blocks


def redo(model, history):
    blocks = history.redo(model.blocks)
    if blocks is not None:
        model.replace_blocks(blocks)
    return blocks


class TestSnapshot:
    """Tests for structural cloning."""

    def test_clone_is_independent(self, sample_blocks):
        """Test snapshot payloads do not alias the source."""
        blocks = [Block(id="g", type="gallery", data={"images": [{"url": "a.webp"}]})]

        result = clone_blocks(blocks)

        assert result.ok
        assert snapshots_equal(result.snapshot, tuple(blocks))
        assert result.snapshot[0].data["images"] is not blocks[0].data["images"]

    def test_clone_failure_is_returned(self):
        """Test non-JSON values produce a CloneError result."""
        blocks = [Block(id="bad", type="text", data={"contents": object()})]

        result = clone_blocks(blocks)

        assert not result.ok
        assert result.snapshot is None
        assert result.error.value_type == "object"
        assert "contents" in result.error.path


class TestHistoryManager:
    """Tests for HistoryManager."""

    def test_undo_restores_pre_mutation_blocks(self, editor):
        """Test undo restores exactly the blocks before the mutation."""
        model, history = editor
        original = model.blocks

        model.remove_block("text0001")
        restored = undo(model, history)

        assert restored == original
        assert model.blocks == original

    def test_redo_after_undo(self, editor):
        """Test redo(undo(x)) == x."""
        model, history = editor
        model.add_block("image")
        after_add = model.blocks

        undo(model, history)
        redo(model, history)

        assert model.blocks == after_add

    def test_undo_redo_bounds(self, editor):
        """Test undo and redo return None at the ends."""
        model, history = editor

        assert history.undo(model.blocks) is None
        assert history.redo(model.blocks) is None
        assert not history.can_undo

    def test_new_edit_discards_redo_branch(self, editor):
        """Test recording after undo drops the redo entries."""
        model, history = editor
        model.add_block("image")
        model.add_block("video")
        undo(model, history)

        model.add_block("quote")

        assert not history.can_redo
        assert [block.type for block in model.blocks][-1] == "quote"
        undo(model, history)
        assert [block.type for block in model.blocks][-1] == "image"

    def test_max_size_evicts_oldest(self, sample_document, clock):
        """Test the stack never exceeds its maximum size."""
        model = DocumentModel(sample_document)
        history = HistoryManager(max_size=50, clock=clock)
        model.subscribe(history.on_command)
        history.reset(model.blocks)

        for _ in range(60):
            model.add_block("divider")
            assert len(history) <= 50

        assert len(history) == 50
        assert history.pointer == 49

        undo_count = 0
        while undo(model, history) is not None:
            undo_count += 1
        assert undo_count == 49
        # The oldest reachable state already has the first 11 dividers
        assert sum(block.type == "divider" for block in model.blocks) == 11

    def test_typing_burst_records_one_checkpoint(self, editor, clock):
        """Test 29 updates inside 400ms record at most one checkpoint."""
        model, history = editor
        before = len(history)

        for i in range(29):
            model.update_block("text0001", {"contents": f"typing {i}"})
            clock.advance(400 / 29)

        assert len(history) - before <= 1

    def test_typing_burst_undoes_as_a_unit(self, editor, clock):
        """Test a burst undoes to the text before the burst."""
        model, history = editor
        for i in range(10):
            model.update_block("text0001", {"contents": f"typing {i}"})
            clock.advance(20)

        undo(model, history)
        assert model.blocks[1].data["contents"] == "A picture frame over the city."

        redo(model, history)
        assert model.blocks[1].data["contents"] == "typing 9"

    def test_updates_after_debounce_window_record_again(self, editor, clock):
        """Test edits separated by the debounce window are separate checkpoints."""
        model, history = editor

        model.update_block("text0001", {"contents": "first"})
        clock.advance(600)
        model.update_block("text0001", {"contents": "second"})

        undo(model, history)
        assert model.blocks[1].data["contents"] == "first"

    def test_noop_command_is_not_recorded(self, editor):
        """Test commands that change nothing leave history alone."""
        model, history = editor

        model.remove_block("ghost")

        assert len(history) == 1
        assert not history.can_undo

    def test_clone_failure_skips_snapshot(self, editor):
        """Test an uncloneable payload skips the push and keeps the live document."""
        model, history = editor
        size = len(history)

        model.update_block("text0001", {"contents": object()})

        assert len(history) == size
        assert not isinstance(model.blocks[1].data["contents"], str)

    def test_history_does_not_alias_live_blocks(self, editor):
        """Test snapshots are independent of later edits."""
        model, history = editor
        model.add_block(BlockType.GALLERY)
        model.add_block(BlockType.DIVIDER)

        # Mutate the live payload in place, behind the command stream
        model.blocks[3].data["images"].append({"url": "leak.webp"})
        undo(model, history)

        assert len(model.blocks) == 4
        assert model.blocks[3].type == "gallery"
        assert model.blocks[3].data["images"] == []

    def test_max_size_must_allow_undo(self):
        """Test a history too small to undo is rejected."""
        with pytest.raises(ValueError):
            HistoryManager(max_size=1)

    def test_on_command_ignores_identical_lists(self, clock):
        """Test on_command skips when nothing changed."""
        history = HistoryManager(clock=clock)
        blocks = [Block(id="a", type="text")]
        history.reset(blocks)

        history.on_command(AddBlock(block_type=BlockType.TEXT), blocks, list(blocks))
        history.on_command(UpdateBlock(block_id="a", data={}), blocks, list(blocks))

        assert len(history) == 1
