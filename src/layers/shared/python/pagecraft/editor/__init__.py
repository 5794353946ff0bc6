"""Editing core: commands, history, autosave, workflow and the editor session."""

from pagecraft.editor.autosave import AutosaveScheduler, AutosaveState
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
from pagecraft.editor.document_model import DocumentModel
from pagecraft.editor.history import HistoryManager
from pagecraft.editor.locks import LockCoordinator
from pagecraft.editor.session import EditorSession
from pagecraft.editor.snapshot import CloneResult, HistorySnapshot, clone_blocks
from pagecraft.editor.workflow import RefusalReason, TransitionResult, WorkflowStateMachine

__all__ = [
    "AddBlock",
    "AutosaveScheduler",
    "AutosaveState",
    "CloneResult",
    "Command",
    "Direction",
    "DocumentModel",
    "DuplicateBlock",
    "EditorSession",
    "HistoryManager",
    "HistorySnapshot",
    "LockCoordinator",
    "MoveBlock",
    "RefusalReason",
    "RemoveBlock",
    "Reorder",
    "TransitionResult",
    "UpdateBlock",
    "WorkflowStateMachine",
    "apply_command",
    "clone_blocks",
]
