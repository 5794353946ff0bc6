"""Editor session - owns one document being edited and everything around it.

An EditorSession ties together the document model, the undo/redo history,
the autosave scheduler, the workflow state machine, the lock poller and the
API clients. It is created per open document and must be closed, which
cancels every timer and background task it owns::

    async with EditorSession(document, http=http) as session:
        session.add_block("text")
        session.update_block(block_id, {"contents": "Hello"})
        result = await session.save()

Persistence responses are sequenced: each outbound call carries a request
sequence and the edit sequence it was built from. A response older than one
already applied is discarded, and the dirty flag only clears when the
acknowledged edit sequence is still the current one.
"""

import time
from datetime import datetime
from typing import Any, Callable

import httpx
import structlog

from pagecraft.clients.base import create_http_client
from pagecraft.clients.locks import LockClient
from pagecraft.clients.persistence import PersistenceClient
from pagecraft.clients.section_generation import SectionGenerationClient
from pagecraft.clients.seo_gate import SeoValidationClient
from pagecraft.clients.versions import VersionClient
from pagecraft.config import EditorSettings
from pagecraft.editor.autosave import AutosaveScheduler, AutosaveState
from pagecraft.editor.commands import Command, Direction
from pagecraft.editor.document_model import DocumentModel
from pagecraft.editor.history import HistoryManager
from pagecraft.editor.locks import LockCoordinator
from pagecraft.editor.workflow import TransitionResult, WorkflowStateMachine
from pagecraft.models.block import Block
from pagecraft.models.block_schemas import BlockType
from pagecraft.models.document import ContentStatus, Document
from pagecraft.models.lock import LockStatus
from pagecraft.models.seo import SeoScore, SeoValidation
from pagecraft.models.version import Change, Version
from pagecraft.services import section_generator
from pagecraft.services.seo_scorer import count_words, score_document
from pagecraft.services.version_diff import diff_versions
from pagecraft.utils.exceptions import PagecraftError
from pagecraft.utils.results import ActionResult

logger = structlog.get_logger()


class EditorSession:
    """A single open document in the editor."""

    def __init__(
        self,
        document: Document,
        settings: EditorSettings | None = None,
        http: httpx.AsyncClient | None = None,
        persistence: PersistenceClient | None = None,
        versions: VersionClient | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_lock_change: Callable[[LockStatus], None] | None = None,
        on_autosave_state: Callable[[AutosaveState], None] | None = None,
    ):
        """Initialize editor session.

        Args:
            document: The document to edit.
            settings: Editor settings. Defaults to the environment.
            http: Shared AsyncClient for the API clients. Created (and closed
                with the session) when not given.
            persistence: Optional save/publish backend, e.g. a ContentStore.
                Defaults to the HTTP persistence client.
            versions: Optional version backend. Defaults to the HTTP client.
            clock: Monotonic clock used by the history debounce.
            on_lock_change: Callback for lock status changes.
            on_autosave_state: Callback for autosave indicator changes.
        """
        self.settings = settings or EditorSettings.from_env()

        self._owns_http = http is None
        self.http = http or create_http_client(self.settings)
        self.persistence = persistence or PersistenceClient(self.http)
        self.versions = versions or VersionClient(self.http)
        self.locks = LockClient(self.http)
        self.seo_gate = SeoValidationClient(self.http)
        self.sections = SectionGenerationClient(self.http)

        self.model = DocumentModel(document)
        self.history = HistoryManager(
            max_size=self.settings.history_max_size,
            debounce_ms=self.settings.history_debounce_ms,
            clock=clock,
        )
        self.workflow = WorkflowStateMachine()
        self.autosave = AutosaveScheduler(
            persist=self._autosave,
            should_save=self._should_autosave,
            debounce_seconds=self.settings.autosave_debounce_seconds,
            saved_display_seconds=self.settings.autosave_saved_display_seconds,
            on_state_change=on_autosave_state,
        )
        self.lock = LockCoordinator(
            document.id,
            self.locks.get_lock_status,
            poll_interval_seconds=self.settings.lock_poll_interval_seconds,
            on_change=on_lock_change,
        )

        self.dirty = False
        self.edit_sequence = 0
        self.seo_can_publish = True
        self.seo_validation: SeoValidation | None = None

        self._request_sequence = 0
        self._applied_sequence = 0
        self._in_flight = 0
        self._unsubscribers: list[Callable[[], None]] = []
        self._opened = False
        self._closed = False

    # -- lifecycle ---------------------------------------------------------

    async def open(self) -> "EditorSession":
        """Seed history and start the lock poller."""
        if self._opened:
            return self
        self._unsubscribers.append(self.model.subscribe(self.history.on_command))
        self._unsubscribers.append(self.model.subscribe(self._on_command))
        self.history.reset(self.model.blocks)
        self.lock.start()
        self._opened = True
        logger.info("Editor session opened", document_id=self.document_id)
        return self

    async def close(self) -> None:
        """Cancel timers and background tasks and release the HTTP client."""
        if self._closed:
            return
        self._closed = True
        try:
            await self.autosave.close()
            await self.lock.stop()
        finally:
            for unsubscribe in self._unsubscribers:
                unsubscribe()
            self._unsubscribers = []
            if self._owns_http:
                await self.http.aclose()
        logger.info("Editor session closed", document_id=self.document_id, dirty=self.dirty)

    async def __aenter__(self) -> "EditorSession":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # -- state -------------------------------------------------------------

    @property
    def document(self) -> Document:
        return self.model.document

    @property
    def document_id(self) -> str:
        return self.model.document.id

    @property
    def blocks(self) -> list[Block]:
        return self.model.blocks

    @property
    def selected_block_id(self) -> str | None:
        return self.model.selected_block_id

    @property
    def seo_score(self) -> SeoScore:
        """SEO score of the current document, recomputed on every access."""
        return score_document(self.model.document)

    @property
    def lock_status(self) -> LockStatus:
        return self.lock.status

    @property
    def autosave_state(self) -> AutosaveState:
        return self.autosave.state

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def _mark_changed(self) -> None:
        self.edit_sequence += 1
        self.dirty = True
        if not self._closed:
            self.autosave.notify_change(self.model.document.status)

    def _on_command(self, command: Command, before: list[Block], after: list[Block]) -> None:
        if before != after:
            self._mark_changed()

    # -- mutations ---------------------------------------------------------

    def apply(self, command: Command) -> list[Block]:
        """Apply a block command to the document."""
        return self.model.apply(command)

    def add_block(self, block_type: BlockType | str, after_index: int | None = None) -> list[Block]:
        return self.model.add_block(block_type, after_index)

    def remove_block(self, block_id: str) -> list[Block]:
        return self.model.remove_block(block_id)

    def update_block(self, block_id: str, data: dict[str, Any]) -> list[Block]:
        return self.model.update_block(block_id, data)

    def duplicate_block(self, block_id: str) -> list[Block]:
        return self.model.duplicate_block(block_id)

    def move_block(self, block_id: str, direction: Direction | str) -> list[Block]:
        return self.model.move_block(block_id, direction)

    def reorder(self, block_ids: list[str]) -> list[Block]:
        return self.model.reorder(block_ids)

    def set_metadata(self, **fields: Any) -> Document:
        """Update page metadata (title, slug, SEO fields, hero image)."""
        before = self.model.document
        document = self.model.set_metadata(**fields)
        if document.model_dump() != before.model_dump():
            self._mark_changed()
        return document

    def undo(self) -> bool:
        """Undo the last checkpoint.

        Returns:
            True if the document changed.
        """
        blocks = self.history.undo(self.model.blocks)
        if blocks is None:
            return False
        self.model.replace_blocks(blocks)
        self._mark_changed()
        return True

    def redo(self) -> bool:
        """Redo the next checkpoint.

        Returns:
            True if the document changed.
        """
        blocks = self.history.redo(self.model.blocks)
        if blocks is None:
            return False
        self.model.replace_blocks(blocks)
        self._mark_changed()
        return True

    # -- persistence -------------------------------------------------------

    def _build_payload(self) -> dict[str, Any]:
        document = self.model.document
        payload = document.to_save_payload()
        payload["wordCount"] = count_words(document.blocks)
        payload["editSequence"] = self.edit_sequence
        return payload

    def _next_request(self) -> int:
        self._request_sequence += 1
        return self._request_sequence

    def _acknowledge(self, request_sequence: int, edit_sequence: int) -> bool:
        """Apply a persistence response.

        Returns:
            False if the response is stale and was discarded.
        """
        if request_sequence < self._applied_sequence:
            logger.info(
                "Discarding stale persistence response",
                document_id=self.document_id,
                request_sequence=request_sequence,
                applied_sequence=self._applied_sequence,
            )
            return False
        self._applied_sequence = request_sequence
        if edit_sequence == self.edit_sequence:
            self.dirty = False
        return True

    async def _persist(self, publish: bool = False) -> bool:
        request_sequence = self._next_request()
        edit_sequence = self.edit_sequence
        payload = self._build_payload()

        self._in_flight += 1
        try:
            if publish:
                await self.persistence.publish(self.document_id, payload)
            else:
                await self.persistence.save(self.document_id, payload)
        finally:
            self._in_flight -= 1

        return self._acknowledge(request_sequence, edit_sequence)

    def _should_autosave(self) -> bool:
        return (
            self.dirty
            and self.model.document.status == ContentStatus.DRAFT
            and self._in_flight == 0
        )

    async def _autosave(self) -> bool:
        # A response overtaken by a newer save does not count as saved
        return await self._persist()

    async def save(self) -> ActionResult:
        """Save the document now, cancelling any pending autosave."""
        self.autosave.cancel_pending()
        try:
            applied = await self._persist()
        except PagecraftError as e:
            logger.warning("Save failed", document_id=self.document_id, error=e.message)
            return ActionResult.refused("SAVE_FAILED", "Failed to save contents.")
        logger.info("Content saved", document_id=self.document_id, applied=applied)
        return ActionResult.ok("Content saved successfully.", data={"applied": applied})

    async def publish(self) -> ActionResult:
        """Publish the document if the workflow and the SEO gate allow it."""
        self.autosave.cancel_pending()
        result = self.workflow.publish(self.model.document, self.seo_can_publish)
        if not result.allowed:
            return ActionResult.refused(result.reason.value, result.message)

        try:
            await self._persist(publish=True)
        except PagecraftError as e:
            logger.warning("Publish failed", document_id=self.document_id, error=e.message)
            return ActionResult.refused("PUBLISH_FAILED", "Failed to publish contents.")

        self.model.replace_document(self.model.document.with_status(ContentStatus.PUBLISHED))
        logger.info("Content published", document_id=self.document_id)
        return ActionResult.ok(result.message)

    # -- workflow ----------------------------------------------------------

    async def _transition(self, result: TransitionResult) -> ActionResult:
        if not result.allowed:
            return ActionResult.refused(result.reason.value, result.message)

        target = result.document
        try:
            await self.persistence.update_status(
                self.document_id, target.status, target.scheduled_at
            )
        except PagecraftError as e:
            logger.warning(
                "Status change failed",
                document_id=self.document_id,
                status=target.status,
                error=e.message,
            )
            return ActionResult.refused("STATUS_UPDATE_FAILED", "Failed to update status.")

        # Apply to the live document, which may have changed while awaiting
        self.model.replace_document(
            self.model.document.with_status(target.status, target.scheduled_at)
        )
        if target.status != ContentStatus.DRAFT:
            self.autosave.cancel_pending()
        elif self.dirty:
            self.autosave.notify_change(target.status)
        logger.info("Content status changed", document_id=self.document_id, status=target.status)
        return ActionResult.ok(result.message, data={"status": target.status})

    async def submit_for_review(self) -> ActionResult:
        return await self._transition(self.workflow.submit_for_review(self.model.document))

    async def approve(self) -> ActionResult:
        return await self._transition(self.workflow.approve(self.model.document))

    async def request_changes(self) -> ActionResult:
        return await self._transition(self.workflow.request_changes(self.model.document))

    async def schedule(self, scheduled_at: datetime) -> ActionResult:
        return await self._transition(self.workflow.schedule(self.model.document, scheduled_at))

    def mark_published(self) -> ActionResult:
        """Reflect a publish performed by the external scheduler."""
        result = self.workflow.mark_published(self.model.document)
        if not result.allowed:
            return ActionResult.refused(result.reason.value, result.message)
        self.model.replace_document(result.document)
        return ActionResult.ok(result.message)

    # -- SEO gate ----------------------------------------------------------

    async def validate_seo(self) -> ActionResult:
        """Run the external SEO validation and store its verdict."""
        try:
            validation = await self.seo_gate.validate(self.model.document)
        except PagecraftError as e:
            logger.warning("SEO validation failed", document_id=self.document_id, error=e.message)
            return ActionResult.refused("SEO_VALIDATION_FAILED", "Failed to validate SEO.")
        self.set_seo_validation(validation)
        return ActionResult.ok(
            validation.publish_block_reason or "",
            data={"can_publish": validation.can_publish},
        )

    def set_seo_validation(self, validation: SeoValidation | bool) -> None:
        """Store the latest SEO validation verdict."""
        if isinstance(validation, bool):
            validation = SeoValidation(can_publish=validation)
        self.seo_validation = validation
        self.seo_can_publish = validation.can_publish

    # -- versions ----------------------------------------------------------

    async def list_versions(self) -> list[Version]:
        """List stored versions, newest first."""
        return await self.versions.list_versions(self.document_id)

    def diff(self, version: Version, previous: Version | None = None) -> list[Change]:
        """Describe changes between two versions, or between a version and the live document.

        Args:
            version: The older state when ``previous`` is omitted, else the newer one.
            previous: Optional older version.

        Returns:
            Display-only list of changes.
        """
        if previous is None:
            return diff_versions(self.model.document, version)
        return diff_versions(version, previous)

    async def restore_version(self, version_id: str) -> ActionResult:
        """Replace the live document with a stored version.

        Unsaved local edits are discarded. The pre-restore blocks stay
        reachable through undo.
        """
        self.autosave.cancel_pending()
        request_sequence = self._next_request()
        try:
            restored = await self.versions.restore_version(self.document_id, version_id)
        except PagecraftError as e:
            logger.warning(
                "Version restore failed",
                document_id=self.document_id,
                version_id=version_id,
                error=e.message,
            )
            return ActionResult.refused("RESTORE_FAILED", "Failed to restore version.")

        before = self.model.blocks
        self.model.replace_document(restored)
        if before != self.model.blocks:
            self.history.record(before, self.model.blocks)

        self.edit_sequence += 1
        self._applied_sequence = max(self._applied_sequence, request_sequence)
        self.dirty = False
        logger.info("Version restored", document_id=self.document_id, version_id=version_id)
        return ActionResult.ok("Content restored from previous version.")

    # -- section generation ------------------------------------------------

    async def generate_section(self, block_id: str, section_type: str) -> ActionResult:
        """Fill a block with generated FAQ, tips or highlights content.

        The result is merged into the block through an ``UpdateBlock``
        command recorded as its own undo checkpoint.
        """
        document = self.model.document
        if not document.title:
            return ActionResult.refused(
                "TITLE_REQUIRED", "Please enter a title before generating sections."
            )
        if not section_generator.is_supported(section_type):
            return ActionResult.refused(
                "UNSUPPORTED_SECTION", f"Cannot generate '{section_type}' sections."
            )
        if not any(block.id == block_id for block in document.blocks):
            return ActionResult.refused("BLOCK_NOT_FOUND", "The target block no longer exists.")

        try:
            result = await self.sections.generate_section(
                section_type,
                document.title,
                section_generator.existing_content(document.blocks),
            )
        except PagecraftError as e:
            logger.warning(
                "Section generation failed",
                document_id=self.document_id,
                section_type=section_type,
                error=e.message,
            )
            return ActionResult.refused("GENERATION_FAILED", "Failed to generate section.")

        # The block may have been deleted while the generator was running
        if not any(block.id == block_id for block in self.model.blocks):
            return ActionResult.refused("BLOCK_NOT_FOUND", "The target block no longer exists.")

        self.history.break_coalescing()
        self.model.update_block(block_id, section_generator.to_block_data(section_type, result))
        return ActionResult.ok(f"Generated {section_type} section.")
