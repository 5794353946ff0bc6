"""Publish workflow state machine.

Transitions:
    draft      -> in_review                 (submit for review)
    in_review  -> approved | draft          (approve / request changes)
    approved   -> published | scheduled     (publish / schedule)
    scheduled  -> published                 (publish, or the external scheduler)
    published  -> published                 (republish)

Refusals are returned, never raised: the document stays as it was and the
caller shows the message.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import structlog

from pagecraft.models.document import ContentStatus, Document

logger = structlog.get_logger()

PUBLISHABLE_STATUSES = {
    ContentStatus.APPROVED.value,
    ContentStatus.PUBLISHED.value,
    ContentStatus.SCHEDULED.value,
}


class RefusalReason(str, Enum):
    """Why a transition was refused."""

    NOT_APPROVED = "NOT_APPROVED"
    SEO_BLOCKED = "SEO_BLOCKED"
    INVALID_TRANSITION = "INVALID_TRANSITION"


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a workflow transition."""

    allowed: bool
    document: Document
    reason: RefusalReason | None = None
    message: str = ""

    @classmethod
    def accept(cls, document: Document, message: str) -> "TransitionResult":
        return cls(allowed=True, document=document, message=message)

    @classmethod
    def refuse(
        cls,
        document: Document,
        reason: RefusalReason,
        message: str,
    ) -> "TransitionResult":
        logger.info(
            "Workflow transition refused",
            document_id=document.id,
            status=document.status,
            reason=reason.value,
        )
        return cls(allowed=False, document=document, reason=reason, message=message)


class WorkflowStateMachine:
    """Computes status transitions for a document."""

    def submit_for_review(self, document: Document) -> TransitionResult:
        """Send a draft to editorial review."""
        if document.status != ContentStatus.DRAFT:
            return TransitionResult.refuse(
                document,
                RefusalReason.INVALID_TRANSITION,
                "Only drafts can be submitted for review.",
            )
        return TransitionResult.accept(
            document.with_status(ContentStatus.IN_REVIEW),
            "Your content has been submitted for editorial review.",
        )

    def approve(self, document: Document) -> TransitionResult:
        """Approve content under review."""
        if document.status != ContentStatus.IN_REVIEW:
            return TransitionResult.refuse(
                document,
                RefusalReason.INVALID_TRANSITION,
                "Only content in review can be approved.",
            )
        return TransitionResult.accept(
            document.with_status(ContentStatus.APPROVED),
            "Content has been approved and is ready to publish.",
        )

    def request_changes(self, document: Document) -> TransitionResult:
        """Return content under review to draft."""
        if document.status != ContentStatus.IN_REVIEW:
            return TransitionResult.refuse(
                document,
                RefusalReason.INVALID_TRANSITION,
                "Changes can only be requested on content in review.",
            )
        return TransitionResult.accept(
            document.with_status(ContentStatus.DRAFT),
            "Content returned to draft status for revisions.",
        )

    def schedule(self, document: Document, scheduled_at: datetime) -> TransitionResult:
        """Schedule approved content for a later publish."""
        if document.status != ContentStatus.APPROVED:
            return TransitionResult.refuse(
                document,
                RefusalReason.NOT_APPROVED,
                "Content must be approved before it can be scheduled.",
            )
        return TransitionResult.accept(
            document.with_status(ContentStatus.SCHEDULED, scheduled_at=scheduled_at),
            f"Content scheduled for {scheduled_at.isoformat()}.",
        )

    def publish(self, document: Document, seo_can_publish: bool) -> TransitionResult:
        """Publish approved, scheduled or already published content.

        Args:
            document: The document to publish.
            seo_can_publish: Latest verdict of the SEO validation gate.

        Returns:
            TransitionResult with the published document, or a refusal.
        """
        if document.status not in PUBLISHABLE_STATUSES:
            return TransitionResult.refuse(
                document,
                RefusalReason.NOT_APPROVED,
                "Content must be approved before publishing. Submit for review first.",
            )
        if not seo_can_publish:
            return TransitionResult.refuse(
                document,
                RefusalReason.SEO_BLOCKED,
                "SEO validation reported blocking issues. Fix them before publishing.",
            )
        return TransitionResult.accept(
            document.with_status(ContentStatus.PUBLISHED),
            "Content has been published.",
        )

    def mark_published(self, document: Document) -> TransitionResult:
        """Transition fired by the external scheduler when the schedule date passes."""
        if document.status != ContentStatus.SCHEDULED:
            return TransitionResult.refuse(
                document,
                RefusalReason.INVALID_TRANSITION,
                "Only scheduled content can be published by the scheduler.",
            )
        return TransitionResult.accept(
            document.with_status(ContentStatus.PUBLISHED),
            "Scheduled content has been published.",
        )
