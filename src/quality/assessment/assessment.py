"""Assessment aggregate: one product's journey through the quality review.

CQRS (not event sourced). The review history lives in the audit ledgers, so
the aggregate only keeps the latest decision: one status, one logistics
note, the most recent rejection reason, and a timestamp per milestone.

`status` is persisted in the storage vocabulary; `current_status` exposes the
canonical value and is what every guard reads.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from quality.assessment.events import (
    AssessmentOpened,
    AssessmentRejected,
    AssessmentResubmitted,
    QualityCheckPassed,
    RevisionRequested,
    SampleRequested,
    SampleSubmitted,
)
from quality.assessment.state_machine import AssessmentAction, next_status
from quality.domain import quality
from quality.shared.status import (
    AssessmentStatus,
    ReviewStage,
    from_storage,
    storage_forms,
    to_storage,
)


@quality.aggregate
class Assessment:
    product_id: Identifier(required=True, unique=True)
    vendor: String(max_length=255)
    status: String(max_length=30, default=to_storage(AssessmentStatus.PENDING_DIGITAL_REVIEW))
    logistics: Text()
    rejection_reason: Text()
    rejection_stage: String(choices=ReviewStage)

    submitted_at: DateTime()
    approved_at: DateTime()
    verified_at: DateTime()
    rejected_at: DateTime()
    revision_requested_at: DateTime()
    resubmitted_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def status_must_be_a_known_storage_form(self):
        if self.status not in storage_forms():
            raise ValidationError({"status": [f"Unknown assessment status '{self.status}'"]})

    @property
    def current_status(self) -> AssessmentStatus:
        return from_storage(self.status)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, product_id, vendor=None, bypassed=False):
        """Open the assessment for a newly submitted product.

        Trusted-brand products skip both review stages and start verified.
        """
        now = datetime.now(UTC)
        initial = AssessmentStatus.ACTIVE_VERIFIED if bypassed else AssessmentStatus.PENDING_DIGITAL_REVIEW

        assessment = cls(
            product_id=product_id,
            vendor=vendor,
            status=to_storage(initial),
            submitted_at=now,
            verified_at=now if bypassed else None,
            updated_at=now,
        )
        assessment.raise_(
            AssessmentOpened(
                assessment_id=str(assessment.id),
                product_id=str(product_id),
                vendor=vendor,
                status=initial.value,
                bypassed=bypassed,
                submitted_at=now,
            )
        )
        return assessment

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def _move(self, action, **payload):
        target = next_status(self.current_status, action, **payload)
        now = datetime.now(UTC)
        self.status = to_storage(target)
        self.updated_at = now
        return now

    def approve_for_sample(self):
        now = self._move(AssessmentAction.APPROVE_FOR_SAMPLE)
        self.approved_at = now

        self.raise_(
            SampleRequested(
                assessment_id=str(self.id),
                product_id=str(self.product_id),
                approved_at=now,
            )
        )

    def submit_sample(self, logistics):
        now = self._move(AssessmentAction.SUBMIT_SAMPLE, logistics=logistics)
        self.logistics = logistics

        self.raise_(
            SampleSubmitted(
                assessment_id=str(self.id),
                product_id=str(self.product_id),
                logistics=logistics,
                sample_submitted_at=now,
            )
        )

    def pass_quality_check(self):
        now = self._move(AssessmentAction.PASS_QUALITY_CHECK)
        self.verified_at = now

        self.raise_(
            QualityCheckPassed(
                assessment_id=str(self.id),
                product_id=str(self.product_id),
                verified_at=now,
            )
        )

    def reject(self, reason, stage):
        previous = self.current_status
        now = self._move(AssessmentAction.REJECT, reason=reason, stage=stage)
        self.rejected_at = now
        self.rejection_reason = reason
        self.rejection_stage = ReviewStage(stage).value

        self.raise_(
            AssessmentRejected(
                assessment_id=str(self.id),
                product_id=str(self.product_id),
                previous_status=previous.value,
                reason=reason,
                stage=self.rejection_stage,
                rejected_at=now,
            )
        )

    def request_revision(self, reason, stage):
        previous = self.current_status
        now = self._move(AssessmentAction.REQUEST_REVISION, reason=reason, stage=stage)
        self.revision_requested_at = now
        self.rejection_reason = reason
        self.rejection_stage = ReviewStage(stage).value

        self.raise_(
            RevisionRequested(
                assessment_id=str(self.id),
                product_id=str(self.product_id),
                previous_status=previous.value,
                reason=reason,
                stage=self.rejection_stage,
                revision_requested_at=now,
            )
        )

    def resubmit(self):
        """Send a revised product back to digital review on the same record."""
        now = self._move(AssessmentAction.RESUBMIT)
        self.resubmitted_at = now

        self.raise_(
            AssessmentResubmitted(
                assessment_id=str(self.id),
                product_id=str(self.product_id),
                resubmitted_at=now,
            )
        )
