"""Audit ledgers: append-only records of every review decision.

Each ledger is its own aggregate (and table) keyed to an assessment. Records
are created once by the recorder and never updated or deleted by the
pipeline; nothing reads them back into a transition decision.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from quality.domain import quality
from quality.shared.status import ReviewStage


@quality.aggregate
class ApprovalRecord:
    """A review stage was passed (digital, physical, or bypassed)."""

    assessment_id: Identifier(required=True)
    description: Text(required=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))


@quality.aggregate
class RejectionRecord:
    """The product was rejected, optionally with a category reclassification."""

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    description: Text(required=True)
    stage: String(choices=ReviewStage)
    vendor_submitted_category: String(max_length=100)
    admin_reclassified_category: String(max_length=100)
    created_at: DateTime(default=lambda: datetime.now(UTC))


@quality.aggregate
class RevisionRecord:
    """The seller was asked to revise the product."""

    assessment_id: Identifier(required=True)
    description: Text(required=True)
    stage: String(choices=ReviewStage)
    created_at: DateTime(default=lambda: datetime.now(UTC))


@quality.aggregate
class LogisticsRecord:
    """How the seller delivered the physical sample."""

    assessment_id: Identifier(required=True)
    description: Text(required=True)
    created_at: DateTime(default=lambda: datetime.now(UTC))
