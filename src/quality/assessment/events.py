"""Domain events for the Assessment aggregate.

Statuses in event payloads use the canonical vocabulary (`AssessmentStatus`
names), never the storage form.
"""

from protean.fields import Boolean, DateTime, Identifier, String, Text

from quality.domain import quality


@quality.event(part_of="Assessment")
class AssessmentOpened:
    """A product entered the quality pipeline."""

    __version__ = 1

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    vendor: String()
    status: String(required=True)
    bypassed: Boolean(default=False)
    submitted_at: DateTime(required=True)


@quality.event(part_of="Assessment")
class SampleRequested:
    """Digital review passed; the seller must now send a physical sample."""

    __version__ = 1

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    approved_at: DateTime(required=True)


@quality.event(part_of="Assessment")
class SampleSubmitted:
    """The seller shipped (or scheduled) a physical sample for review."""

    __version__ = 1

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    logistics: Text(required=True)
    sample_submitted_at: DateTime(required=True)


@quality.event(part_of="Assessment")
class QualityCheckPassed:
    """The physical sample passed review; the product is verified."""

    __version__ = 1

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    verified_at: DateTime(required=True)


@quality.event(part_of="Assessment")
class AssessmentRejected:
    """A reviewer rejected the product. Terminal."""

    __version__ = 1

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    previous_status: String(required=True)
    reason: Text(required=True)
    stage: String(required=True)
    rejected_at: DateTime(required=True)


@quality.event(part_of="Assessment")
class RevisionRequested:
    """A reviewer sent the product back to the seller for changes."""

    __version__ = 1

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    previous_status: String(required=True)
    reason: Text(required=True)
    stage: String(required=True)
    revision_requested_at: DateTime(required=True)


@quality.event(part_of="Assessment")
class AssessmentResubmitted:
    """The seller revised the product and sent it back to digital review."""

    __version__ = 1

    assessment_id: Identifier(required=True)
    product_id: Identifier(required=True)
    resubmitted_at: DateTime(required=True)
