"""Assessment status vocabulary.

Domain code speaks only in `AssessmentStatus`. The lowercase storage form is
produced and parsed here, through `_STORAGE_FORMS`, and nowhere else.
"""

from enum import Enum


class AssessmentStatus(Enum):
    """Canonical review stages of a product assessment."""

    PENDING_DIGITAL_REVIEW = "PENDING_DIGITAL_REVIEW"
    WAITING_FOR_SAMPLE = "WAITING_FOR_SAMPLE"
    IN_QUALITY_REVIEW = "IN_QUALITY_REVIEW"
    ACTIVE_VERIFIED = "ACTIVE_VERIFIED"
    FOR_REVISION = "FOR_REVISION"
    REJECTED = "REJECTED"


class ProductApprovalStatus(Enum):
    """Sellability flag kept on the product record."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    RECLASSIFIED = "reclassified"


class ReviewStage(Enum):
    """Stage at which a reviewer rejected a product or asked for a revision."""

    DIGITAL = "digital"
    PHYSICAL = "physical"


_STORAGE_FORMS = {
    AssessmentStatus.PENDING_DIGITAL_REVIEW: "pending_digital_review",
    AssessmentStatus.WAITING_FOR_SAMPLE: "waiting_for_sample",
    AssessmentStatus.IN_QUALITY_REVIEW: "pending_physical_review",
    AssessmentStatus.ACTIVE_VERIFIED: "verified",
    AssessmentStatus.FOR_REVISION: "for_revision",
    AssessmentStatus.REJECTED: "rejected",
}

_CANONICAL_FORMS = {stored: status for status, stored in _STORAGE_FORMS.items()}

TERMINAL_STATUSES = frozenset({AssessmentStatus.ACTIVE_VERIFIED, AssessmentStatus.REJECTED})


def to_storage(status: AssessmentStatus | str) -> str:
    """Translate a canonical status (enum or its name) to the persisted value."""
    return _STORAGE_FORMS[AssessmentStatus(status)]


def from_storage(value: str) -> AssessmentStatus:
    """Translate a persisted value back to the canonical status."""
    try:
        return _CANONICAL_FORMS[value]
    except KeyError:
        raise ValueError(f"Unknown stored assessment status: {value!r}") from None


def storage_forms() -> tuple[str, ...]:
    return tuple(_STORAGE_FORMS.values())
