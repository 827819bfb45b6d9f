"""Tests for deriving a product's approval status from its assessment status."""

import pytest

from quality.assessment.synchronizer import derive_product_status
from quality.shared.status import AssessmentStatus, ProductApprovalStatus

EXPECTED = {
    AssessmentStatus.PENDING_DIGITAL_REVIEW: ProductApprovalStatus.PENDING,
    AssessmentStatus.WAITING_FOR_SAMPLE: ProductApprovalStatus.PENDING,
    AssessmentStatus.IN_QUALITY_REVIEW: ProductApprovalStatus.PENDING,
    AssessmentStatus.FOR_REVISION: ProductApprovalStatus.PENDING,
    AssessmentStatus.ACTIVE_VERIFIED: ProductApprovalStatus.APPROVED,
    AssessmentStatus.REJECTED: ProductApprovalStatus.REJECTED,
}


@pytest.mark.parametrize("status", list(AssessmentStatus))
def test_defined_for_every_status(status):
    assert derive_product_status(status) == EXPECTED[status]


@pytest.mark.parametrize("status", list(AssessmentStatus))
def test_deterministic(status):
    results = {derive_product_status(status) for _ in range(5)}
    assert len(results) == 1


def test_never_derives_reclassified():
    assert ProductApprovalStatus.RECLASSIFIED not in {derive_product_status(s) for s in AssessmentStatus}


def test_accepts_canonical_name():
    assert derive_product_status("ACTIVE_VERIFIED") == ProductApprovalStatus.APPROVED
