"""Status synchronizer: keeps the product's sellability flag in step with its assessment.

`derive_product_status` is the pure half; `sync_product_status` writes the
result onto the product inside the caller's unit of work.
"""

import structlog
from protean.utils.globals import current_domain

from quality.product.product import Product
from quality.shared.status import AssessmentStatus, ProductApprovalStatus

logger = structlog.get_logger(__name__)

_PRODUCT_STATUS = {
    AssessmentStatus.PENDING_DIGITAL_REVIEW: ProductApprovalStatus.PENDING,
    AssessmentStatus.WAITING_FOR_SAMPLE: ProductApprovalStatus.PENDING,
    AssessmentStatus.IN_QUALITY_REVIEW: ProductApprovalStatus.PENDING,
    AssessmentStatus.FOR_REVISION: ProductApprovalStatus.PENDING,
    AssessmentStatus.ACTIVE_VERIFIED: ProductApprovalStatus.APPROVED,
    AssessmentStatus.REJECTED: ProductApprovalStatus.REJECTED,
}

# Statuses whose reviewer reason is shown to the seller on the listing
_REASON_VISIBLE = frozenset({AssessmentStatus.REJECTED, AssessmentStatus.FOR_REVISION})


def derive_product_status(status: AssessmentStatus) -> ProductApprovalStatus:
    return _PRODUCT_STATUS[AssessmentStatus(status)]


def sync_product_status(assessment, product=None):
    """Write the derived approval status (and reason) onto the assessed product.

    `product` may be passed when the caller already holds it, e.g. when it was
    created in the same unit of work and is not yet readable from the store.
    """
    repo = current_domain.repository_for(Product)
    if product is None:
        product = repo.get(assessment.product_id)

    status = assessment.current_status
    approval_status = derive_product_status(status)
    reason = assessment.rejection_reason if status in _REASON_VISIBLE else None

    product.sync_approval_status(approval_status, rejection_reason=reason)
    repo.add(product)

    logger.debug(
        "Product approval status synced",
        product_id=str(product.id),
        assessment_status=status.value,
        approval_status=approval_status.value,
    )
    return product
