"""Opening assessments: the command, its handler, and the shared helper.

An assessment is opened once per product. `OpenAssessment` is an upsert keyed
by `product_id`: if the product already has one, it is returned untouched.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from quality.assessment.assessment import Assessment
from quality.assessment.synchronizer import sync_product_status
from quality.audit.recorder import AuditTrailRecorder
from quality.domain import quality
from quality.product.product import Product
from quality.seller.seller import Seller

logger = structlog.get_logger(__name__)

UNKNOWN_VENDOR = "Unknown"


def resolve_vendor_name(seller=None, product=None) -> str:
    """Seller's store name, else the product's own name, else "Unknown"."""
    if seller is not None and seller.store_name:
        return seller.store_name
    if product is not None and product.name:
        return product.name
    return UNKNOWN_VENDOR


def find_seller(seller_id):
    if not seller_id:
        return None
    try:
        return current_domain.repository_for(Seller).get(seller_id)
    except ObjectNotFoundError:
        return None


def open_assessment_for(product, vendor=None):
    """Create and register the assessment for `product` in the current unit of work.

    Products of trusted-brand sellers are verified on the spot.
    """
    seller = find_seller(product.seller_id)
    bypassed = seller is not None and seller.bypasses_assessment
    vendor = vendor or resolve_vendor_name(seller, product)

    assessment = Assessment.open(product_id=str(product.id), vendor=vendor, bypassed=bypassed)
    current_domain.repository_for(Assessment).add(assessment)

    if bypassed:
        AuditTrailRecorder().record_bypass(assessment)
        sync_product_status(assessment, product=product)

    logger.info(
        "Assessment opened",
        product_id=str(product.id),
        assessment_id=str(assessment.id),
        vendor=vendor,
        bypassed=bypassed,
    )
    return assessment


@quality.command(part_of="Assessment")
class OpenAssessment:
    """Open the assessment for an existing product (no-op if it already has one)."""

    product_id: Identifier(required=True)
    vendor: String(max_length=255)


@quality.command_handler(part_of=Assessment)
class OpenAssessmentHandler:
    @handle(OpenAssessment)
    def open_assessment(self, command):
        existing = current_domain.repository_for(Assessment).find_by_product_id(command.product_id)
        if existing is not None:
            logger.debug("Assessment already open", product_id=str(command.product_id))
            return str(existing.id)

        product = current_domain.repository_for(Product).get(command.product_id)
        assessment = open_assessment_for(product, vendor=command.vendor)
        return str(assessment.id)
