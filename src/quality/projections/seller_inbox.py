"""SellerInbox: review outcomes a seller needs to act on or know about."""

import uuid

import structlog
from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from quality.assessment.assessment import Assessment
from quality.assessment.events import (
    AssessmentOpened,
    AssessmentRejected,
    QualityCheckPassed,
    RevisionRequested,
    SampleRequested,
)
from quality.assessment.repository import fetch_all
from quality.domain import quality
from quality.product.product import Product

logger = structlog.get_logger(__name__)


@quality.projection
class SellerInbox:
    message_id = Identifier(identifier=True, required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    kind = String(required=True, max_length=30)
    message = Text(required=True)
    created_at = DateTime()


@quality.projector(projector_for=SellerInbox, aggregates=[Assessment])
class SellerInboxProjector:
    def _notify(self, product_id, kind, message_for, created_at):
        try:
            product = current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            logger.warning("Cannot notify seller, product not found", product_id=str(product_id), kind=kind)
            return
        if not product.seller_id:
            return

        current_domain.repository_for(SellerInbox).add(
            SellerInbox(
                message_id=str(uuid.uuid4()),
                seller_id=str(product.seller_id),
                product_id=str(product.id),
                product_name=product.name,
                kind=kind,
                message=message_for(product.name),
                created_at=created_at,
            )
        )

    @on(AssessmentOpened)
    def on_assessment_opened(self, event):
        if event.bypassed:
            self._notify(
                event.product_id,
                "approved",
                lambda name: f"{name} is live. Trusted brand products skip quality review.",
                event.submitted_at,
            )

    @on(SampleRequested)
    def on_sample_requested(self, event):
        self._notify(
            event.product_id,
            "sample_requested",
            lambda name: f"{name} passed digital review. Please send a physical sample.",
            event.approved_at,
        )

    @on(QualityCheckPassed)
    def on_quality_check_passed(self, event):
        self._notify(
            event.product_id,
            "approved",
            lambda name: f"{name} passed quality review and is now live.",
            event.verified_at,
        )

    @on(AssessmentRejected)
    def on_assessment_rejected(self, event):
        self._notify(
            event.product_id,
            "rejected",
            lambda name: f"{name} was rejected during {event.stage} review: {event.reason}",
            event.rejected_at,
        )

    @on(RevisionRequested)
    def on_revision_requested(self, event):
        self._notify(
            event.product_id,
            "revision_requested",
            lambda name: f"{name} needs changes after {event.stage} review: {event.reason}",
            event.revision_requested_at,
        )


def inbox_for(seller_id) -> list[SellerInbox]:
    """A seller's messages, newest first."""
    dao = current_domain.repository_for(SellerInbox)._dao
    return list(fetch_all(dao.query.filter(seller_id=str(seller_id)).order_by("-created_at")))
