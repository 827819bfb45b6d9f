"""FastAPI routes for the Quality bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Store failures surface as
`PersistenceError`; validation, guard and not-found errors pass through to
the registered exception handlers.
"""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from quality.api.schemas import (
    ChangeSellerTierRequest,
    InboxMessageResponse,
    ProductIdResponse,
    ReconciliationResponse,
    RegisterSellerRequest,
    RejectRequest,
    RequestRevisionRequest,
    SellerIdResponse,
    StatusResponse,
    SubmitProductRequest,
    SubmitSampleRequest,
)
from quality.assessment.queries import AssessmentView, get_assessment, list_assessments
from quality.assessment.queue import call_store
from quality.assessment.reconciliation import reconcile_orphans
from quality.assessment.transitions import (
    ApproveForSample,
    PassQualityCheck,
    RejectProduct,
    RequestRevision,
    ResubmitProduct,
    SubmitSample,
)
from quality.errors import AssessmentNotFound
from quality.product.submission import SubmitProduct
from quality.projections.seller_inbox import inbox_for
from quality.seller.management import ChangeSellerTier, RegisterSeller

seller_router = APIRouter(prefix="/sellers", tags=["sellers"])
product_router = APIRouter(prefix="/products", tags=["products"])
assessment_router = APIRouter(prefix="/assessments", tags=["assessments"])


def _process(command):
    return call_store(current_domain.process, command, asynchronous=False)


def _view(product_id) -> AssessmentView:
    view = call_store(get_assessment, product_id)
    if view is None:
        raise AssessmentNotFound(product_id)
    return view


# ---------------------------------------------------------------------------
# Sellers
# ---------------------------------------------------------------------------
@seller_router.post("", status_code=201, response_model=SellerIdResponse)
async def register_seller(body: RegisterSellerRequest) -> SellerIdResponse:
    seller_id = _process(
        RegisterSeller(store_name=body.store_name, owner_name=body.owner_name, tier=body.tier)
    )
    return SellerIdResponse(seller_id=seller_id)


@seller_router.put("/{seller_id}/tier", response_model=StatusResponse)
async def change_seller_tier(seller_id: str, body: ChangeSellerTierRequest) -> StatusResponse:
    """Move a seller between the standard and trusted-brand tiers."""
    _process(ChangeSellerTier(seller_id=seller_id, tier=body.tier))
    return StatusResponse()


@seller_router.get("/{seller_id}/inbox", response_model=list[InboxMessageResponse])
async def seller_inbox(seller_id: str) -> list[InboxMessageResponse]:
    messages = call_store(inbox_for, seller_id)
    return [
        InboxMessageResponse(
            message_id=str(m.message_id),
            product_id=str(m.product_id),
            product_name=m.product_name,
            kind=m.kind,
            message=m.message,
            created_at=m.created_at,
        )
        for m in messages
    ]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def submit_product(body: SubmitProductRequest) -> ProductIdResponse:
    """Submit a product; its assessment is opened in the same transaction."""
    command = SubmitProduct(
        name=body.name,
        seller_id=body.seller_id,
        price=body.price,
        description=body.description,
        category=body.category,
        images=json.dumps(body.images) if body.images else None,
        variants=json.dumps([v.model_dump() for v in body.variants]) if body.variants else None,
    )
    product_id = _process(command)
    return ProductIdResponse(product_id=product_id)


# ---------------------------------------------------------------------------
# Assessments
# ---------------------------------------------------------------------------
@assessment_router.get("", response_model=list[AssessmentView])
async def get_assessments(seller_id: str | None = None) -> list[AssessmentView]:
    """A seller's assessments, or the whole queue (after reconciling orphans) for admins."""
    if seller_id is None:
        call_store(reconcile_orphans)
    return call_store(list_assessments, seller_id)


@assessment_router.post("/reconcile", response_model=ReconciliationResponse)
async def reconcile() -> ReconciliationResponse:
    report = call_store(reconcile_orphans)
    return ReconciliationResponse(created=report.created, failed=report.failed)


@assessment_router.get("/{product_id}", response_model=AssessmentView)
async def get_assessment_for_product(product_id: str) -> AssessmentView:
    return _view(product_id)


@assessment_router.put("/{product_id}/approve-for-sample", response_model=AssessmentView)
async def approve_for_sample(product_id: str) -> AssessmentView:
    _process(ApproveForSample(product_id=product_id))
    return _view(product_id)


@assessment_router.put("/{product_id}/sample", response_model=AssessmentView)
async def submit_sample(product_id: str, body: SubmitSampleRequest) -> AssessmentView:
    _process(SubmitSample(product_id=product_id, logistics=body.logistics))
    return _view(product_id)


@assessment_router.put("/{product_id}/pass", response_model=AssessmentView)
async def pass_quality_check(product_id: str) -> AssessmentView:
    _process(PassQualityCheck(product_id=product_id))
    return _view(product_id)


@assessment_router.put("/{product_id}/reject", response_model=AssessmentView)
async def reject(product_id: str, body: RejectRequest) -> AssessmentView:
    _process(
        RejectProduct(
            product_id=product_id,
            reason=body.reason,
            stage=body.stage,
            reclassified_category=body.reclassified_category,
        )
    )
    return _view(product_id)


@assessment_router.put("/{product_id}/revision", response_model=AssessmentView)
async def request_revision(product_id: str, body: RequestRevisionRequest) -> AssessmentView:
    _process(RequestRevision(product_id=product_id, reason=body.reason, stage=body.stage))
    return _view(product_id)


@assessment_router.put("/{product_id}/resubmit", response_model=AssessmentView)
async def resubmit(product_id: str) -> AssessmentView:
    """Seller sends a revised product back to digital review."""
    _process(ResubmitProduct(product_id=product_id))
    return _view(product_id)
