"""Read side of the pipeline: assessments joined to their product, seller and ledgers.

Sellers only ever see assessments of their own products; the filter is
applied here, at the query boundary, not by callers.
"""

from datetime import datetime

from protean.utils.globals import current_domain
from pydantic import BaseModel, ConfigDict

from quality.assessment.assessment import Assessment
from quality.assessment.repository import fetch_all
from quality.audit.recorder import ledger_entries
from quality.product.product import Product
from quality.seller.seller import Seller
from quality.shared.status import AssessmentStatus


class LedgerEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    stage: str | None = None
    vendor_submitted_category: str | None = None
    admin_reclassified_category: str | None = None
    created_at: datetime | None = None


class VariantSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    variant_name: str
    sku: str | None = None
    price: float | None = None
    stock: int | None = None


class ProductSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float | None = None
    category: str | None = None
    images: list[str] = []
    variants: list[VariantSummary] = []
    approval_status: str
    rejection_reason: str | None = None


class AssessmentView(BaseModel):
    """One assessment as the review UIs consume it."""

    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    vendor: str | None = None
    seller_name: str | None = None
    status: AssessmentStatus
    logistics: str | None = None
    rejection_reason: str | None = None
    rejection_stage: str | None = None
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    verified_at: datetime | None = None
    rejected_at: datetime | None = None
    revision_requested_at: datetime | None = None
    resubmitted_at: datetime | None = None
    updated_at: datetime | None = None
    product: ProductSummary | None = None
    approvals: list[LedgerEntry] = []
    rejections: list[LedgerEntry] = []
    revisions: list[LedgerEntry] = []
    logistics_records: list[LedgerEntry] = []


def _ledger_entry(record) -> LedgerEntry:
    return LedgerEntry(
        id=str(record.id),
        description=record.description,
        stage=getattr(record, "stage", None),
        vendor_submitted_category=getattr(record, "vendor_submitted_category", None),
        admin_reclassified_category=getattr(record, "admin_reclassified_category", None),
        created_at=record.created_at,
    )


def _product_summary(product) -> ProductSummary:
    return ProductSummary(
        id=str(product.id),
        name=product.name,
        price=product.price,
        category=product.category,
        images=product.image_urls,
        variants=[
            VariantSummary(
                variant_name=variant.variant_name,
                sku=variant.sku,
                price=variant.price,
                stock=variant.stock,
            )
            for variant in product.variants
        ],
        approval_status=product.approval_status,
        rejection_reason=product.rejection_reason,
    )


def _by_id(aggregate_cls, ids) -> dict:
    ids = sorted({str(i) for i in ids if i})
    if not ids:
        return {}
    queryset = current_domain.repository_for(aggregate_cls)._dao.query.filter(id__in=ids)
    return {str(item.id): item for item in fetch_all(queryset)}


def describe(assessments) -> list[AssessmentView]:
    """Join assessments to their products, sellers and ledger entries."""
    assessments = list(assessments)
    products = _by_id(Product, [a.product_id for a in assessments])
    sellers = _by_id(Seller, [p.seller_id for p in products.values()])
    ledgers = ledger_entries([a.id for a in assessments])

    views = []
    for assessment in assessments:
        product = products.get(str(assessment.product_id))
        seller = sellers.get(str(product.seller_id)) if product is not None and product.seller_id else None
        seller_name = (seller.store_name or seller.owner_name) if seller is not None else None
        entries = ledgers[str(assessment.id)]

        views.append(
            AssessmentView(
                id=str(assessment.id),
                product_id=str(assessment.product_id),
                vendor=assessment.vendor,
                seller_name=seller_name or assessment.vendor,
                status=assessment.current_status,
                logistics=assessment.logistics,
                rejection_reason=assessment.rejection_reason,
                rejection_stage=assessment.rejection_stage,
                submitted_at=assessment.submitted_at,
                approved_at=assessment.approved_at,
                verified_at=assessment.verified_at,
                rejected_at=assessment.rejected_at,
                revision_requested_at=assessment.revision_requested_at,
                resubmitted_at=assessment.resubmitted_at,
                updated_at=assessment.updated_at,
                product=_product_summary(product) if product is not None else None,
                approvals=[_ledger_entry(r) for r in entries["approvals"]],
                rejections=[_ledger_entry(r) for r in entries["rejections"]],
                revisions=[_ledger_entry(r) for r in entries["revisions"]],
                logistics_records=[_ledger_entry(r) for r in entries["logistics"]],
            )
        )
    return views


def _dedupe_by_product(assessments):
    seen = set()
    for assessment in assessments:
        product_id = str(assessment.product_id)
        if product_id in seen:
            continue
        seen.add(product_id)
        yield assessment


def list_assessments(seller_id=None) -> list[AssessmentView]:
    """Most recently submitted first; restricted to one seller's products when `seller_id` is given."""
    repo = current_domain.repository_for(Assessment)

    if seller_id is not None:
        products = current_domain.repository_for(Product)._dao.query.filter(seller_id=str(seller_id))
        product_ids = [str(product.id) for product in fetch_all(products)]
        assessments = repo.find_for_products(product_ids)
    else:
        assessments = repo.find_all()

    return describe(_dedupe_by_product(assessments))


def get_assessment(product_id) -> AssessmentView | None:
    assessment = current_domain.repository_for(Assessment).find_by_product_id(product_id)
    if assessment is None:
        return None
    return describe([assessment])[0]
