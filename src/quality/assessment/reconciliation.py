"""Reconciliation job: open an assessment for every product that lacks one.

Best effort. Each orphan is handled in its own command (and unit of work); a
failure is logged and the job moves on to the next product. Running it again
is harmless because opening an assessment is an upsert.
"""

from dataclasses import dataclass, field

import structlog
from protean.utils.globals import current_domain

from quality.assessment.assessment import Assessment
from quality.assessment.creation import OpenAssessment
from quality.assessment.repository import fetch_all
from quality.product.product import Product

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReconciliationReport:
    created: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def orphan_count(self) -> int:
        return len(self.created) + len(self.failed)


def find_orphan_product_ids() -> list[str]:
    """Ids of products with no assessment, oldest product first."""
    assessed = current_domain.repository_for(Assessment).assessed_product_ids()
    products = current_domain.repository_for(Product)._dao.query.order_by("created_at")
    return [str(product.id) for product in fetch_all(products) if str(product.id) not in assessed]


def reconcile_orphans() -> ReconciliationReport:
    report = ReconciliationReport()

    # Sequential: the domain context is thread-local, so orphans cannot be fanned out to threads
    for product_id in find_orphan_product_ids():
        try:
            current_domain.process(OpenAssessment(product_id=product_id), asynchronous=False)
        except Exception:
            logger.exception("Failed to open assessment for orphan product", product_id=product_id)
            report.failed.append(product_id)
        else:
            report.created.append(product_id)

    if report.orphan_count:
        logger.info(
            "Orphan products reconciled",
            created=len(report.created),
            failed=len(report.failed),
        )
    return report
