"""Repository for the Assessment aggregate.

Every read and write of assessment records goes through here. Single-row
lookups return `None` for zero rows; callers decide whether absence is an
error.
"""

from quality.assessment.assessment import Assessment
from quality.domain import quality
from quality.shared.status import AssessmentStatus, to_storage

_PAGE_SIZE = 100


def fetch_all(queryset, page_size=_PAGE_SIZE):
    """Yield every row of a queryset, page by page."""
    offset = 0
    while True:
        page = queryset.offset(offset).limit(page_size).all()
        yield from page.items
        if not page.has_next:
            return
        offset += page_size


@quality.repository(part_of=Assessment)
class AssessmentRepository:
    def find_by_product_id(self, product_id) -> Assessment | None:
        """Return the product's assessment, or None when it has none."""
        results = self._dao.query.filter(product_id=str(product_id)).all()
        return results.first

    def find_for_products(self, product_ids) -> list[Assessment]:
        product_ids = [str(pid) for pid in product_ids]
        if not product_ids:
            return []
        queryset = self._dao.query.filter(product_id__in=product_ids).order_by("-submitted_at")
        return list(fetch_all(queryset))

    def find_all(self) -> list[Assessment]:
        """Every assessment, most recently submitted first."""
        return list(fetch_all(self._dao.query.order_by("-submitted_at")))

    def find_by_status(self, status: AssessmentStatus) -> list[Assessment]:
        queryset = self._dao.query.filter(status=to_storage(status)).order_by("-submitted_at")
        return list(fetch_all(queryset))

    def assessed_product_ids(self) -> set[str]:
        return {str(assessment.product_id) for assessment in self.find_all()}
