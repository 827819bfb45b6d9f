"""Shared BDD fixtures and step definitions for the assessment workflow."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from quality.assessment.assessment import Assessment
from quality.assessment.queue import AssessmentQueue
from quality.audit.records import ApprovalRecord, LogisticsRecord, RejectionRecord, RevisionRecord
from quality.errors import GuardViolation
from quality.product.product import Product
from quality.product.submission import SubmitProduct
from quality.seller.management import RegisterSeller

_LEDGERS = {
    "approval": ApprovalRecord,
    "rejection": RejectionRecord,
    "revision": RevisionRecord,
    "logistics": LogisticsRecord,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def queue():
    return AssessmentQueue()


def _assessment(product_id):
    return current_domain.repository_for(Assessment).find_by_product_id(product_id)


def _ledger(kind, product_id):
    dao = current_domain.repository_for(_LEDGERS[kind])._dao
    assessment_id = str(_assessment(product_id).id)
    return dao.query.filter(assessment_id=assessment_id).order_by("created_at").all().items


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a seller "{store_name}"'), target_fixture="seller_id")
def a_seller(store_name):
    return current_domain.process(RegisterSeller(store_name=store_name), asynchronous=False)


@given(parsers.cfparse('the seller submitted a product "{name}"'), target_fixture="product_id")
def submitted_product(seller_id, name, queue):
    product_id = current_domain.process(
        SubmitProduct(name=name, seller_id=seller_id, price=450000.0, category="Apparel"),
        asynchronous=False,
    )
    queue.load()
    return product_id


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the assessment status is "{status}"'))
def assessment_status_is(product_id, queue, status):
    assert _assessment(product_id).current_status.value == status
    assert queue.get_by_id(product_id).status.value == status


@then(parsers.cfparse('the product approval status is "{status}"'))
def product_approval_status_is(product_id, status):
    assert current_domain.repository_for(Product).get(product_id).approval_status == status


@then(parsers.cfparse('the newest {kind} record reads "{description}"'))
def newest_record_reads(product_id, kind, description):
    records = _ledger(kind, product_id)
    assert records, f"no {kind} records"
    assert records[-1].description == description


@then(parsers.cfparse("the assessment has {count:d} approval records"))
def approval_record_count(product_id, count):
    assert len(_ledger("approval", product_id)) == count


@then("the verified timestamp is set")
def verified_timestamp_set(product_id):
    assert _assessment(product_id).verified_at is not None


@then("the revision timestamp is set")
def revision_timestamp_set(product_id):
    assert _assessment(product_id).revision_requested_at is not None


@then("the transition is refused as not allowed")
def refused_by_guard(error):
    assert isinstance(error["exc"], GuardViolation)


@then("the request is refused as invalid")
def refused_as_invalid(error):
    assert isinstance(error["exc"], ValidationError)
    assert not isinstance(error["exc"], GuardViolation)
