"""Application tests for OpenAssessment: opening is an upsert keyed by product."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from quality.assessment.assessment import Assessment
from quality.assessment.creation import OpenAssessment, resolve_vendor_name
from quality.product.product import Product
from quality.seller.seller import Seller
from quality.shared.status import AssessmentStatus


def _open(product_id, vendor=None):
    return current_domain.process(OpenAssessment(product_id=product_id, vendor=vendor), asynchronous=False)


class TestOpenAssessment:
    def test_opens_for_orphan(self, orphan_product, assessment_of):
        product_id = orphan_product()

        assessment_id = _open(product_id)

        assessment = assessment_of(product_id)
        assert str(assessment.id) == assessment_id
        assert assessment.current_status == AssessmentStatus.PENDING_DIGITAL_REVIEW

    def test_explicit_vendor_name_wins(self, orphan_product, assessment_of):
        product_id = orphan_product()

        _open(product_id, vendor="Admin Entered Vendor")

        assert assessment_of(product_id).vendor == "Admin Entered Vendor"

    def test_second_open_returns_existing(self, orphan_product):
        product_id = orphan_product()

        first = _open(product_id)
        second = _open(product_id)

        assert first == second
        assert len(current_domain.repository_for(Assessment).find_all()) == 1

    def test_open_for_submitted_product_is_a_no_op(self, submit_product, assessment_of):
        product_id = submit_product()
        existing = assessment_of(product_id)

        assert _open(product_id) == str(existing.id)
        assert len(current_domain.repository_for(Assessment).find_all()) == 1

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _open("no-such-product")


class TestUniqueness:
    def test_store_refuses_second_assessment_for_product(self, submit_product):
        product_id = submit_product()

        with pytest.raises(ValidationError):
            current_domain.repository_for(Assessment).add(Assessment.open(product_id=product_id))

    def test_lookup_of_absent_assessment_returns_none(self):
        assert current_domain.repository_for(Assessment).find_by_product_id("no-such-product") is None


class TestResolveVendorName:
    def test_store_name(self):
        seller = Seller(store_name="Toko Batik Sari")
        product = Product(name="Batik Tulis Shirt")
        assert resolve_vendor_name(seller, product) == "Toko Batik Sari"

    def test_product_name_when_store_unnamed(self):
        seller = Seller(owner_name="Sari")
        product = Product(name="Batik Tulis Shirt")
        assert resolve_vendor_name(seller, product) == "Batik Tulis Shirt"

    def test_product_name_without_seller(self):
        assert resolve_vendor_name(None, Product(name="Batik Tulis Shirt")) == "Batik Tulis Shirt"

    def test_unknown(self):
        assert resolve_vendor_name(None, None) == "Unknown"
