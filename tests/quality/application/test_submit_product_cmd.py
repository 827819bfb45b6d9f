"""Application tests for SubmitProduct: the product and its assessment are created together."""

from protean import current_domain

from quality.assessment.assessment import Assessment
from quality.audit.records import ApprovalRecord
from quality.shared.status import AssessmentStatus


class TestSubmitProduct:
    def test_persists_product(self, submit_product, product_of):
        product_id = submit_product(name="Kopi Gayo 250g", price=85000.0)

        product = product_of(product_id)
        assert product.name == "Kopi Gayo 250g"
        assert product.approval_status == "pending"
        assert len(product.variants) == 1

    def test_opens_assessment(self, submit_product, assessment_of):
        product_id = submit_product()

        assessment = assessment_of(product_id)
        assert assessment is not None
        assert assessment.current_status == AssessmentStatus.PENDING_DIGITAL_REVIEW
        assert assessment.submitted_at is not None
        assert str(assessment.product_id) == product_id

    def test_vendor_is_store_name(self, register_seller, submit_product, assessment_of):
        seller_id = register_seller(store_name="Toko Batik Sari")
        product_id = submit_product(seller_id=seller_id)

        assert assessment_of(product_id).vendor == "Toko Batik Sari"

    def test_vendor_falls_back_to_product_name(self, register_seller, submit_product, assessment_of):
        seller_id = register_seller(store_name=None, owner_name="Budi")
        product_id = submit_product(name="Keripik Tempe", seller_id=seller_id)

        assert assessment_of(product_id).vendor == "Keripik Tempe"

    def test_vendor_for_unknown_seller_is_product_name(self, submit_product, assessment_of):
        product_id = submit_product(name="Keripik Tempe", seller_id="no-such-seller")

        assert assessment_of(product_id).vendor == "Keripik Tempe"

    def test_event_stored(self, submit_product):
        submit_product()

        messages = current_domain.event_store.store.read("quality::product")
        submitted = [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type == "Quality.ProductSubmitted.v1"
        ]
        assert len(submitted) >= 1


class TestTrustedBrandBypass:
    def test_assessment_opens_verified(self, register_seller, submit_product, assessment_of):
        seller_id = register_seller(store_name="Trusted Co", tier="trusted_brand")
        product_id = submit_product(seller_id=seller_id)

        assessment = assessment_of(product_id)
        assert assessment.current_status == AssessmentStatus.ACTIVE_VERIFIED
        assert assessment.verified_at is not None

    def test_product_approved(self, register_seller, submit_product, product_of):
        seller_id = register_seller(store_name="Trusted Co", tier="trusted_brand")
        product_id = submit_product(seller_id=seller_id)

        assert product_of(product_id).approval_status == "approved"

    def test_bypass_recorded_in_approval_ledger(self, register_seller, submit_product, assessment_of):
        seller_id = register_seller(store_name="Trusted Co", tier="trusted_brand")
        product_id = submit_product(seller_id=seller_id)
        assessment = assessment_of(product_id)

        records = (
            current_domain.repository_for(ApprovalRecord)._dao.query.filter(assessment_id=str(assessment.id)).all().items
        )
        assert [r.description for r in records] == ["Trusted brand, quality review bypassed"]

    def test_standard_seller_is_not_bypassed(self, register_seller, submit_product, assessment_of):
        seller_id = register_seller(store_name="Toko Batik Sari")
        product_id = submit_product(seller_id=seller_id)

        assert assessment_of(product_id).current_status == AssessmentStatus.PENDING_DIGITAL_REVIEW

    def test_only_one_assessment_per_submission(self, submit_product):
        submit_product(name="A")
        submit_product(name="B")

        assert len(current_domain.repository_for(Assessment).find_all()) == 2
