"""Product aggregate: the listing a seller puts up for review.

Product data entry belongs to the seller tooling; the pipeline only reads the
listing for display and writes `approval_status` (and the reviewer's reason)
back onto it.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from quality.domain import quality
from quality.product.events import ProductApprovalStatusChanged, ProductSubmitted
from quality.shared.status import ProductApprovalStatus


@quality.entity(part_of="Product")
class ProductVariant:
    """A purchasable variant of the product (size, colour, ...)."""

    variant_name: String(required=True, max_length=255)
    sku: String(max_length=50)
    price: Float(min_value=0.0)
    stock: Integer(default=0, min_value=0)


@quality.aggregate
class Product:
    seller_id: Identifier()
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    category: String(max_length=100)
    images: Text()  # JSON array of image URLs, primary first
    variants: HasMany(ProductVariant)
    approval_status: String(choices=ProductApprovalStatus, default=ProductApprovalStatus.PENDING.value)
    rejection_reason: Text()
    created_at: DateTime()
    updated_at: DateTime()

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @classmethod
    def submit(cls, name, seller_id=None, price=None, description=None, category=None, images=None, variants=None):
        now = datetime.now(UTC)

        product = cls(
            seller_id=seller_id,
            name=name,
            description=description,
            price=price,
            category=category,
            images=json.dumps(images) if images else None,
            approval_status=ProductApprovalStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for variant in variants or []:
            product.add_variants(
                ProductVariant(
                    variant_name=variant["variant_name"],
                    sku=variant.get("sku"),
                    price=variant.get("price", price),
                    stock=variant.get("stock", 0),
                )
            )

        product.raise_(
            ProductSubmitted(
                product_id=str(product.id),
                seller_id=str(seller_id) if seller_id else None,
                name=name,
                category=category,
                price=price,
                variant_count=len(product.variants),
                submitted_at=now,
            )
        )
        return product

    def sync_approval_status(self, approval_status, rejection_reason=None):
        """Mirror a review decision onto the listing."""
        new_status = ProductApprovalStatus(approval_status)
        previous = self.approval_status
        now = datetime.now(UTC)

        self.approval_status = new_status.value
        self.rejection_reason = rejection_reason
        self.updated_at = now

        if previous != new_status.value:
            self.raise_(
                ProductApprovalStatusChanged(
                    product_id=str(self.id),
                    seller_id=str(self.seller_id) if self.seller_id else None,
                    previous_status=previous,
                    new_status=new_status.value,
                    rejection_reason=rejection_reason,
                    changed_at=now,
                )
            )
