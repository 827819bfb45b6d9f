"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from quality.domain import quality


@quality.event(part_of="Product")
class ProductSubmitted:
    """A seller submitted a new product for the quality review."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier()
    name: String(required=True)
    category: String()
    price: Float()
    variant_count: Integer(default=0)
    submitted_at: DateTime(required=True)


@quality.event(part_of="Product")
class ProductApprovalStatusChanged:
    """The product's sellability flag moved after a review decision."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier()
    previous_status: String(required=True)
    new_status: String(required=True)
    rejection_reason: Text()
    changed_at: DateTime(required=True)
