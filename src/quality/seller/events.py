"""Domain events for the Seller aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from quality.domain import quality


@quality.event(part_of="Seller")
class SellerRegistered:
    """A seller storefront was registered on the marketplace."""

    __version__ = 1

    seller_id: Identifier(required=True)
    store_name: String()
    owner_name: String()
    tier: String(required=True)
    registered_at: DateTime(required=True)


@quality.event(part_of="Seller")
class SellerTierChanged:
    """A seller was promoted to, or demoted from, trusted-brand status."""

    __version__ = 1

    seller_id: Identifier(required=True)
    previous_tier: String(required=True)
    new_tier: String(required=True)
    bypasses_assessment: Boolean(required=True)
    changed_at: DateTime(required=True)
