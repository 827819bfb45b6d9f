"""Seller aggregate: the storefront that owns products under review.

Only what the assessment pipeline needs is modelled here: the display names
used to label assessments and the tier that decides whether new products
skip the quality review.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from quality.domain import quality
from quality.seller.events import SellerRegistered, SellerTierChanged


class SellerTier(Enum):
    STANDARD = "standard"
    TRUSTED_BRAND = "trusted_brand"


@quality.aggregate
class Seller:
    store_name: String(max_length=255)
    owner_name: String(max_length=255)
    tier: String(choices=SellerTier, default=SellerTier.STANDARD.value)
    registered_at: DateTime()
    updated_at: DateTime()

    @property
    def bypasses_assessment(self) -> bool:
        return self.tier == SellerTier.TRUSTED_BRAND.value

    @classmethod
    def register(cls, store_name=None, owner_name=None, tier=None):
        now = datetime.now(UTC)
        seller = cls(
            store_name=store_name,
            owner_name=owner_name,
            tier=tier or SellerTier.STANDARD.value,
            registered_at=now,
            updated_at=now,
        )
        seller.raise_(
            SellerRegistered(
                seller_id=str(seller.id),
                store_name=store_name,
                owner_name=owner_name,
                tier=seller.tier,
                registered_at=now,
            )
        )
        return seller

    def change_tier(self, tier):
        try:
            new_tier = SellerTier(tier)
        except ValueError:
            raise ValidationError({"tier": [f"Unknown seller tier '{tier}'"]}) from None

        if new_tier.value == self.tier:
            raise ValidationError({"tier": [f"Seller is already in tier '{self.tier}'"]})

        previous = self.tier
        now = datetime.now(UTC)
        self.tier = new_tier.value
        self.updated_at = now

        self.raise_(
            SellerTierChanged(
                seller_id=str(self.id),
                previous_tier=previous,
                new_tier=new_tier.value,
                bypasses_assessment=self.bypasses_assessment,
                changed_at=now,
            )
        )
