"""Seller management: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from quality.domain import quality
from quality.seller.seller import Seller


@quality.command(part_of="Seller")
class RegisterSeller:
    store_name: String(max_length=255)
    owner_name: String(max_length=255)
    tier: String(max_length=20)


@quality.command(part_of="Seller")
class ChangeSellerTier:
    seller_id: Identifier(required=True)
    tier: String(required=True, max_length=20)


@quality.command_handler(part_of=Seller)
class ManageSellerHandler:
    @handle(RegisterSeller)
    def register_seller(self, command):
        seller = Seller.register(
            store_name=command.store_name,
            owner_name=command.owner_name,
            tier=command.tier,
        )
        current_domain.repository_for(Seller).add(seller)
        return str(seller.id)

    @handle(ChangeSellerTier)
    def change_tier(self, command):
        repo = current_domain.repository_for(Seller)
        seller = repo.get(command.seller_id)
        seller.change_tier(command.tier)
        repo.add(seller)
