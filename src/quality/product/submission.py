"""Product submission: command and handler.

Submitting a product and opening its assessment happen in one unit of work,
so a product is never persisted without the record that gates its sale.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from quality.assessment.creation import open_assessment_for
from quality.domain import quality
from quality.product.product import Product


@quality.command(part_of="Product")
class SubmitProduct:
    name: String(required=True, max_length=255)
    seller_id: Identifier()
    price: Float(min_value=0.0)
    description: Text()
    category: String(max_length=100)
    images: Text()  # JSON array of image URLs
    variants: Text()  # JSON array of {variant_name, sku, price, stock}


@quality.command_handler(part_of=Product)
class SubmitProductHandler:
    @handle(SubmitProduct)
    def submit_product(self, command):
        product = Product.submit(
            name=command.name,
            seller_id=command.seller_id,
            price=command.price,
            description=command.description,
            category=command.category,
            images=json.loads(command.images) if command.images else None,
            variants=json.loads(command.variants) if command.variants else None,
        )
        current_domain.repository_for(Product).add(product)

        open_assessment_for(product)
        return str(product.id)
