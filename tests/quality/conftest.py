"""Shared fixtures for the quality domain tests."""

import json

import pytest
from protean import current_domain

from quality.assessment.assessment import Assessment
from quality.product.product import Product
from quality.product.submission import SubmitProduct
from quality.seller.management import RegisterSeller


@pytest.fixture()
def register_seller():
    """Register a seller through the command path and return its id."""

    def _register(store_name="Toko Batik Sari", owner_name="Sari", tier=None):
        return current_domain.process(
            RegisterSeller(store_name=store_name, owner_name=owner_name, tier=tier),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def submit_product():
    """Submit a product (which opens its assessment) and return the product id."""

    def _submit(name="Batik Tulis Shirt", seller_id=None, price=450000.0, category="Apparel", **overrides):
        fields = {
            "name": name,
            "seller_id": seller_id,
            "price": price,
            "category": category,
            "images": json.dumps(["https://cdn.example.com/batik-front.jpg"]),
            "variants": json.dumps([{"variant_name": "M", "sku": "BTK-M", "stock": 10}]),
        }
        fields.update(overrides)
        return current_domain.process(SubmitProduct(**fields), asynchronous=False)

    return _submit


@pytest.fixture()
def orphan_product():
    """Store a product directly, bypassing submission, so it has no assessment."""

    def _orphan(name="Orphaned Sambal", seller_id=None, category="Food"):
        product = Product.submit(name=name, seller_id=seller_id, price=35000.0, category=category)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    return _orphan


@pytest.fixture()
def assessment_of():
    def _get(product_id):
        return current_domain.repository_for(Assessment).find_by_product_id(product_id)

    return _get


@pytest.fixture()
def product_of():
    def _get(product_id):
        return current_domain.repository_for(Product).get(product_id)

    return _get
