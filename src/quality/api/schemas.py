"""Pydantic request/response schemas for the Quality API.

These are separate from Protean commands (anti-corruption pattern).
Assessment reads are served as `AssessmentView`, the same model the
review queue caches.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterSellerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"store_name": "Kopi Kenangan Store", "owner_name": "Sari Wulandari", "tier": "standard"}]
        }
    }

    store_name: str | None = Field(None, max_length=255)
    owner_name: str | None = Field(None, max_length=255)
    tier: str | None = Field(None, max_length=20)


class ChangeSellerTierRequest(BaseModel):
    tier: str = Field(..., max_length=20)


class VariantSchema(BaseModel):
    variant_name: str = Field(..., max_length=255)
    sku: str | None = Field(None, max_length=50)
    price: float | None = Field(None, ge=0)
    stock: int = Field(0, ge=0)


class SubmitProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Batik Tulis Shirt",
                    "seller_id": "seller-042",
                    "price": 450000,
                    "category": "Apparel",
                    "images": ["https://cdn.example.com/batik-front.jpg"],
                    "variants": [{"variant_name": "M", "sku": "BTK-M", "stock": 10}],
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    seller_id: str | None = None
    price: float | None = Field(None, ge=0)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    images: list[str] | None = None
    variants: list[VariantSchema] | None = None


class SubmitSampleRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"logistics": "Drop-off via courier"}]}}

    logistics: str | None = None


class RejectRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"reason": "blurry images", "stage": "digital", "reclassified_category": "Accessories"}]
        }
    }

    reason: str | None = None
    stage: str | None = None
    reclassified_category: str | None = Field(None, max_length=100)


class RequestRevisionRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"reason": "add specs", "stage": "digital"}]}}

    reason: str | None = None
    stage: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class SellerIdResponse(BaseModel):
    seller_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ReconciliationResponse(BaseModel):
    created: list[str]
    failed: list[str]


class InboxMessageResponse(BaseModel):
    message_id: str
    product_id: str
    product_name: str | None = None
    kind: str
    message: str
    created_at: datetime | None = None
