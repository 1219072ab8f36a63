"""Pydantic request/response models for cart endpoints."""

from __future__ import annotations

from dataclasses import asdict

from pydantic import BaseModel, Field

from ..models.domain import CartSnapshot, PricingBreakdown


class AddItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, description="Units to add; merged into an existing line.")


class UpdateQuantityRequest(BaseModel):
    quantity: int = Field(..., description="New quantity. Values below 1 remove the line.")


class LineItemModel(BaseModel):
    product_id: str
    name: str
    unit_price: float
    quantity: int
    unit_weight: float
    image_ref: str | None = None
    line_total: float


class PricingModel(BaseModel):
    subtotal: float
    item_count: int
    total_weight: float
    delivery_charge: float
    handling_charge: float
    small_cart_charge: float
    grand_total: float
    delivery_savings: float = 0.0


class CartResponse(BaseModel):
    cart_id: str
    items: list[LineItemModel]
    item_count: int
    subtotal: float
    total_weight: float
    pricing: PricingModel

    @classmethod
    def build(cls, cart_id: str, snapshot: CartSnapshot, pricing: PricingBreakdown) -> "CartResponse":
        return cls(
            cart_id=cart_id,
            items=[LineItemModel(**asdict(item), line_total=item.line_total) for item in snapshot.items],
            item_count=snapshot.item_count,
            subtotal=snapshot.subtotal,
            total_weight=snapshot.total_weight,
            pricing=PricingModel(**asdict(pricing)),
        )
