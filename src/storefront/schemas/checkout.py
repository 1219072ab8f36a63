"""Pydantic request/response models for checkout endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import LocationFix, OrderContact, PricedOrder
from .cart import LineItemModel
from .common import CoordinateModel


class LocationInput(BaseModel):
    """Result of the client's location acquisition: a fix, or why there is none."""

    coordinate: Optional[CoordinateModel] = None
    error: Optional[str] = Field(default=None, description="denied, timeout, unavailable, ...")

    def to_domain(self) -> LocationFix:
        return LocationFix(
            coordinate=self.coordinate.to_domain() if self.coordinate else None,
            reason=self.error,
        )


class ContactModel(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None

    def to_domain(self) -> OrderContact:
        return OrderContact(**self.model_dump())


class QuoteRequest(BaseModel):
    delivery_option: Literal["delivery", "pickup"] = "delivery"
    location: Optional[LocationInput] = None

    def location_fix(self) -> Optional[LocationFix]:
        return self.location.to_domain() if self.location else None


class PlaceOrderRequest(QuoteRequest):
    contact: ContactModel = Field(default_factory=ContactModel)
    payment_method: str = Field(default="COD", description="Only COD (cash on delivery) is accepted.")


class OrderResponse(BaseModel):
    order_id: Optional[str] = None
    status: str
    created_at: datetime
    delivery_option: Literal["delivery", "pickup"]
    zone_code: str
    location: Optional[CoordinateModel] = None
    payment_method: str
    contact: ContactModel
    items: list[LineItemModel]
    item_count: int
    total_weight: float
    subtotal: float
    delivery_charge: float
    handling_charge: float
    small_cart_charge: float
    grand_total: float

    @classmethod
    def from_order(cls, order: PricedOrder) -> "OrderResponse":
        return cls(
            order_id=order.order_id,
            status=order.status,
            created_at=order.created_at,
            delivery_option=order.delivery_option,
            zone_code=order.zone_code,
            location=CoordinateModel.from_domain(order.location) if order.location else None,
            payment_method=order.payment_method,
            contact=ContactModel(**asdict(order.contact)),
            items=[LineItemModel(**asdict(item), line_total=item.line_total) for item in order.items.items],
            item_count=order.item_count,
            total_weight=order.total_weight,
            subtotal=order.subtotal,
            delivery_charge=order.delivery_charge,
            handling_charge=order.handling_charge,
            small_cart_charge=order.small_cart_charge,
            grand_total=order.grand_total,
        )
