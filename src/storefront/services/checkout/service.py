"""High-level orchestration for checkout: zone resolution + pricing -> priced order."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Sequence, Union

from ...config import settings
from ...errors import EmptyCart, InvalidContact, MissingLocation, OutOfServiceArea, PaymentMethodUnavailable
from ...models.domain import (
    OUT_OF_SERVICE,
    CartSnapshot,
    Coordinate,
    DeliveryOption,
    LocationFix,
    OrderContact,
    PricedOrder,
    Zone,
)
from ...persistence.repositories import OrderSink
from ..cart.aggregate import CartAggregate
from ..pricing.service import PricingEngine
from ..zoning.service import ZoneResolver

LocationInput = Union[Coordinate, LocationFix, None]


def _coordinate_of(location: LocationInput) -> tuple[Coordinate | None, str | None]:
    if isinstance(location, LocationFix):
        return location.coordinate, location.reason
    return location, None


def _new_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex[:12].upper()}"


class CheckoutOrchestrator:
    """Compose zone resolution and cart pricing into a submittable order.

    This is the only place where the two meet, and the only place that turns
    core failures into customer-facing ``CheckoutError``s. Zone and pricing
    arithmetic live in their own services and are never repeated here.
    """

    def __init__(
        self,
        resolver: ZoneResolver,
        pricing: PricingEngine,
        order_sink: OrderSink | None = None,
        *,
        pickup_zone_code: str | None = None,
        refuse_out_of_service: bool | None = None,
        accepted_payment_methods: Sequence[str] | None = None,
    ):
        self.resolver = resolver
        self.pricing = pricing
        self.order_sink = order_sink
        self.pickup_zone_code = pickup_zone_code or settings.pickup_zone_code
        self.refuse_out_of_service = (
            settings.refuse_out_of_service if refuse_out_of_service is None else refuse_out_of_service
        )
        self.accepted_payment_methods = tuple(
            m.upper() for m in (accepted_payment_methods or settings.accepted_payment_methods)
        )

    def build_order(
        self,
        snapshot: CartSnapshot,
        location: LocationInput,
        delivery_option: DeliveryOption,
        zones: Sequence[Zone],
    ) -> PricedOrder:
        if snapshot.item_count == 0:
            raise EmptyCart()

        breakdown = self.pricing.price(snapshot)

        if delivery_option == "pickup":
            # pickup pays subtotal + handling only
            return PricedOrder(
                items=snapshot,
                subtotal=breakdown.subtotal,
                delivery_charge=0.0,
                handling_charge=breakdown.handling_charge,
                small_cart_charge=0.0,
                grand_total=round(breakdown.subtotal + breakdown.handling_charge, 2),
                zone_code=self.pickup_zone_code,
                delivery_option="pickup",
            )

        if delivery_option != "delivery":
            raise ValueError(f"Unknown delivery option '{delivery_option}'.")

        coordinate, reason = _coordinate_of(location)
        if coordinate is None:
            raise MissingLocation(reason)

        zone_code = self.resolver.resolve(coordinate, zones)
        return PricedOrder(
            items=snapshot,
            subtotal=breakdown.subtotal,
            delivery_charge=breakdown.delivery_charge,
            handling_charge=breakdown.handling_charge,
            small_cart_charge=breakdown.small_cart_charge,
            grand_total=breakdown.grand_total,
            zone_code=zone_code,
            delivery_option="delivery",
            location=coordinate,
        )

    def place_order(
        self,
        cart: CartAggregate,
        location: LocationInput,
        delivery_option: DeliveryOption,
        zones: Sequence[Zone],
        contact: OrderContact,
        payment_method: str = "COD",
    ) -> PricedOrder:
        """Validate, price and hand the order to the sink, then empty the cart."""
        if self.order_sink is None:
            raise RuntimeError("CheckoutOrchestrator has no order sink configured.")

        method = payment_method.strip().upper()
        if method not in self.accepted_payment_methods:
            raise PaymentMethodUnavailable(payment_method)
        if not (contact.phone or "").strip():
            raise InvalidContact("Please enter your phone number.")
        if delivery_option == "delivery" and not (contact.address or "").strip():
            raise InvalidContact("Please enter a delivery address.")

        if delivery_option == "pickup":
            contact = replace(contact, address="Store Pickup")

        # Items added while the order is being stored wait for the clear and survive it.
        with cart.transaction():
            order = self.build_order(cart.snapshot(), location, delivery_option, zones)
            if order.zone_code == OUT_OF_SERVICE and self.refuse_out_of_service:
                raise OutOfServiceArea(order.zone_code)
            order = replace(order, order_id=_new_order_id(), payment_method=method, contact=contact)

            order_id = self.order_sink.save_order(order)
            cart.clear()

        logging.info(
            f"Order {order_id} placed: {order.delivery_option} zone={order.zone_code} "
            f"items={order.item_count} total={order.grand_total}"
        )
        return order
