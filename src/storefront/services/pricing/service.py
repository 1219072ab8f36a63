# services/pricing/service.py

from __future__ import annotations

from dataclasses import dataclass

from ...config import Settings, settings
from ...models.domain import CartSnapshot, PricingBreakdown


@dataclass(frozen=True, slots=True)
class TierConfig:
    """Charge policy for a cart.

    Below ``free_delivery_threshold`` the cart pays both ``base_delivery_fee``
    and ``small_cart_fee``; at or above it (inclusive) both are waived.
    ``handling_fee`` applies to every non-empty cart.
    """

    free_delivery_threshold: float = 100.0
    base_delivery_fee: float = 25.0
    handling_fee: float = 2.0
    small_cart_fee: float = 20.0

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "TierConfig":
        config = config or settings
        return cls(
            free_delivery_threshold=config.free_delivery_threshold,
            base_delivery_fee=config.base_delivery_fee,
            handling_fee=config.handling_fee,
            small_cart_fee=config.small_cart_fee,
        )


def price(snapshot: CartSnapshot, tiers: TierConfig) -> PricingBreakdown:
    """Price a cart snapshot. Pure: same snapshot and tiers give the same breakdown."""

    subtotal = snapshot.subtotal
    item_count = snapshot.item_count
    total_weight = snapshot.total_weight

    # never charge fees on an empty cart
    if snapshot.is_empty:
        return PricingBreakdown(
            subtotal=0.0,
            item_count=0,
            total_weight=0.0,
            delivery_charge=0.0,
            handling_charge=0.0,
            small_cart_charge=0.0,
            grand_total=0.0,
        )

    qualifies = subtotal >= tiers.free_delivery_threshold
    delivery_charge = 0.0 if qualifies else tiers.base_delivery_fee
    small_cart_charge = 0.0 if qualifies else tiers.small_cart_fee
    handling_charge = tiers.handling_fee

    grand_total = round(subtotal + delivery_charge + handling_charge + small_cart_charge, 2)
    return PricingBreakdown(
        subtotal=subtotal,
        item_count=item_count,
        total_weight=total_weight,
        delivery_charge=delivery_charge,
        handling_charge=handling_charge,
        small_cart_charge=small_cart_charge,
        grand_total=grand_total,
        delivery_savings=tiers.base_delivery_fee if qualifies else 0.0,
    )


class PricingEngine:
    # Binds a tier policy so call sites never repeat the fee constants.

    def __init__(self, tiers: TierConfig | None = None):
        self.tiers = tiers or TierConfig.from_settings()

    def price(self, snapshot: CartSnapshot) -> PricingBreakdown:
        return price(snapshot, self.tiers)
