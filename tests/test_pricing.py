import pytest

from storefront.models.domain import CartSnapshot, LineItem, Product
from storefront.services.cart.aggregate import CartAggregate
from storefront.services.pricing.service import PricingEngine, TierConfig, price


def _snapshot(*lines: tuple[float, int, float]) -> CartSnapshot:
    return CartSnapshot(
        items=tuple(
            LineItem(product_id=f"P{i}", name=f"Item {i}", unit_price=unit, quantity=qty, unit_weight=weight)
            for i, (unit, qty, weight) in enumerate(lines)
        )
    )


def test_empty_cart_prices_to_zero(tiers: TierConfig):
    breakdown = price(CartSnapshot(), tiers)

    assert breakdown.subtotal == 0
    assert breakdown.delivery_charge == 0
    assert breakdown.handling_charge == 0
    assert breakdown.small_cart_charge == 0
    assert breakdown.grand_total == 0
    assert breakdown.item_count == 0


def test_derived_quantities(tiers: TierConfig):
    breakdown = price(_snapshot((30.0, 2, 1000.0), (40.0, 1, 400.0)), tiers)

    assert breakdown.subtotal == 100.0
    assert breakdown.item_count == 3
    assert breakdown.total_weight == 2400.0


def test_threshold_is_inclusive(tiers: TierConfig):
    at_threshold = price(_snapshot((50.0, 2, 0.0)), tiers)

    assert at_threshold.subtotal == 100.0
    assert at_threshold.delivery_charge == 0
    assert at_threshold.small_cart_charge == 0
    assert at_threshold.handling_charge == 2.0
    assert at_threshold.grand_total == 102.0
    assert at_threshold.delivery_savings == 25.0


def test_below_threshold_pays_delivery_and_small_cart(tiers: TierConfig):
    below = price(_snapshot((99.99, 1, 0.0)), tiers)

    assert below.delivery_charge == 25.0
    assert below.small_cart_charge == 20.0
    assert below.handling_charge == 2.0
    assert below.grand_total == 146.99
    assert below.delivery_savings == 0


def test_subtotal_is_rounded_to_cents(tiers: TierConfig):
    breakdown = price(_snapshot((33.33, 3, 0.0)), tiers)

    assert breakdown.subtotal == 99.99
    assert breakdown.delivery_charge > 0


def test_price_is_pure(tiers: TierConfig):
    snapshot = _snapshot((12.5, 3, 250.0), (7.25, 2, 100.0))

    assert price(snapshot, tiers) == price(snapshot, tiers)


def test_custom_tiers_are_respected():
    tiers = TierConfig(free_delivery_threshold=500.0, base_delivery_fee=40.0, handling_fee=5.0, small_cart_fee=0.0)
    breakdown = price(_snapshot((100.0, 2, 0.0)), tiers)

    assert breakdown.delivery_charge == 40.0
    assert breakdown.small_cart_charge == 0.0
    assert breakdown.grand_total == 245.0


def test_engine_prices_live_cart(tiers: TierConfig, catalog: dict[str, Product]):
    engine = PricingEngine(tiers)
    cart = CartAggregate()
    cart.add(catalog["P2"], 2)

    assert engine.price(cart.snapshot()).grand_total == pytest.approx(80.0 + 25.0 + 2.0 + 20.0)

    cart.add(catalog["P2"])
    assert engine.price(cart.snapshot()).grand_total == 122.0


def test_tier_config_from_settings(monkeypatch: pytest.MonkeyPatch):
    from storefront.services.pricing import service as pricing_service

    monkeypatch.setattr(pricing_service.settings, "handling_fee", 3.5)
    assert TierConfig.from_settings().handling_fee == 3.5
