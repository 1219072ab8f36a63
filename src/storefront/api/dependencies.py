"""Process-wide service wiring for the route handlers."""

from __future__ import annotations

from functools import lru_cache

from ..persistence.repositories import get_cart_store, get_order_sink
from ..services.cart.registry import CartRegistry
from ..services.checkout.service import CheckoutOrchestrator
from ..services.pricing.service import PricingEngine
from ..services.zoning.service import get_resolver


@lru_cache(maxsize=1)
def get_cart_registry() -> CartRegistry:
    return CartRegistry(get_cart_store())


@lru_cache(maxsize=1)
def get_pricing_engine() -> PricingEngine:
    return PricingEngine()


@lru_cache(maxsize=1)
def get_orchestrator() -> CheckoutOrchestrator:
    return CheckoutOrchestrator(get_resolver(), get_pricing_engine(), get_order_sink())
