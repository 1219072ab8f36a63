"""API routes for shopping carts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...data.catalog_repository import get_product
from ...errors import ProductNotFound
from ...schemas.cart import AddItemRequest, CartResponse, UpdateQuantityRequest
from ...services.cart.registry import CartRegistry
from ...services.pricing.service import PricingEngine
from ..dependencies import get_cart_registry, get_pricing_engine

router = APIRouter(prefix="/carts", tags=["carts"])


@router.get("/{cart_id}", response_model=CartResponse)
def get_cart(
    cart_id: str,
    registry: CartRegistry = Depends(get_cart_registry),
    pricing: PricingEngine = Depends(get_pricing_engine),
) -> CartResponse:
    snapshot = registry.get(cart_id).snapshot()
    return CartResponse.build(cart_id, snapshot, pricing.price(snapshot))


@router.post("/{cart_id}/items", response_model=CartResponse, status_code=status.HTTP_200_OK)
def add_item(
    cart_id: str,
    payload: AddItemRequest,
    registry: CartRegistry = Depends(get_cart_registry),
    pricing: PricingEngine = Depends(get_pricing_engine),
) -> CartResponse:
    """Add a product; an existing line for the same product has its quantity increased."""
    try:
        product = get_product(payload.product_id)
    except ProductNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    snapshot = registry.get(cart_id).add(product, payload.quantity)
    return CartResponse.build(cart_id, snapshot, pricing.price(snapshot))


@router.patch("/{cart_id}/items/{product_id}", response_model=CartResponse)
def update_item(
    cart_id: str,
    product_id: str,
    payload: UpdateQuantityRequest,
    registry: CartRegistry = Depends(get_cart_registry),
    pricing: PricingEngine = Depends(get_pricing_engine),
) -> CartResponse:
    snapshot = registry.get(cart_id).update_quantity(product_id, payload.quantity)
    return CartResponse.build(cart_id, snapshot, pricing.price(snapshot))


@router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
def remove_item(
    cart_id: str,
    product_id: str,
    registry: CartRegistry = Depends(get_cart_registry),
    pricing: PricingEngine = Depends(get_pricing_engine),
) -> CartResponse:
    snapshot = registry.get(cart_id).remove(product_id)
    return CartResponse.build(cart_id, snapshot, pricing.price(snapshot))


@router.delete("/{cart_id}", response_model=CartResponse)
def clear_cart(
    cart_id: str,
    registry: CartRegistry = Depends(get_cart_registry),
    pricing: PricingEngine = Depends(get_pricing_engine),
) -> CartResponse:
    snapshot = registry.get(cart_id).clear()
    return CartResponse.build(cart_id, snapshot, pricing.price(snapshot))
