"""API routes for checkout: quotes and order placement."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...data.zones_repository import get_zones
from ...errors import CheckoutError, EmptyCart, InvalidCoordinate, MissingLocation
from ...schemas.checkout import OrderResponse, PlaceOrderRequest, QuoteRequest
from ...services.cart.registry import CartRegistry
from ...services.checkout.service import CheckoutOrchestrator
from ..dependencies import get_cart_registry, get_orchestrator

router = APIRouter(prefix="/checkout", tags=["checkout"])


def _status_for(exc: CheckoutError) -> int:
    if isinstance(exc, (EmptyCart, MissingLocation)):
        return status.HTTP_409_CONFLICT
    return status.HTTP_422_UNPROCESSABLE_ENTITY


@router.post("/{cart_id}/quote", response_model=OrderResponse)
def quote(
    cart_id: str,
    payload: QuoteRequest,
    registry: CartRegistry = Depends(get_cart_registry),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> OrderResponse:
    """Price the cart for the chosen fulfilment without placing an order."""
    snapshot = registry.get(cart_id).snapshot()
    try:
        order = orchestrator.build_order(snapshot, payload.location_fix(), payload.delivery_option, get_zones())
    except CheckoutError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
    except InvalidCoordinate as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return OrderResponse.from_order(order)


@router.post("/{cart_id}/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def place_order(
    cart_id: str,
    payload: PlaceOrderRequest,
    registry: CartRegistry = Depends(get_cart_registry),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> OrderResponse:
    cart = registry.get(cart_id)
    try:
        order = orchestrator.place_order(
            cart,
            payload.location_fix(),
            payload.delivery_option,
            get_zones(),
            payload.contact.to_domain(),
            payment_method=payload.payment_method,
        )
    except CheckoutError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
    except InvalidCoordinate as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except ConnectionError as exc:
        logging.error(f"Order for cart {cart_id} could not be stored: {exc}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return OrderResponse.from_order(order)
