"""Storage seams injected into the cart registry and the checkout orchestrator."""

from __future__ import annotations

import threading
from typing import Optional, Protocol

from ..db.supabase import get_supabase_client
from ..models.domain import CartSnapshot, PricedOrder
from .database import SupabaseCartStore, SupabaseOrderSink
from .filesystem import FileCartStore, FileOrderSink


class CartStore(Protocol):
    def load_cart(self, cart_id: str) -> Optional[CartSnapshot]: ...

    def save_cart(self, cart_id: str, snapshot: CartSnapshot) -> None: ...


class OrderSink(Protocol):
    def save_order(self, order: PricedOrder) -> str: ...


class InMemoryCartStore:
    def __init__(self) -> None:
        self.carts: dict[str, CartSnapshot] = {}
        self._lock = threading.Lock()

    def load_cart(self, cart_id: str) -> Optional[CartSnapshot]:
        with self._lock:
            return self.carts.get(cart_id)

    def save_cart(self, cart_id: str, snapshot: CartSnapshot) -> None:
        with self._lock:
            self.carts[cart_id] = snapshot


class InMemoryOrderSink:
    def __init__(self) -> None:
        self.orders: list[PricedOrder] = []
        self._lock = threading.Lock()

    def save_order(self, order: PricedOrder) -> str:
        if not order.order_id:
            raise ValueError("Order must have an order_id before it is stored.")
        with self._lock:
            self.orders.append(order)
        return order.order_id


def get_cart_store() -> CartStore:
    """Database first when Supabase is configured, otherwise JSON files under the data root."""
    client = get_supabase_client()
    if client is not None:
        return SupabaseCartStore(client)
    return FileCartStore()


def get_order_sink() -> OrderSink:
    client = get_supabase_client()
    if client is not None:
        return SupabaseOrderSink(client)
    return FileOrderSink()
