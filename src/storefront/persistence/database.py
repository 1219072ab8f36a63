"""Supabase persistence for carts and orders."""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client

from ..models.domain import CartSnapshot, PricedOrder
from ..services.outputs.formatter import order_to_json, snapshot_from_json, snapshot_to_json


class SupabaseCartStore:
    """Mirror carts into the ``carts`` table (one row per cart id)."""

    table = "carts"

    def __init__(self, client: Client) -> None:
        self.client = client

    def load_cart(self, cart_id: str) -> Optional[CartSnapshot]:
        try:
            response = self.client.table(self.table).select("*").eq("cart_id", cart_id).limit(1).execute()
        except Exception as e:
            # Cart mirrors are best-effort; an unreachable database starts an empty cart.
            logging.warning(f"Failed to load cart {cart_id} from database: {e}")
            return None
        if not response.data:
            return None
        return snapshot_from_json(response.data[0].get("payload") or {})

    def save_cart(self, cart_id: str, snapshot: CartSnapshot) -> None:
        row: dict[str, Any] = {"cart_id": cart_id, "payload": snapshot_to_json(snapshot)}
        try:
            self.client.table(self.table).upsert(row, on_conflict="cart_id").execute()
        except Exception as e:
            logging.warning(f"Failed to mirror cart {cart_id} to database: {e}")


class SupabaseOrderSink:
    """Insert placed orders into the ``orders`` table."""

    table = "orders"

    def __init__(self, client: Client) -> None:
        self.client = client

    def save_order(self, order: PricedOrder) -> str:
        if not order.order_id:
            raise ValueError("Order must have an order_id before it is stored.")
        try:
            self.client.table(self.table).insert(order_to_json(order)).execute()
        except Exception as e:
            raise ConnectionError(f"Failed to save order {order.order_id}: {e}") from e
        logging.info(f"Saved order {order.order_id} to database")
        return order.order_id
