"""Utilities to serialize carts and orders into JSON/CSV artifacts."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from datetime import datetime
from typing import Any

from ...models.domain import CartSnapshot, Coordinate, LineItem, PricedOrder

ITEM_FIELDS = ["product_id", "name", "unit_price", "quantity", "unit_weight", "image_ref", "line_total"]


def snapshot_to_json(snapshot: CartSnapshot) -> dict:
    return {
        "items": [asdict(item) for item in snapshot.items],
        "item_count": snapshot.item_count,
        "subtotal": snapshot.subtotal,
        "total_weight": snapshot.total_weight,
    }


def snapshot_from_json(payload: dict[str, Any]) -> CartSnapshot:
    """Rebuild a snapshot from its stored form. Stored totals are ignored and recomputed.

    Lines with a quantity below 1 are dropped, matching the cart's update rule.
    """
    items = []
    for row in payload.get("items", []):
        raw_quantity = row.get("quantity")
        quantity = 1 if raw_quantity in (None, "") else int(raw_quantity)
        if quantity < 1:
            continue
        items.append(
            LineItem(
                product_id=str(row["product_id"]),
                name=str(row.get("name") or ""),
                unit_price=float(row.get("unit_price") or 0),
                quantity=quantity,
                unit_weight=float(row.get("unit_weight") or 0),
                image_ref=row.get("image_ref") or None,
            )
        )
    return CartSnapshot(items=tuple(items))


def _coordinate_to_json(location: Coordinate | None) -> dict | None:
    return {"lat": location.lat, "lng": location.lng} if location else None


def order_to_json(order: PricedOrder) -> dict:
    created_at = order.created_at.isoformat() if isinstance(order.created_at, datetime) else order.created_at
    return {
        "order_id": order.order_id,
        "status": order.status,
        "created_at": created_at,
        "delivery_option": order.delivery_option,
        "zone_code": order.zone_code,
        "location": _coordinate_to_json(order.location),
        "contact": asdict(order.contact),
        "payment_method": order.payment_method,
        "items": [dict(asdict(item), line_total=item.line_total) for item in order.items.items],
        "item_count": order.item_count,
        "total_weight": order.total_weight,
        "subtotal": order.subtotal,
        "delivery_charge": order.delivery_charge,
        "handling_charge": order.handling_charge,
        "small_cart_charge": order.small_cart_charge,
        "grand_total": order.grand_total,
    }


def order_items_to_csv(order: PricedOrder) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=ITEM_FIELDS)
    writer.writeheader()
    for item in order.items.items:
        writer.writerow(dict(asdict(item), line_total=item.line_total))
    return buffer.getvalue()
