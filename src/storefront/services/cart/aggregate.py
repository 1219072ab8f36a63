"""In-memory cart keyed by product identity."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, Iterator, Optional

from ...models.domain import CartSnapshot, LineItem, Product

CartListener = Callable[[CartSnapshot], None]


class CartAggregate:
    """Ordered collection of line items with merge-on-add semantics.

    No two items share a ``product_id``. Items keep their insertion position:
    merging quantities or removing another item never reorders the rest.
    Mutations are serialised by a per-cart lock, and ``on_change`` receives
    the fresh snapshot after every mutation so callers can mirror the cart
    to durable storage.
    """

    def __init__(self, items: Optional[list[LineItem]] = None, on_change: Optional[CartListener] = None):
        self._items: dict[str, LineItem] = {}
        self._lock = threading.RLock()
        self.on_change = on_change
        for item in items or []:
            self._merge(item)

    @classmethod
    def from_snapshot(cls, snapshot: CartSnapshot, on_change: Optional[CartListener] = None) -> "CartAggregate":
        return cls(list(snapshot.items), on_change=on_change)

    def _merge(self, item: LineItem) -> None:
        if item.quantity < 1:
            raise ValueError("The quantity must be a positive number.")
        existing = self._items.get(item.product_id)
        if existing is None:
            self._items[item.product_id] = item
        else:
            self._items[item.product_id] = replace(existing, quantity=existing.quantity + item.quantity)

    def _changed(self) -> CartSnapshot:
        snapshot = self.snapshot()
        if self.on_change is not None:
            self.on_change(snapshot)
        return snapshot

    def add(self, product: Product, quantity: int = 1) -> CartSnapshot:
        with self._lock:
            self._merge(LineItem.from_product(product, quantity))
            logging.debug(f"Added {quantity} x {product.product_id} to cart")
            return self._changed()

    def update_quantity(self, product_id: str, quantity: int) -> CartSnapshot:
        with self._lock:
            if quantity < 1:
                return self.remove(product_id)
            existing = self._items.get(product_id)
            if existing is None:
                logging.debug(f"Ignoring quantity update for {product_id}: not in cart")
                return self.snapshot()
            self._items[product_id] = replace(existing, quantity=quantity)
            return self._changed()

    def remove(self, product_id: str) -> CartSnapshot:
        with self._lock:
            if self._items.pop(product_id, None) is None:
                return self.snapshot()
            return self._changed()

    def clear(self) -> CartSnapshot:
        with self._lock:
            self._items.clear()
            return self._changed()

    def snapshot(self) -> CartSnapshot:
        with self._lock:
            return CartSnapshot(items=tuple(self._items.values()))

    @contextmanager
    def transaction(self) -> Iterator["CartAggregate"]:
        """Hold the cart lock across several calls, e.g. snapshot, store and clear at checkout."""
        with self._lock:
            yield self

    def get(self, product_id: str) -> Optional[LineItem]:
        with self._lock:
            return self._items.get(product_id)

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return product_id in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
