"""Per-session cart lookup with write-through mirroring."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Optional

from ...config import settings
from ...persistence.repositories import CartStore
from .aggregate import CartAggregate


class CartRegistry:
    """Hold one CartAggregate per cart id, restoring from and mirroring to a CartStore.

    At most ``max_carts`` carts stay in memory. The least recently used cart is
    dropped first; every mutation is already mirrored, so it is restored from
    the store on its next lookup.
    """

    def __init__(self, store: CartStore, max_carts: Optional[int] = None):
        self.store = store
        self.max_carts = max_carts or settings.max_active_carts
        self._carts: OrderedDict[str, CartAggregate] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, cart_id: str) -> CartAggregate:
        with self._lock:
            cart = self._carts.get(cart_id)
            if cart is not None:
                self._carts.move_to_end(cart_id)
                return cart

            stored = self.store.load_cart(cart_id)
            mirror = lambda snapshot: self.store.save_cart(cart_id, snapshot)
            if stored is not None:
                logging.info(f"Restored cart {cart_id} with {len(stored)} line items")
                cart = CartAggregate.from_snapshot(stored, on_change=mirror)
            else:
                cart = CartAggregate(on_change=mirror)
            self._carts[cart_id] = cart
            while len(self._carts) > self.max_carts:
                evicted, _ = self._carts.popitem(last=False)
                logging.debug(f"Evicted cart {evicted} from memory")
            return cart

    def __len__(self) -> int:
        with self._lock:
            return len(self._carts)
