"""File-based persistence for carts and placed orders."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import CartSnapshot, PricedOrder
from ..services.outputs.formatter import order_items_to_csv, order_to_json, snapshot_from_json, snapshot_to_json

_SAFE_NAME = re.compile(r"[^A-Za-z0-9_.-]")


class FileStorage:
    """Thin wrapper around the data root for storing JSON and CSV outputs."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "orders"
        self.cart_root = self.root / "carts"
        self.output_root.mkdir(parents=True, exist_ok=True)
        self.cart_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "order") -> Path:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        path = self.output_root / f"{_SAFE_NAME.sub('_', prefix)}_{timestamp}"
        path.mkdir(parents=True, exist_ok=False)
        return path

    def cart_path(self, cart_id: str) -> Path:
        return self.cart_root / f"{_SAFE_NAME.sub('_', cart_id)}.json"

    def read_json(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)


class FileCartStore:
    """Mirror each cart to ``<data_root>/carts/<cart_id>.json``."""

    def __init__(self, storage: FileStorage | None = None) -> None:
        self.storage = storage or FileStorage()

    def load_cart(self, cart_id: str) -> Optional[CartSnapshot]:
        path = self.storage.cart_path(cart_id)
        if not path.exists():
            return None
        try:
            return snapshot_from_json(self.storage.read_json(path))
        except (OSError, ValueError, KeyError, TypeError) as e:
            logging.warning(f"Ignoring unreadable cart file {path}: {e}")
            return None

    def save_cart(self, cart_id: str, snapshot: CartSnapshot) -> None:
        try:
            self.storage.write_json(self.storage.cart_path(cart_id), snapshot_to_json(snapshot))
        except OSError as e:
            logging.warning(f"Failed to mirror cart {cart_id} to disk: {e}")


class FileOrderSink:
    """Write every order into its own run directory (summary.json + items.csv)."""

    def __init__(self, storage: FileStorage | None = None) -> None:
        self.storage = storage or FileStorage()

    def save_order(self, order: PricedOrder) -> str:
        if not order.order_id:
            raise ValueError("Order must have an order_id before it is stored.")
        run_dir = self.storage.make_run_directory(prefix=order.order_id)
        self.storage.write_json(run_dir / "summary.json", order_to_json(order))
        self.storage.write_csv(run_dir / "items.csv", order_items_to_csv(order))
        return order.order_id
