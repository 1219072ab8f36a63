"""Product catalog loader with database-first approach, falling back to a CSV or Excel file."""

from __future__ import annotations

import csv
import functools
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from openpyxl import load_workbook

from ..config import settings
from ..db.supabase import get_supabase_client
from ..errors import ProductNotFound
from ..models.domain import Product


def _coerce_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _pick(row: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def product_from_row(row: dict[str, Any]) -> Optional[Product]:
    """Map a catalog row (database or file) to a Product. Rows without an id are skipped."""
    product_id = _pick(row, "product_id", "id", "ProductId")
    if product_id is None:
        return None
    price = _coerce_float(_pick(row, "unit_price", "price", "Price"))
    weight = _coerce_float(_pick(row, "unit_weight", "weight", "Weight"))
    if price < 0 or weight < 0:
        raise ValueError(f"Product {product_id} has a negative price or weight.")
    image_ref = _pick(row, "image_ref", "imageUrl", "image_url", "ImageUrl")
    description = _pick(row, "description", "Description")
    category = _pick(row, "category", "Category")
    return Product(
        product_id=str(product_id).strip(),
        name=str(_pick(row, "name", "Name") or "").strip(),
        unit_price=price,
        unit_weight=weight,
        image_ref=str(image_ref) if image_ref else None,
        description=str(description) if description else None,
        category=str(category) if category else None,
    )


def _collect(rows: Iterable[dict[str, Any]]) -> tuple[Product, ...]:
    products: list[Product] = []
    for row in rows:
        try:
            product = product_from_row(row)
        except (ValueError, TypeError) as e:
            logging.warning(f"Skipping invalid product row: {e}")
            continue
        if product is not None:
            products.append(product)
    return tuple(products)


def _load_products_from_database() -> tuple[Product, ...] | None:
    """Load products from Supabase. Returns None if the database is not available or empty."""
    supabase = get_supabase_client()
    if not supabase:
        return None
    try:
        response = supabase.table("products").select("*").execute()
    except Exception as e:
        logging.debug(f"Database query failed, falling back to file: {e}")
        return None
    if not response.data:
        return None
    return _collect(response.data) or None


def _iter_xlsx_rows(path: Path) -> Iterable[dict[str, Any]]:
    wb = load_workbook(path, data_only=True, read_only=True)
    try:
        sheet = wb.active
        rows = sheet.iter_rows(min_row=1, values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValueError(f"Catalog workbook '{path}' is empty.")
        names = [str(name).strip() if name is not None else "" for name in header]
        for row in rows:
            yield dict(zip(names, row))
    finally:
        wb.close()


def _load_products_from_file(source: Path | None = None) -> tuple[Product, ...]:
    path = source or settings.catalog_file
    if not path.exists():
        raise FileNotFoundError(f"Product catalog not found: {path}")

    if path.suffix.lower() in {".xlsx", ".xlsm"}:
        return _collect(_iter_xlsx_rows(path))

    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Catalog file '{path}' is missing a header row.")
        return _collect(reader)


@functools.lru_cache(maxsize=1)
def load_products(source: Optional[Path] = None) -> tuple[Product, ...]:
    """Get products from the database first, fall back to the catalog file."""
    db_products = _load_products_from_database()
    if db_products:
        return db_products
    return _load_products_from_file(source)


def get_product(product_id: str) -> Product:
    for product in load_products():
        if product.product_id == product_id:
            return product
    raise ProductNotFound(product_id)


def list_products(category: Optional[str] = None, search: Optional[str] = None) -> list[Product]:
    products = list(load_products())
    if category:
        wanted = category.strip().lower()
        products = [p for p in products if (p.category or "").lower() == wanted]
    if search:
        needle = search.strip().lower()
        products = [p for p in products if needle in p.name.lower() or needle in (p.description or "").lower()]
    return products
